"""
Mutex commands for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import asyncio

import click

from ..constants import DEFAULT_DOMAIN_NAME, DEFAULT_LOCK_TTL_MS, DEFAULT_MAX_TRIES
from ..core.mutex_operations import DistributedMutex
from ..core.store import build_store
from ..exceptions import (
    AttributeMissingError,
    CoordinationError,
    CorruptRecordError,
    ItemNotFoundError,
    LockFailedError,
    UnlockFailedError,
)
from ..logging_config import get_logger, setup_logging
from ..utils import error_json, error_text, now_ms, output_json, output_text, validate_key

logger = get_logger(__name__)


def _report_error(ctx: click.Context, lock_name: str, error: Exception, text: bool) -> None:
    extra: dict[str, str] = {}
    if isinstance(error, ValueError):
        message, solution, code = str(error), "Use a non-empty lock name of at most 1000 bytes", 2
    elif isinstance(error, LockFailedError):
        message = f"Lock '{lock_name}' is held by another client: {error.reason}"
        solution, code = "Wait for the lease to expire or raise --max-tries", 4
        extra = {"reason": error.reason}
    elif isinstance(error, UnlockFailedError):
        message = f"Lock '{lock_name}' could not be released: {error.reason}"
        solution, code = "Check the guard matches the one returned by lock-acquire", 2
        extra = {"reason": error.reason}
    elif isinstance(error, (ItemNotFoundError, AttributeMissingError, CorruptRecordError)):
        message = str(error)
        solution = f"Lock '{lock_name}' record is damaged; inspect the item in SimpleDB"
        code = 1
    else:
        message, solution, code = str(error), "Check domain exists and AWS credentials", 3

    if text:
        click.echo(error_text(message, solution), err=True)
    else:
        click.echo(error_json(message, solution, code, **extra), err=True)
    ctx.exit(code)


@click.command("lock-acquire")
@click.argument("lock_name")
@click.option(
    "--ttl-ms",
    type=int,
    default=DEFAULT_LOCK_TTL_MS,
    help="Lock lease in milliseconds (default: 10000)",
)
@click.option(
    "--domain",
    envvar="SDB_DOMAIN",
    default=DEFAULT_DOMAIN_NAME,
    help="SimpleDB domain name",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option(
    "--max-tries",
    type=int,
    default=DEFAULT_MAX_TRIES,
    help="Retry budget, 0 for unlimited (default: 10)",
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def lock_acquire_command(
    ctx: click.Context,
    lock_name: str,
    ttl_ms: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
    verbose: int,
) -> None:
    """Acquire a distributed lock.

    Prints the guard token that lock-release needs. An expired lease is
    reclaimed automatically.

    Examples:

    \b
        # Acquire lock with a 30 second lease
        sdb-primitives-tool coordination lock-acquire deploy-prod --ttl-ms 30000

    \b
        # Use in shell script
        if guard=$(sdb-primitives-tool coordination lock-acquire deploy | jq -r .guard); then
            deploy.sh
            sdb-primitives-tool coordination lock-release deploy "$guard"
        fi

    \b
    Output Format:
        Returns JSON:
        {"lock": "deploy-prod", "guard": 7, "ttl_ms": 30000}
    """
    setup_logging(verbose)

    try:
        validate_key(lock_name)
        logger.info(f"Acquiring lock '{lock_name}' for {ttl_ms}ms")
        logger.debug(f"Domain: {domain}, Region: {region}, Max tries: {max_tries}")

        mutex = DistributedMutex(build_store(region, profile), lock_name, domain)
        guard = asyncio.run(mutex.lock(ttl_ms, max_tries))

        if text:
            output_text(f"✅ Lock '{lock_name}' acquired with guard {guard}")
            output_text(f"TTL: {ttl_ms} ms")
        else:
            output_json({"lock": lock_name, "guard": guard, "ttl_ms": ttl_ms})

    except (ValueError, CoordinationError) as e:
        _report_error(ctx, lock_name, e, text)


@click.command("lock-release")
@click.argument("lock_name")
@click.argument("guard", type=int)
@click.option(
    "--domain",
    envvar="SDB_DOMAIN",
    default=DEFAULT_DOMAIN_NAME,
    help="SimpleDB domain name",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option(
    "--max-tries",
    type=int,
    default=DEFAULT_MAX_TRIES,
    help="Retry budget, 0 for unlimited (default: 10)",
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def lock_release_command(
    ctx: click.Context,
    lock_name: str,
    guard: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
    verbose: int,
) -> None:
    """Release a distributed lock.

    Only the guard returned by lock-acquire releases the lock. A stale guard
    (the lease expired and the lock moved on) is a successful no-op.

    Examples:

    \b
        # Release lock acquired with guard 7
        sdb-primitives-tool coordination lock-release deploy-prod 7

    \b
    Output Format:
        Returns JSON:
        {"lock": "deploy-prod", "guard": 7, "released": true, "status": "released"}
    """
    setup_logging(verbose)

    try:
        validate_key(lock_name)
        logger.info(f"Releasing lock '{lock_name}' with guard {guard}")
        logger.debug(f"Domain: {domain}, Region: {region}, Max tries: {max_tries}")

        mutex = DistributedMutex(build_store(region, profile), lock_name, domain)
        released = asyncio.run(mutex.unlock(guard, max_tries))
        status = "released" if released else "stale_guard"

        if text:
            if released:
                output_text(f"✅ Lock '{lock_name}' released")
            else:
                output_text(f"✅ Guard {guard} for '{lock_name}' is stale (already released)")
        else:
            output_json({"lock": lock_name, "guard": guard, "released": True, "status": status})

    except (ValueError, CoordinationError) as e:
        _report_error(ctx, lock_name, e, text)


@click.command("lock-check")
@click.argument("lock_name")
@click.option(
    "--domain",
    envvar="SDB_DOMAIN",
    default=DEFAULT_DOMAIN_NAME,
    help="SimpleDB domain name",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def lock_check_command(
    ctx: click.Context,
    lock_name: str,
    domain: str,
    region: str | None,
    profile: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Check if a lock is held.

    Exit code 0 if locked, 1 if free (unlocked or lease expired).

    Examples:

    \b
        # Use in shell script
        if sdb-primitives-tool coordination lock-check deploy-prod; then
            echo "Lock is held"
        fi

    \b
    Output Format:
        Returns JSON:
        {"item": "mutex:deploy-prod", "state": "locked", "expires": 1731696300000,
         "counter": 7, "lockable": false}
    """
    setup_logging(verbose)

    try:
        validate_key(lock_name)
        logger.info(f"Checking lock '{lock_name}'")

        mutex = DistributedMutex(build_store(region, profile), lock_name, domain)
        record = asyncio.run(mutex.check())
        now = now_ms()
        result = record.to_dict(now)

    except (ValueError, CoordinationError) as e:
        _report_error(ctx, lock_name, e, text)
        return

    held = not record.is_lockable(now)
    if text:
        if held:
            output_text(f"Lock '{lock_name}' is held (generation {record.counter})")
            output_text(f"Expires at: {record.expires}")
        else:
            output_text(f"Lock '{lock_name}' is free")
    else:
        output_json(result)
    ctx.exit(0 if held else 1)
