"""
Counter commands for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import asyncio

import click

from ..constants import DEFAULT_DOMAIN_NAME, DEFAULT_MAX_TRIES
from ..core.counter_operations import AtomicCounter
from ..core.store import build_store
from ..exceptions import (
    AttributeMissingError,
    CoordinationError,
    CorruptRecordError,
    ItemNotFoundError,
    OperationFailedError,
)
from ..logging_config import get_logger, setup_logging
from ..utils import error_json, error_text, output_json, output_text, validate_key

logger = get_logger(__name__)


def _report_error(ctx: click.Context, key: str, error: Exception, text: bool) -> None:
    extra: dict[str, str] = {}
    if isinstance(error, ValueError):
        message, solution, code = str(error), "Use a non-empty key of at most 1000 bytes", 2
    elif isinstance(error, OperationFailedError):
        message, solution, code = str(error), "Retry later or raise --max-tries", 4
        extra = {"reason": error.reason}
    elif isinstance(error, (ItemNotFoundError, AttributeMissingError, CorruptRecordError)):
        message = str(error)
        solution = f"Counter '{key}' record is damaged; inspect the item in SimpleDB"
        code = 1
    else:
        message, solution, code = str(error), "Check domain exists and AWS credentials", 3

    if text:
        click.echo(error_text(message, solution), err=True)
    else:
        click.echo(error_json(message, solution, code, **extra), err=True)
    ctx.exit(code)


def _add(
    ctx: click.Context,
    key: str,
    amount: int,
    initial_value: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
) -> None:
    try:
        validate_key(key)
        logger.debug(f"Domain: {domain}, Region: {region}, Max tries: {max_tries}")

        counter = AtomicCounter(build_store(region, profile), key, domain, initial_value)
        update = asyncio.run(counter.add(amount, max_tries))

        if text:
            output_text(f"✅ {key}: {update.old_value} -> {update.new_value}")
        else:
            output_json({"key": key, **update.to_dict()})

    except (ValueError, CoordinationError) as e:
        _report_error(ctx, key, e, text)


@click.command("inc")
@click.argument("key")
@click.option("--by", type=int, default=1, help="Amount to increment (default: 1)")
@click.option(
    "--initial-value",
    type=int,
    default=0,
    help="Value used if the counter does not exist yet (default: 0)",
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
def inc_command(
    ctx: click.Context,
    key: str,
    by: int,
    initial_value: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
    verbose: int,
) -> None:
    """Atomically increment a counter.

    Reads the counter and writes the new value on condition that nobody
    changed it in between. Lost races are retried with backoff.

    Examples:

    \b
        # Increment by 1
        sdb-primitives-tool coordination inc api-requests

    \b
        # Increment by custom amount, starting new counters at 100
        sdb-primitives-tool coordination inc api-requests --by 10 --initial-value 100

    \b
    Output Format:
        Returns JSON:
        {"key": "api-requests", "old_value": 122, "new_value": 123}
    """
    setup_logging(verbose)
    logger.info(f"Incrementing counter '{key}' by {by}")
    _add(ctx, key, by, initial_value, domain, region, profile, max_tries, text)


@click.command("dec")
@click.argument("key")
@click.option("--by", type=int, default=1, help="Amount to decrement (default: 1)")
@click.option(
    "--initial-value",
    type=int,
    default=0,
    help="Value used if the counter does not exist yet (default: 0)",
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
def dec_command(
    ctx: click.Context,
    key: str,
    by: int,
    initial_value: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
    verbose: int,
) -> None:
    """Atomically decrement a counter.

    Examples:

    \b
        # Decrement by 1
        sdb-primitives-tool coordination dec rate-limit-remaining

    \b
        # Decrement by custom amount
        sdb-primitives-tool coordination dec rate-limit-remaining --by 5

    \b
    Output Format:
        Returns JSON:
        {"key": "rate-limit-remaining", "old_value": 100, "new_value": 95}
    """
    setup_logging(verbose)
    logger.info(f"Decrementing counter '{key}' by {by}")
    _add(ctx, key, -by, initial_value, domain, region, profile, max_tries, text)


@click.command("get-counter")
@click.argument("key")
@click.option(
    "--initial-value",
    type=int,
    default=0,
    help="Value used if the counter does not exist yet (default: 0)",
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
def get_counter_command(
    ctx: click.Context,
    key: str,
    initial_value: int,
    domain: str,
    region: str | None,
    profile: str | None,
    max_tries: int,
    text: bool,
    verbose: int,
) -> None:
    """Read counter value.

    Examples:

    \b
        # Get counter value
        sdb-primitives-tool coordination get-counter api-requests

    \b
        # Extract value with jq
        sdb-primitives-tool coordination get-counter api-requests | jq -r '.value'

    \b
    Output Format:
        Returns JSON:
        {"key": "api-requests", "value": 12345}
    """
    setup_logging(verbose)

    try:
        validate_key(key)
        logger.info(f"Getting counter '{key}'")
        logger.debug(f"Domain: {domain}, Region: {region}")

        counter = AtomicCounter(build_store(region, profile), key, domain, initial_value)
        value = asyncio.run(counter.get(max_tries))

        if text:
            output_text(f"{key} = {value}")
        else:
            output_json({"key": key, "value": value})

    except (ValueError, CoordinationError) as e:
        _report_error(ctx, key, e, text)
