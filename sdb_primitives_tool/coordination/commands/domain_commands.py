"""
Domain management commands for coordination primitives.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from ..constants import DEFAULT_DOMAIN_NAME
from ..core.client import SimpleDBClient
from ..core.domain_operations import create_domain, describe_domain, drop_domain
from ..exceptions import CoordinationError, DomainNotFoundError
from ..logging_config import get_logger, setup_logging
from ..utils import error_json, error_text, output_json, output_text

logger = get_logger(__name__)


def _fail(ctx: click.Context, message: str, solution: str, code: int, text: bool) -> None:
    if text:
        click.echo(error_text(message, solution), err=True)
    else:
        click.echo(error_json(message, solution, code), err=True)
    ctx.exit(code)


@click.command("create-domain")
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
def create_domain_command(
    ctx: click.Context,
    domain: str,
    region: str | None,
    profile: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Create the SimpleDB domain for counters and locks.

    Creating a domain that already exists succeeds.

    Examples:

    \b
        # Create default domain
        sdb-primitives-tool coordination create-domain

    \b
        # Create custom domain in a specific region
        sdb-primitives-tool coordination create-domain --domain locks --region eu-west-1
    """
    setup_logging(verbose)

    try:
        logger.info(f"Creating domain '{domain}'")
        result = create_domain(SimpleDBClient(region, profile), domain)

        if text:
            output_text(f"✅ Domain '{domain}' is ready")
        else:
            output_json(result)

    except ValueError as e:
        _fail(ctx, str(e), "Use 3-255 characters: letters, digits, '-', '_' or '.'", 2, text)
    except CoordinationError as e:
        _fail(ctx, str(e), "Check AWS credentials and region", 3, text)


@click.command("drop-domain")
@click.option(
    "--domain",
    envvar="SDB_DOMAIN",
    default=DEFAULT_DOMAIN_NAME,
    help="SimpleDB domain name",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option(
    "--approve",
    is_flag=True,
    help="Required flag to confirm domain deletion",
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def drop_domain_command(
    ctx: click.Context,
    domain: str,
    region: str | None,
    profile: str | None,
    approve: bool,
    text: bool,
    verbose: int,
) -> None:
    """Delete the SimpleDB domain and every counter and lock in it.

    WARNING: This permanently deletes ALL counters and locks in the domain.

    Examples:

    \b
        # Drop with approval
        sdb-primitives-tool coordination drop-domain --domain locks --approve
    """
    setup_logging(verbose)

    if not approve:
        cmd = f"sdb-primitives-tool coordination drop-domain --domain {domain} --approve"
        solution = f"Add --approve flag to confirm: {cmd}"
        _fail(ctx, "Domain deletion requires approval", solution, 2, text)

    try:
        logger.info(f"Deleting domain '{domain}'")
        result = drop_domain(SimpleDBClient(region, profile), domain)

        if text:
            output_text(f"✅ Domain '{domain}' deleted")
        else:
            output_json(result)

    except ValueError as e:
        _fail(ctx, str(e), "Use 3-255 characters: letters, digits, '-', '_' or '.'", 2, text)
    except CoordinationError as e:
        _fail(ctx, str(e), "Check AWS credentials and region", 3, text)


# Alias: delete-domain is the same as drop-domain
@click.command("delete-domain")
@click.option(
    "--domain",
    envvar="SDB_DOMAIN",
    default=DEFAULT_DOMAIN_NAME,
    help="SimpleDB domain name",
)
@click.option("--region", envvar="AWS_REGION", help="AWS region")
@click.option("--profile", envvar="AWS_PROFILE", help="AWS profile")
@click.option(
    "--approve",
    is_flag=True,
    help="Required flag to confirm domain deletion",
)
@click.option("--text", is_flag=True, help="Output as human-readable text")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
)
@click.pass_context
def delete_domain_command(
    ctx: click.Context,
    domain: str,
    region: str | None,
    profile: str | None,
    approve: bool,
    text: bool,
    verbose: int,
) -> None:
    """Alias for drop-domain command.

    See 'sdb-primitives-tool coordination drop-domain --help' for full documentation.
    """
    ctx.invoke(
        drop_domain_command,
        domain=domain,
        region=region,
        profile=profile,
        approve=approve,
        text=text,
        verbose=verbose,
    )


@click.command("domain-info")
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
def domain_info_command(
    ctx: click.Context,
    domain: str,
    region: str | None,
    profile: str | None,
    text: bool,
    verbose: int,
) -> None:
    """Show item and attribute counts of the domain.

    \b
    Output Format:
        Returns JSON:
        {"domain": "locks", "items": 12, "attribute_names": 3,
         "attribute_values": 34, "timestamp": 1731696000}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Describing domain '{domain}'")
        result = describe_domain(SimpleDBClient(region, profile), domain)

        if text:
            output_text(f"Domain: {domain}")
            output_text(f"Items: {result['items']}")
            output_text(f"Attribute values: {result['attribute_values']}")
        else:
            output_json(result)

    except DomainNotFoundError as e:
        _fail(
            ctx,
            str(e),
            f"Use 'sdb-primitives-tool coordination create-domain --domain {domain}'",
            1,
            text,
        )
    except CoordinationError as e:
        _fail(ctx, str(e), "Check AWS credentials and region", 3, text)
