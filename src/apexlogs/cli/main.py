"""apexlogs CLI - apexlogs command."""

import click

from apexlogs.cli.logs import logs_group
from apexlogs.cli.prefetch import prefetch_command
from apexlogs.config.loader import load_config
from apexlogs.core.errors import ConfigError
from apexlogs.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="apexlogs")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """apexlogs - Download Salesforce Apex debug logs."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        config.logging.level = "DEBUG"
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config
    configure_logging(config=config.logging)


cli.add_command(logs_group, name="logs")
cli.add_command(prefetch_command, name="prefetch")


if __name__ == "__main__":
    cli()
