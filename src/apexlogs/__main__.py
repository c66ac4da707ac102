"""Entry point for ``python -m apexlogs``."""

from apexlogs.cli.main import cli

cli()
