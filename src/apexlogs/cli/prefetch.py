"""apexlogs prefetch command - show or toggle eager body downloads."""

from __future__ import annotations

import json

import click

from apexlogs.cli.utils import get_config, open_state_store


@click.command()
@click.argument("action", type=click.Choice(["on", "off", "status"]), default="status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def prefetch_command(ctx: click.Context, action: str, as_json: bool) -> None:
    """Show or set whether log bodies are downloaded right after listing.

    The setting persists across runs.
    """
    store = open_state_store(get_config(ctx))
    if action != "status":
        store.persist(action == "on")

    enabled = store.restore()
    if as_json:
        click.echo(json.dumps({"prefetch": enabled}))
    else:
        click.echo(f"Prefetch: {'on' if enabled else 'off'}")
