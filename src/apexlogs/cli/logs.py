"""apexlogs logs commands - list, get and sync debug logs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from apexlogs.cli.utils import build_service, connection_options, get_config, resolve_api_version
from apexlogs.core.errors import ApexLogsError
from apexlogs.core.progress import export_progress, pluralize, status
from apexlogs.logs.limits import clamp_limit
from apexlogs.logs.models import ExportResult, LogDescriptor

_output_dir_option = click.option(
    "-d",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to write logs to.",
)


def _render_table(descriptors: list[LogDescriptor], result: ExportResult | None = None) -> None:
    files = {s.id: str(s.path) for s in result.saved} if result else {}
    table = Table(show_edge=False)
    table.add_column("StartTime")
    table.add_column("User")
    table.add_column("LogId", no_wrap=True)
    table.add_column("Size", justify="right")
    table.add_column("Operation")
    if result is not None:
        table.add_column("File")
    for d in descriptors:
        row = [d.start_time, d.owner_name, d.id, str(d.length), d.operation]
        if result is not None:
            row.append(files.get(d.id, ""))
        table.add_row(*row)
    Console().print(table)


def _report_export(
    descriptors: list[LogDescriptor],
    result: ExportResult,
    target: Path,
    as_json: bool,
    extra: dict[str, Any],
) -> None:
    """Print an export outcome and exit 1 if any log failed."""
    if as_json:
        payload = {
            **result.to_dict(),
            **extra,
            "outputDir": str(target),
            "logs": [d.to_dict() for d in descriptors],
        }
        click.echo(json.dumps(payload))
    else:
        _render_table(descriptors, result)
        click.echo(f"Saved: {result.succeeded}, Errors: {len(result.failed)}")
        for failure in result.failed:
            status(f"{failure.descriptor.id}: {failure.reason}", style="error")
        if result.ok:
            status(f"{pluralize(result.succeeded, 'log')} written to {target}", style="success")

    if not result.ok:
        raise SystemExit(1)


@click.group()
def logs_group() -> None:
    """List and download Apex debug logs."""


@logs_group.command("list")
@connection_options
@click.option("-l", "--limit", type=int, default=None, help="Logs to list (1-200).")
@_output_dir_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_command(
    ctx: click.Context,
    instance_url: str,
    access_token: str,
    api_version: str | None,
    limit: int | None,
    output_dir: Path | None,
    as_json: bool,
) -> None:
    """List the most recent debug logs in the org.

    With prefetch on, the listed logs are also downloaded into OUTPUT_DIR.
    """
    config = get_config(ctx)
    version = resolve_api_version(api_version)
    service, client = build_service(config, instance_url, access_token, version)
    try:
        with client:
            descriptors, result = service.refresh(limit, output_dir)
    except ApexLogsError as e:
        raise click.ClickException(str(e)) from e

    if result is not None:
        target = output_dir or service.default_target_dir
        _report_export(descriptors, result, target, as_json, {"prefetched": True})
        return

    if as_json:
        click.echo(json.dumps({"ok": True, "prefetched": False, "logs": [d.to_dict() for d in descriptors]}))
        return
    _render_table(descriptors)


@logs_group.command("get")
@connection_options
@click.argument("log_id")
@click.option("-l", "--limit", type=int, default=None, help="How many recent logs to search (1-200).")
@_output_dir_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def get_command(
    ctx: click.Context,
    instance_url: str,
    access_token: str,
    api_version: str | None,
    log_id: str,
    limit: int | None,
    output_dir: Path | None,
    as_json: bool,
) -> None:
    """Download a single debug log by LOG_ID."""
    config = get_config(ctx)
    version = resolve_api_version(api_version)
    service, client = build_service(config, instance_url, access_token, version)
    try:
        with client:
            descriptors = service.catalog(limit)
            descriptor = next((d for d in descriptors if d.id == log_id), None)
            if descriptor is None:
                searched = pluralize(len(descriptors), "log")
                raise click.ClickException(f"Log {log_id} not found in the latest {searched}")
            saved = service.download(descriptor, output_dir)
    except ApexLogsError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps({"ok": True, "saved": saved.to_dict()}))
        return
    status(f"{saved.id} written to {saved.path}", style="success")


@logs_group.command("sync")
@connection_options
@click.option("-l", "--limit", type=int, default=None, help="Logs to download (1-200).")
@_output_dir_option
@click.option("-c", "--concurrency", type=int, default=None, help="Parallel downloads.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def sync_command(
    ctx: click.Context,
    instance_url: str,
    access_token: str,
    api_version: str | None,
    limit: int | None,
    output_dir: Path | None,
    concurrency: int | None,
    as_json: bool,
) -> None:
    """Download recent debug logs into OUTPUT_DIR.

    Files are named <start>_<user>_<id>.log, so re-running overwrites
    instead of duplicating.
    """
    config = get_config(ctx)
    version = resolve_api_version(api_version)
    effective_limit = clamp_limit(config.export.limit if limit is None else limit)
    target = output_dir or Path(config.export.output_dir)
    service, client = build_service(config, instance_url, access_token, version)

    try:
        with client:
            descriptors = service.catalog(effective_limit)
            with export_progress(len(descriptors)) as advance:
                result = service.export_all(
                    descriptors,
                    target,
                    concurrency,
                    on_progress=lambda _: advance(),
                )
    except ApexLogsError as e:
        raise click.ClickException(str(e)) from e

    extra = {"org": {"instanceUrl": instance_url}, "apiVersion": version, "limit": effective_limit}
    _report_export(descriptors, result, target, as_json, extra)
