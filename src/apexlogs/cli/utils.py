"""CLI utilities."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from apexlogs.config.models import ApexLogsConfig
from apexlogs.core.errors import ApexLogsError
from apexlogs.logs.prefetch import PrefetchStateStore, YamlStateStore
from apexlogs.logs.service import LogService
from apexlogs.project import find_project_root, read_source_api_version
from apexlogs.remote.tooling import ToolingClient


def connection_options[F: Callable[..., Any]](fn: F) -> F:
    """Add the org connection options shared by commands that talk to the API."""
    fn = click.option(
        "--api-version",
        default=None,
        help="Tooling API version, e.g. 60.0. Defaults to sfdx-project.json sourceApiVersion.",
    )(fn)
    fn = click.option(
        "--access-token",
        envvar="SF_ACCESS_TOKEN",
        required=True,
        help="OAuth access token for the org (env: SF_ACCESS_TOKEN).",
    )(fn)
    fn = click.option(
        "--instance-url",
        envvar="SF_INSTANCE_URL",
        required=True,
        help="Org instance URL, e.g. https://example.my.salesforce.com (env: SF_INSTANCE_URL).",
    )(fn)
    return fn


def get_config(ctx: click.Context) -> ApexLogsConfig:
    obj = ctx.find_object(dict) or {}
    config = obj.get("config")
    return config if isinstance(config, ApexLogsConfig) else ApexLogsConfig()


def resolve_api_version(api_version: str | None, start: Path | None = None) -> str:
    """Use the explicit version, else the enclosing project's sourceApiVersion."""
    if api_version:
        return api_version
    root = find_project_root(start)
    if root is None:
        raise click.ClickException(
            "sfdx-project.json not found. Run inside a valid SFDX project or pass --api-version."
        )
    try:
        return read_source_api_version(root)
    except ApexLogsError as e:
        raise click.ClickException(e.message) from e


def open_state_store(config: ApexLogsConfig) -> PrefetchStateStore:
    return PrefetchStateStore(YamlStateStore(Path(config.state.path).expanduser()))


def build_service(
    config: ApexLogsConfig,
    instance_url: str,
    access_token: str,
    api_version: str,
) -> tuple[LogService, ToolingClient]:
    """Create the service and the client it owns. Caller closes the client."""
    client = ToolingClient(
        instance_url,
        access_token,
        api_version,
        timeout_sec=config.http.timeout_sec,
    )
    return LogService(client, open_state_store(config), config), client
