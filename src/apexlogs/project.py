"""SFDX project discovery."""

import json
import re
from pathlib import Path

from apexlogs.config.constants import PROJECT_FILE
from apexlogs.core.errors import ProjectError

_API_VERSION = re.compile(r"\d+\.\d+")


def find_project_root(start: Path | None = None) -> Path | None:
    """Walk up from ``start`` to the directory holding sfdx-project.json."""
    current = (start or Path.cwd()).resolve()
    if current.is_file():
        current = current.parent

    for candidate in (current, *current.parents):
        if (candidate / PROJECT_FILE).is_file():
            return candidate
    return None


def read_source_api_version(project_root: Path) -> str:
    """Read ``sourceApiVersion`` (e.g. "60.0") from sfdx-project.json.

    Raises:
        ProjectError: File missing, not valid JSON, or version absent/malformed.
    """
    path = project_root / PROJECT_FILE
    try:
        content = path.read_text()
    except OSError as e:
        raise ProjectError.not_found(str(project_root)) from e
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ProjectError.invalid(str(path), str(e)) from e

    version = data.get("sourceApiVersion") if isinstance(data, dict) else None
    if not isinstance(version, str):
        raise ProjectError.missing_api_version(str(path))
    if not _API_VERSION.fullmatch(version):
        raise ProjectError.invalid(str(path), f"malformed sourceApiVersion {version!r}")
    return version
