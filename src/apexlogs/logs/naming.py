"""Deterministic artifact names for exported logs."""

import re

from apexlogs.config.constants import ARTIFACT_SUFFIX, OWNER_FALLBACK

_UNSAFE_OWNER_CHARS = re.compile(r"[^A-Za-z0-9_.@-]")


def sanitize_owner(username: str) -> str:
    """Make a log owner's name safe for use in a filename.

    Surrounding whitespace is trimmed, every other character outside
    ``[A-Za-z0-9_.@-]`` becomes ``_``, and a blank name becomes ``default``.
    """
    trimmed = username.strip()
    if not trimmed:
        return OWNER_FALLBACK
    return _UNSAFE_OWNER_CHARS.sub("_", trimmed)


def build_log_filename(start_time_utc: str, username: str, log_id: str) -> str:
    """Return ``{start_time_utc}_{safe_owner}_{log_id}.log``.

    ``start_time_utc`` and ``log_id`` are embedded verbatim; the id keeps
    names unique across logs.
    """
    return f"{start_time_utc}_{sanitize_owner(username)}_{log_id}{ARTIFACT_SUFFIX}"
