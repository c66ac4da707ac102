"""Catalog page size bounds."""

from apexlogs.config.constants import LIMIT_MAX, LIMIT_MIN


def clamp_limit(requested: int) -> int:
    """Clamp a requested page size into [LIMIT_MIN, LIMIT_MAX]."""
    return max(LIMIT_MIN, min(LIMIT_MAX, requested))
