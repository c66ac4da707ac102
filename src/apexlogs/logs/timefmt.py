"""Start time normalization for artifact names."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from apexlogs.core.errors import ValidationError


def _parse(value: str) -> datetime:
    text = value.strip()
    if not text:
        raise ValueError("empty timestamp")
    try:
        # Covers the tooling API form 2024-01-02T03:04:05.000+0000
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    # RFC 2822, e.g. "Tue, 02 Jan 2024 03:04:05 +0000"
    return parsedate_to_datetime(text)


def format_start_time_utc(start_time: str) -> str:
    """Render a remote timestamp as ``YYYYMMDDTHHMMSSZ`` in UTC.

    Fractional seconds are dropped, not rounded. Timestamps without an
    offset are taken as UTC.

    Raises:
        ValidationError: If ``start_time`` is not a parseable instant.
    """
    try:
        parsed = _parse(start_time)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        dt = parsed.astimezone(UTC)
    except (ValueError, TypeError, OverflowError) as e:
        raise ValidationError.invalid_start_time(start_time) from e

    return (
        f"{dt.year:04d}{dt.month:02d}{dt.day:02d}"
        f"T{dt.hour:02d}{dt.minute:02d}{dt.second:02d}Z"
    )
