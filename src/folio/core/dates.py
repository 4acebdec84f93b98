"""Timestamp parsing and formatting for front-matter values."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from typing import Any

from dateutil import parser as dateutil_parser

from folio.core.exceptions import UnparsableTimestampError


def parse_timestamp(value: datetime | date | str | Any, *, default_timezone: tzinfo = UTC) -> datetime:
    """Parse a front-matter timestamp into an aware UTC datetime.

    YAML already turns unquoted ISO dates into ``date``/``datetime`` objects;
    anything else must be a non-empty string ``dateutil`` understands.

    Args:
        value: Raw value from the front-matter mapping.
        default_timezone: Timezone assigned to naive values before conversion.

    Returns:
        A timezone-aware ``datetime`` in UTC.

    Raises:
        UnparsableTimestampError: if the value is empty, of the wrong type, or
            cannot be parsed.

    """
    dt = _to_datetime(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=default_timezone)
    try:
        return dt.astimezone(UTC)
    except (OverflowError, ValueError) as exc:
        raise UnparsableTimestampError(value, str(exc)) from exc


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str):
        raise UnparsableTimestampError(value, f"expected a date string, got {type(value).__name__}")

    raw = value.strip()
    if not raw:
        raise UnparsableTimestampError(value, "empty value")

    try:
        return dateutil_parser.parse(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise UnparsableTimestampError(value, str(exc)) from exc


def format_iso_utc(dt: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with a ``Z`` suffix."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


__all__ = ["format_iso_utc", "parse_timestamp"]
