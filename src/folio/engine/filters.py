"""Custom Jinja2 filters for site templates."""

from datetime import datetime


def format_datetime(value: datetime | None, format_str: str = "%Y-%m-%d") -> str:
    """Format datetime object.

    Args:
        value: Datetime to format
        format_str: strftime format string

    Returns:
        Formatted datetime string, or an empty string for missing values

    """
    if value is None:
        return ""
    if not isinstance(value, datetime):
        return str(value)
    return value.strftime(format_str)


def isoformat(value: datetime | None) -> str:
    if not isinstance(value, datetime):
        return ""
    return value.isoformat()
