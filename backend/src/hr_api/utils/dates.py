"""Date helpers."""

from datetime import date, datetime, timezone


def utc_today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()
