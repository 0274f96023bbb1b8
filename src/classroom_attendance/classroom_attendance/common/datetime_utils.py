from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Union


def now_utc() -> datetime:
    """Current instant in UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_instant(value: Union[str, datetime]) -> datetime:
    """Parse an ISO instant (``...Z`` or with offset) into an aware UTC datetime.

    Naive values are taken to be UTC already.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value or "").strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_instant(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    dt = parse_instant(value)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def calendar_date(value: Union[str, datetime]) -> date:
    """UTC calendar date of an instant, independent of the device's local zone."""
    return parse_instant(value).date()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def last_days_window(today: date, days: int) -> tuple[date, date]:
    """Inclusive (start, end) window of ``days`` calendar days ending ``today``."""
    if days < 1:
        raise ValueError("days must be >= 1")
    return today - timedelta(days=days - 1), today
