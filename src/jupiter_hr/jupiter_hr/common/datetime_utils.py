from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value) -> Optional[datetime]:
    """Parse an ISO-8601 string (date or date-time) into a naive local datetime.

    Offsets such as +00:00 or Z are converted to local time and dropped so the
    result compares with now_local(). None passes through.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _to_naive_local(value)
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    text = str(value).strip()
    if len(text) == 10:
        return datetime.combine(parse_iso_date(text), datetime.min.time())
    return _to_naive_local(datetime.fromisoformat(text))


def _to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_optional_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value).strip()[:10])


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
