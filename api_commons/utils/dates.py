"""Date helpers and the date formats shared across services."""

from __future__ import annotations

from datetime import date, datetime, timedelta

ISO_DATE = "%Y-%m-%d"
ISO_DATE_TIME = "%Y-%m-%dT%H:%M:%S"
FRENCH_DATE = "%d/%m/%Y"
FRENCH_DATE_TIME = "%d/%m/%Y %H:%M:%S"


def parse_date(text: str, fmt: str = ISO_DATE) -> date:
    """Raises ``ValueError`` when *text* does not match *fmt*."""
    return datetime.strptime(text, fmt).date()


def parse_datetime(text: str, fmt: str = ISO_DATE_TIME) -> datetime:
    return datetime.strptime(text, fmt)


def format_date(value: date, fmt: str = ISO_DATE) -> str:
    return value.strftime(fmt)


def days_between(start: date, end: date) -> int:
    """Signed number of days from *start* to *end*."""
    return (end - start).days


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def is_between(value: date, start: date, end: date) -> bool:
    """Inclusive range check; works for dates and datetimes alike."""
    return start <= value <= end
