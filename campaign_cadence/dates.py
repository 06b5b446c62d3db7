"""Date parsing for spreadsheet date cells."""

from __future__ import annotations

import warnings
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pandas as pd

# Tried in order; strptime accepts unpadded month/day for %m and %d.
_DATE_FORMATS = (
    "%Y-%m-%d",  # yyyy-MM-dd
    "%b %d, %Y",  # MMM d, yyyy
    "%B %d, %Y",  # MMMM d, yyyy
    "%m/%d/%Y",  # M/d/yyyy, MM/dd/yyyy
    "%m/%d/%y",  # M/d/yy, MM/dd/yy
)


def _loose_parse(text: str) -> Optional[date]:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.date()


def parse_date(value: Any) -> Optional[date]:
    """Parse a date cell, returning None when it cannot be read."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    return _loose_parse(text)


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""

    return day - timedelta(days=day.weekday())


def week_end(day: date) -> date:
    return week_start(day) + timedelta(days=6)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    if day.month == 12:
        return date(day.year, 12, 31)
    return date(day.year, day.month + 1, 1) - timedelta(days=1)


def same_month(left: date, right: date) -> bool:
    return left.year == right.year and left.month == right.month
