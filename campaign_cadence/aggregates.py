"""Monthly, weekly and per-cadence mail volume aggregates."""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Iterable

from campaign_cadence.cadence import campaign_group_key
from campaign_cadence.dates import month_end, month_start, same_month, week_start
from campaign_cadence.schema import (
    CadenceGroupRow,
    MonthTotal,
    NormalizedEvent,
    WeekTotal,
    WeekWindow,
    WeekWindows,
)

CADENCE_WIDTH = 5


def monthly_mail_totals(events: Iterable[NormalizedEvent]) -> list[MonthTotal]:
    """Sum mail counts per calendar month, oldest month first."""

    totals = Counter()
    for event in events:
        if event.has_mail:
            totals[(event.event_date.year, event.event_date.month)] += event.count

    return [
        MonthTotal(key=f"{year}-{month:02d}", year=year, month=month, total=total)
        for (year, month), total in sorted(totals.items())
    ]


def month_mail_total(events: Iterable[NormalizedEvent], month: date) -> int:
    return sum(event.count for event in events if event.has_mail and same_month(event.event_date, month))


def weekly_mail_totals(events: Iterable[NormalizedEvent], month: date) -> list[WeekTotal]:
    """Mail counts per Monday-start week for every week touching ``month``.

    Only events dated inside ``month`` count, so the first and last weeks
    ignore the days that spill into the neighbouring months.
    """

    starts = []
    day = week_start(month_start(month))
    last = month_end(month)
    while day <= last:
        starts.append(day)
        day += timedelta(days=7)

    totals = Counter()
    for event in events:
        if event.has_mail and same_month(event.event_date, month):
            totals[week_start(event.event_date)] += event.count

    return [WeekTotal(start=start, end=start + timedelta(days=6), total=totals[start]) for start in starts]


def cadence_matrix(events: Iterable[NormalizedEvent], width: int = CADENCE_WIDTH) -> list[CadenceGroupRow]:
    """Group events by campaign + part and list each group's first dates."""

    groups: dict[str, list[NormalizedEvent]] = defaultdict(list)
    for event in events:
        groups[campaign_group_key(event.campaign, event.part)].append(event)

    rows = []
    for key, members in groups.items():
        ordered = sorted(members, key=lambda e: e.event_date)
        rows.append(
            CadenceGroupRow(
                key=key,
                dates=tuple(e.event_date for e in ordered[:width]),
                total=sum(e.count for e in ordered),
            )
        )
    return sorted(rows, key=lambda row: (row.key.casefold(), row.key))


def _window(day: date) -> WeekWindow:
    start = week_start(day)
    return WeekWindow(start=start, end=start + timedelta(days=6))


def week_windows(today: date) -> WeekWindows:
    return WeekWindows(
        this=_window(today),
        next=_window(today + timedelta(days=7)),
        next2=_window(today + timedelta(days=14)),
    )


def classify_week(day: date, today: date) -> str:
    """Return ``"this"``, ``"next"``, ``"next2"`` or ``"none"`` for ``day``."""

    windows = week_windows(today)
    if windows.this.contains(day):
        return "this"
    if windows.next.contains(day):
        return "next"
    if windows.next2.contains(day):
        return "next2"
    return "none"
