"""Host-facing projections: reminder lists, schedule table, calendar grid."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from campaign_cadence.aggregates import classify_week
from campaign_cadence.cadence import part_letter
from campaign_cadence.completion import CompletionTracker
from campaign_cadence.config import TrackerConfig
from campaign_cadence.dates import month_end, month_start, week_end, week_start
from campaign_cadence.schema import TEXT, VM, MonthTotal, NormalizedEvent, ScheduledTask, WeekWindow
from campaign_cadence.tasks import FOLLOW_UP_DAYS, follow_up_date, identity_key

_HYPHEN = re.compile(r"\s*-\s*")


@dataclass(frozen=True)
class ScheduleRow:
    event: NormalizedEvent
    name: str
    batch_num: Optional[int]
    follow_up: date
    week: str

    @property
    def no_mail(self) -> bool:
        return not self.event.has_mail


@dataclass(frozen=True)
class TargetStatus:
    total: int
    in_target: bool
    label: str
    progress_pct: float


@dataclass(frozen=True)
class CalendarDay:
    date: date
    tasks: tuple
    in_month: bool


def tasks_in_window(tasks: Iterable[ScheduledTask], window: WeekWindow) -> list[ScheduledTask]:
    return [task for task in tasks if window.contains(task.date)]


def unique_tasks(tasks: Iterable[ScheduledTask]) -> list[ScheduledTask]:
    """Keep the first task per identity key; duplicates are the same logical task."""

    seen = set()
    kept = []
    for task in tasks:
        if task.identity_key not in seen:
            seen.add(task.identity_key)
            kept.append(task)
    return kept


def schedule_name(campaign: str, part: str) -> str:
    """Campaign name with hyphens flattened and the part letter appended once."""

    name = _HYPHEN.sub(" ", campaign or "").strip()
    letter = part_letter(part)
    if letter and not re.search(rf"\b{letter}\b", name, re.IGNORECASE):
        name = f"{name} {letter}"
    return name


def follow_ups_done(event: NormalizedEvent, completion: CompletionTracker, follow_up_days: int = FOLLOW_UP_DAYS) -> bool:
    """True when every text/VM follow-up of ``event`` is marked done (or absent)."""

    follow = follow_up_date(event, follow_up_days)
    text_done = not event.has_text or completion.is_done(
        identity_key(TEXT, follow, event.campaign, event.part, event.batch)
    )
    vm_done = not event.has_vm or completion.is_done(
        identity_key(VM, follow, event.campaign, event.part, event.batch)
    )
    return text_done and vm_done


def schedule_rows(
    events: Iterable[NormalizedEvent],
    today: date,
    completion: Optional[CompletionTracker] = None,
    hide_past: bool = True,
    hide_completed: bool = False,
    follow_up_days: int = FOLLOW_UP_DAYS,
) -> list[ScheduleRow]:
    """Rows of the campaign schedule table, oldest first."""

    completion = completion or CompletionTracker()
    rows = []
    for event in sorted(events, key=lambda e: e.event_date):
        if hide_past and event.event_date < today:
            continue
        if hide_completed and follow_ups_done(event, completion, follow_up_days):
            continue
        rows.append(
            ScheduleRow(
                event=event,
                name=schedule_name(event.campaign, event.part),
                batch_num=event.batch_num,
                follow_up=follow_up_date(event, follow_up_days),
                week=classify_week(event.event_date, today),
            )
        )
    return rows


def calendar_days(tasks: Iterable[ScheduledTask], month: date) -> list[CalendarDay]:
    """Monday-start grid of whole weeks covering ``month`` with each day's tasks."""

    by_day: dict[date, list[ScheduledTask]] = {}
    for task in tasks:
        by_day.setdefault(task.date, []).append(task)

    first = week_start(month_start(month))
    last = week_end(month_end(month))
    days = []
    day = first
    while day <= last:
        days.append(
            CalendarDay(
                date=day,
                tasks=tuple(by_day.get(day, ())),
                in_month=(day.year, day.month) == (month.year, month.month),
            )
        )
        day += timedelta(days=1)
    return days


def month_target(total: int, config: Optional[TrackerConfig] = None) -> TargetStatus:
    """Compare a month's mail total against the configured target range."""

    config = config or TrackerConfig()
    in_target = config.target_min <= total <= config.target_max
    if in_target:
        label = "Within target"
    elif total < config.target_min:
        label = "Below"
    else:
        label = "Above"

    pct = (total * 100.0 / config.target_max) if config.target_max else 0.0
    return TargetStatus(total=total, in_target=in_target, label=label, progress_pct=max(0.0, min(100.0, pct)))


def recent_months(month_totals: list[MonthTotal], limit: int = 12) -> list[MonthTotal]:
    ordered = sorted(month_totals, key=lambda item: (item.year, item.month))
    return ordered[-limit:] if limit > 0 else []
