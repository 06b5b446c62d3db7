"""Mail / text / voicemail task derivation."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from campaign_cadence.cadence import stage_for_batch
from campaign_cadence.schema import MAIL, TEXT, VM, NormalizedEvent, ScheduledTask

FOLLOW_UP_DAYS = 13

_TYPE_LABELS = {MAIL: "Mail", TEXT: "Text", VM: "VM"}


def identity_key(task_type: str, day: date, campaign: str, part: str, batch: str) -> str:
    """Stable key used to track completion of a task across reloads."""

    return f"{task_type}|{day.isoformat()}|{campaign}|{part}|{batch}"


def follow_up_date(event: NormalizedEvent, follow_up_days: int = FOLLOW_UP_DAYS) -> date:
    """Text/VM go out ``follow_up_days`` after the mail drop, or on the date itself without mail."""

    if event.has_mail:
        return event.event_date + timedelta(days=follow_up_days)
    return event.event_date


def task_label(task_type: str, event: NormalizedEvent) -> str:
    part_batch = " • ".join(value for value in (event.part, event.batch) if value)
    label = f"{_TYPE_LABELS[task_type]} • {event.campaign}"
    return f"{label} • {part_batch}" if part_batch else label


def _make_task(task_type: str, day: date, event: NormalizedEvent) -> ScheduledTask:
    return ScheduledTask(
        type=task_type,
        date=day,
        identity_key=identity_key(task_type, day, event.campaign, event.part, event.batch),
        count=event.count,
        label=task_label(task_type, event),
        event=event,
        stage=None if task_type == MAIL else stage_for_batch(event.batch_num),
    )


def tasks_for_event(event: NormalizedEvent, follow_up_days: int = FOLLOW_UP_DAYS) -> list[ScheduledTask]:
    """Expand one event into its mail, text and voicemail tasks, in that order."""

    tasks = []
    follow = follow_up_date(event, follow_up_days)
    if event.has_mail:
        tasks.append(_make_task(MAIL, event.event_date, event))
    if event.has_text:
        tasks.append(_make_task(TEXT, follow, event))
    if event.has_vm:
        tasks.append(_make_task(VM, follow, event))
    return tasks


def derive_tasks(events: Iterable[NormalizedEvent], follow_up_days: int = FOLLOW_UP_DAYS) -> list[ScheduledTask]:
    """Derive every task and order them by date (ties keep emission order)."""

    tasks: list[ScheduledTask] = []
    for event in events:
        tasks.extend(tasks_for_event(event, follow_up_days))
    return sorted(tasks, key=lambda task: task.date)
