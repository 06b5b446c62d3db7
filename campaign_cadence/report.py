"""One-shot tracker report over a set of raw schedule rows."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date
from typing import Iterable, Optional

from campaign_cadence.aggregates import (
    cadence_matrix,
    month_mail_total,
    monthly_mail_totals,
    week_windows,
    weekly_mail_totals,
)
from campaign_cadence.completion import CompletionTracker
from campaign_cadence.config import TrackerConfig
from campaign_cadence.normalize import normalize_rows
from campaign_cadence.schema import RawRow, ScheduledTask
from campaign_cadence.tasks import derive_tasks
from campaign_cadence.views import month_target, recent_months, tasks_in_window


def _task_payload(task: ScheduledTask, completion: CompletionTracker) -> dict:
    return {
        "type": task.type,
        "date": task.date.isoformat(),
        "label": task.label,
        "stage": task.stage,
        "count": task.count,
        "identity_key": task.identity_key,
        "done": completion.is_done(task.identity_key),
    }


def build_report(
    rows: Iterable[RawRow],
    today: date,
    month: Optional[date] = None,
    config: Optional[TrackerConfig] = None,
    completion: Optional[CompletionTracker] = None,
) -> dict:
    """Run the whole derivation and return a JSON-friendly summary."""

    config = config or TrackerConfig()
    completion = completion or CompletionTracker()
    month = month or today
    rows = list(rows)

    events = normalize_rows(rows)
    tasks = derive_tasks(events, config.follow_up_days)
    windows = week_windows(today)
    month_totals = monthly_mail_totals(events)
    target = month_target(month_mail_total(events, month), config)

    return {
        "today": today.isoformat(),
        "config": config.to_dict(),
        "month": f"{month.year}-{month.month:02d}",
        "rows": len(rows),
        "events": len(events),
        "dropped_rows": len(rows) - len(events),
        "tasks": len(tasks),
        "this_week": [_task_payload(t, completion) for t in tasks_in_window(tasks, windows.this)],
        "next_week": [_task_payload(t, completion) for t in tasks_in_window(tasks, windows.next)],
        "month_totals": [asdict(item) for item in month_totals],
        "chart_months": [item.key for item in recent_months(month_totals, config.chart_months)],
        "month_target": asdict(target),
        "weekly_totals": [
            {"start": week.start.isoformat(), "end": week.end.isoformat(), "total": week.total}
            for week in weekly_mail_totals(events, month)
        ],
        "cadence_matrix": [
            {"key": row.key, "total": row.total, "dates": [d.isoformat() for d in row.dates]}
            for row in cadence_matrix(events, config.cadence_width)
        ],
    }


def report_to_json(report: dict) -> str:
    return json.dumps(report, indent=2)
