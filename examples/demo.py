"""Demo script for campaign-cadence."""

import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from campaign_cadence.adapters.csv_adapter import parse
from campaign_cadence.aggregates import cadence_matrix, monthly_mail_totals
from campaign_cadence.normalize import normalize_rows
from campaign_cadence.tasks import derive_tasks


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    rows = parse(str(Path(__file__).with_name("sample_schedule.csv")))
    events = normalize_rows(rows)
    tasks = derive_tasks(events)

    print(f"{len(rows)} rows -> {len(events)} events -> {len(tasks)} tasks (as of {date.today()})")
    for task in tasks:
        stage = f" [{task.stage}]" if task.stage else ""
        print(f"  {task.date:%a, %b %d}  {task.label}{stage}")
    print("Monthly mail:", {item.key: item.total for item in monthly_mail_totals(events)})
    for row in cadence_matrix(events):
        print("Cadence:", row.key, row.total, [d.isoformat() for d in row.dates])


if __name__ == "__main__":
    main()
