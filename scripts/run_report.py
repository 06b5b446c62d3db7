"""Build a tracker report from a CSV file or a Google Sheet link."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from campaign_cadence.adapters import csv_adapter, sheets
from campaign_cadence.completion import load_state
from campaign_cadence.config import default_config
from campaign_cadence.dates import parse_date
from campaign_cadence.report import build_report, report_to_json

logger = logging.getLogger(__name__)


def _load_rows(args, config):
    if args.data:
        path = Path(args.data)
        if path.suffix.lower() != ".csv":
            raise ValueError("Unsupported input format, expected .csv")
        return csv_adapter.parse(str(path))
    return sheets.fetch_rows(args.url, gid=args.gid or None, timeout=config.fetch_timeout)


def _date_arg(value: str) -> date:
    parsed = parse_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"not a date: {value!r}")
    return parsed


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the campaign cadence report")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", help="Path to a schedule CSV file")
    source.add_argument("--url", help="Google Sheet or CSV link")
    parser.add_argument("--gid", default="", help="Sheet tab gid to force")
    parser.add_argument("--today", type=_date_arg, default=None, help="Reference date (default: today)")
    parser.add_argument("--month", type=_date_arg, default=None, help="Any date inside the month to summarise")
    parser.add_argument("--state", default=None, help="Host state JSON with completed task keys")
    args = parser.parse_args()

    config = default_config()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.debug("Config: %s", config.to_dict())

    try:
        rows = _load_rows(args, config)
    except sheets.SheetFetchError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    state = load_state(args.state or config.state_path)
    today = args.today or date.today()
    report = build_report(rows, today=today, month=args.month, config=config, completion=state.tracker())

    print(report_to_json(report))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "cadence_report.json"
    out_path.write_text(report_to_json(report), encoding="utf-8")
    print(f"Saved cadence report to {out_path}")


if __name__ == "__main__":
    main()
