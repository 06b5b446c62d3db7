import json
from datetime import date
from pathlib import Path

from campaign_cadence.adapters.csv_adapter import parse
from campaign_cadence.completion import CompletionTracker
from campaign_cadence.config import TrackerConfig
from campaign_cadence.normalize import normalize_rows
from campaign_cadence.report import build_report, report_to_json

SAMPLE = Path(__file__).resolve().parents[1] / "examples" / "sample_schedule.csv"


def sample_rows():
    return [
        {"Date": "2025-08-26", "Campaign": "DM3-B", "Part": "Batch 2", "Count": "2444", "Channels": "Mail,Text,Voicemail"},
        {"Date": "2025-09-02", "Campaign": "DM3-B", "Part": "Batch 3", "Count": "2117", "Channels": "Mail,Text,Voicemail"},
        {"Date": "2025-09-04", "Campaign": "Promo", "Part": "Wave 1", "Count": "1800", "Tags": "NoMail"},
        {"Date": "", "Campaign": "Broken", "Count": "5"},
    ]


def test_build_report_summary():
    report = build_report(sample_rows(), today=date(2025, 9, 3))
    assert report["rows"] == 4
    assert report["events"] == 3
    assert report["dropped_rows"] == 1
    assert report["month"] == "2025-09"
    assert [m["key"] for m in report["month_totals"]] == ["2025-08", "2025-09"]
    assert report["month_target"]["total"] == 2117
    assert report["month_target"]["label"] == "Below"
    assert len(report["weekly_totals"]) == 5

    this_week = [(t["type"], t["date"]) for t in report["this_week"]]
    assert this_week == [("mail", "2025-09-02"), ("text", "2025-09-04"), ("vm", "2025-09-04")]
    assert [t["date"] for t in report["next_week"]] == ["2025-09-08", "2025-09-08"]


def test_build_report_marks_done_tasks_and_serializes():
    completion = CompletionTracker(["text|2025-09-08|DM3-B|Batch 2|"])
    report = build_report(sample_rows(), today=date(2025, 9, 3), month=date(2025, 8, 1), completion=completion)
    assert [t["done"] for t in report["next_week"]] == [True, False]
    assert report["month_target"]["total"] == 2444
    assert json.loads(report_to_json(report))["events"] == 3


def test_sample_schedule_file():
    rows = parse(str(SAMPLE))
    events = normalize_rows(rows)
    assert len(rows) == 8
    assert len(events) == 7

    no_vm = events[-1]
    assert (no_vm.has_mail, no_vm.has_text, no_vm.has_vm) == (True, True, False)
    assert events[2].event_date == date(2025, 9, 10)
    assert events[5].cost == 1250.0


def test_build_report_includes_config_values():
    report = build_report(sample_rows(), today=date(2025, 9, 3))
    assert report["config"]["follow_up_days"] == 13
    assert report["config"]["sheet_tab_name"] == "Marketing"

    custom = build_report(sample_rows(), today=date(2025, 9, 3), config=TrackerConfig(target_max=5))
    assert custom["config"]["target_max"] == 5
    assert json.loads(report_to_json(custom))["config"]["target_max"] == 5
