"""Streamlit host for the campaign cadence tracker."""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from typing import Any, Optional

import pandas as pd

from campaign_cadence.adapters import csv_adapter, sheets
from campaign_cadence.aggregates import (
    cadence_matrix,
    month_mail_total,
    monthly_mail_totals,
    week_windows,
    weekly_mail_totals,
)
from campaign_cadence.cadence import ordinal
from campaign_cadence.completion import CompletionTracker, HostState, load_state, save_state
from campaign_cadence.config import TrackerConfig, default_config
from campaign_cadence.dates import month_end, month_start
from campaign_cadence.normalize import normalize_rows
from campaign_cadence.schema import MAIL
from campaign_cadence.tasks import derive_tasks
from campaign_cadence.views import (
    calendar_days,
    month_target,
    recent_months,
    schedule_rows,
    tasks_in_window,
    unique_tasks,
)

DEMO_DATASET = "examples/sample_schedule.csv"
TYPE_ICONS = {"mail": "✉️", "text": "💬", "vm": "🎙️"}
WEEK_LABELS = {"this": "This week", "next": "Next week", "next2": "In two weeks", "none": ""}


def _parse_uploaded(uploaded_file) -> list:
    with tempfile.NamedTemporaryFile(delete=False, suffix=".csv") as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return csv_adapter.parse(temp_path)


def _fmt_currency(value: float) -> str:
    return f"${value:,.2f}"


def run_tracker(rows: list, today: date, month: date, config: TrackerConfig) -> dict[str, Any]:
    """Run every derivation step and return a UI-friendly payload."""

    events = normalize_rows(rows)
    tasks = derive_tasks(events, config.follow_up_days)
    windows = week_windows(today)
    month_totals = monthly_mail_totals(events)
    return {
        "events": events,
        "tasks": tasks,
        "this_week": unique_tasks(tasks_in_window(tasks, windows.this)),
        "next_week": unique_tasks(tasks_in_window(tasks, windows.next)),
        "month_totals": month_totals,
        "chart": recent_months(month_totals, config.chart_months),
        "target": month_target(month_mail_total(events, month), config),
        "weeks": weekly_mail_totals(events, month),
        "cadence": cadence_matrix(events, config.cadence_width),
        "calendar": calendar_days(tasks, month),
        "dropped": len(rows) - len(events),
    }


def _schedule_frame(rows, show_costs: bool, show_county: bool) -> pd.DataFrame:
    records = []
    for row in rows:
        event = row.event
        record = {
            "Date": f"{event.event_date:%a, %b %d, %Y}",
            "Campaign + Part": row.name,
            "Batch": "" if row.batch_num is None else row.batch_num,
            "Mail?": "No Mail" if row.no_mail else "Mail",
            "Text/VM On": f"{row.follow_up:%a, %b %d}"
            + (" 💬" if event.has_text else "")
            + (" 🎙️" if event.has_vm else ""),
            "Mail Count": f"{event.count:,}" if event.has_mail else "",
            "Week": WEEK_LABELS[row.week],
        }
        if show_county:
            record["County"] = event.county
        if show_costs:
            record["Cost"] = _fmt_currency(event.cost) if event.has_mail else ""
        records.append(record)
    return pd.DataFrame.from_records(records)


def _render_reminders(st, title: str, tasks: list, completion: CompletionTracker, state: HostState, config) -> None:
    st.subheader(title)
    if not tasks:
        st.write(f"No scheduled actions {title.lower()}.")
        return

    for task in tasks:
        text = f"{TYPE_ICONS[task.type]} **{task.date:%a, %b %d}** — {task.label}"
        if task.stage:
            text += f" · _{task.stage}_"
        if task.type == MAIL:
            if task.count:
                text += f" · {task.count:,}"
            st.markdown(text)
            continue

        checked = st.checkbox(text, value=completion.is_done(task.identity_key), key=f"{title}:{task.identity_key}")
        if checked != completion.is_done(task.identity_key):
            completion.set_done(task.identity_key, checked)
            state.done_keys = completion.done_keys()
            save_state(config.state_path, state)


def _load_source(
    st, config: TrackerConfig, state: HostState, uploaded, use_demo: bool, sheet_url: str, reload: bool = False
) -> Optional[str]:
    """Refresh ``st.session_state.rows``; a failed fetch keeps the previous rows.

    A sheet is only downloaded when its link changes or a reload is requested.
    """

    if uploaded is not None:
        st.session_state.rows = _parse_uploaded(uploaded)
        st.session_state.fetched_url = None
        return f"uploaded file ({uploaded.name})"
    if sheet_url:
        if reload or st.session_state.get("fetched_url") != sheet_url:
            try:
                st.session_state.rows = sheets.fetch_rows(
                    sheet_url, gid=config.sheet_gid or None, timeout=config.fetch_timeout
                )
            except sheets.SheetFetchError as exc:
                st.error(str(exc))
                return "previously loaded data" if st.session_state.get("rows") else None
            st.session_state.fetched_url = sheet_url
        if not config.use_fixed_source and sheet_url != state.sheet_url:
            state.sheet_url = sheet_url
            save_state(config.state_path, state)
        tab = f" — tab: {config.sheet_tab_name}" if config.use_fixed_source else ""
        return f"Google Sheet{tab}"
    if use_demo:
        st.session_state.rows = csv_adapter.parse(DEMO_DATASET)
        st.session_state.fetched_url = None
        return f"demo dataset ({DEMO_DATASET})"
    return None


def main() -> None:
    import streamlit as st

    config = default_config()
    state = load_state(config.state_path)
    completion = state.tracker()

    st.set_page_config(page_title="Marketing Schedule Tracker", layout="wide")
    st.title("Marketing Schedule Tracker")

    if "view_month" not in st.session_state:
        st.session_state.view_month = month_start(date.today())

    with st.sidebar:
        st.header("Source")
        if config.use_fixed_source:
            sheet_url = config.sheet_url
            st.caption(f"Fixed Google Sheet — tab: {config.sheet_tab_name}")
            uploaded = None
        else:
            sheet_url = st.text_input("Google Sheet or CSV link", value=state.sheet_url)
            uploaded = st.file_uploader("Upload CSV", type=["csv"])
        reload = bool(sheet_url) and st.button("Reload sheet")
        use_demo = st.checkbox("Load demo dataset", value=not sheet_url)
        today = st.date_input("Today", value=date.today())

        st.header("Sections")
        show_calendar = st.checkbox("Calendar", value=True)
        show_weekly = st.checkbox("Weekly count", value=True)
        show_schedule = st.checkbox("Campaign schedule", value=True)
        show_cadence = st.checkbox("Cadence matrix", value=True)

        st.header("Month")
        prev_col, next_col, today_col = st.columns(3)
        if prev_col.button("Prev"):
            st.session_state.view_month = month_start(st.session_state.view_month - timedelta(days=1))
        if next_col.button("Next"):
            st.session_state.view_month = month_end(st.session_state.view_month) + timedelta(days=1)
        if today_col.button("Today"):
            st.session_state.view_month = month_start(today)

    source = _load_source(st, config, state, uploaded, use_demo, sheet_url, reload=reload)
    rows = st.session_state.get("rows") or []
    if not source or not rows:
        st.info("Connect a sheet, upload a CSV or enable the demo dataset.")
        return

    month = st.session_state.view_month
    result = run_tracker(rows, today, month, config)
    st.success(f"Loaded {len(rows)} rows from {source}.")
    if result["dropped"]:
        st.caption(f"{result['dropped']} row(s) without a readable date were skipped.")

    left, right = st.columns(2)
    with left:
        _render_reminders(st, "This week", result["this_week"], completion, state, config)
    with right:
        _render_reminders(st, "Next week", result["next_week"], completion, state, config)

    target = result["target"]
    st.subheader(f"{month:%B %Y} mail total")
    t1, t2 = st.columns([1, 3])
    t1.metric("Mail pieces", f"{target.total:,}", target.label)
    t2.progress(int(target.progress_pct))
    t2.caption(
        f"Target {config.target_min:,}–{config.target_max:,}. Mail counts only; "
        "Text/VM-only campaigns are excluded."
    )

    if show_calendar:
        st.subheader("Mail per month")
        chart = pd.DataFrame({"Mail": [item.total for item in result["chart"]]}, index=[item.key for item in result["chart"]])
        st.bar_chart(chart)

        st.subheader("Calendar")
        days = result["calendar"]
        for start in range(0, len(days), 7):
            cols = st.columns(7)
            for col, day in zip(cols, days[start:start + 7]):
                lines = [f"**{day.date.day}**" if day.in_month else f"_{day.date.day}_"]
                for task in day.tasks[:3]:
                    lines.append(f"{TYPE_ICONS[task.type]} {task.event.campaign}")
                if len(day.tasks) > 3:
                    lines.append(f"+{len(day.tasks) - 3} more…")
                col.markdown("  \n".join(lines))

    if show_weekly:
        st.subheader(f"Weekly Mail Count — {month:%B %Y}")
        st.table(
            pd.DataFrame.from_records(
                [{"Week (Mon–Sun)": f"{w.start:%b %d} – {w.end:%b %d}", "Total": f"{w.total:,}"} for w in result["weeks"]]
            )
        )

    if show_schedule:
        st.subheader("Campaign schedule")
        c1, c2, c3, c4 = st.columns(4)
        show_costs = c1.checkbox("Show cost column")
        show_county = c2.checkbox("Show county column")
        hide_completed = c3.checkbox("Hide completed (Text/VM done)")
        hide_past = c4.checkbox("Hide past schedule", value=True)
        table = schedule_rows(
            result["events"],
            today,
            completion,
            hide_past=hide_past,
            hide_completed=hide_completed,
            follow_up_days=config.follow_up_days,
        )
        st.caption("Showing upcoming only" if hide_past else "Showing all (past + upcoming)")
        st.dataframe(_schedule_frame(table, show_costs, show_county), use_container_width=True)

    if show_cadence:
        st.subheader(f"Cadence matrix (first {config.cadence_width} batches by campaign & part)")
        records = []
        for row in result["cadence"]:
            record = {"Campaign + Part": row.key, "Total Count": f"{row.total:,}"}
            for index in range(config.cadence_width):
                label = f"{ordinal(index + 1)} Batch"
                record[label] = f"{row.dates[index]:%m/%d/%Y}" if index < len(row.dates) else ""
            records.append(record)
        st.table(pd.DataFrame.from_records(records))


if __name__ == "__main__":
    main()
