from datetime import date

from campaign_cadence.aggregates import (
    cadence_matrix,
    classify_week,
    month_mail_total,
    monthly_mail_totals,
    week_windows,
    weekly_mail_totals,
)
from campaign_cadence.schema import MonthTotal, NormalizedEvent


def make_event(day, count, has_mail=True, campaign="DM3-B", part=""):
    return NormalizedEvent(
        row_index=0,
        event_date=day,
        has_mail=has_mail,
        has_text=True,
        has_vm=True,
        count=count,
        campaign=campaign,
        category="",
        part=part,
        batch="",
        batch_num=None,
        cost=0.0,
    )


def sample_events():
    return [
        make_event(date(2025, 8, 26), 2444),
        make_event(date(2025, 9, 2), 2117),
        make_event(date(2025, 9, 9), 2524),
        make_event(date(2025, 9, 16), 2091),
        make_event(date(2025, 9, 23), 1800, has_mail=False),
    ]


def test_monthly_mail_totals_ignore_text_only_events():
    totals = monthly_mail_totals(sample_events())
    assert totals == [
        MonthTotal(key="2025-08", year=2025, month=8, total=2444),
        MonthTotal(key="2025-09", year=2025, month=9, total=2117 + 2524 + 2091),
    ]


def test_monthly_mail_totals_do_not_depend_on_row_order():
    events = sample_events()
    assert monthly_mail_totals(list(reversed(events))) == monthly_mail_totals(events)
    assert month_mail_total(events, date(2025, 9, 30)) == 6732


def test_weekly_mail_totals_cover_every_week_of_month():
    weeks = weekly_mail_totals(sample_events(), date(2025, 9, 15))
    assert [w.start for w in weeks] == [
        date(2025, 9, 1),
        date(2025, 9, 8),
        date(2025, 9, 15),
        date(2025, 9, 22),
        date(2025, 9, 29),
    ]
    assert [w.total for w in weeks] == [2117, 2524, 2091, 0, 0]
    assert weeks[-1].end == date(2025, 10, 5)


def test_weekly_mail_totals_skip_days_from_other_months():
    events = [make_event(date(2025, 7, 29), 500), make_event(date(2025, 8, 1), 300)]
    weeks = weekly_mail_totals(events, date(2025, 8, 1))
    assert weeks[0].start == date(2025, 7, 28)
    assert weeks[0].total == 300
    assert sum(w.total for w in weeks) == 300


def test_cadence_matrix_groups_and_totals_whole_group():
    events = [make_event(date(2025, 9, day), day, campaign="DM 1 - A") for day in (20, 3, 10, 1, 15, 25)]
    events.append(make_event(date(2025, 9, 4), 7, campaign="DM 1", part="Batch B"))
    rows = cadence_matrix(events)

    assert [row.key for row in rows] == ["DM 1 - A", "DM 1 - B"]
    first = rows[0]
    assert first.dates == (date(2025, 9, 1), date(2025, 9, 3), date(2025, 9, 10), date(2025, 9, 15), date(2025, 9, 20))
    assert first.total == 20 + 3 + 10 + 1 + 15 + 25
    assert rows[1].total == 7


def test_week_classification():
    today = date(2025, 9, 3)
    assert week_windows(today).this.start == date(2025, 9, 1)
    assert classify_week(date(2025, 9, 7), today) == "this"
    assert classify_week(date(2025, 9, 8), today) == "next"
    assert classify_week(date(2025, 9, 21), today) == "next2"
    assert classify_week(date(2025, 9, 22), today) == "none"
    assert classify_week(date(2025, 8, 31), today) == "none"


def test_cadence_matrix_sorts_keys_ignoring_case():
    events = [make_event(date(2025, 9, 1), 1, campaign=name) for name in ("beta", "Gamma", "Alpha")]
    assert [row.key for row in cadence_matrix(events)] == ["Alpha", "beta", "Gamma"]
