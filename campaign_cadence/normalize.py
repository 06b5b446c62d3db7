"""Raw spreadsheet rows -> normalized campaign events."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable, Optional

from campaign_cadence.cadence import infer_batch_num
from campaign_cadence.channels import classify_channels
from campaign_cadence.dates import parse_date
from campaign_cadence.schema import NormalizedEvent, RawRow

logger = logging.getLogger(__name__)

ADJUSTED_DATE_FIELD = "red - adjusted dates"
UNNAMED_CAMPAIGN = "(Unnamed)"
# Follow-up, week and calendar arithmetic needs room past the event date.
LATEST_EVENT_DATE = date(9998, 12, 31)


def _lower_keys(row: RawRow) -> dict:
    return {str(key).strip().lower(): value for key, value in row.items() if key is not None}


def _text(fields: dict, name: str) -> str:
    value = fields.get(name)
    if value is None:
        return ""
    return str(value).strip()


def _number(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        cleaned = str(value).strip().replace(",", "").replace("$", "")
        if not cleaned:
            return 0.0
        try:
            number = float(cleaned)
        except ValueError:
            return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def resolve_event_date(fields: dict):
    """Adjusted date when the cell is filled in, otherwise the Date cell."""

    adjusted = fields.get(ADJUSTED_DATE_FIELD)
    if adjusted is not None and str(adjusted).strip():
        return parse_date(adjusted)
    return parse_date(fields.get("date"))


def normalize_row(row: RawRow, row_index: int) -> Optional[NormalizedEvent]:
    """Normalize one raw row, or None when it has no usable date."""

    fields = _lower_keys(row)
    event_date = resolve_event_date(fields)
    if event_date is None or event_date > LATEST_EVENT_DATE:
        return None

    flags = classify_channels(fields.get("tags"), fields.get("channels"))
    part = _text(fields, "part")
    batch = _text(fields, "batch")

    return NormalizedEvent(
        row_index=row_index,
        event_date=event_date,
        has_mail=flags.has_mail,
        has_text=flags.has_text,
        has_vm=flags.has_vm,
        count=int(_number(fields.get("count"))),
        campaign=_text(fields, "campaign") or UNNAMED_CAMPAIGN,
        category=_text(fields, "category"),
        part=part,
        batch=batch,
        batch_num=infer_batch_num(part, batch),
        cost=_number(fields.get("cost")),
        county=_text(fields, "county"),
    )


def normalize_rows(rows: Iterable[RawRow]) -> list[NormalizedEvent]:
    """Normalize every row, dropping the ones whose date cannot be parsed."""

    events: list[NormalizedEvent] = []
    dropped = 0
    for row_index, row in enumerate(rows):
        event = normalize_row(row, row_index)
        if event is None:
            dropped += 1
            continue
        events.append(event)

    if dropped:
        logger.debug("Dropped %d row(s) without a usable date", dropped)
    return events
