"""CSV adapter for raw campaign schedule rows."""

from __future__ import annotations

import csv
import io
import logging
from typing import Iterable, TextIO

from campaign_cadence.schema import RawRow

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {"date", "campaign", "count"}


def _check_header(fieldnames: Iterable[str]) -> None:
    present = {name.strip().lower() for name in fieldnames if name}
    missing = sorted(_REQUIRED_FIELDS - present)
    if missing:
        logger.warning("Schedule is missing expected column(s) %s", missing)


def _is_blank(row: dict) -> bool:
    return all(value is None or not str(value).strip() for value in row.values())


def _read(handle: TextIO) -> list[RawRow]:
    reader = csv.DictReader(handle)
    if not reader.fieldnames:
        return []

    reader.fieldnames = [name.strip() if name else name for name in reader.fieldnames]
    _check_header(reader.fieldnames)

    rows: list[RawRow] = []
    for row in reader:
        row.pop(None, None)
        if _is_blank(row):
            continue
        rows.append(row)
    return rows


def parse_text(text: str) -> list[RawRow]:
    """Parse CSV text (e.g. a downloaded sheet export) into raw rows."""

    return _read(io.StringIO(text.lstrip("\ufeff")))


def parse(file_path: str) -> list[RawRow]:
    """Parse a CSV file into a list of raw rows."""

    with open(file_path, newline="", encoding="utf-8-sig") as handle:
        rows = _read(handle)
    logger.info("Loaded %d row(s) from %s", len(rows), file_path)
    return rows
