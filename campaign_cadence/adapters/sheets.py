"""Google Sheets source: link normalization and CSV download."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse, urlunparse

import requests

from campaign_cadence.adapters.csv_adapter import parse_text
from campaign_cadence.schema import RawRow

logger = logging.getLogger(__name__)

_SHEET_ID = re.compile(r"/d/([^/]+)")

FETCH_HINT = (
    "Couldn't load the sheet. Make sure it's published to the web "
    "(File → Share → Publish to web → CSV), or share it with "
    "'Anyone with the link' and we will try the export URL."
)


class SheetFetchError(RuntimeError):
    """Raised when the schedule cannot be downloaded; the message is user-facing."""


def _with_query(parsed, **updates) -> str:
    query = {key: values[-1] for key, values in parse_qs(parsed.query, keep_blank_values=True).items()}
    query.update(updates)
    return urlunparse(parsed._replace(query=urlencode(query)))


def to_csv_url(url: str, gid: Optional[str] = None) -> str:
    """Turn any Google Sheets link into its CSV export link.

    ``gid`` pins a specific tab and overrides one found in the link.
    Anything that is not a Google Sheets link is returned unchanged.
    """

    text = (url or "").strip()
    if not text:
        return ""

    parsed = urlparse(text)
    if "docs.google.com" not in parsed.netloc or "/spreadsheets/" not in parsed.path:
        return text

    if "/export" in parsed.path:
        updates = {"format": "csv"}
        if gid:
            updates["gid"] = gid
        return _with_query(parsed, **updates)

    if "/pub" in parsed.path and parse_qs(parsed.query).get("output") == ["csv"]:
        return _with_query(parsed, gid=gid) if gid else text

    match = _SHEET_ID.search(parsed.path)
    if not match:
        return text

    incoming = parse_qs(parsed.query).get("gid", [None])[0] or parse_qs(parsed.fragment).get("gid", [None])[0]
    final_gid = gid or incoming
    export = f"https://docs.google.com/spreadsheets/d/{match.group(1)}/export?format=csv"
    return f"{export}&gid={final_gid}" if final_gid else export


def fetch_rows(url: str, gid: Optional[str] = None, timeout: float = 20.0) -> list[RawRow]:
    """Download a sheet (or any CSV link) and parse it into raw rows."""

    csv_url = to_csv_url(url, gid)
    if not csv_url:
        raise SheetFetchError("No sheet link was provided.")

    try:
        response = requests.get(csv_url, timeout=timeout, headers={"Cache-Control": "no-store"})
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("Failed to load sheet CSV from %s: %s", csv_url, exc)
        raise SheetFetchError(FETCH_HINT) from exc

    rows = parse_text(response.text)
    logger.info("Fetched %d row(s) from %s", len(rows), csv_url)
    return rows
