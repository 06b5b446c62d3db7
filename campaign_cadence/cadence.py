"""Cadence labels: batch numbers, follow-up stages and campaign groups."""

from __future__ import annotations

import math
import re
from typing import Optional

_DIGIT = re.compile(r"[0-9]")
_LONE_LETTER = re.compile(r"(?<![A-Za-z0-9])([A-Za-z])(?![A-Za-z0-9])")
_FIRST_LETTER = re.compile(r"[A-Za-z]")
_LETTER_SUFFIX = " - "


def infer_batch_num(part: object, batch: object) -> Optional[int]:
    """Join every digit of ``part`` then ``batch`` into one number.

    Returns None when there are no digits or the run is too long to be a
    finite number.
    """

    digits = "".join(_DIGIT.findall(f"{part or ''} {batch or ''}"))
    if not digits or not math.isfinite(float(digits)):
        return None
    return int(digits)


def ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def stage_for_batch(batch_num: Optional[int]) -> str:
    """Human label for a batch position: Initial, 2nd..4th Follow-up, Final."""

    if not batch_num or batch_num <= 1:
        return "Initial"
    if batch_num >= 5:
        return "Final"
    return f"{ordinal(batch_num)} Follow-up"


def part_letter(part: object) -> str:
    """Letter a part cell encodes, e.g. ``"Batch A"`` -> ``"A"``.

    A standalone letter wins; otherwise the first ASCII letter is used.
    """

    text = str(part or "")
    match = _LONE_LETTER.search(text) or _FIRST_LETTER.search(text)
    return match.group(0).upper() if match else ""


def strip_letter_suffix(campaign: object) -> str:
    base = str(campaign or "").strip()
    idx = base.rfind(_LETTER_SUFFIX)
    if idx > -1:
        suffix = base[idx + len(_LETTER_SUFFIX):].strip()
        if len(suffix) == 1 and "A" <= suffix.upper() <= "Z":
            base = base[:idx]
    return base


def campaign_group_key(campaign: object, part: object) -> str:
    """Campaign + part identity; a part letter replaces any letter suffix."""

    letter = part_letter(part)
    if not letter:
        return str(campaign or "").strip()
    return f"{strip_letter_suffix(campaign)}{_LETTER_SUFFIX}{letter}"
