# src/core/dates.py

from __future__ import annotations

import logging
import math
import re
from datetime import date, timedelta
from typing import Optional

logger = logging.getLogger(__name__)


THAI_MONTHS_FULL = (
    "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
    "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
)

THAI_MONTHS_ABBR = (
    "ม.ค.", "ก.พ.", "มี.ค.", "เม.ย.", "พ.ค.", "มิ.ย.",
    "ก.ค.", "ส.ค.", "ก.ย.", "ต.ค.", "พ.ย.", "ธ.ค.",
)

_LEADING_DAY_RE = re.compile(r"^\s*(\d{1,2})")
_YEAR_RE = re.compile(r"(\d{4})\s*$")


def month_index(month_name: str) -> int:
    """1-based month number for a full Thai month name."""
    return THAI_MONTHS_FULL.index(month_name) + 1


def _first_month_in(text: str) -> Optional[int]:
    found = [(text.find(name), i + 1)
             for i, name in enumerate(THAI_MONTHS_FULL) if name in text]
    if not found:
        return None
    return min(found)[1]


def parse_best_deal_date(text: str, fallback: date) -> date:
    """
    First day of a canonical best-deal window.

    Accepts '15-22 พฤษภาคม 2025' and '25 มีนาคม - 5 เมษายน 2025'.
    Anything unparseable is a data-table authoring error: it is logged and
    `fallback` is returned instead.
    """
    day_match = _LEADING_DAY_RE.match(text or "")
    year_match = _YEAR_RE.search(text or "")
    month = _first_month_in(text or "")

    if not day_match or not year_match or month is None:
        logger.warning("Unparseable best-deal dates %r, using %s", text, fallback)
        return fallback

    try:
        return date(int(year_match.group(1)), month, int(day_match.group(1)))
    except ValueError:
        logger.warning("Invalid best-deal date %r, using %s", text, fallback)
        return fallback


def format_thai_date(d: date) -> str:
    return f"{d.day} {THAI_MONTHS_FULL[d.month - 1]} {d.year}"


def format_thai_short(d: date) -> str:
    return f"{d.day} {THAI_MONTHS_ABBR[d.month - 1]}"


def format_thai_date_range(start: date, end: date, trip_type: Optional[str] = None) -> str:
    if trip_type == "one-way":
        return format_thai_date(start)

    if (start.year, start.month) == (end.year, end.month):
        return f"{start.day}-{end.day} {THAI_MONTHS_FULL[end.month - 1]} {end.year}"

    if start.year == end.year:
        return f"{start.day} {THAI_MONTHS_FULL[start.month - 1]} - {format_thai_date(end)}"

    return f"{format_thai_date(start)} - {format_thai_date(end)}"


def add_days(d: date, days: float) -> date:
    """Shift by a (possibly fractional) day count, rounded half-up like the form does."""
    return d + timedelta(days=math.floor(days + 0.5))


def trip_duration_days(start: date, end: date) -> int:
    # Whole calendar dates, so the day difference is already the ceiling
    return abs((end - start).days)
