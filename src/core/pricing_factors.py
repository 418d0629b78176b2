# src/core/pricing_factors.py

"""
Calendar and lead-time pricing factors.

Three independent multipliers, each bounded, combined by product:

    lead time      [0.85, 1.30]  non-increasing in days booked ahead
    day of week    [0.90, 1.15]  Friday/Sunday peaks, Tuesday/Wednesday troughs
    festival       [1.00, 1.30]  surcharge near public holidays

No randomness: the same (booking_date, travel_date) always yields the same factors.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Tuple

from core.models import PricingFactors
from core.seasons import season_for_date


# (max days ahead, multiplier). Past travel dates land in the first bucket.
LEAD_TIME_BUCKETS: List[Tuple[int, float]] = [
    (3, 1.30),
    (7, 1.20),
    (14, 1.10),
    (30, 1.00),
    (60, 0.95),
    (90, 0.90),
]
LEAD_TIME_FLOOR = 0.85

# Monday .. Sunday
DAY_OF_WEEK_FACTORS: Tuple[float, ...] = (1.00, 0.90, 0.90, 1.00, 1.15, 1.10, 1.15)

# (name, month, day, surcharge)
FESTIVALS: List[Tuple[str, int, int, float]] = [
    ("วันขึ้นปีใหม่", 1, 1, 1.30),
    ("วันวาเลนไทน์", 2, 14, 1.10),
    ("สงกรานต์", 4, 13, 1.30),
    ("วันแรงงาน", 5, 1, 1.10),
    ("วันแม่", 8, 12, 1.15),
    ("วันปิยมหาราช", 10, 23, 1.10),
    ("วันพ่อ", 12, 5, 1.15),
    ("คริสต์มาส", 12, 25, 1.20),
    ("วันสิ้นปี", 12, 31, 1.30),
]
FESTIVAL_WINDOW_DAYS = 3
FESTIVAL_SHOULDER_DAYS = 7


def lead_time_factor(days_ahead: int) -> float:
    for max_days, multiplier in LEAD_TIME_BUCKETS:
        if days_ahead <= max_days:
            return multiplier
    return LEAD_TIME_FLOOR


def day_of_week_factor(travel_date: date) -> float:
    return DAY_OF_WEEK_FACTORS[travel_date.weekday()]


def _days_to_festival(travel_date: date, month: int, day: int) -> int:
    # Check the neighbouring years too so late December sees New Year's Day
    distances = []
    for year in (travel_date.year - 1, travel_date.year, travel_date.year + 1):
        distances.append(abs((date(year, month, day) - travel_date).days))
    return min(distances)


def festival_factor(travel_date: date) -> Tuple[float, Optional[str]]:
    """Strongest surcharge among nearby festivals; half of it in the shoulder window."""
    best, best_name = 1.0, None
    for name, month, day, surcharge in FESTIVALS:
        distance = _days_to_festival(travel_date, month, day)
        if distance <= FESTIVAL_WINDOW_DAYS:
            factor = surcharge
        elif distance <= FESTIVAL_SHOULDER_DAYS:
            factor = 1 + (surcharge - 1) / 2
        else:
            continue
        if factor > best:
            best, best_name = factor, name
    return best, best_name


def pricing_factors(booking_date: date, travel_date: date) -> PricingFactors:
    days_ahead = (travel_date - booking_date).days
    festival, festival_name = festival_factor(travel_date)

    return PricingFactors(
        lead_time=lead_time_factor(days_ahead),
        day_of_week=day_of_week_factor(travel_date),
        festival=festival,
        days_ahead=days_ahead,
        festival_name=festival_name,
        calendar_season=season_for_date(travel_date),
    )
