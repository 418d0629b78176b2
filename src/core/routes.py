# src/core/routes.py

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


# Reference round-trip fares in THB for a 5-day trip. Stored one way only;
# lookups treat the table as symmetric.
ROUTE_BASE_PRICES: Dict[str, Dict[str, float]] = {
    "bangkok": {
        "chiang-mai": 3500,
        "phuket": 3200,
        "krabi": 3000,
        "samui": 2800,
        "pattaya": 1500,
        "hat-yai": 2500,
        "udon-thani": 2800,
        "khon-kaen": 2600,
        "nakhon-ratchasima": 2000,
        "surat-thani": 2700,
        "trang": 2900,
        "surin": 2400,
        "ubon-ratchathani": 3000,
        "nakhon-sawan": 1800,
        "lampang": 3200,
        "mae-hong-son": 3800,
        "nan": 3400,
        "phitsanulok": 2500,
        "sukhothai": 2700,
    },
}

DEFAULT_ROUTE_PRICE = 2500.0
REFERENCE_TRIP_DAYS = 5
DURATION_STEP = 0.05

# (value, Thai label) in form order
PLACES: List[Tuple[str, str]] = [
    ("bangkok", "กรุงเทพมหานคร"),
    ("chiang-mai", "เชียงใหม่"),
    ("phuket", "ภูเก็ต"),
    ("krabi", "กระบี่"),
    ("samui", "เกาะสมุย"),
    ("pattaya", "พัทยา (ชลบุรี)"),
    ("hat-yai", "หาดใหญ่ (สงขลา)"),
    ("udon-thani", "อุดรธานี"),
    ("khon-kaen", "ขอนแก่น"),
    ("nakhon-ratchasima", "นครราชสีมา"),
    ("surat-thani", "สุราษฎร์ธานี"),
    ("trang", "ตรัง"),
    ("surin", "สุรินทร์"),
    ("ubon-ratchathani", "อุบลราชธานี"),
    ("nakhon-sawan", "นครสวรรค์"),
    ("lampang", "ลำปาง"),
    ("mae-hong-son", "แม่ฮ่องสอน"),
    ("nan", "น่าน"),
    ("phitsanulok", "พิษณุโลก"),
    ("sukhothai", "สุโขทัย"),
]

_PLACE_LABELS = dict(PLACES)


def lookup_symmetric(table: Dict[str, Dict[str, float]], origin: str, destination: str) -> Optional[float]:
    """Find a value for (origin, destination), falling back to the reversed pair."""
    value = table.get(origin, {}).get(destination)
    if value is None:
        value = table.get(destination, {}).get(origin)
    return value


def base_price(origin: str, destination: str, avg_duration_days: float) -> float:
    """
    Reference round-trip fare for a route, scaled linearly around a 5-day trip.
    No floor is applied: very short trips can fall below the table value.
    """
    base = lookup_symmetric(ROUTE_BASE_PRICES, origin, destination)
    if base is None:
        if origin == destination:
            base = 0.0
        else:
            logger.debug("No route price for %s-%s, using default %s",
                         origin, destination, DEFAULT_ROUTE_PRICE)
            base = DEFAULT_ROUTE_PRICE

    return base * (1 + (avg_duration_days - REFERENCE_TRIP_DAYS) * DURATION_STEP)


def place_label(value: str) -> str:
    return _PLACE_LABELS.get(value, value)
