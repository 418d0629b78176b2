# src/core/airlines.py

from __future__ import annotations

from typing import Dict, List, Tuple

from core.routes import lookup_symmetric


# (id, display name) in the order the search form lists them
AIRLINES: List[Tuple[str, str]] = [
    ("thai-airways", "Thai Airways"),
    ("thai-airasia", "Thai AirAsia"),
    ("thai-lion-air", "Thai Lion Air"),
    ("thai-vietjet", "Thai Vietjet Air"),
    ("bangkok-airways", "Bangkok Airways"),
    ("nok-air", "Nok Air"),
]

AIRLINE_IDS: List[str] = [airline_id for airline_id, _ in AIRLINES]

_DISPLAY_NAMES: Dict[str, str] = dict(AIRLINES)

# Two-letter designators used in flight numbers
AIRLINE_CODES: Dict[str, str] = {
    "thai-airways": "TG",
    "thai-airasia": "FD",
    "thai-lion-air": "SL",
    "thai-vietjet": "VZ",
    "bangkok-airways": "PG",
    "nok-air": "DD",
}

# Full-service carriers anchor higher than the budget ones
AIRLINE_BASE_PRICES: Dict[str, float] = {
    "thai-airways": 4000,
    "bangkok-airways": 3800,
    "thai-airasia": 2500,
    "thai-lion-air": 2300,
    "thai-vietjet": 2400,
    "nok-air": 2200,
}

DEFAULT_AIRLINE_PRICE = 3000.0

ROUTE_MULTIPLIERS: Dict[str, Dict[str, float]] = {
    "bangkok": {
        "chiang-mai": 1.0,
        "phuket": 0.95,
        "hat-yai": 0.9,
        "udon-thani": 0.85,
    },
}

# Used when the caller has no airline preference
DEFAULT_AIRLINE = "Thai Airways"


def base_fare_for_route(origin: str, destination: str, airline_id: str) -> float:
    anchor = AIRLINE_BASE_PRICES.get(airline_id, DEFAULT_AIRLINE_PRICE)
    multiplier = lookup_symmetric(ROUTE_MULTIPLIERS, origin, destination)
    if multiplier is None:
        multiplier = 1.0
    return anchor * multiplier


def display_name(airline_id: str) -> str:
    return _DISPLAY_NAMES.get(airline_id, airline_id)


def airline_code(airline_id: str) -> str:
    return AIRLINE_CODES.get(airline_id, airline_id[:2].upper())
