# src/core/scoring.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from core.airlines import DEFAULT_AIRLINE, base_fare_for_route, display_name
from core.models import PriceRange, SeasonData
from core.pricing_factors import pricing_factors


@dataclass(frozen=True)
class AirlineFare:
    airline_id: str
    airline: str  # display name
    price: float


def round_fare(value: float) -> int:
    """Half-up rounding to whole baht (Python's round() is half-even)."""
    return int(math.floor(value + 0.5))


def band_multiplier(season_type: str, multiplier: PriceRange) -> float:
    """
    Low season is priced at its cheapest bound and high season at its steepest,
    so the seasonal contrast shows even when airline anchors are close.
    """
    if season_type == "low":
        return multiplier.min
    if season_type == "high":
        return multiplier.max
    return (multiplier.min + multiplier.max) / 2


def score_airlines(
    origin: str,
    destination: str,
    airline_ids: Sequence[str],
    season_type: str,
    multiplier: PriceRange,
    travel_date: date,
    booking_date: date,
) -> List[AirlineFare]:
    """Unrounded fare per airline for one travel date, cheapest first."""
    total = pricing_factors(booking_date, travel_date).total_multiplier
    season_mult = band_multiplier(season_type, multiplier)

    fares = [
        AirlineFare(
            airline_id=airline_id,
            airline=display_name(airline_id),
            price=base_fare_for_route(
                origin, destination, airline_id) * season_mult * total,
        )
        for airline_id in airline_ids
    ]
    # sort is stable: equal prices keep the caller's airline order
    fares.sort(key=lambda f: f.price)
    return fares


def pick_best_by_price(fares: List[AirlineFare]) -> Optional[AirlineFare]:
    if not fares:
        return None
    return fares[0]


def cheapest_airline_fare(
    origin: str,
    destination: str,
    airline_ids: Sequence[str],
    season_type: str,
    multiplier: PriceRange,
    travel_date: date,
    booking_date: date,
    route_base_price: float,
) -> AirlineFare:
    """
    Cheapest rounded fare among `airline_ids` for one travel date.

    With no airlines to compare, the route base price at the band's unweighted
    average multiplier is reported under the default airline.
    """
    best = pick_best_by_price(score_airlines(
        origin, destination, airline_ids, season_type, multiplier, travel_date, booking_date))

    if best is None:
        total = pricing_factors(booking_date, travel_date).total_multiplier
        price = route_base_price * (multiplier.min + multiplier.max) / 2 * total
        return AirlineFare("", DEFAULT_AIRLINE, round_fare(price))

    return AirlineFare(best.airline_id, best.airline, round_fare(best.price))


def pick_recommended_season(seasons: Sequence[SeasonData]) -> SeasonData:
    """Strictly cheapest best deal; ties go to the earlier band (low, normal, high)."""
    best = seasons[0]
    for season in seasons[1:]:
        if season.best_deal.price < best.best_deal.price:
            best = season
    return best
