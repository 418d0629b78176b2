# src/providers/mock_provider.py

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from core.airlines import airline_code, base_fare_for_route, display_name
from core.dates import format_thai_date
from core.models import Flight, FlightAnalysisResult, SearchParams
from core.pricing_factors import pricing_factors
from core.scoring import round_fare
from engine import analyze
from providers.base import FlightDataSource


FLIGHTS_PER_AIRLINE = 4

# Fixed rotations, indexed by leg number
DEPARTURE_SLOTS: List[Tuple[int, int]] = [(6, 0), (9, 30), (13, 15), (18, 45)]
FLIGHT_DURATIONS: List[Tuple[int, int]] = [(1, 15), (1, 5), (1, 30), (1, 20)]
FARE_OFFSETS: List[float] = [0.92, 1.0, 1.06, 0.97]

# (month, day) in the booking year, when the user picked no date
DEFAULT_FLIGHT_DATES: List[Tuple[int, int]] = [(5, 15), (5, 20), (6, 1)]


def _flight_number(airline_id: str, leg: int, origin: str, destination: str) -> str:
    check_digit = sum(map(ord, origin + destination)) % 10
    return f"{airline_code(airline_id)}{100 + leg}{check_digit}"


def generate_flights_for_airline(
    airline_id: str,
    origin: str,
    destination: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> List[Flight]:
    """
    Synthetic legs for one airline, cheapest first.

    With both dates the legs alternate between outbound flights on
    start_date and return flights (reverse route) on end_date.
    """
    today = today or date.today()
    airline_name = display_name(airline_id)

    if start_date and end_date:
        legs = [
            (start_date, origin, destination, "OUT"),
            (end_date, destination, origin, "RETURN"),
        ]
    elif start_date:
        legs = [(start_date, origin, destination, "OUT")]
    else:
        legs = [
            (date(today.year, month, day), origin, destination, "OUT")
            for month, day in DEFAULT_FLIGHT_DATES
        ]

    flights: List[Flight] = []
    for i in range(FLIGHTS_PER_AIRLINE):
        leg_date, leg_origin, leg_destination, direction = legs[i % len(legs)]

        dep_hour, dep_minute = DEPARTURE_SLOTS[i]
        dur_hours, dur_minutes = FLIGHT_DURATIONS[i]
        departure = datetime.combine(leg_date, time(dep_hour, dep_minute))
        arrival = departure + timedelta(hours=dur_hours, minutes=dur_minutes)

        fare = base_fare_for_route(leg_origin, leg_destination, airline_id)
        factors = pricing_factors(today, leg_date)

        flights.append(
            Flight(
                airline=airline_name,
                flight_number=_flight_number(airline_id, i, leg_origin, leg_destination),
                departure_time=departure.strftime("%H:%M"),
                arrival_time=arrival.strftime("%H:%M"),
                duration=f"{dur_hours}h {dur_minutes}m",
                price=round_fare(fare * FARE_OFFSETS[i] * factors.total_multiplier),
                date=format_thai_date(leg_date),
                direction=direction,
            )
        )

    flights.sort(key=lambda f: f.price)
    return flights


class MockProvider(FlightDataSource):
    """
    Deterministic offline data source: every answer is synthesized locally.
    Pass `today` to pin the booking date (tests, reproducible screenshots).
    """

    def __init__(self, today: Optional[date] = None):
        self.today = today

    def analyze(self, params: SearchParams) -> FlightAnalysisResult:
        return analyze(params, today=self.today)

    def flights_for_airline(
        self,
        airline_id: str,
        origin: str,
        destination: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Flight]:
        return generate_flights_for_airline(
            airline_id, origin, destination, start_date, end_date, today=self.today)
