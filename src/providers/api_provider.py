# src/providers/api_provider.py

from __future__ import annotations

from datetime import date
from typing import List, Optional

from core.errors import DataSourceError
from core.models import Flight, FlightAnalysisResult, SearchParams
from providers.base import FlightDataSource
from services.api_client import FlightApiClient
from services.result_bridge import (
    analysis_from_dict,
    flights_from_dicts,
    search_params_to_request,
)


class ApiProvider(FlightDataSource):
    """
    Remote data source. The backend must accept the same parameters as the
    local engine (dates as ISO strings) and answer with the same result shape.
    """

    def __init__(self, client: FlightApiClient):
        self.client = client

    def analyze(self, params: SearchParams) -> FlightAnalysisResult:
        payload = self.client.post("/flights/analyze", search_params_to_request(params))
        return analysis_from_dict(payload)

    def flights_for_airline(
        self,
        airline_id: str,
        origin: str,
        destination: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Flight]:
        if start_date is None:
            # The prices endpoint needs a concrete departure day
            return []

        body = {
            "origin": origin,
            "destination": destination,
            "startDate": start_date.isoformat(),
            "endDate": end_date.isoformat() if end_date else None,
            "tripType": "round-trip" if end_date else "one-way",
            "passengerCount": 1,
            "selectedAirlines": [airline_id],
        }
        rows = self.client.post("/flights/prices", body)
        if not isinstance(rows, list):
            raise DataSourceError("Expected a list of flights from /flights/prices")

        flights = flights_from_dicts(rows)
        flights.sort(key=lambda f: f.price)
        return flights

    def available_airlines(self, origin: str, destination: str) -> List[str]:
        rows = self.client.get(
            "/flights/airlines", params={"origin": origin, "destination": destination})
        if not isinstance(rows, list):
            raise DataSourceError("Expected a list of airline ids from /flights/airlines")
        return [str(r) for r in rows]
