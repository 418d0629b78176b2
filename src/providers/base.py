# src/providers/base.py

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from core.models import Flight, FlightAnalysisResult, SearchParams


class FlightDataSource(ABC):

    @abstractmethod
    def analyze(self, params: SearchParams) -> FlightAnalysisResult:
        ...

    @abstractmethod
    def flights_for_airline(
        self,
        airline_id: str,
        origin: str,
        destination: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Flight]:
        ...
