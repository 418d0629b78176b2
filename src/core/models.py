# src/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from core.errors import InvalidSearchError


SEASON_TYPES = ("low", "normal", "high")
TRIP_TYPES = ("one-way", "round-trip")


@dataclass(frozen=True)
class DurationRange:
    """Trip length window in days, as picked on the search form."""

    min: float
    max: float

    @property
    def avg(self) -> float:
        return (self.min + self.max) / 2

    @property
    def label(self) -> str:
        return f"{self.min:g}-{self.max:g}"


@dataclass(frozen=True)
class SearchParams:
    origin: str
    destination: str
    duration_range: DurationRange
    selected_airlines: List[str] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    trip_type: Optional[str] = None  # "one-way" | "round-trip" | None
    passenger_count: int = 1

    # Display labels, only used for statistics and the UI
    origin_name: Optional[str] = None
    destination_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.passenger_count < 1:
            raise InvalidSearchError(
                f"passenger_count must be at least 1, got {self.passenger_count}")
        if self.duration_range.min < 0 or self.duration_range.max < 0:
            raise InvalidSearchError("duration_range cannot be negative")
        if self.duration_range.min > self.duration_range.max:
            raise InvalidSearchError(
                f"duration_range min {self.duration_range.min} exceeds max {self.duration_range.max}")
        if self.trip_type is not None and self.trip_type not in TRIP_TYPES:
            raise InvalidSearchError(f"unknown trip_type {self.trip_type!r}")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise InvalidSearchError("end_date is before start_date")

    @property
    def is_one_way(self) -> bool:
        return self.trip_type == "one-way"


@dataclass(frozen=True)
class PricingFactors:
    """Multiplicative adjustments for one (booking date, travel date) pair."""

    lead_time: float
    day_of_week: float
    festival: float
    days_ahead: int
    festival_name: Optional[str] = None
    calendar_season: str = "normal"

    @property
    def total_multiplier(self) -> float:
        return self.lead_time * self.day_of_week * self.festival


@dataclass(frozen=True)
class PriceRange:
    min: float
    max: float


@dataclass(frozen=True)
class BestDeal:
    dates: str
    price: float
    airline: str


@dataclass(frozen=True)
class SeasonData:
    type: str  # "low" | "normal" | "high"
    months: Tuple[str, ...]
    price_range: PriceRange
    best_deal: BestDeal
    description: str


@dataclass(frozen=True)
class RecommendedPeriod:
    start_date: str
    end_date: str
    return_date: str
    price: float
    airline: str
    season: str
    savings: float


@dataclass(frozen=True)
class ComparisonPoint:
    date: str
    price: float
    difference: float
    percentage: int


@dataclass(frozen=True)
class PriceComparison:
    if_go_before: ComparisonPoint
    if_go_after: ComparisonPoint


@dataclass(frozen=True)
class ChartPoint:
    start_date: str
    return_date: str
    price: float
    season: str
    duration: int = 0
    # Actual calendar date behind the start_date label, used for ordering
    travel_date: Optional[date] = None


@dataclass(frozen=True)
class FlightAnalysisResult:
    recommended_period: RecommendedPeriod
    seasons: Tuple[SeasonData, ...]
    price_comparison: PriceComparison
    price_chart_data: Tuple[ChartPoint, ...]

    def season(self, season_type: str) -> SeasonData:
        for s in self.seasons:
            if s.type == season_type:
                return s
        raise KeyError(season_type)


@dataclass(frozen=True)
class Flight:
    """A single synthetic flight leg for the per-airline list."""

    airline: str
    flight_number: str
    departure_time: str  # "HH:MM"
    arrival_time: str
    duration: str  # e.g. "1h 15m"
    price: float
    date: str
    direction: str = "OUT"  # "OUT" | "RETURN"


@dataclass(frozen=True)
class SearchStat:
    origin: str
    destination: str
    duration_range: str
    timestamp: str


@dataclass(frozen=True)
class PriceStat:
    origin: str
    destination: str
    origin_name: str
    destination_name: str
    recommended_price: float
    season: str
    airline: str
    timestamp: str
