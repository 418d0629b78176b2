# src/engine.py

"""
Synthetic fare analysis.

Given a route, a trip length window and optional travel dates, build the
season summaries, the recommended travel period, a one-week before/after
comparison and the price trend series. Everything is derived from static
tables and calendar arithmetic, so identical inputs (including `today`)
give identical results.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterator, List, Optional, Sequence

from core.airlines import AIRLINE_IDS
from core.dates import (
    add_days,
    format_thai_date,
    format_thai_date_range,
    format_thai_short,
    parse_best_deal_date,
    trip_duration_days,
)
from core.models import (
    BestDeal,
    ChartPoint,
    ComparisonPoint,
    DurationRange,
    FlightAnalysisResult,
    PriceComparison,
    PriceRange,
    RecommendedPeriod,
    SearchParams,
    SeasonData,
)
from core.pricing_factors import pricing_factors
from core.routes import base_price
from core.scoring import AirlineFare, cheapest_airline_fare, pick_recommended_season, round_fare
from core.seasons import (
    CHART_SEASON_MULTIPLIERS,
    SEASON_DESCRIPTIONS,
    SeasonConfig,
    season_config,
    season_for_date,
)

logger = logging.getLogger(__name__)


COMPARISON_OFFSET_DAYS = 7
CHART_STEP_DAYS = 3
CHART_WINDOW_DAYS = 30
CHART_SAMPLE_DAYS = (1, 15)
ONE_WAY_FACTOR = 0.5


def _one_way_adjusted(price: float, trip_type: Optional[str]) -> float:
    return price * ONE_WAY_FACTOR if trip_type == "one-way" else price


# -----------------------------------------------------------------------------
# Chart series
# -----------------------------------------------------------------------------

def _every(first: date, last: date, step_days: int) -> Iterator[date]:
    current = first
    while current <= last:
        yield current
        current += timedelta(days=step_days)


def _canonical_samples(year: int) -> Iterator[date]:
    for month in range(1, 13):
        for day in CHART_SAMPLE_DAYS:
            yield date(year, month, day)


def iter_chart_series(
    route_base_price: float,
    duration_range: DurationRange,
    selected_airlines: Sequence[str] = (),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    trip_type: Optional[str] = None,
    today: Optional[date] = None,
) -> Iterator[ChartPoint]:
    """
    Yield price points in calendar order.

    With a start date: every 3 days across the chosen round trip, or across a
    ±30 day window for one-way / start-only searches. Without one: the 1st and
    15th of every month of the booking year.

    Chart prices follow the route base price and the fixed calendar season
    multipliers; `selected_airlines` does not narrow them.
    """
    today = today or date.today()
    one_way = trip_type == "one-way"

    if start_date and end_date:
        duration: float = trip_duration_days(start_date, end_date)
    else:
        duration = duration_range.avg

    if start_date:
        if end_date and not one_way:
            samples = _every(start_date, end_date, CHART_STEP_DAYS)
        else:
            window = timedelta(days=CHART_WINDOW_DAYS)
            samples = _every(start_date - window, start_date + window, CHART_STEP_DAYS)
        with_return = end_date is not None and not one_way
    else:
        samples = _canonical_samples(today.year)
        with_return = not one_way

    for travel_date in samples:
        season = season_for_date(travel_date)
        factors = pricing_factors(today, travel_date)
        price = round_fare(
            route_base_price * CHART_SEASON_MULTIPLIERS[season] * factors.total_multiplier)

        yield ChartPoint(
            start_date=format_thai_short(travel_date),
            return_date=format_thai_short(
                add_days(travel_date, duration)) if with_return else "",
            price=_one_way_adjusted(price, trip_type),
            season=season,
            duration=round_fare(duration) if with_return else 0,
            travel_date=travel_date,
        )


class ChartSeries:
    """Restartable chart series: each iteration recomputes the same points."""

    def __init__(self, route_base_price: float, duration_range: DurationRange, **kwargs):
        self.route_base_price = route_base_price
        self.duration_range = duration_range
        self._kwargs = kwargs

    def __iter__(self) -> Iterator[ChartPoint]:
        return iter_chart_series(self.route_base_price, self.duration_range, **self._kwargs)


def chart_series(
    route_base_price: float,
    duration_range: DurationRange,
    selected_airlines: Sequence[str] = (),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    trip_type: Optional[str] = None,
    today: Optional[date] = None,
) -> ChartSeries:
    return ChartSeries(
        route_base_price,
        duration_range,
        selected_airlines=selected_airlines,
        start_date=start_date,
        end_date=end_date,
        trip_type=trip_type,
        today=today,
    )


# -----------------------------------------------------------------------------
# Analysis
# -----------------------------------------------------------------------------

def _season_summaries(
    params: SearchParams,
    config: SeasonConfig,
    route_base_price: float,
    today: date,
) -> List[SeasonData]:
    """Per-band cards, priced over every airline regardless of the user's filter."""
    seasons: List[SeasonData] = []
    for season_type, band in config.bands():
        travel_date = params.start_date or parse_best_deal_date(band.best_deal_dates, today)
        cheapest = cheapest_airline_fare(
            params.origin,
            params.destination,
            AIRLINE_IDS,
            season_type,
            band.price_multiplier,
            travel_date,
            today,
            route_base_price,
        )
        seasons.append(
            SeasonData(
                type=season_type,
                months=band.months,
                price_range=PriceRange(
                    min=round_fare(route_base_price * band.price_multiplier.min),
                    max=round_fare(route_base_price * band.price_multiplier.max),
                ),
                best_deal=BestDeal(
                    dates=band.best_deal_dates,
                    price=cheapest.price,
                    airline=cheapest.airline,
                ),
                description=SEASON_DESCRIPTIONS[season_type],
            )
        )
    return seasons


def cheapest_fare_on(
    params: SearchParams,
    config: SeasonConfig,
    route_base_price: float,
    travel_date: date,
    today: date,
) -> AirlineFare:
    """Cheapest selected-airline fare for one concrete date, one-way halving included."""
    season_type = season_for_date(travel_date)
    band = config.band(season_type)
    fare = cheapest_airline_fare(
        params.origin,
        params.destination,
        params.selected_airlines,
        season_type,
        band.price_multiplier,
        travel_date,
        today,
        route_base_price,
    )
    return replace(fare, price=_one_way_adjusted(fare.price, params.trip_type))


def _comparison_point(
    params: SearchParams,
    config: SeasonConfig,
    route_base_price: float,
    start: date,
    recommended_price: float,
    today: date,
) -> ComparisonPoint:
    end = add_days(start, params.duration_range.avg)
    price = cheapest_fare_on(params, config, route_base_price, start, today).price
    difference = price - recommended_price
    percentage = round_fare(difference / recommended_price * 100) if recommended_price else 0
    n = params.passenger_count

    return ComparisonPoint(
        date=format_thai_date_range(start, end, params.trip_type),
        price=price * n,
        difference=difference * n,
        percentage=percentage,
    )


def analyze(params: SearchParams, today: Optional[date] = None) -> FlightAnalysisResult:
    today = today or date.today()
    avg_duration = params.duration_range.avg
    route_base = base_price(params.origin, params.destination, avg_duration)
    config = season_config(params.destination)

    seasons = _season_summaries(params, config, route_base, today)
    best_season = pick_recommended_season(seasons)

    # Concrete travel window
    if params.start_date:
        start = params.start_date
        if params.end_date and not params.is_one_way:
            end = params.end_date
        else:
            end = add_days(start, avg_duration)
    else:
        start = parse_best_deal_date(config.band(best_season.type).best_deal_dates, today)
        end = add_days(start, avg_duration)

    recommended = cheapest_fare_on(params, config, route_base, start, today)
    recommended_price = recommended.price

    comparison = PriceComparison(
        if_go_before=_comparison_point(
            params, config, route_base,
            start - timedelta(days=COMPARISON_OFFSET_DAYS), recommended_price, today),
        if_go_after=_comparison_point(
            params, config, route_base,
            start + timedelta(days=COMPARISON_OFFSET_DAYS), recommended_price, today),
    )

    chart = chart_series(
        route_base,
        params.duration_range,
        params.selected_airlines,
        params.start_date,
        params.end_date,
        params.trip_type,
        today,
    )

    n = params.passenger_count
    high_price = next(s.best_deal.price for s in seasons if s.type == "high")

    logger.debug(
        "Analyzed %s-%s: %s season, %s at %s",
        params.origin, params.destination, best_season.type,
        recommended.airline, recommended_price,
    )

    return FlightAnalysisResult(
        recommended_period=RecommendedPeriod(
            start_date=format_thai_date(start),
            end_date=format_thai_date(end),
            return_date="" if params.is_one_way else format_thai_date(end),
            price=recommended_price * n,
            airline=recommended.airline,
            season=best_season.type,
            savings=(high_price - recommended_price) * n,
        ),
        seasons=tuple(
            replace(
                s,
                price_range=PriceRange(s.price_range.min * n, s.price_range.max * n),
                best_deal=replace(s.best_deal, price=s.best_deal.price * n),
            )
            for s in seasons
        ),
        price_comparison=comparison,
        price_chart_data=tuple(replace(p, price=p.price * n) for p in chart),
    )


def analyze_flight_prices(
    origin: str,
    destination: str,
    duration_range: DurationRange,
    selected_airlines: Sequence[str],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    trip_type: Optional[str] = None,
    passenger_count: int = 1,
    today: Optional[date] = None,
) -> FlightAnalysisResult:
    """Positional entry point mirroring the search form's argument order."""
    params = SearchParams(
        origin=origin,
        destination=destination,
        duration_range=duration_range,
        selected_airlines=list(selected_airlines),
        start_date=start_date,
        end_date=end_date,
        trip_type=trip_type,
        passenger_count=passenger_count,
    )
    return analyze(params, today=today)
