import json
from datetime import date, timedelta

import pytest

from core.airlines import AIRLINE_IDS
from core.dates import format_thai_date
from core.errors import InvalidSearchError
from core.models import DurationRange, SearchParams
from core.routes import base_price
from core.seasons import calendar_season_of
from engine import analyze, analyze_flight_prices, chart_series
from services.result_bridge import analysis_to_dict

DURATIONS = DurationRange(5, 7)
ALL_AIRLINES = list(AIRLINE_IDS)


def _params(**overrides):
    values = dict(
        origin="bangkok",
        destination="phuket",
        duration_range=DURATIONS,
        selected_airlines=ALL_AIRLINES,
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 9),
        trip_type="round-trip",
        passenger_count=1,
    )
    values.update(overrides)
    return SearchParams(**values)


def test_no_airlines_falls_back_to_default_carrier(today):
    result = analyze_flight_prices("bangkok", "phuket", DURATIONS, [], today=today)
    assert result.recommended_period.airline == "Thai Airways"
    assert result.recommended_period.price > 0


@pytest.mark.parametrize("trip_type", ["round-trip", "one-way"])
@pytest.mark.parametrize("n", [2, 3, 7])
def test_prices_scale_linearly_with_passengers(today, trip_type, n):
    end = date(2026, 3, 9) if trip_type == "round-trip" else None
    single = analyze(_params(trip_type=trip_type, end_date=end), today=today)
    group = analyze(_params(trip_type=trip_type, end_date=end, passenger_count=n), today=today)

    assert group.recommended_period.price == n * single.recommended_period.price
    assert group.recommended_period.savings == n * single.recommended_period.savings
    for s1, sn in zip(single.seasons, group.seasons):
        assert sn.best_deal.price == n * s1.best_deal.price
        assert sn.price_range.max == n * s1.price_range.max
    assert group.price_comparison.if_go_after.price == n * single.price_comparison.if_go_after.price
    assert [p.price for p in group.price_chart_data] == [
        n * p.price for p in single.price_chart_data]


def test_one_way_is_half_the_round_trip(today):
    round_trip = analyze(_params(), today=today)
    one_way = analyze(_params(trip_type="one-way", end_date=None), today=today)

    assert one_way.recommended_period.price * 2 == round_trip.recommended_period.price
    assert one_way.recommended_period.return_date == ""
    # season cards are round-trip fares either way
    assert one_way.seasons == round_trip.seasons


def test_analysis_is_deterministic(today):
    first = analyze(_params(), today=today)
    second = analyze(_params(), today=today)
    assert first == second
    assert json.dumps(analysis_to_dict(first), ensure_ascii=False) == json.dumps(
        analysis_to_dict(second), ensure_ascii=False)


def test_seasons_are_low_normal_high(today):
    result = analyze(_params(), today=today)
    assert [s.type for s in result.seasons] == ["low", "normal", "high"]
    assert "พฤษภาคม" in result.season("low").months
    # bangkok-phuket at 6 days: 3200 * 1.05 = 3360, low band 0.65-0.8
    assert result.season("low").price_range.min == 2184
    assert result.season("low").price_range.max == 2688


def test_recommended_season_is_cheapest_best_deal(today):
    result = analyze(_params(start_date=None, end_date=None), today=today)
    cheapest = min(result.seasons, key=lambda s: s.best_deal.price)
    assert result.recommended_period.season == cheapest.type


def test_without_dates_the_canonical_window_is_used(today):
    result = analyze(_params(start_date=None, end_date=None), today=today)
    # Phuket's low band is far below the others; its window opens 1 June 2025
    assert result.recommended_period.season == "low"
    assert result.recommended_period.start_date == "1 มิถุนายน 2025"
    assert result.recommended_period.end_date == "7 มิถุนายน 2025"
    assert len(result.price_chart_data) == 24


def test_user_dates_drive_the_recommended_period(today):
    result = analyze(_params(), today=today)
    rp = result.recommended_period
    assert rp.start_date == format_thai_date(date(2026, 3, 2))
    assert rp.end_date == format_thai_date(date(2026, 3, 9))
    assert rp.return_date == rp.end_date


def test_savings_are_measured_against_high_season(today):
    result = analyze(_params(), today=today)
    high = result.season("high").best_deal.price
    assert result.recommended_period.savings == high - result.recommended_period.price


def test_before_after_comparison(today):
    result = analyze(_params(), today=today)
    rec = result.recommended_period.price
    for point in (result.price_comparison.if_go_before, result.price_comparison.if_go_after):
        assert point.difference == point.price - rec
        assert abs(point.percentage - point.difference / rec * 100) <= 0.5
    assert result.price_comparison.if_go_before.date.startswith("23 กุมภาพันธ์")
    assert result.price_comparison.if_go_after.date.startswith("9-")


def test_unknown_route_and_destination_do_not_raise(today):
    result = analyze(_params(origin="nowhere", destination="Atlantis"), today=today)
    assert result.recommended_period.price > 0


def test_zero_passengers_is_rejected():
    with pytest.raises(InvalidSearchError):
        _params(passenger_count=0)
    with pytest.raises(ValueError):
        _params(passenger_count=-1)


def test_inverted_dates_are_rejected():
    with pytest.raises(InvalidSearchError):
        _params(start_date=date(2026, 3, 9), end_date=date(2026, 3, 2))


# -- chart series --------------------------------------------------------------

def _base():
    return base_price("bangkok", "phuket", DURATIONS.avg)


def test_round_trip_chart_steps_through_the_trip(today):
    points = list(chart_series(
        _base(), DURATIONS, ALL_AIRLINES, date(2026, 3, 1), date(2026, 3, 10), "round-trip", today))

    assert [p.travel_date for p in points] == [
        date(2026, 3, 1), date(2026, 3, 4), date(2026, 3, 7), date(2026, 3, 10)]
    assert all(p.duration == 9 for p in points)
    assert points[0].return_date == "10 มี.ค."


def test_one_way_chart_covers_a_two_month_window(today):
    start = date(2026, 6, 15)
    round_trip = list(chart_series(_base(), DURATIONS, [], start, None, "round-trip", today))
    one_way = list(chart_series(_base(), DURATIONS, [], start, None, "one-way", today))

    assert len(one_way) == 21
    assert one_way[0].travel_date == start - timedelta(days=30)
    assert one_way[-1].travel_date == start + timedelta(days=30)
    assert all(p.return_date == "" and p.duration == 0 for p in one_way)
    assert [p.price * 2 for p in one_way] == [p.price for p in round_trip]


def test_canonical_chart_samples_the_whole_year(today):
    points = list(chart_series(_base(), DURATIONS, today=today))
    assert len(points) == 24
    assert points[0].travel_date == date(today.year, 1, 1)
    assert points[1].travel_date == date(today.year, 1, 15)
    assert all(p.season == calendar_season_of(p.travel_date.month) for p in points)


def test_chart_uses_calendar_seasons_not_destination_config(today):
    # Japan's own config calls May high season; the chart follows the calendar table
    base = base_price("bangkok", "japan", DURATIONS.avg)
    points = list(chart_series(base, DURATIONS, [], date(2026, 5, 10), date(2026, 5, 16),
                               "round-trip", today))
    assert {p.season for p in points} == {"low"}


def test_chart_is_strictly_ordered_and_restartable(today):
    series = chart_series(_base(), DURATIONS, [], date(2026, 12, 20), None, "one-way", today)
    first = list(series)
    second = list(series)

    assert first == second
    dates = [p.travel_date for p in first]
    assert all(a < b for a, b in zip(dates, dates[1:]))
    # crosses the year boundary in calendar order
    assert dates[-1].year == 2027
