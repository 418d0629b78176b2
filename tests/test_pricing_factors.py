from datetime import date, timedelta

import pytest

from core.pricing_factors import (
    DAY_OF_WEEK_FACTORS,
    _days_to_festival,
    day_of_week_factor,
    festival_factor,
    lead_time_factor,
    pricing_factors,
)


def _next_weekday(start: date, weekday: int) -> date:
    return next(start + timedelta(days=i) for i in range(7)
                if (start + timedelta(days=i)).weekday() == weekday)


def test_total_is_non_increasing_with_lead_time():
    travel = date(2026, 6, 17)
    totals = [
        pricing_factors(travel - timedelta(days=ahead), travel).total_multiplier
        for ahead in range(-5, 200)
    ]
    assert all(later <= earlier for earlier, later in zip(totals, totals[1:]))
    assert totals[0] > totals[-1]


def test_lead_time_floor_and_ceiling():
    assert lead_time_factor(-10) == 1.30
    assert lead_time_factor(0) == 1.30
    assert lead_time_factor(45) == 0.95
    assert lead_time_factor(365) == 0.85


def test_factor_ranges_hold_all_year():
    booking = date(2026, 1, 1)
    for offset in range(366):
        factors = pricing_factors(booking, booking + timedelta(days=offset))
        assert 0.85 <= factors.lead_time <= 1.30
        assert 0.90 <= factors.day_of_week <= 1.15
        assert 1.00 <= factors.festival <= 1.30
        assert factors.total_multiplier == pytest.approx(
            factors.lead_time * factors.day_of_week * factors.festival)


def test_weekend_costs_more_than_midweek():
    base = date(2026, 6, 1)
    friday = _next_weekday(base, 4)
    tuesday = _next_weekday(base, 1)
    assert day_of_week_factor(friday) > day_of_week_factor(tuesday)
    assert day_of_week_factor(friday) == DAY_OF_WEEK_FACTORS[4]


def test_festival_surcharge_near_songkran():
    factor, name = festival_factor(date(2026, 4, 13))
    assert factor == 1.30
    assert name == "สงกรานต์"

    # five days out is the shoulder: half the surcharge
    shoulder, _ = festival_factor(date(2026, 4, 18))
    assert shoulder == pytest.approx(1.15)


def test_no_festival_in_quiet_weeks():
    assert festival_factor(date(2026, 6, 20)) == (1.0, None)


def test_festival_distance_wraps_year_end():
    assert _days_to_festival(date(2027, 1, 2), 12, 31) == 2
    assert _days_to_festival(date(2026, 12, 30), 1, 1) == 2


def test_factors_are_deterministic(today):
    travel = date(2026, 12, 24)
    assert pricing_factors(today, travel) == pricing_factors(today, travel)
    assert pricing_factors(today, travel).calendar_season == "high"
