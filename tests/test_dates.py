import logging
from datetime import date

from core.dates import (
    add_days,
    format_thai_date,
    format_thai_date_range,
    format_thai_short,
    month_index,
    parse_best_deal_date,
    trip_duration_days,
)

FALLBACK = date(2026, 1, 15)


def test_parse_single_month_window():
    assert parse_best_deal_date("15-22 พฤษภาคม 2025", FALLBACK) == date(2025, 5, 15)


def test_parse_cross_month_window():
    assert parse_best_deal_date("25 มีนาคม - 5 เมษายน 2025", FALLBACK) == date(2025, 3, 25)


def test_parse_garbage_falls_back_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="core.dates"):
        assert parse_best_deal_date("sometime soon", FALLBACK) == FALLBACK
    assert "sometime soon" in caplog.text


def test_parse_impossible_day_falls_back():
    assert parse_best_deal_date("30-31 กุมภาพันธ์ 2025", FALLBACK) == FALLBACK


def test_thai_labels():
    d = date(2025, 5, 15)
    assert format_thai_date(d) == "15 พฤษภาคม 2025"
    assert format_thai_short(d) == "15 พ.ค."
    assert month_index("ธันวาคม") == 12


def test_date_range_labels():
    assert format_thai_date_range(date(2025, 5, 8), date(2025, 5, 15)) == "8-15 พฤษภาคม 2025"
    assert (format_thai_date_range(date(2025, 5, 28), date(2025, 6, 4))
            == "28 พฤษภาคม - 4 มิถุนายน 2025")
    assert (format_thai_date_range(date(2025, 12, 30), date(2026, 1, 4))
            == "30 ธันวาคม 2025 - 4 มกราคม 2026")
    assert format_thai_date_range(date(2025, 5, 8), date(2025, 5, 15), "one-way") == "8 พฤษภาคม 2025"


def test_add_days_rounds_half_up():
    assert add_days(date(2025, 1, 1), 6.5) == date(2025, 1, 8)
    assert add_days(date(2025, 1, 1), 6.4) == date(2025, 1, 7)


def test_trip_duration_days():
    assert trip_duration_days(date(2025, 3, 1), date(2025, 3, 10)) == 9
