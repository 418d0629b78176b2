# src/core/seasons.py

"""
Season taxonomy per destination.

Two classification tables live here and are intentionally kept apart:

  - per-destination configs (``season_config`` / ``per_destination_season_of``),
    used for season cards and best-deal pricing;
  - one fixed calendar table (``calendar_season_of`` / ``season_for_date``),
    used for the chart series and for re-deriving the season of a concrete
    travel date.

They disagree for many destinations and both behaviours are relied upon.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterator, Tuple

from core.dates import THAI_MONTHS_FULL, month_index
from core.models import SEASON_TYPES, PriceRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BandConfig:
    months: Tuple[str, ...]
    price_multiplier: PriceRange
    best_deal_dates: str

    @property
    def midpoint(self) -> float:
        return (self.price_multiplier.min + self.price_multiplier.max) / 2


@dataclass(frozen=True)
class SeasonConfig:
    low: BandConfig
    normal: BandConfig
    high: BandConfig

    def band(self, season_type: str) -> BandConfig:
        if season_type not in SEASON_TYPES:
            raise KeyError(season_type)
        return getattr(self, season_type)

    def bands(self) -> Iterator[Tuple[str, BandConfig]]:
        for season_type in SEASON_TYPES:
            yield season_type, self.band(season_type)


def _band(months: str, lo: float, hi: float, best_deal_dates: str) -> BandConfig:
    return BandConfig(tuple(months.split()), PriceRange(lo, hi), best_deal_dates)


DEFAULT_CONFIG = SeasonConfig(
    low=_band("พฤษภาคม มิถุนายน กันยายน", 0.7, 0.85, "15-22 พฤษภาคม 2025"),
    normal=_band("กุมภาพันธ์ มีนาคม ตุลาคม พฤศจิกายน", 0.85, 1.1, "5-12 มีนาคม 2025"),
    high=_band("มกราคม เมษายน กรกฎาคม สิงหาคม ธันวาคม", 1.1, 1.5, "10-17 กรกฎาคม 2025"),
)

DESTINATION_CONFIGS: Dict[str, SeasonConfig] = {
    # Thai provinces: rainy season is cheap, cool season is peak
    "chiang-mai": SeasonConfig(
        low=_band("พฤษภาคม มิถุนายน กรกฎาคม กันยายน", 0.7, 0.85, "1-8 มิถุนายน 2025"),
        normal=_band("มีนาคม เมษายน สิงหาคม ตุลาคม", 0.85, 1.1, "10-17 มีนาคม 2025"),
        high=_band("มกราคม กุมภาพันธ์ พฤศจิกายน ธันวาคม", 1.2, 1.7, "20-27 ธันวาคม 2025"),
    ),
    "phuket": SeasonConfig(
        low=_band("พฤษภาคม มิถุนายน กรกฎาคม กันยายน", 0.65, 0.8, "1-8 มิถุนายน 2025"),
        normal=_band("มีนาคม เมษายน สิงหาคม ตุลาคม", 0.8, 1.1, "10-17 มีนาคม 2025"),
        high=_band("มกราคม กุมภาพันธ์ พฤศจิกายน ธันวาคม", 1.2, 1.7, "20-27 ธันวาคม 2025"),
    ),
    # South-east Asia
    "singapore": SeasonConfig(
        low=_band("กุมภาพันธ์ มีนาคม เมษายน พฤษภาคม มิถุนายน กรกฎาคม สิงหาคม กันยายน",
                  0.8, 0.95, "15-22 พฤษภาคม 2025"),
        normal=_band("ตุลาคม พฤศจิกายน", 0.95, 1.1, "5-12 ตุลาคม 2025"),
        high=_band("มกราคม ธันวาคม", 1.2, 1.6, "1-7 มกราคม 2025"),
    ),
    "vietnam": SeasonConfig(
        low=_band("พฤษภาคม มิถุนายน กรกฎาคม สิงหาคม", 0.7, 0.85, "15-22 พฤษภาคม 2025"),
        normal=_band("มีนาคม เมษายน กันยายน ตุลาคม", 0.85, 1.1, "5-12 มีนาคม 2025"),
        high=_band("มกราคม กุมภาพันธ์ พฤศจิกายน ธันวาคม", 1.1, 1.5, "1-7 มกราคม 2025"),
    ),
    "malaysia": SeasonConfig(
        low=_band("กุมภาพันธ์ พฤษภาคม มิถุนายน กันยายน ตุลาคม", 0.75, 0.9, "10-17 กุมภาพันธ์ 2025"),
        normal=_band("มีนาคม เมษายน กรกฎาคม สิงหาคม พฤศจิกายน", 0.9, 1.1, "5-12 มีนาคม 2025"),
        high=_band("มกราคม ธันวาคม", 1.1, 1.5, "20-27 ธันวาคม 2025"),
    ),
    # East Asia
    "japan": SeasonConfig(
        low=_band("มิถุนายน กรกฎาคม สิงหาคม", 0.75, 0.9, "15-22 มิถุนายน 2025"),
        normal=_band("กุมภาพันธ์ กันยายน", 0.9, 1.15, "5-12 กันยายน 2025"),
        high=_band("มกราคม มีนาคม เมษายน พฤษภาคม ตุลาคม พฤศจิกายน ธันวาคม",
                   1.2, 1.8, "25 มีนาคม - 5 เมษายน 2025"),
    ),
    "korea": SeasonConfig(
        low=_band("มกราคม กุมภาพันธ์ กรกฎาคม สิงหาคม", 0.7, 0.85, "15-22 มกราคม 2025"),
        normal=_band("มีนาคม มิถุนายน กันยายน ธันวาคม", 0.85, 1.1, "5-12 กันยายน 2025"),
        high=_band("เมษายน พฤษภาคม ตุลาคม พฤศจิกายน", 1.15, 1.6, "5-15 เมษายน 2025"),
    ),
    "taiwan": SeasonConfig(
        low=_band("กรกฎาคม สิงหาคม", 0.7, 0.85, "15-22 กรกฎาคม 2025"),
        normal=_band("มกราคม กุมภาพันธ์ มีนาคม มิถุนายน กันยายน ธันวาคม",
                     0.85, 1.1, "5-12 มีนาคม 2025"),
        high=_band("เมษายน พฤษภาคม ตุลาคม พฤศจิกายน", 1.1, 1.6, "1-8 พฤศจิกายน 2025"),
    ),
    "hong-kong": SeasonConfig(
        low=_band("พฤษภาคม มิถุนายน กรกฎาคม สิงหาคม", 0.7, 0.85, "15-22 มิถุนายน 2025"),
        normal=_band("มีนาคม เมษายน กันยายน ตุลาคม", 0.85, 1.1, "5-12 เมษายน 2025"),
        high=_band("มกราคม กุมภาพันธ์ พฤศจิกายน ธันวาคม", 1.1, 1.5, "1-7 ธันวาคม 2025"),
    ),
    # Western destinations peak in their summer
    "france": SeasonConfig(
        low=_band("มกราคม กุมภาพันธ์ พฤศจิกายน", 0.75, 0.9, "10-17 พฤศจิกายน 2025"),
        normal=_band("มีนาคม เมษายน กันยายน ตุลาคม", 0.9, 1.2, "1-8 มีนาคม 2025"),
        high=_band("พฤษภาคม มิถุนายน กรกฎาคม สิงหาคม ธันวาคม", 1.3, 1.9, "1-15 กรกฎาคม 2025"),
    ),
    "italy": SeasonConfig(
        low=_band("มกราคม กุมภาพันธ์ พฤศจิกายน", 0.7, 0.85, "10-17 พฤศจิกายน 2025"),
        normal=_band("มีนาคม เมษายน กันยายน ตุลาคม", 0.85, 1.15, "1-8 มีนาคม 2025"),
        high=_band("พฤษภาคม มิถุนายน กรกฎาคม สิงหาคม ธันวาคม", 1.25, 2.0, "1-15 กรกฎาคม 2025"),
    ),
    "usa": SeasonConfig(
        low=_band("มกราคม กุมภาพันธ์ กันยายน ตุลาคม", 0.75, 0.95, "15-22 กันยายน 2025"),
        normal=_band("มีนาคม เมษายน พฤษภาคม พฤศจิกายน", 0.95, 1.2, "5-12 พฤศจิกายน 2025"),
        high=_band("มิถุนายน กรกฎาคม สิงหาคม ธันวาคม", 1.2, 1.8, "1-15 กรกฎาคม 2025"),
    ),
}

# Fixed month -> season table shared by every destination (January first)
CALENDAR_SEASONS: Tuple[str, ...] = (
    "high", "high", "normal", "normal", "low", "low",
    "low", "low", "low", "low", "high", "high",
)

# Representative multipliers for chart sampling
CHART_SEASON_MULTIPLIERS: Dict[str, float] = {
    "low": 0.75,
    "normal": 1.0,
    "high": 1.3,
}

SEASON_DESCRIPTIONS: Dict[str, str] = {
    "low": "ราคาถูกที่สุดของปี เหมาะสำหรับผู้ที่มีความยืดหยุ่นในการเดินทาง",
    "normal": "ราคาปานกลาง อากาศดี เหมาะสำหรับการท่องเที่ยว",
    "high": "ช่วงเทศกาลและปิดเทอม ราคาสูงสุด แนะนำจองล่วงหน้า",
}


def validate_season_config(config: SeasonConfig, name: str = "config") -> None:
    """Raise ValueError unless the three bands partition the 12 months."""
    seen: Dict[str, str] = {}
    for season_type, band in config.bands():
        for month in band.months:
            if month not in THAI_MONTHS_FULL:
                raise ValueError(f"{name}: unknown month {month!r} in {season_type}")
            if month in seen:
                raise ValueError(
                    f"{name}: {month} is in both {seen[month]} and {season_type}")
            seen[month] = season_type
        if band.price_multiplier.min > band.price_multiplier.max:
            raise ValueError(f"{name}: {season_type} multiplier min exceeds max")

    missing = [m for m in THAI_MONTHS_FULL if m not in seen]
    if missing:
        raise ValueError(f"{name}: months without a season: {', '.join(missing)}")


def normalize_destination(destination: str) -> str:
    return destination.lower().replace(" ", "-")


def season_config(destination: str) -> SeasonConfig:
    key = normalize_destination(destination)
    config = DESTINATION_CONFIGS.get(key)
    if config is None:
        logger.debug("No season config for %r, using default", destination)
        return DEFAULT_CONFIG
    return config


def month_season_map(destination: str) -> Dict[int, str]:
    """1-based month -> season type for the destination's own config."""
    mapping: Dict[int, str] = {}
    for season_type, band in season_config(destination).bands():
        for month in band.months:
            mapping[month_index(month)] = season_type
    return mapping


def per_destination_season_of(destination: str, month: int) -> str:
    return month_season_map(destination)[month]


def calendar_season_of(month: int) -> str:
    return CALENDAR_SEASONS[month - 1]


def season_for_date(d: date) -> str:
    return calendar_season_of(d.month)


validate_season_config(DEFAULT_CONFIG, "default")
for _name, _config in DESTINATION_CONFIGS.items():
    validate_season_config(_config, _name)
