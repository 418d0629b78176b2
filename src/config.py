"""Configuration utilities.

Central place to load environment driven settings (data source toggle, API
endpoint, statistics storage). Avoids scattering os.getenv calls around the codebase.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("false", "0", "no", "off")


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass(slots=True)
class Settings:
    use_mock_data: bool = field(default_factory=lambda: _env_bool("USE_MOCK_DATA", True))
    api_base_url: str = field(
        default_factory=lambda: _env("FLIGHT_API_BASE_URL", "http://localhost:8000/api"))
    api_timeout_s: float = field(
        default_factory=lambda: float(_env("FLIGHT_API_TIMEOUT_S", "20")))
    api_max_retries: int = field(
        default_factory=lambda: int(_env("FLIGHT_API_MAX_RETRIES", "3")))
    api_backoff_s: float = field(
        default_factory=lambda: float(_env("FLIGHT_API_BACKOFF_S", "0.5")))
    stats_db_path: Path = field(
        default_factory=lambda: Path(_env("STATS_DB_PATH", "data/flight_stats.sqlite")))
    stats_max_price_records: int = field(
        default_factory=lambda: int(_env("STATS_MAX_PRICE_RECORDS", "1000")))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))


settings = Settings()
