from datetime import date

import pytest

from stats_store import FlightStatsStore, SqliteStatsRepository


# Fixed booking date so every pricing factor is reproducible
TODAY = date(2026, 1, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def stats_repository(tmp_path):
    return SqliteStatsRepository(str(tmp_path / "stats.sqlite"))


@pytest.fixture
def stats_store(stats_repository):
    return FlightStatsStore(stats_repository)
