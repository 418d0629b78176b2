from config import Settings
from data_source import get_flight_data_source
from providers.api_provider import ApiProvider
from providers.mock_provider import MockProvider


def test_defaults(monkeypatch):
    for name in ("USE_MOCK_DATA", "FLIGHT_API_MAX_RETRIES", "STATS_MAX_PRICE_RECORDS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.use_mock_data is True
    assert s.api_max_retries == 3
    assert s.stats_max_price_records == 1000


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("USE_MOCK_DATA", "false")
    monkeypatch.setenv("FLIGHT_API_BASE_URL", "https://fares.example/api")
    monkeypatch.setenv("FLIGHT_API_TIMEOUT_S", "5")
    monkeypatch.setenv("STATS_DB_PATH", "/tmp/stats.sqlite")
    s = Settings()
    assert s.use_mock_data is False
    assert s.api_base_url == "https://fares.example/api"
    assert s.api_timeout_s == 5.0
    assert str(s.stats_db_path) == "/tmp/stats.sqlite"


def test_blank_flag_keeps_default(monkeypatch):
    monkeypatch.setenv("USE_MOCK_DATA", "  ")
    assert Settings().use_mock_data is True


def test_data_source_follows_settings(monkeypatch):
    monkeypatch.setenv("USE_MOCK_DATA", "1")
    assert isinstance(get_flight_data_source(Settings()), MockProvider)

    monkeypatch.setenv("USE_MOCK_DATA", "off")
    monkeypatch.setenv("FLIGHT_API_BASE_URL", "https://fares.example/api/")
    source = get_flight_data_source(Settings())
    assert isinstance(source, ApiProvider)
    assert source.client.base_url == "https://fares.example/api"
