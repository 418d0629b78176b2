import logging
from typing import Optional

from config import Settings, settings as default_settings
from providers.api_provider import ApiProvider
from providers.base import FlightDataSource
from providers.mock_provider import MockProvider
from services.api_client import FlightApiClient

logger = logging.getLogger(__name__)


def get_flight_data_source(settings: Optional[Settings] = None) -> FlightDataSource:
    """
    Pick the data source from settings: the local mock generator unless
    USE_MOCK_DATA is explicitly turned off.
    """
    settings = settings or default_settings

    if settings.use_mock_data:
        return MockProvider()

    logger.info("Using remote flight API at %s", settings.api_base_url)
    client = FlightApiClient(
        base_url=settings.api_base_url,
        timeout_seconds=settings.api_timeout_s,
        max_retries=settings.api_max_retries,
        backoff_seconds=settings.api_backoff_s,
    )
    return ApiProvider(client)
