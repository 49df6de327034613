from shelter.api.base import BaseRecordsClient
from shelter.api.http_client import HttpRecordsClient
from shelter.api.memory_client import InMemoryRecordsClient
from shelter.config.settings import Settings


class RecordsClientFactory:
    """Creates the configured records client adapter."""

    SUPPORTED = ("http", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordsClient:
        """Create a records client from application settings."""
        kind = settings.records_client.lower()
        if kind == "memory":
            return InMemoryRecordsClient(actor=settings.default_actor)
        if kind == "http":
            return HttpRecordsClient(
                base_url=cls._resolve_base_url(settings),
                api_token=settings.api_token,
                timeout_seconds=settings.api_timeout_seconds,
            )
        raise ValueError(
            f"Unknown records client '{kind}'. Choose from: {list(cls.SUPPORTED)}"
        )

    @classmethod
    def _resolve_base_url(cls, settings: Settings) -> str:
        url = settings.api_base_url.strip()
        if not url:
            raise ValueError("api_base_url is required for records_client=http")
        return url
