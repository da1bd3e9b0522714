from doc_capture.backend.base import BaseBackendClient
from doc_capture.backend.example_client_adapter import ExampleBackendClientAdapter
from doc_capture.backend.http_client_adapter import HttpBackendClientAdapter
from doc_capture.config.settings import Settings


class BackendClientFactory:
    """Creates the configured backend client."""

    PROVIDERS = ("http", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseBackendClient:
        provider = settings.backend_provider.lower()
        if provider == "example":
            return ExampleBackendClientAdapter(
                scenario=settings.process_scenario,
                light=settings.page_light,
            )
        if provider == "http":
            return HttpBackendClientAdapter(
                base_url=settings.backend_base_url,
                timeout_seconds=settings.backend_timeout_seconds,
                scenario=settings.process_scenario,
                light=settings.page_light,
            )
        raise ValueError(
            f"Unknown backend provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
