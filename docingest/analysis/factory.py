from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.example_client_adapter import ExampleAnalysisClient
from docingest.analysis.http_client_adapter import HttpAnalysisClient
from docingest.analysis.poller import AnalysisPoller
from docingest.analysis.submitter import AnalysisSubmitter
from docingest.config.settings import Settings


class AnalysisClientFactory:
    """Creates the configured analysis service client."""

    PROVIDERS = ("azure", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalysisClient:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalysisClient()
        if provider == "azure":
            endpoint = settings.analysis_endpoint.strip()
            if not endpoint:
                raise ValueError("analysis_endpoint is required for analysis_provider=azure")
            return HttpAnalysisClient(
                endpoint=endpoint,
                api_key=settings.analysis_api_key,
                model_id=settings.analysis_model_id,
                api_version=settings.analysis_api_version,
                timeout_seconds=settings.analysis_request_timeout_seconds,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )


def build_submitter(settings: Settings, client: BaseAnalysisClient) -> AnalysisSubmitter:
    return AnalysisSubmitter(
        client,
        request_timeout_seconds=settings.analysis_request_timeout_seconds,
    )


def build_poller(settings: Settings, client: BaseAnalysisClient) -> AnalysisPoller:
    return AnalysisPoller(
        client,
        max_rounds=settings.analysis_max_poll_attempts,
        delay_seconds=settings.analysis_poll_interval_seconds,
        request_timeout_seconds=settings.analysis_request_timeout_seconds,
    )
