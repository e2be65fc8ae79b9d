from abc import ABC, abstractmethod

from docingest.analysis.models import AnalysisHttpResponse


class BaseAnalysisClient(ABC):
    """Contract for provider-specific document-analysis service clients."""

    @abstractmethod
    def begin_analysis(
        self,
        content: bytes,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        """Send raw document bytes and return the service answer as-is.

        Raises:
            AnalysisTransportError: if the request could not be completed.
        """

    @abstractmethod
    def get_operation(
        self,
        operation_url: str,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        """Query the status of an analysis operation.

        Raises:
            AnalysisTransportError: if the request could not be completed.
        """

    def close(self) -> None:
        """Release held connections. No-op by default."""
