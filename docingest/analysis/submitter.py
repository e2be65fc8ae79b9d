from docingest.analysis.cancellation import CancellationToken
from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.exceptions import AnalysisTransportError, SubmissionError
from docingest.analysis.models import AnalysisJobHandle
from docingest.logging.logger import Log
from docingest.processor.models import Document


class AnalysisSubmitter:
    """Sends document bytes to the analysis service and returns the job handle."""

    OPERATION_LOCATION_HEADER = "Operation-Location"

    def __init__(
        self,
        client: BaseAnalysisClient,
        request_timeout_seconds: float = 30.0,
    ) -> None:
        self._client = client
        self._request_timeout_seconds = request_timeout_seconds

    def submit(
        self,
        document: Document,
        cancellation: CancellationToken | None = None,
    ) -> AnalysisJobHandle:
        """Start analysis of *document*.

        Raises:
            SubmissionError: if the call fails or the answer carries no
                operation reference. Not retried at this layer.
            AnalysisCancelledError: if *cancellation* fired before the call.
        """
        timeout = self._request_timeout_seconds
        if cancellation is not None:
            timeout = cancellation.clip(timeout)

        try:
            response = self._client.begin_analysis(document.content, timeout=timeout)
        except AnalysisTransportError as exc:
            raise SubmissionError(f"Submission of {document.name} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise SubmissionError(
                f"Submission of {document.name} rejected with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        operation_url = response.header(self.OPERATION_LOCATION_HEADER)
        if not operation_url:
            raise SubmissionError(
                f"{self.OPERATION_LOCATION_HEADER} header not found",
                status_code=response.status_code,
            )

        Log.info(
            f"Submitted {document.name} ({document.size} bytes) for analysis",
            document=document.name,
            operation=operation_url,
        )
        return AnalysisJobHandle(document_name=document.name, operation_url=operation_url)
