import httpx

from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.exceptions import AnalysisTransportError
from docingest.analysis.models import AnalysisHttpResponse

# InvalidURL is not an HTTPError subclass; a malformed operation URL is a
# per-request failure like any other.
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


class HttpAnalysisClient(BaseAnalysisClient):
    """Analysis client for the document-intelligence REST API, built on httpx."""

    API_KEY_HEADER = "Ocp-Apim-Subscription-Key"

    def __init__(
        self,
        *,
        endpoint: str,
        api_key: str,
        model_id: str = "prebuilt-layout",
        api_version: str = "2023-07-31",
        timeout_seconds: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._analyze_url = (
            f"{endpoint.rstrip('/')}/formrecognizer/documentModels/{model_id}:analyze"
        )
        self._api_version = api_version
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client()

    @property
    def analyze_url(self) -> str:
        return self._analyze_url

    def begin_analysis(
        self,
        content: bytes,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        try:
            response = self._client.post(
                self._analyze_url,
                params={"api-version": self._api_version},
                content=content,
                headers={
                    self.API_KEY_HEADER: self._api_key,
                    "Content-Type": "application/octet-stream",
                },
                timeout=self._resolve_timeout(timeout),
            )
        except _TRANSPORT_ERRORS as exc:
            raise AnalysisTransportError(f"Analysis service network error: {exc}") from exc
        return self._to_response(response)

    def get_operation(
        self,
        operation_url: str,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        try:
            response = self._client.get(
                operation_url,
                headers={self.API_KEY_HEADER: self._api_key},
                timeout=self._resolve_timeout(timeout),
            )
        except _TRANSPORT_ERRORS as exc:
            raise AnalysisTransportError(f"Analysis service network error: {exc}") from exc
        return self._to_response(response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _resolve_timeout(self, timeout: float | None) -> float:
        return self._timeout_seconds if timeout is None else timeout

    @staticmethod
    def _to_response(response: httpx.Response) -> AnalysisHttpResponse:
        return AnalysisHttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers.items()),
            body=response.content,
        )
