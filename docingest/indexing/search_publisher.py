import httpx

from docingest.indexing.exceptions import IndexPublishError
from docingest.indexing.models import IndexRecord
from docingest.indexing.publisher_base import BaseIndexPublisher
from docingest.logging.logger import Log


class SearchIndexPublisher(BaseIndexPublisher):
    """Uploads records through the search service's document indexing REST API."""

    def __init__(
        self,
        *,
        endpoint: str,
        index_name: str,
        api_key: str,
        api_version: str = "2023-11-01",
        timeout_seconds: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._index_url = f"{endpoint.rstrip('/')}/indexes/{index_name}/docs/index"
        self._api_version = api_version
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._owns_client = http_client is None
        self._client = http_client if http_client is not None else httpx.Client()

    def publish(self, record: IndexRecord) -> None:
        body = {"value": [{"@search.action": "upload", **record.to_document()}]}
        try:
            response = self._client.post(
                self._index_url,
                params={"api-version": self._api_version},
                json=body,
                headers={"api-key": self._api_key},
                timeout=self._timeout_seconds,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise IndexPublishError(f"Search service network error: {exc}") from exc

        if not response.is_success:
            raise IndexPublishError(
                f"Search service rejected record {record.id} with HTTP {response.status_code}"
            )
        self._raise_for_rejected_documents(record, response)
        Log.info(f"Indexed record {record.id}", document=record.file_name)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @staticmethod
    def _raise_for_rejected_documents(record: IndexRecord, response: httpx.Response) -> None:
        try:
            body = response.json()
        except ValueError:
            return
        results = body.get("value") if isinstance(body, dict) else None
        for result in results if isinstance(results, list) else []:
            if isinstance(result, dict) and result.get("status") is False:
                message = result.get("errorMessage") or "rejected by index"
                raise IndexPublishError(f"Record {record.id} not indexed: {message}")
