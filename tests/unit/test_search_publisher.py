import json

import httpx
import pytest

from docingest.indexing.exceptions import IndexPublishError
from docingest.indexing.models import IndexRecord
from docingest.indexing.search_publisher import SearchIndexPublisher

RECORD = IndexRecord(
    id="rec-1",
    file_name="report",
    content="Hello\nWorld",
    metadata="filename: report",
    upload_date=1_700_000_000_000,
)


def _make_publisher(handler) -> SearchIndexPublisher:
    return SearchIndexPublisher(
        endpoint="https://search.example.com/",
        index_name="documents",
        api_key="admin-key",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestPublish:
    def test_uploads_record(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"value": [{"key": "rec-1", "status": True}]})

        _make_publisher(handler).publish(RECORD)

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/indexes/documents/docs/index"
        assert request.url.params["api-version"] == "2023-11-01"
        assert request.headers["api-key"] == "admin-key"
        body = json.loads(request.content)
        assert body == {
            "value": [
                {
                    "@search.action": "upload",
                    "id": "rec-1",
                    "fileName": "report",
                    "content": "Hello\nWorld",
                    "metadata": "filename: report",
                    "uploadDate": 1_700_000_000_000,
                }
            ]
        }

    def test_accepts_empty_body(self) -> None:
        _make_publisher(lambda request: httpx.Response(200)).publish(RECORD)


class TestPublishErrors:
    def test_http_error_status(self) -> None:
        with pytest.raises(IndexPublishError, match="HTTP 403"):
            _make_publisher(lambda request: httpx.Response(403)).publish(RECORD)

    def test_document_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                207,
                json={"value": [{"key": "rec-1", "status": False, "errorMessage": "bad field"}]},
            )

        with pytest.raises(IndexPublishError, match="bad field"):
            _make_publisher(handler).publish(RECORD)

    def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(IndexPublishError, match="unreachable"):
            _make_publisher(handler).publish(RECORD)

    def test_malformed_endpoint(self) -> None:
        publisher = SearchIndexPublisher(
            endpoint="http://[::1",
            index_name="documents",
            api_key="admin-key",
            http_client=httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200))),
        )

        with pytest.raises(IndexPublishError):
            publisher.publish(RECORD)
