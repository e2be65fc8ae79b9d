import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docingest.analysis.models import AnalysisHttpResponse
from docingest.config.settings import Settings

OPERATION_URL = "https://analysis.example.com/operations/1"


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_root=tmp_path / "storage",
        queue_root=tmp_path / "queues",
        analysis_provider="example",
        search_provider="local",
        analysis_poll_interval_ms=0,
        analysis_max_poll_attempts=3,
        job_poll_interval_seconds=0,
        pipeline_timeout_seconds=30,
    )


@pytest.fixture
def store_document(test_settings: Settings):
    """Write bytes into the documents container and return the blob path."""

    def _store(name: str, data: bytes) -> Path:
        path = test_settings.storage_root / test_settings.documents_container / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    return _store


def _make_analysis_client(*poll_bodies: dict[str, object]) -> MagicMock:
    """Analysis client double that accepts the document and answers each poll in turn."""
    client = MagicMock()
    client.begin_analysis.return_value = AnalysisHttpResponse(
        status_code=202,
        headers={"Operation-Location": OPERATION_URL},
    )
    client.get_operation.side_effect = [
        AnalysisHttpResponse(status_code=200, body=json.dumps(body).encode("utf-8"))
        for body in poll_bodies
    ]
    return client


@pytest.fixture
def make_analysis_client():
    return _make_analysis_client
