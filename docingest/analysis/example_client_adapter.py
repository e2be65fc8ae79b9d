"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import json
from itertools import count
from typing import ClassVar

from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.models import AnalysisHttpResponse


class ExampleAnalysisClient(BaseAnalysisClient):
    """Example adapter that accepts every document and reports a fixed result.

    No network calls. Useful for local development and tests.
    """

    OPERATION_PREFIX: ClassVar[str] = "example://operations/"

    DEFAULT_RESULT: ClassVar[dict[str, object]] = {
        "status": "succeeded",
        "analyzeResult": {
            "docType": "example",
            "createdDateTime": "2024-01-01T00:00:00Z",
            "pages": [
                {"lines": [{"content": "Example analysis result"}]},
            ],
        },
    }

    def __init__(self) -> None:
        self._operation_ids = count(1)

    def begin_analysis(
        self,
        content: bytes,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        _ = content, timeout
        operation_url = f"{self.OPERATION_PREFIX}{next(self._operation_ids)}"
        return AnalysisHttpResponse(
            status_code=202,
            headers={"Operation-Location": operation_url},
        )

    def get_operation(
        self,
        operation_url: str,
        *,
        timeout: float | None = None,
    ) -> AnalysisHttpResponse:
        _ = operation_url, timeout
        return AnalysisHttpResponse(
            status_code=200,
            headers={"Content-Type": "application/json"},
            body=json.dumps(self.DEFAULT_RESULT).encode("utf-8"),
        )
