import json
from collections.abc import Mapping
from typing import Any

from docingest.extraction.exceptions import ExtractionError
from docingest.extraction.models import ExtractedContent
from docingest.extraction.naming import document_base_name
from docingest.extraction.schema import AnalyzeResult, build_operation


class ResultExtractor:
    """Turns a terminal analysis payload into plain text and flat metadata."""

    def extract(
        self,
        payload: Mapping[str, Any] | bytes | str,
        artifact_name: str,
    ) -> ExtractedContent:
        """Extract text and metadata, tolerating absent optional sections.

        Raises:
            ExtractionError: if raw *payload* is not a JSON object.
        """
        data = self._decode(payload)
        result = build_operation(data).analyze_result or AnalyzeResult()
        return ExtractedContent(
            text=self._extract_text(result),
            metadata=self._extract_metadata(result, artifact_name),
        )

    @staticmethod
    def _decode(payload: Mapping[str, Any] | bytes | str) -> Mapping[str, Any]:
        if isinstance(payload, Mapping):
            return payload
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ExtractionError(f"Analysis payload is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ExtractionError("Analysis payload must be a JSON object")
        return data

    @staticmethod
    def _extract_text(result: AnalyzeResult) -> str:
        lines = [
            line.content.strip()
            for page in result.pages or ()
            for line in page.lines
        ]
        return "\n".join(lines).strip()

    @staticmethod
    def _extract_metadata(
        result: AnalyzeResult,
        artifact_name: str,
    ) -> tuple[tuple[str, str], ...]:
        metadata: list[tuple[str, str]] = [("filename", document_base_name(artifact_name))]
        if result.doc_type is not None:
            metadata.append(("document_type", result.doc_type))
        if result.pages is not None:
            metadata.append(("page_count", str(len(result.pages))))
        if result.created_date_time is not None:
            metadata.append(("created_date", result.created_date_time))
        return tuple(metadata)
