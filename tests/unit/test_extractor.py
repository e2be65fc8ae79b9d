import json

import pytest

from docingest.extraction.exceptions import ExtractionError
from docingest.extraction.extractor import ResultExtractor

PAYLOAD = {
    "status": "succeeded",
    "analyzeResult": {
        "docType": "invoice",
        "createdDateTime": "2024-03-01T10:00:00Z",
        "pages": [
            {"lines": [{"content": "  Hello "}, {"content": "World"}]},
            {"lines": [{"content": "Second"}, {"content": "page  "}]},
        ],
    },
}


class TestExtractText:
    def test_lines_in_document_order(self) -> None:
        content = ResultExtractor().extract(PAYLOAD, "report.pdf")

        assert content.text == "Hello\nWorld\nSecond\npage"
        assert len(content.text.split("\n")) == 4

    def test_missing_pages_gives_empty_text(self) -> None:
        content = ResultExtractor().extract({"analyzeResult": {}}, "report.pdf")

        assert content.text == ""

    def test_missing_analyze_result(self) -> None:
        content = ResultExtractor().extract({"status": "succeeded"}, "report.pdf")

        assert content.text == ""
        assert content.metadata == (("filename", "report"),)

    def test_pages_not_a_list(self) -> None:
        content = ResultExtractor().extract({"analyzeResult": {"pages": "oops"}}, "a.pdf")

        assert content.text == ""
        assert "page_count" not in dict(content.metadata)

    def test_page_without_lines(self) -> None:
        payload = {"analyzeResult": {"pages": [{}, {"lines": [{"content": "Only"}]}]}}

        content = ResultExtractor().extract(payload, "a.pdf")

        assert content.text == "Only"

    def test_line_without_content(self) -> None:
        payload = {"analyzeResult": {"pages": [{"lines": [{}, {"content": "x"}]}]}}

        content = ResultExtractor().extract(payload, "a.pdf")

        assert content.text == "x"


class TestExtractMetadata:
    def test_all_fields_in_order(self) -> None:
        content = ResultExtractor().extract(PAYLOAD, "report.pdf")

        assert content.metadata == (
            ("filename", "report"),
            ("document_type", "invoice"),
            ("page_count", "2"),
            ("created_date", "2024-03-01T10:00:00Z"),
        )

    def test_empty_pages_counted(self) -> None:
        content = ResultExtractor().extract({"analyzeResult": {"pages": []}}, "a.pdf")

        assert dict(content.metadata)["page_count"] == "0"

    def test_filename_from_processed_artifact(self) -> None:
        content = ResultExtractor().extract(PAYLOAD, "report.pdf.json")

        assert content.filename == "report"


class TestExtractRawPayload:
    def test_accepts_bytes(self) -> None:
        content = ResultExtractor().extract(json.dumps(PAYLOAD).encode("utf-8"), "report.pdf")

        assert content.text.startswith("Hello")

    def test_accepts_str(self) -> None:
        content = ResultExtractor().extract(json.dumps(PAYLOAD), "report.pdf")

        assert content.filename == "report"

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ExtractionError, match="not valid JSON"):
            ResultExtractor().extract(b"{not json", "report.pdf")

    def test_non_object_raises(self) -> None:
        with pytest.raises(ExtractionError, match="JSON object"):
            ResultExtractor().extract(b"[1, 2]", "report.pdf")
