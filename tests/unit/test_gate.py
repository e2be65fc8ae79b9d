import pytest

from docingest.validation.gate import (
    DEFAULT_MAX_FILE_SIZE_BYTES,
    SUPPORTED_FILE_TYPES,
    FileTypeGate,
    file_extension,
)
from docingest.validation.models import DocumentDescriptor, RejectionReason


def _descriptor(
    name: str = "report.pdf",
    content_type: str = "application/pdf",
    size: int = 10_240,
    exists: bool = True,
) -> DocumentDescriptor:
    return DocumentDescriptor(name=name, content_type=content_type, size=size, exists=exists)


class TestFileExtension:
    def test_lowercases_last_suffix(self) -> None:
        assert file_extension("Scan.PDF") == "pdf"

    def test_uses_last_suffix_only(self) -> None:
        assert file_extension("archive.tar.txt") == "txt"

    def test_no_suffix(self) -> None:
        assert file_extension("README") == ""


class TestAccepts:
    @pytest.mark.parametrize("extension", sorted(SUPPORTED_FILE_TYPES))
    def test_every_supported_type_at_size_bound(self, extension: str) -> None:
        gate = FileTypeGate()
        verdict = gate.validate(
            _descriptor(
                name=f"doc.{extension}",
                content_type=SUPPORTED_FILE_TYPES[extension],
                size=DEFAULT_MAX_FILE_SIZE_BYTES,
            )
        )
        assert verdict.accepted

    def test_small_pdf(self) -> None:
        verdict = FileTypeGate().validate(_descriptor())
        assert verdict.accepted
        assert verdict.reason is None

    def test_uppercase_extension(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(name="REPORT.PDF"))
        assert verdict.accepted

    def test_generic_content_type(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(content_type="application/octet-stream"))
        assert verdict.accepted

    def test_empty_content_type(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(content_type=""))
        assert verdict.accepted

    def test_content_type_parameters_ignored(self) -> None:
        verdict = FileTypeGate().validate(
            _descriptor(name="page.html", content_type="text/html; charset=utf-8")
        )
        assert verdict.accepted


class TestRejects:
    def test_one_byte_over_limit(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(size=DEFAULT_MAX_FILE_SIZE_BYTES + 1))
        assert not verdict.accepted
        assert verdict.reason is RejectionReason.OVERSIZED

    def test_oversized_regardless_of_type(self) -> None:
        verdict = FileTypeGate(max_file_size_bytes=100).validate(
            _descriptor(name="image.png", content_type="image/png", size=101)
        )
        assert verdict.reason is RejectionReason.OVERSIZED

    def test_unsupported_extension(self) -> None:
        verdict = FileTypeGate().validate(
            _descriptor(name="image.png", content_type="image/png")
        )
        assert verdict.reason is RejectionReason.UNSUPPORTED_TYPE

    def test_mismatching_content_type(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(content_type="image/png"))
        assert verdict.reason is RejectionReason.UNSUPPORTED_TYPE

    def test_missing_blob(self) -> None:
        verdict = FileTypeGate().validate(_descriptor(exists=False, size=0))
        assert verdict.reason is RejectionReason.MISSING_BLOB

    def test_type_not_enabled(self) -> None:
        gate = FileTypeGate(allowed_file_types=["pdf"])
        verdict = gate.validate(_descriptor(name="notes.txt", content_type="text/plain"))
        assert verdict.reason is RejectionReason.UNSUPPORTED_TYPE

    def test_content_type_of_disabled_type(self) -> None:
        gate = FileTypeGate(allowed_file_types=["pdf"])
        verdict = gate.validate(_descriptor(content_type="text/plain"))
        assert verdict.reason is RejectionReason.UNSUPPORTED_TYPE


class TestConfiguration:
    def test_unknown_allowed_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unsupported file types"):
            FileTypeGate(allowed_file_types=["pdf", "exe"])

    def test_allowed_types_normalized(self) -> None:
        gate = FileTypeGate(allowed_file_types=[".PDF"])
        assert gate.validate(_descriptor()).accepted
