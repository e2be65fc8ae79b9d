from collections.abc import Iterable
from pathlib import PurePosixPath
from types import MappingProxyType

from docingest.config.settings import Settings
from docingest.validation.models import (
    DocumentDescriptor,
    RejectionReason,
    ValidationVerdict,
)

# Single source for both the extension and the MIME-type checks.
SUPPORTED_FILE_TYPES = MappingProxyType(
    {
        "pdf": "application/pdf",
        "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "txt": "text/plain",
        "html": "text/html",
    }
)

_GENERIC_CONTENT_TYPES = frozenset({"", "application/octet-stream"})

DEFAULT_MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024


def file_extension(name: str) -> str:
    """Return the lowercased last suffix of *name* without the dot."""
    return PurePosixPath(name).suffix.lower().lstrip(".")


class FileTypeGate:
    """Decides whether an artifact is eligible for analysis. Pure, no I/O."""

    def __init__(
        self,
        allowed_file_types: Iterable[str] = tuple(SUPPORTED_FILE_TYPES),
        max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
    ) -> None:
        allowed = {t.lower().lstrip(".") for t in allowed_file_types}
        unknown = allowed - SUPPORTED_FILE_TYPES.keys()
        if unknown:
            raise ValueError(
                f"Unsupported file types {sorted(unknown)}. "
                f"Choose from: {list(SUPPORTED_FILE_TYPES)}"
            )
        self._extensions = frozenset(allowed)
        self._content_types = frozenset(SUPPORTED_FILE_TYPES[t] for t in allowed)
        self._max_file_size_bytes = max_file_size_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileTypeGate":
        return cls(
            allowed_file_types=settings.allowed_file_types,
            max_file_size_bytes=settings.max_file_size_bytes,
        )

    def validate(self, descriptor: DocumentDescriptor) -> ValidationVerdict:
        if not descriptor.exists:
            return ValidationVerdict.reject(
                RejectionReason.MISSING_BLOB,
                f"Artifact {descriptor.name} does not exist",
            )
        if descriptor.size > self._max_file_size_bytes:
            return ValidationVerdict.reject(
                RejectionReason.OVERSIZED,
                f"Size {descriptor.size} exceeds maximum {self._max_file_size_bytes}",
            )
        extension = file_extension(descriptor.name)
        if extension not in self._extensions:
            return ValidationVerdict.reject(
                RejectionReason.UNSUPPORTED_TYPE,
                f"Extension '{extension}' is not supported",
            )
        content_type = self._base_content_type(descriptor.content_type)
        if (
            content_type not in _GENERIC_CONTENT_TYPES
            and content_type not in self._content_types
        ):
            return ValidationVerdict.reject(
                RejectionReason.UNSUPPORTED_TYPE,
                f"Content type '{descriptor.content_type}' is not allowed",
            )
        return ValidationVerdict.accept()

    @staticmethod
    def _base_content_type(content_type: str) -> str:
        # "text/html; charset=utf-8" -> "text/html"
        return content_type.split(";", 1)[0].strip().lower()
