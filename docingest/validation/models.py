from dataclasses import dataclass
from enum import Enum


class RejectionReason(str, Enum):
    UNSUPPORTED_TYPE = "unsupported-type"
    OVERSIZED = "oversized"
    MISSING_BLOB = "missing-blob"


@dataclass(frozen=True)
class DocumentDescriptor:
    """Metadata of a stored artifact, available before its bytes are read."""

    name: str
    content_type: str
    size: int
    exists: bool = True


@dataclass(frozen=True)
class ValidationVerdict:
    """Accept/reject decision of the file-type gate."""

    accepted: bool
    reason: RejectionReason | None = None
    detail: str = ""

    @classmethod
    def accept(cls) -> "ValidationVerdict":
        return cls(accepted=True)

    @classmethod
    def reject(cls, reason: RejectionReason, detail: str) -> "ValidationVerdict":
        return cls(accepted=False, reason=reason, detail=detail)
