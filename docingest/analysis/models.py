from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from docingest.analysis.exceptions import AnalysisFailedError, AnalysisTimeoutError


@dataclass(frozen=True)
class AnalysisHttpResponse:
    """Transport-neutral view of one analysis service answer."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


@dataclass(frozen=True)
class AnalysisJobHandle:
    """Reference to one in-flight analysis operation."""

    document_name: str
    operation_url: str


class AnalysisStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal outcome of polling one analysis operation."""

    status: AnalysisStatus
    payload: dict[str, Any] | None = None
    reason: str = ""
    rounds: int = 0

    @classmethod
    def succeeded(cls, payload: dict[str, Any], rounds: int) -> "AnalysisResult":
        return cls(status=AnalysisStatus.SUCCEEDED, payload=payload, rounds=rounds)

    @classmethod
    def failed(cls, reason: str, rounds: int) -> "AnalysisResult":
        return cls(status=AnalysisStatus.FAILED, reason=reason, rounds=rounds)

    @classmethod
    def timed_out(cls, reason: str, rounds: int) -> "AnalysisResult":
        return cls(status=AnalysisStatus.TIMED_OUT, reason=reason, rounds=rounds)

    @property
    def is_success(self) -> bool:
        return self.status is AnalysisStatus.SUCCEEDED

    def unwrap(self) -> dict[str, Any]:
        """Return the success payload.

        Raises:
            AnalysisFailedError: if the service reported the operation as failed.
            AnalysisTimeoutError: if polling ran out of rounds.
        """
        if self.status is AnalysisStatus.FAILED:
            raise AnalysisFailedError(self.reason)
        if self.status is AnalysisStatus.TIMED_OUT:
            raise AnalysisTimeoutError(self.reason)
        if self.payload is None:
            raise AnalysisFailedError("Succeeded analysis carried no payload")
        return self.payload
