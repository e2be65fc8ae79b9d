from dataclasses import dataclass, field
from enum import Enum

from docingest.indexing.models import IndexRecord


@dataclass(frozen=True)
class Document:
    """Immutable byte payload of one stored artifact, alive for one pipeline run."""

    name: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


class PipelineStage(str, Enum):
    VALIDATION = "validation"
    ANALYSIS = "analysis"
    INDEXING = "indexing"


class OutcomeStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineOutcome:
    """How one pipeline run for one document ended."""

    document_name: str
    run_id: str
    status: OutcomeStatus
    stage: PipelineStage | None = None
    reason: str = ""
    retryable: bool = False
    record: IndexRecord | None = None
    diverted_to: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED
