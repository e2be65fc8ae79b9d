import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from docingest.analysis.cancellation import CancellationToken
from docingest.analysis.models import AnalysisJobHandle, AnalysisResult
from docingest.extraction.models import ExtractedContent
from docingest.indexing.models import IndexRecord
from docingest.processor.models import Document, PipelineStage
from docingest.validation.models import DocumentDescriptor, ValidationVerdict


@dataclass(slots=True)
class PipelineContext:
    document_name: str
    run_id: str
    cancellation: CancellationToken = field(default_factory=CancellationToken)
    descriptor: DocumentDescriptor | None = None
    verdict: ValidationVerdict | None = None
    document: Document | None = None
    handle: AnalysisJobHandle | None = None
    analysis_result: AnalysisResult | None = None
    analysis_payload: dict[str, Any] | bytes | None = None
    extracted: ExtractedContent | None = None
    record: IndexRecord | None = None

    @property
    def rejected(self) -> bool:
        return self.verdict is not None and not self.verdict.accepted

    def analysis_payload_bytes(self) -> bytes | None:
        if self.analysis_payload is None or isinstance(self.analysis_payload, bytes):
            return self.analysis_payload
        return json.dumps(self.analysis_payload, ensure_ascii=False).encode("utf-8")


class PipelineStep(ABC):
    stage: ClassVar[PipelineStage]

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
