import uuid
from collections.abc import Sequence

from docingest.analysis import CancellationToken
from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.exceptions import (
    AnalysisCancelledError,
    AnalysisTimeoutError,
    SubmissionError,
)
from docingest.analysis.factory import AnalysisClientFactory, build_poller, build_submitter
from docingest.config.settings import Settings
from docingest.extraction.extractor import ResultExtractor
from docingest.indexing.factory import IndexPublisherFactory, build_record_builder
from docingest.indexing.publisher_base import BaseIndexPublisher
from docingest.logging.logger import Log
from docingest.processor.failure_sink import DIVERT, LOG_ONLY, FailureSink
from docingest.processor.models import OutcomeStatus, PipelineOutcome, PipelineStage
from docingest.processor.pipeline import PipelineContext, PipelineStep
from docingest.processor.steps import (
    BuildIndexRecordStep,
    DescribeDocumentStep,
    ExtractContentStep,
    LoadAnalysisResultStep,
    LoadDocumentStep,
    PersistAnalysisStep,
    PollAnalysisStep,
    PublishIndexRecordStep,
    SubmitAnalysisStep,
    ValidateDocumentStep,
)
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import BlobNotFoundError, StorageError
from docingest.storage.factory import BlobStoreFactory
from docingest.validation.gate import FileTypeGate

# Worth another attempt from the job runner. A "failed" analysis status and
# every indexing-stage error are final.
_RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    SubmissionError,
    AnalysisTimeoutError,
    AnalysisCancelledError,
    StorageError,
)


def is_retryable(exc: Exception) -> bool:
    if isinstance(exc, BlobNotFoundError):
        return False
    return isinstance(exc, _RETRYABLE_ERRORS)


class Processor:
    """Orchestrates the document pipeline for one document at a time.

    Pipeline: describe -> validate -> load -> submit -> poll -> persist
    -> extract -> build -> publish. ``reindex`` runs the indexing stage alone
    on a previously persisted analysis result.
    """

    def __init__(
        self,
        steps: Sequence[PipelineStep],
        failure_sink: FailureSink,
        reindex_steps: Sequence[PipelineStep] = (),
        analysis_failure_policy: str = LOG_ONLY,
        indexing_failure_policy: str = DIVERT,
        timeout_seconds: float | None = None,
    ) -> None:
        self._steps = tuple(steps)
        self._reindex_steps = tuple(reindex_steps)
        self._failure_sink = failure_sink
        self._analysis_failure_policy = analysis_failure_policy
        self._indexing_failure_policy = indexing_failure_policy
        self._timeout_seconds = timeout_seconds

    def process(
        self,
        document_name: str,
        run_id: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> PipelineOutcome:
        """Run the full pipeline for a stored document. Never raises for pipeline errors."""
        context = self._new_context(document_name, run_id, cancellation)
        Log.info(f"Processing document {document_name}", run_id=context.run_id)
        return self._run(self._steps, context)

    def reindex(
        self,
        processed_name: str,
        run_id: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> PipelineOutcome:
        """Extract, build and publish from a persisted analysis result."""
        context = self._new_context(processed_name, run_id, cancellation)
        Log.info(f"Reindexing analysis result {processed_name}", run_id=context.run_id)
        return self._run(self._reindex_steps, context)

    def _new_context(
        self,
        document_name: str,
        run_id: str | None,
        cancellation: CancellationToken | None,
    ) -> PipelineContext:
        return PipelineContext(
            document_name=document_name,
            run_id=run_id or uuid.uuid4().hex,
            cancellation=cancellation or CancellationToken(self._timeout_seconds),
        )

    def _run(self, steps: Sequence[PipelineStep], context: PipelineContext) -> PipelineOutcome:
        for step in steps:
            try:
                context = step.run(context)
            except Exception as exc:
                return self._handle_failure(step.stage, context, exc)
            if context.rejected:
                return self._skipped(context)

        Log.info(
            f"Document {context.document_name} processed successfully",
            run_id=context.run_id,
            record=context.record.id if context.record else "",
        )
        return PipelineOutcome(
            document_name=context.document_name,
            run_id=context.run_id,
            status=OutcomeStatus.SUCCEEDED,
            record=context.record,
        )

    @staticmethod
    def _skipped(context: PipelineContext) -> PipelineOutcome:
        verdict = context.verdict
        reason = ""
        if verdict is not None and verdict.reason is not None:
            reason = f"{verdict.reason.value}: {verdict.detail}"
        return PipelineOutcome(
            document_name=context.document_name,
            run_id=context.run_id,
            status=OutcomeStatus.SKIPPED,
            stage=PipelineStage.VALIDATION,
            reason=reason,
        )

    def _handle_failure(
        self,
        stage: PipelineStage,
        context: PipelineContext,
        exc: Exception,
    ) -> PipelineOutcome:
        reason = str(exc) or type(exc).__name__
        Log.error(
            f"Document {context.document_name} failed at {stage.value} stage: {reason}",
            document=context.document_name,
            stage=stage.value,
            run_id=context.run_id,
            error=type(exc).__name__,
        )
        diverted_to = None
        if stage is PipelineStage.ANALYSIS and self._analysis_failure_policy == DIVERT:
            if context.document is not None:
                diverted_to = self._failure_sink.divert(
                    context.document_name, context.run_id, context.document.content
                )
        elif stage is PipelineStage.INDEXING and self._indexing_failure_policy == DIVERT:
            payload = context.analysis_payload_bytes()
            if payload is not None:
                diverted_to = self._failure_sink.divert(
                    context.document_name, context.run_id, payload
                )

        return PipelineOutcome(
            document_name=context.document_name,
            run_id=context.run_id,
            status=OutcomeStatus.FAILED,
            stage=stage,
            reason=reason,
            retryable=stage is not PipelineStage.INDEXING and is_retryable(exc),
            diverted_to=diverted_to,
        )


def build_processor(
    settings: Settings,
    blob_store: BaseBlobStore | None = None,
    analysis_client: BaseAnalysisClient | None = None,
    index_publisher: BaseIndexPublisher | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    blob_store = blob_store or BlobStoreFactory.create(settings)
    analysis_client = analysis_client or AnalysisClientFactory.create(settings)
    index_publisher = index_publisher or IndexPublisherFactory.create(settings, blob_store)
    gate = FileTypeGate.from_settings(settings)
    extractor = ResultExtractor()
    builder = build_record_builder(settings)

    indexing_steps: list[PipelineStep] = [
        ExtractContentStep(extractor),
        BuildIndexRecordStep(builder),
        PublishIndexRecordStep(index_publisher),
    ]
    steps: list[PipelineStep] = [
        DescribeDocumentStep(blob_store, settings.documents_container),
        ValidateDocumentStep(gate),
        LoadDocumentStep(blob_store, settings.documents_container),
        SubmitAnalysisStep(build_submitter(settings, analysis_client)),
        PollAnalysisStep(build_poller(settings, analysis_client)),
        PersistAnalysisStep(blob_store, settings.processed_container),
        *indexing_steps,
    ]
    reindex_steps: list[PipelineStep] = [
        LoadAnalysisResultStep(blob_store, settings.processed_container),
        *indexing_steps,
    ]
    return Processor(
        steps=steps,
        reindex_steps=reindex_steps,
        failure_sink=FailureSink(blob_store, settings.failed_container),
        analysis_failure_policy=settings.analysis_failure_policy,
        indexing_failure_policy=settings.indexing_failure_policy,
        timeout_seconds=settings.pipeline_timeout_seconds,
    )
