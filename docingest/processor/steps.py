from docingest.analysis.poller import AnalysisPoller
from docingest.analysis.submitter import AnalysisSubmitter
from docingest.extraction.extractor import ResultExtractor
from docingest.extraction.naming import processed_artifact_name, source_artifact_name
from docingest.indexing.publisher_base import BaseIndexPublisher
from docingest.indexing.record_builder import IndexRecordBuilder
from docingest.logging.logger import Log
from docingest.processor.exceptions import StepPreconditionError
from docingest.processor.models import Document, PipelineStage
from docingest.processor.pipeline import PipelineContext, PipelineStep
from docingest.storage.base import BaseBlobStore
from docingest.validation.gate import FileTypeGate


class DescribeDocumentStep(PipelineStep):
    stage = PipelineStage.VALIDATION

    def __init__(self, blob_store: BaseBlobStore, container: str) -> None:
        self._blob_store = blob_store
        self._container = container

    def run(self, context: PipelineContext) -> PipelineContext:
        context.descriptor = self._blob_store.describe(self._container, context.document_name)
        return context


class ValidateDocumentStep(PipelineStep):
    stage = PipelineStage.VALIDATION

    def __init__(self, gate: FileTypeGate) -> None:
        self._gate = gate

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.descriptor is None:
            raise StepPreconditionError("PipelineContext.descriptor must be set before validation")
        context.verdict = self._gate.validate(context.descriptor)
        if context.rejected:
            Log.warning(
                f"Skipping {context.document_name}: {context.verdict.detail}",
                document=context.document_name,
                stage=self.stage.value,
                reason=context.verdict.reason.value if context.verdict.reason else "",
            )
        return context


class LoadDocumentStep(PipelineStep):
    stage = PipelineStage.VALIDATION

    def __init__(self, blob_store: BaseBlobStore, container: str) -> None:
        self._blob_store = blob_store
        self._container = container

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.descriptor is None:
            raise StepPreconditionError("PipelineContext.descriptor must be set before loading")
        content = self._blob_store.read(self._container, context.document_name)
        context.document = Document(
            name=context.document_name,
            content_type=context.descriptor.content_type,
            content=content,
        )
        Log.info(
            f"Loaded {len(content)} bytes for document {context.document_name}",
            run_id=context.run_id,
        )
        return context


class SubmitAnalysisStep(PipelineStep):
    stage = PipelineStage.ANALYSIS

    def __init__(self, submitter: AnalysisSubmitter) -> None:
        self._submitter = submitter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise StepPreconditionError("PipelineContext.document must be set before submission")
        context.handle = self._submitter.submit(context.document, context.cancellation)
        return context


class PollAnalysisStep(PipelineStep):
    stage = PipelineStage.ANALYSIS

    def __init__(self, poller: AnalysisPoller) -> None:
        self._poller = poller

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.handle is None:
            raise StepPreconditionError("PipelineContext.handle must be set before polling")
        context.analysis_result = self._poller.poll(context.handle, context.cancellation)
        context.analysis_payload = context.analysis_result.unwrap()
        return context


class PersistAnalysisStep(PipelineStep):
    stage = PipelineStage.INDEXING

    def __init__(self, blob_store: BaseBlobStore, container: str) -> None:
        self._blob_store = blob_store
        self._container = container

    def run(self, context: PipelineContext) -> PipelineContext:
        data = context.analysis_payload_bytes()
        if data is None:
            raise StepPreconditionError(
                "PipelineContext.analysis_payload must be set before persist"
            )
        name = processed_artifact_name(context.document_name)
        self._blob_store.write(self._container, name, data)
        Log.info(f"Analysis result saved to {self._container}/{name}", run_id=context.run_id)
        return context


class LoadAnalysisResultStep(PipelineStep):
    stage = PipelineStage.INDEXING

    def __init__(self, blob_store: BaseBlobStore, container: str) -> None:
        self._blob_store = blob_store
        self._container = container

    def run(self, context: PipelineContext) -> PipelineContext:
        payload = self._blob_store.read(self._container, context.document_name)
        context.analysis_payload = payload
        Log.info(
            f"Loaded analysis result {self._container}/{context.document_name} "
            f"({len(payload)} bytes)",
            run_id=context.run_id,
        )
        return context


class ExtractContentStep(PipelineStep):
    stage = PipelineStage.INDEXING

    def __init__(self, extractor: ResultExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis_payload is None:
            raise StepPreconditionError(
                "PipelineContext.analysis_payload must be set before extraction"
            )
        context.extracted = self._extractor.extract(
            context.analysis_payload, context.document_name
        )
        Log.info(
            f"Extracted {len(context.extracted.text)} chars from document "
            f"{context.document_name}",
            run_id=context.run_id,
        )
        return context


class BuildIndexRecordStep(PipelineStep):
    stage = PipelineStage.INDEXING

    def __init__(self, builder: IndexRecordBuilder) -> None:
        self._builder = builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted is None:
            raise StepPreconditionError("PipelineContext.extracted must be set before build")
        context.record = self._builder.build(
            context.extracted.filename,
            context.extracted.text,
            context.extracted.metadata,
            source_name=source_artifact_name(context.document_name),
        )
        return context


class PublishIndexRecordStep(PipelineStep):
    stage = PipelineStage.INDEXING

    def __init__(self, publisher: BaseIndexPublisher) -> None:
        self._publisher = publisher

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise StepPreconditionError("PipelineContext.record must be set before publish")
        self._publisher.publish(context.record)
        return context
