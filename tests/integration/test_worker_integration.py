import json

import pytest

from docingest.config.settings import Settings
from docingest.intake.event_handler import EventIntakeHandler
from docingest.processor.processor import build_processor
from docingest.queue.local_queue import LocalMessageQueue
from docingest.storage.local_blob_store import LocalBlobStore
from docingest.validation.gate import FileTypeGate
from docingest.worker.job_runner import JobRunner
from docingest.worker.worker import Worker


def _queue(settings: Settings) -> LocalMessageQueue:
    return LocalMessageQueue(settings.queue_root, settings.processing_queue_name)


def _intake(settings: Settings, queue: LocalMessageQueue) -> EventIntakeHandler:
    return EventIntakeHandler(
        blob_store=LocalBlobStore(settings.storage_root),
        queue=queue,
        gate=FileTypeGate.from_settings(settings),
        container=settings.documents_container,
    )


@pytest.mark.integration
class TestWorkerIntegration:
    def test_event_to_indexed_record(
        self,
        test_settings: Settings,
        store_document,
        sample_pdf_bytes: bytes,
    ) -> None:
        path = store_document("report.pdf", sample_pdf_bytes)
        queue = _queue(test_settings)
        event = {"data": {"url": path.absolute().as_uri()}}
        assert _intake(test_settings, queue).handle(json.dumps(event)) is not None

        processor = build_processor(test_settings)
        worker = Worker(queue, JobRunner(processor, queue, test_settings), test_settings)
        worker.run(max_jobs=1)

        indexed = list((test_settings.storage_root / "indexed").glob("*.json"))
        assert len(indexed) == 1
        document = json.loads(indexed[0].read_text(encoding="utf-8"))
        assert document["fileName"] == "report"
        assert queue.receive() is None

    def test_rejected_blob_never_queued(self, test_settings: Settings, store_document) -> None:
        path = store_document("notes.exe", b"MZ")
        queue = _queue(test_settings)

        message_id = _intake(test_settings, queue).handle(
            {"data": {"url": path.absolute().as_uri()}}
        )

        assert message_id is None
        assert queue.receive() is None

    def test_retryable_failure_released_then_dropped(
        self,
        test_settings: Settings,
        store_document,
        make_analysis_client,
    ) -> None:
        path = store_document("report.pdf", b"%PDF-1.4 minimal")
        queue = _queue(test_settings)
        _intake(test_settings, queue).handle({"data": {"url": path.absolute().as_uri()}})
        running = {"status": "running"}
        client = make_analysis_client(*([running] * 3 * test_settings.max_job_attempts))
        processor = build_processor(test_settings, analysis_client=client)
        worker = Worker(queue, JobRunner(processor, queue, test_settings), test_settings)

        worker.run(max_jobs=test_settings.max_job_attempts)

        assert client.begin_analysis.call_count == test_settings.max_job_attempts
        assert queue.receive() is None
        assert not (test_settings.storage_root / "indexed").exists()
