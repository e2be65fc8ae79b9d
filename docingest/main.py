import argparse
import signal
import sys
from pathlib import Path

from docingest.analysis.factory import AnalysisClientFactory
from docingest.config.settings import Settings
from docingest.indexing.factory import IndexPublisherFactory
from docingest.intake.event_handler import EventIntakeHandler
from docingest.intake.exceptions import InvalidEventError
from docingest.logging.logger import Log
from docingest.processor.models import OutcomeStatus
from docingest.processor.processor import build_processor
from docingest.queue.factory import MessageQueueFactory
from docingest.storage.factory import BlobStoreFactory
from docingest.validation.gate import FileTypeGate
from docingest.worker.job_runner import JobRunner
from docingest.worker.worker import Worker


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docingest", description="Document ingestion worker")
    commands = parser.add_subparsers(dest="command")

    worker = commands.add_parser("worker", help="poll the processing queue (default)")
    worker.add_argument("--max-jobs", type=int, default=None, help="stop after N messages")

    intake = commands.add_parser("intake", help="enqueue the blob referenced by an event")
    intake.add_argument("event_file", type=Path, help="JSON event envelope")

    reindex = commands.add_parser("reindex", help="index a persisted analysis result")
    reindex.add_argument("processed_name", help="name in the processed container")
    return parser


def run_intake(settings: Settings, event_file: Path) -> int:
    handler = EventIntakeHandler(
        blob_store=BlobStoreFactory.create(settings),
        queue=MessageQueueFactory.create(settings),
        gate=FileTypeGate.from_settings(settings),
        container=settings.documents_container,
    )
    try:
        handler.handle(event_file.read_bytes())
    except (InvalidEventError, OSError) as exc:
        Log.error(f"Cannot handle event {event_file}: {exc}")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build dependencies -> run the sub-command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "intake":
        return run_intake(settings, args.event_file)

    blob_store = BlobStoreFactory.create(settings)
    analysis_client = AnalysisClientFactory.create(settings)
    index_publisher = IndexPublisherFactory.create(settings, blob_store)
    try:
        processor = build_processor(settings, blob_store, analysis_client, index_publisher)
        if args.command == "reindex":
            outcome = processor.reindex(args.processed_name)
            return 0 if outcome.status is OutcomeStatus.SUCCEEDED else 1

        queue = MessageQueueFactory.create(settings)
        job_runner = JobRunner(processor, queue, settings)
        worker = Worker(queue, job_runner, settings)
        previous = signal.signal(signal.SIGTERM, lambda _signum, _frame: worker.stop())
        try:
            worker.run(max_jobs=getattr(args, "max_jobs", None))
        finally:
            signal.signal(signal.SIGTERM, previous)
        return 0
    finally:
        analysis_client.close()
        index_publisher.close()


if __name__ == "__main__":
    sys.exit(main())
