from docingest.config.settings import Settings
from docingest.logging.logger import Log
from docingest.processor.models import OutcomeStatus, PipelineOutcome
from docingest.processor.processor import Processor
from docingest.queue.base import BaseMessageQueue
from docingest.queue.models import QueueMessage


class JobRunner:
    """Run one queue message through the processor and apply retry logic."""

    def __init__(
        self,
        processor: Processor,
        queue: BaseMessageQueue,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._queue = queue
        self._settings = settings

    def run(self, message: QueueMessage) -> PipelineOutcome | None:
        """Execute a single message with error handling."""
        document_name = message.body.metadata.file_name
        Log.info(
            f"Running message {message.id} for {document_name} "
            f"(attempt {message.attempts + 1})"
        )
        try:
            outcome = self._processor.process(document_name, run_id=message.id)
        except Exception as exc:
            Log.exception(f"Message {message.id} failed unexpectedly: {exc}")
            self._handle_failure(message, str(exc), retryable=True)
            return None

        if outcome.status is OutcomeStatus.FAILED:
            self._handle_failure(message, outcome.reason, retryable=outcome.retryable)
        else:
            self._queue.complete(message)
            Log.info(f"Message {message.id} completed ({outcome.status.value})")
        return outcome

    def _handle_failure(self, message: QueueMessage, reason: str, retryable: bool) -> None:
        """Release for another attempt while attempts remain, otherwise drop."""
        attempt = message.attempts + 1
        if retryable and attempt < self._settings.max_job_attempts:
            self._queue.release(message)
            Log.warning(f"Message {message.id} will be retried (attempt {attempt} failed)")
            return
        self._queue.complete(message)
        Log.error(
            f"Message {message.id} permanently failed after {attempt} attempts: {reason}"
        )
