import threading

from docingest.config.settings import Settings
from docingest.logging.logger import Log
from docingest.queue.base import BaseMessageQueue
from docingest.queue.models import QueueMessage
from docingest.worker.job_runner import JobRunner


class Worker:
    """Claims queue messages one at a time and hands them to the job runner.

    ``stop()`` may be called from another thread or a signal handler. An idle
    wait ends at once; a message already claimed is run to completion first.
    """

    def __init__(
        self,
        queue: BaseMessageQueue,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._queue = queue
        self._job_runner = job_runner
        self._idle_interval = settings.job_poll_interval_seconds
        self._stop_requested = threading.Event()

    @property
    def stopping(self) -> bool:
        return self._stop_requested.is_set()

    def stop(self) -> None:
        self._stop_requested.set()

    def run(self, max_jobs: int | None = None) -> int:
        """Handle messages until stopped, interrupted or *max_jobs* is reached.

        Returns the number of messages handed to the job runner.
        """
        Log.info("Worker started", idle_interval=self._idle_interval)
        handled = 0
        try:
            while not self.stopping and (max_jobs is None or handled < max_jobs):
                if self.poll_once():
                    handled += 1
                else:
                    self._stop_requested.wait(self._idle_interval)
        except KeyboardInterrupt:
            self.stop()
        Log.info(f"Worker stopped after {handled} message(s)")
        return handled

    def poll_once(self) -> bool:
        """Claim and run at most one message. True when a message was run."""
        message = self._claim()
        if message is None:
            return False
        self._job_runner.run(message)
        return True

    def _claim(self) -> QueueMessage | None:
        try:
            return self._queue.receive()
        except Exception as exc:
            Log.warning(f"Could not claim a message: {exc}", error=type(exc).__name__)
            return None
