import threading
import time

from docingest.analysis.exceptions import AnalysisCancelledError


class CancellationToken:
    """Cancellable timed waits bounded by an optional overall deadline.

    ``cancel()`` may be called from any thread; a blocked ``wait()`` wakes up
    immediately and raises AnalysisCancelledError.
    """

    def __init__(self, timeout_seconds: float | None = None) -> None:
        self._event = threading.Event()
        self._deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    def cancel(self) -> None:
        self._event.set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.expired

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelledError("Operation cancelled")
        if self.expired:
            raise AnalysisCancelledError("Deadline exceeded")

    def wait(self, seconds: float) -> None:
        """Block for *seconds* unless cancelled or the deadline passes first."""
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is not None and remaining <= seconds:
            self._event.wait(remaining)
            self.raise_if_cancelled()
            raise AnalysisCancelledError("Deadline exceeded")
        self._event.wait(seconds)
        self.raise_if_cancelled()

    def clip(self, timeout_seconds: float) -> float:
        """Clip a per-call timeout to the time left before the deadline."""
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is None:
            return timeout_seconds
        return min(timeout_seconds, remaining)
