from abc import ABC, abstractmethod

from docingest.queue.models import ProcessingMessage, QueueMessage


class BaseMessageQueue(ABC):
    """Contract for processing queue adapters."""

    @abstractmethod
    def send(self, message: ProcessingMessage) -> str:
        """Enqueue a message and return its id."""

    @abstractmethod
    def receive(self) -> QueueMessage | None:
        """Claim the oldest pending message, or return None if there is none.

        A claimed message is invisible to other consumers until it is
        completed or released.
        """

    @abstractmethod
    def complete(self, message: QueueMessage) -> None:
        """Remove a claimed message for good."""

    @abstractmethod
    def release(self, message: QueueMessage) -> None:
        """Return a claimed message to the queue with its attempt count incremented."""
