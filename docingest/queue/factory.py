from docingest.config.settings import Settings
from docingest.queue.base import BaseMessageQueue
from docingest.queue.local_queue import LocalMessageQueue


class MessageQueueFactory:
    """Creates the processing queue adapter."""

    @classmethod
    def create(cls, settings: Settings) -> BaseMessageQueue:
        return LocalMessageQueue(settings.queue_root, settings.processing_queue_name)
