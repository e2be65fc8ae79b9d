from abc import ABC, abstractmethod

from docingest.indexing.models import IndexRecord


class BaseIndexPublisher(ABC):
    """Contract for all search index publishing adapters."""

    @abstractmethod
    def publish(self, record: IndexRecord) -> None:
        """Upload one record to the search index.

        Raises:
            IndexPublishError: if the index does not accept the record.
        """

    def close(self) -> None:
        """Release held connections. No-op by default."""
