from abc import ABC, abstractmethod

from docingest.validation.models import DocumentDescriptor


class BaseBlobStore(ABC):
    """Contract for all blob storage adapters."""

    @abstractmethod
    def describe(self, container: str, name: str) -> DocumentDescriptor:
        """Return name, content type, size and existence of a blob.

        A missing blob is reported with ``exists=False``, not an exception.
        """

    @abstractmethod
    def read(self, container: str, name: str) -> bytes:
        """Read blob bytes.

        Raises:
            BlobNotFoundError: if the blob does not exist.
            StorageError: on any other storage failure.
        """

    @abstractmethod
    def write(
        self,
        container: str,
        name: str,
        data: bytes,
    ) -> str:
        """Create or replace a blob and return its URL.

        Raises:
            StorageError: if the blob cannot be written.
        """

    @abstractmethod
    def url_for(self, container: str, name: str) -> str:
        """Return the URL identifying a blob."""
