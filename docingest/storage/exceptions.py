class StorageError(Exception):
    """Base exception for all blob storage errors."""


class BlobNotFoundError(StorageError):
    """Raised when a blob does not exist in its container."""
