from docingest.config.settings import Settings
from docingest.storage.base import BaseBlobStore
from docingest.storage.local_blob_store import LocalBlobStore


class BlobStoreFactory:
    """Creates the blob store adapter rooted at the configured location."""

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        return LocalBlobStore(storage_root=settings.storage_root)
