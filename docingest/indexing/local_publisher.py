import json

from docingest.indexing.exceptions import IndexPublishError
from docingest.indexing.models import IndexRecord
from docingest.indexing.publisher_base import BaseIndexPublisher
from docingest.logging.logger import Log
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError


class LocalIndexPublisher(BaseIndexPublisher):
    """Writes each record as JSON into a blob container. For local development."""

    def __init__(self, blob_store: BaseBlobStore, container: str = "indexed") -> None:
        self._blob_store = blob_store
        self._container = container

    def publish(self, record: IndexRecord) -> None:
        data = json.dumps(record.to_document(), ensure_ascii=False).encode("utf-8")
        try:
            url = self._blob_store.write(self._container, f"{record.id}.json", data)
        except StorageError as exc:
            raise IndexPublishError(f"Cannot store record {record.id}: {exc}") from exc
        Log.info(f"Indexed record {record.id} locally", document=record.file_name, url=url)
