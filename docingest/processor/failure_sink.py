from pathlib import PurePosixPath

from docingest.logging.logger import Log
from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import StorageError

DIVERT = "divert"
LOG_ONLY = "log"


def failure_key(document_name: str, run_id: str) -> str:
    """Build failure sink key: {document_name}_{run_id}"""
    return f"{PurePosixPath(document_name).name}_{run_id}"


class FailureSink:
    """Durable location for payloads that could not be processed."""

    def __init__(self, blob_store: BaseBlobStore, container: str = "failed") -> None:
        self._blob_store = blob_store
        self._container = container

    def divert(self, document_name: str, run_id: str, data: bytes) -> str | None:
        """Store *data* for manual inspection and return its key.

        A failing write is logged and reported as None; diverting must not
        raise on top of the failure being diverted.
        """
        key = failure_key(document_name, run_id)
        try:
            self._blob_store.write(self._container, key, data)
        except StorageError as exc:
            Log.error(
                f"Could not divert {document_name} to failure sink: {exc}",
                document=document_name,
                run_id=run_id,
            )
            return None
        Log.warning(
            f"Diverted {document_name} to {self._container}/{key}",
            document=document_name,
            run_id=run_id,
        )
        return f"{self._container}/{key}"
