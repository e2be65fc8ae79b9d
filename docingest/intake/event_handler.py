import json
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import unquote, urlparse

from docingest.intake.exceptions import InvalidEventError
from docingest.logging.logger import Log
from docingest.queue.base import BaseMessageQueue
from docingest.queue.models import DocumentMetadata, ProcessingMessage
from docingest.storage.base import BaseBlobStore
from docingest.validation.gate import FileTypeGate, file_extension


def blob_name_from_url(url: str, container: str) -> str:
    """Return the blob name that follows ``/{container}/`` in the URL path."""
    parts = PurePosixPath(unquote(urlparse(url).path)).parts
    try:
        index = parts.index(container)
    except ValueError:
        raise InvalidEventError(
            f"URL {url!r} does not point into container '{container}'"
        ) from None
    name_parts = parts[index + 1 :]
    if not name_parts:
        raise InvalidEventError(f"URL {url!r} has no blob name")
    return "/".join(name_parts)


def parse_event(event: str | bytes | dict[str, Any]) -> str:
    """Return ``data.url`` from a storage event envelope."""
    if isinstance(event, (str, bytes)):
        try:
            event = json.loads(event)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidEventError(f"Event is not valid JSON: {exc}") from exc
    if not isinstance(event, dict):
        raise InvalidEventError("Event must be a JSON object")

    data = event.get("data")
    if not isinstance(data, dict):
        raise InvalidEventError("Event has no 'data' object")
    url = data.get("url")
    if not isinstance(url, str) or not url.strip():
        raise InvalidEventError("Event data has no 'url'")
    return url.strip()


class EventIntakeHandler:
    """Turns a blob-created event into a pending processing message."""

    def __init__(
        self,
        blob_store: BaseBlobStore,
        queue: BaseMessageQueue,
        gate: FileTypeGate,
        container: str,
    ) -> None:
        self._blob_store = blob_store
        self._queue = queue
        self._gate = gate
        self._container = container

    def handle(self, event: str | bytes | dict[str, Any]) -> str | None:
        """Validate the referenced blob and enqueue it.

        Returns the queue message id, or None when the blob was rejected.

        Raises:
            InvalidEventError: if the envelope is malformed.
        """
        url = parse_event(event)
        name = blob_name_from_url(url, self._container)
        Log.info(f"Received event for blob {name}", url=url)

        descriptor = self._blob_store.describe(self._container, name)
        verdict = self._gate.validate(descriptor)
        if not verdict.accepted:
            Log.warning(
                f"Blob {name} rejected: {verdict.detail}",
                document=name,
                reason=verdict.reason.value if verdict.reason else "",
            )
            return None

        metadata = DocumentMetadata(
            file_name=name,
            file_type=file_extension(name),
            file_size=descriptor.size,
            upload_date=datetime.now(timezone.utc).isoformat(),
            blob_url=url,
            content_type=descriptor.content_type,
        )
        message_id = self._queue.send(ProcessingMessage(blob_url=url, metadata=metadata))
        Log.info(f"Blob {name} queued for processing", message_id=message_id)
        return message_id
