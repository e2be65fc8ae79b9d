import json
import os
import time
import uuid
from pathlib import Path
from typing import Any

from docingest.logging.logger import Log
from docingest.queue.base import BaseMessageQueue
from docingest.queue.models import ProcessingMessage, QueueMessage

_PENDING_SUFFIX = ".json"
_LEASE_SUFFIX = ".lease"


class LocalMessageQueue(BaseMessageQueue):
    """Directory-backed queue: one JSON file per message.

    Claiming renames ``{id}.json`` to ``{id}.lease``; the rename is atomic, so
    concurrent workers sharing the directory never claim the same message.
    Ids start with a nanosecond timestamp, so name order is arrival order.
    """

    def __init__(self, queue_root: Path, queue_name: str) -> None:
        self._dir = queue_root / queue_name
        self._dir.mkdir(parents=True, exist_ok=True)

    def send(self, message: ProcessingMessage) -> str:
        message_id = f"{time.time_ns():020d}-{uuid.uuid4().hex}"
        self._write_pending(message_id, message, attempts=0)
        Log.debug(f"Enqueued message {message_id}", queue=self._dir.name)
        return message_id

    def receive(self) -> QueueMessage | None:
        for path in sorted(self._dir.glob(f"*{_PENDING_SUFFIX}")):
            lease = path.with_suffix(_LEASE_SUFFIX)
            try:
                os.rename(path, lease)
            except FileNotFoundError:
                continue  # claimed by another worker
            try:
                return self._load(lease)
            except (ValueError, KeyError, TypeError) as exc:
                Log.error(f"Dropping malformed queue message {lease.name}: {exc}")
                lease.unlink(missing_ok=True)
        return None

    def complete(self, message: QueueMessage) -> None:
        self._lease_path(message.id).unlink(missing_ok=True)

    def release(self, message: QueueMessage) -> None:
        self._write_pending(message.id, message.body, attempts=message.attempts + 1)
        self._lease_path(message.id).unlink(missing_ok=True)

    def _write_pending(self, message_id: str, body: ProcessingMessage, attempts: int) -> None:
        envelope: dict[str, Any] = {
            "id": message_id,
            "attempts": attempts,
            "body": body.to_dict(),
        }
        tmp = self._dir / f".{message_id}.tmp"
        tmp.write_text(json.dumps(envelope), encoding="utf-8")
        os.replace(tmp, self._dir / f"{message_id}{_PENDING_SUFFIX}")

    def _lease_path(self, message_id: str) -> Path:
        return self._dir / f"{message_id}{_LEASE_SUFFIX}"

    @staticmethod
    def _load(path: Path) -> QueueMessage:
        envelope = json.loads(path.read_text(encoding="utf-8"))
        return QueueMessage(
            id=str(envelope["id"]),
            body=ProcessingMessage.from_dict(envelope["body"]),
            attempts=int(envelope.get("attempts", 0)),
        )
