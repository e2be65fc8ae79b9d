import mimetypes
import os
import tempfile
from pathlib import Path, PurePosixPath

from docingest.storage.base import BaseBlobStore
from docingest.storage.exceptions import BlobNotFoundError, StorageError
from docingest.validation.gate import SUPPORTED_FILE_TYPES, file_extension
from docingest.validation.models import DocumentDescriptor


def blob_file_path(storage_root: Path, container: str, name: str) -> Path:
    """Build path to a blob file: {storage_root}/{container}/{name}"""
    relative = PurePosixPath(name)
    if relative.is_absolute() or ".." in relative.parts or not relative.parts:
        raise StorageError(f"Invalid blob name: {name!r}")
    if not container or "/" in container or container in (".", ".."):
        raise StorageError(f"Invalid container name: {container!r}")
    return storage_root / container / Path(*relative.parts)


def guess_content_type(name: str) -> str:
    known = SUPPORTED_FILE_TYPES.get(file_extension(name))
    if known is not None:
        return known
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


class LocalBlobStore(BaseBlobStore):
    """Stores blobs as files, one directory per container."""

    DEFAULT_ROOT = Path("/app/storage")

    def __init__(self, storage_root: Path | None = None) -> None:
        self._root = storage_root if storage_root is not None else self.DEFAULT_ROOT

    def describe(self, container: str, name: str) -> DocumentDescriptor:
        path = blob_file_path(self._root, container, name)
        try:
            size = path.stat().st_size if path.is_file() else None
        except OSError as exc:
            raise StorageError(f"Cannot stat blob {container}/{name}: {exc}") from exc
        return DocumentDescriptor(
            name=name,
            content_type=guess_content_type(name),
            size=size or 0,
            exists=size is not None,
        )

    def read(self, container: str, name: str) -> bytes:
        path = blob_file_path(self._root, container, name)
        if not path.is_file():
            raise BlobNotFoundError(f"Blob not found: {container}/{name}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Cannot read blob {container}/{name}: {exc}") from exc

    def write(self, container: str, name: str, data: bytes) -> str:
        path = blob_file_path(self._root, container, name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-")
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StorageError(f"Cannot write blob {container}/{name}: {exc}") from exc
        return self.url_for(container, name)

    def url_for(self, container: str, name: str) -> str:
        return blob_file_path(self._root, container, name).absolute().as_uri()
