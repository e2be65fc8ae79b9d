import time
import uuid
from collections.abc import Callable, Iterable

from docingest.indexing.models import IndexRecord

ID_STRATEGIES = ("filename", "uuid")


def serialize_metadata(metadata: Iterable[tuple[str, str]]) -> str:
    """Render metadata pairs as ``key: value`` lines."""
    return "\n".join(f"{key}: {value}" for key, value in metadata)


class IndexRecordBuilder:
    """Assembles extracted content into the search index record shape.

    Deterministic for identical inputs except ``upload_date``. With the
    ``filename`` id strategy the id is a name-based UUID of the source
    artifact name, so re-indexing a document replaces its earlier record;
    ``uuid`` gives every build a new id.
    """

    def __init__(
        self,
        id_strategy: str = "filename",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if id_strategy not in ID_STRATEGIES:
            raise ValueError(
                f"Unknown id strategy '{id_strategy}'. Choose from: {list(ID_STRATEGIES)}"
            )
        self._id_strategy = id_strategy
        self._clock = clock

    def build(
        self,
        filename: str,
        content: str,
        metadata: Iterable[tuple[str, str]],
        source_name: str | None = None,
    ) -> IndexRecord:
        """Assemble one record.

        *source_name* is the container-relative artifact name the record is
        keyed on; *filename* is only the display name and may be shared by
        several documents.
        """
        return IndexRecord(
            id=self._record_id(source_name or filename),
            file_name=filename,
            content=content,
            metadata=serialize_metadata(metadata),
            upload_date=int(self._clock() * 1000),
        )

    def _record_id(self, key: str) -> str:
        if self._id_strategy == "uuid":
            return str(uuid.uuid4())
        return str(uuid.uuid5(uuid.NAMESPACE_URL, key))
