from dataclasses import dataclass


@dataclass(frozen=True)
class IndexRecord:
    """Normalized document representation pushed to the search index."""

    id: str
    file_name: str
    content: str
    metadata: str
    upload_date: int  # epoch millis

    def to_document(self) -> dict[str, object]:
        """Return the wire shape expected by the search index."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "content": self.content,
            "metadata": self.metadata,
            "uploadDate": self.upload_date,
        }
