from dataclasses import dataclass
from typing import Any

PENDING = "PENDING"


@dataclass(frozen=True)
class DocumentMetadata:
    """Stored artifact details carried with a processing request."""

    file_name: str
    file_type: str
    file_size: int
    upload_date: str  # ISO-8601
    blob_url: str
    content_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "fileType": self.file_type,
            "fileSize": self.file_size,
            "uploadDate": self.upload_date,
            "blobUrl": self.blob_url,
            "contentType": self.content_type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentMetadata":
        return cls(
            file_name=str(data["fileName"]),
            file_type=str(data.get("fileType", "")),
            file_size=int(data.get("fileSize", 0)),
            upload_date=str(data.get("uploadDate", "")),
            blob_url=str(data.get("blobUrl", "")),
            content_type=str(data.get("contentType", "")),
        )


@dataclass(frozen=True)
class ProcessingMessage:
    """Queue message asking the worker to run the pipeline for one artifact."""

    blob_url: str
    metadata: DocumentMetadata
    processing_status: str = PENDING

    def to_dict(self) -> dict[str, Any]:
        return {
            "blobUrl": self.blob_url,
            "metadata": self.metadata.to_dict(),
            "processingStatus": self.processing_status,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProcessingMessage":
        return cls(
            blob_url=str(data["blobUrl"]),
            metadata=DocumentMetadata.from_dict(data["metadata"]),
            processing_status=str(data.get("processingStatus", PENDING)),
        )


@dataclass(frozen=True)
class QueueMessage:
    """A claimed message together with its delivery bookkeeping."""

    id: str
    body: ProcessingMessage
    attempts: int = 0
