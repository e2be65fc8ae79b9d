from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExtractedContent:
    """Plain text of a document plus its ordered metadata pairs."""

    text: str
    metadata: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def filename(self) -> str:
        return dict(self.metadata).get("filename", "")
