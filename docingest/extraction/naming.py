from pathlib import PurePosixPath

PROCESSING_SUFFIX = ".json"


def document_base_name(artifact_name: str) -> str:
    """Recover the original document name without its extension.

    Drops any directory part and a trailing processing suffix, then one
    extension: ``report.pdf`` and ``processed/report.pdf.json`` both give
    ``report``.
    """
    name = PurePosixPath(artifact_name).name
    if name.lower().endswith(PROCESSING_SUFFIX) and len(name) > len(PROCESSING_SUFFIX):
        name = name[: -len(PROCESSING_SUFFIX)]
    stem = PurePosixPath(name).stem
    return stem or name


def processed_artifact_name(document_name: str) -> str:
    """Name under which a document's analysis result is persisted."""
    return f"{document_name}{PROCESSING_SUFFIX}"


def source_artifact_name(artifact_name: str) -> str:
    """Container-relative name of the uploaded document an artifact stems from.

    Only the processing suffix is removed; directories and the extension
    stay, so ``2024/report.pdf`` and ``2024/report.pdf.json`` map to the same
    name while ``report.pdf`` and ``report.docx`` do not.
    """
    if artifact_name.lower().endswith(PROCESSING_SUFFIX) and len(
        PurePosixPath(artifact_name).name
    ) > len(PROCESSING_SUFFIX):
        return artifact_name[: -len(PROCESSING_SUFFIX)]
    return artifact_name
