class ExtractionError(Exception):
    """Raised when an analysis payload cannot be decoded at all."""
