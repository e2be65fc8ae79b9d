class IndexingError(Exception):
    """Base exception for index record publishing."""


class IndexPublishError(IndexingError):
    """Raised when the search index does not accept a record."""
