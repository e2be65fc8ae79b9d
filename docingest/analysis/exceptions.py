class AnalysisError(Exception):
    """Base exception for all document-analysis errors."""


class SubmissionError(AnalysisError):
    """Raised when the analysis service does not accept a document for analysis."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisTransportError(AnalysisError):
    """Raised when the analysis service call fails due to network/infrastructure issues."""


class AnalysisResponseError(AnalysisError):
    """Raised when a poll response is not a usable JSON status document."""


class AnalysisFailedError(AnalysisError):
    """Raised when the analysis service reports the operation as failed."""


class AnalysisTimeoutError(AnalysisError):
    """Raised when polling exhausts its rounds without a terminal status."""


class AnalysisCancelledError(AnalysisError):
    """Raised when a wait or call is aborted by cancellation or deadline."""
