class IntakeError(Exception):
    """Base exception for event intake errors."""


class InvalidEventError(IntakeError):
    """Raised when an incoming event envelope cannot be understood."""
