class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class StepPreconditionError(ProcessorError):
    """Raised when a pipeline step runs before the data it needs was produced."""
