"""Base exception classes for the adjudication domain layer."""


class AdjudicationError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    Every subclass carries a distinct human-readable message so the
    transport layer can surface it without translation.

    Subclasses are recoverable at the caller boundary; none of them is
    fatal to the process.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
        self.message = message
