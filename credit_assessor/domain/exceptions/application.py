"""Credit application domain exceptions."""

from .base import DomainException


class MissingApplicationDataException(DomainException):
    """Raised when a required input section is absent."""

    def __init__(self, section: str, message: str | None = None):
        super().__init__(
            message=message or f"Please provide {section} to continue.",
            code="MISSING_INPUT",
        )
        self.section = section


class InvalidApplicationException(DomainException):
    """Raised when an application cannot be converted or evaluated as given."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_APPLICATION",
        )


class ScoringException(DomainException):
    """Raised when an unexpected error occurs while scoring or deciding."""

    def __init__(self, operation: str):
        super().__init__(
            message=f"Unable to complete {operation}. Please try again.",
            code="SCORING_ERROR",
        )
        self.operation = operation
