class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NarrativeServiceError(DomainError):
    """Raised by the generative-AI client when a call fails or returns garbage."""
