"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class TranslationError(DomainError):
    """Translation could not be produced (provider failure)."""


class TranslationUnavailableError(TranslationError):
    """No provider credential is configured, so translation is not offered."""


class TranslationInputError(TranslationError, ValidationError):
    """Nothing to translate."""


class RateLimitExceededError(DomainError):
    """Caller exceeded its admission window."""

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__("Too many requests")
