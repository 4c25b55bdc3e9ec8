class InvariantViolation(Exception):
    """Raised when persisted content would break a domain rule."""


class ContentValidationError(ValueError):
    """
    Raised for malformed requests: unknown section, bad item shape,
    unknown content type. Carries per-field details for the API response.
    """

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class SectionNotFound(LookupError):
    """A configured section key has no provisioned row."""
