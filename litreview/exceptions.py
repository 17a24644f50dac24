"""Custom exceptions for litreview."""


class LitReviewError(Exception):
    """Base exception for all litreview errors."""

    pass


class ConfigurationError(LitReviewError):
    """Raised when configuration is invalid or missing."""

    pass


class StorageError(LitReviewError):
    """Raised when the preference store cannot be written."""

    pass


class ValidationError(LitReviewError):
    """Raised when a review value does not fit its field definition."""

    def __init__(self, message: str, field_id: str = ""):
        super().__init__(message)
        self.field_id = field_id


class ItemSourceError(LitReviewError):
    """Raised when the bibliographic library cannot be loaded."""

    pass


class ExportError(LitReviewError):
    """Raised when a CSV or JSON export fails."""

    pass
