"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Delivery failures are deliberately absent: the delivery client reports
them as a boolean and never raises.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ConflictError(ApplicationError):
    """Raised when there is a state conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="RES_CONFLICT")


class FeatureDisabledError(ApplicationError):
    """Raised when a page is switched off in features.yaml."""

    def __init__(self, message: str = "Feature disabled") -> None:
        super().__init__(message, code="RES_FEATURE_DISABLED")
