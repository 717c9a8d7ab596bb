"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Messages are user-facing: the session writes them verbatim to its error slot.
"""


class NotekeeperError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    """Raised when a draft fails local validation before reaching the store."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class StoreError(NotekeeperError):
    """Raised when a Notes Store call fails (non-2xx response or transport failure)."""

    def __init__(self, message: str = "Something went wrong.", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message, code="STORE_REQUEST_FAILED")


class ConfigurationError(NotekeeperError):
    """Raised when configuration cannot be loaded or is invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")
