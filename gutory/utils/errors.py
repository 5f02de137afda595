"""
Gutory Errors
Custom exception classes
"""

from typing import Any, Dict, Optional


class GutoryException(Exception):
    """Base exception for Gutory"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(GutoryException):
    """Validation error (400)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(GutoryException):
    """Authentication error (401)"""

    def __init__(
        self, message: str = "Not signed in.", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, status_code=401, details=details)


class NotFoundError(GutoryException):
    """Resource not found error (404)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=404, details=details)


class PreconditionError(GutoryException):
    """Operation cannot proceed with the given state (422)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=422, details=details)


class InsufficientDataError(PreconditionError):
    """Too few logged days for the requested operation"""

    def __init__(self, required: int, actual: int, message: Optional[str] = None):
        self.required = required
        self.actual = actual
        super().__init__(
            message
            or f"Log at least {required} days in the selected range before generating a report.",
            details={"required": required, "actual": actual},
        )


class ExternalServiceError(GutoryException):
    """External service error (502)"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=502, details=details)


class RecordStoreError(ExternalServiceError):
    """Remote daily log table call failed"""


class StorageError(GutoryException):
    """Local persistence read or write failed"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)
