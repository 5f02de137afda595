"""
Gutory Utilities
Configuration, logging, and error types shared across the package
"""

from .config import Settings, get_settings
from .errors import (
    AuthenticationError,
    ExternalServiceError,
    GutoryException,
    InsufficientDataError,
    NotFoundError,
    PreconditionError,
    RecordStoreError,
    StorageError,
    ValidationError,
)
from .logger import get_logger

__all__ = [
    # Config
    "get_settings",
    "Settings",
    # Logging
    "get_logger",
    # Errors
    "GutoryException",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "PreconditionError",
    "InsufficientDataError",
    "ExternalServiceError",
    "RecordStoreError",
    "StorageError",
]
