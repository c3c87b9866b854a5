"""Shared domain components.

This module exports the error taxonomy and time helpers used across
the data layer.
"""

from mockbank.domain.shared.errors import (
    DomainError,
    ErrorKind,
    HttpError,
    NetworkError,
    ValidationError,
)
from mockbank.domain.shared.time import utc_now

__all__ = [
    # Error kinds
    "ErrorKind",
    # Error variants
    "DomainError",
    "HttpError",
    "NetworkError",
    "ValidationError",
    # Utilities
    "utc_now",
]
