"""Application ports."""

from mockbank.application.ports.credentials import CredentialProvider
from mockbank.application.ports.transport import (
    ApiResponse,
    TransportError,
    TransportPort,
)

__all__ = [
    "ApiResponse",
    "CredentialProvider",
    "TransportError",
    "TransportPort",
]
