"""Transport port for the application layer.

Abstracts the HTTP round trip so the cache, queries and mutations never
see an HTTP library type. Failures are values, not exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from mockbank.domain.shared.errors import DomainError


@dataclass(frozen=True)
class ApiResponse:
    """Successful (2xx) response with its decoded JSON body."""

    status_code: int
    body: Any = None


@dataclass(frozen=True)
class TransportError:
    """Failed round trip.

    ``status_code`` is ``None`` when no response reached the client.
    """

    status_code: int | None = None
    message: str | list[str] | None = None

    @property
    def is_network_failure(self) -> bool:
        return self.status_code is None

    def to_domain_error(self) -> DomainError:
        return DomainError.from_status(self.status_code, self.message)


class TransportPort(ABC):
    """Issues requests against the fixed MockBank API base URL."""

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> ApiResponse | TransportError:
        """Perform one request; never raises for transport failures."""
