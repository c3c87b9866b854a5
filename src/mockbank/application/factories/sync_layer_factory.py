"""Sync layer factory protocol for the application layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from mockbank.application.cache import ResourceCache
    from mockbank.application.ports import CredentialProvider
    from mockbank.application.queries import QueryExecutor
    from mockbank.infrastructure.api import BankingApi


class SyncLayerFactory(Protocol):
    """Protocol for the shared collaborators of queries and commands."""

    @property
    def cache(self) -> ResourceCache:
        """Get the process-wide resource cache."""
        ...

    @property
    def executor(self) -> QueryExecutor:
        """Get the query executor bound to the cache."""
        ...

    @property
    def banking_api(self) -> BankingApi:
        """Get the typed MockBank API."""
        ...

    @property
    def credentials(self) -> CredentialProvider:
        """Get the bearer credential holder."""
        ...
