"""HTTP-backed sync layer wiring.

Builds the transport client, cache, executor and mutation coordinator
from settings and hands out queries bound to them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, MutableMapping

import httpx

from mockbank.application.cache import ResourceCache
from mockbank.application.commands import MutationCoordinator
from mockbank.application.queries import (
    AccountsQuery,
    QueryExecutor,
    RecentTransactionsQuery,
    TransactionsQuery,
)
from mockbank.infrastructure.api import BankingApi, MockBankApiClient
from mockbank.infrastructure.auth import InMemoryCredentialStore

if TYPE_CHECKING:
    from datetime import datetime

    from mockbank.application.ports import CredentialProvider
    from mockbank_config import Settings

logger = logging.getLogger(__name__)


class HttpSyncLayer:
    """Concrete ``SyncLayerFactory`` talking to the MockBank REST API."""

    def __init__(
        self,
        client: MockBankApiClient,
        credentials: CredentialProvider,
        cache: ResourceCache | None = None,
    ):
        self._client = client
        self._credentials = credentials
        self._cache = cache or ResourceCache()
        self._executor = QueryExecutor(self._cache)
        self._banking_api = BankingApi(client)
        self._mutations = MutationCoordinator(
            api=self._banking_api,
            cache=self._cache,
            executor=self._executor,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        credentials: CredentialProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> HttpSyncLayer:
        credentials = credentials or InMemoryCredentialStore(settings.access_token)
        client = MockBankApiClient(
            base_url=settings.mockbank_api_url,
            credentials=credentials,
            timeout=settings.mockbank_api_timeout,
            transport=transport,
        )
        cache = ResourceCache(clock=clock) if clock is not None else ResourceCache()
        return cls(client=client, credentials=credentials, cache=cache)

    @property
    def cache(self) -> ResourceCache:
        return self._cache

    @property
    def executor(self) -> QueryExecutor:
        return self._executor

    @property
    def banking_api(self) -> BankingApi:
        return self._banking_api

    @property
    def credentials(self) -> CredentialProvider:
        return self._credentials

    @property
    def mutations(self) -> MutationCoordinator:
        return self._mutations

    def accounts_query(self) -> AccountsQuery:
        return AccountsQuery.from_factory(self)

    def transactions_query(
        self,
        account_id: str | None,
        navigation_state: MutableMapping[str, str] | None = None,
    ) -> TransactionsQuery:
        return TransactionsQuery.from_factory(self, account_id, navigation_state)

    def recent_transactions_query(
        self,
        account_id: str | None = None,
    ) -> RecentTransactionsQuery:
        return RecentTransactionsQuery.from_factory(self, account_id)

    def login(self, access_token: str) -> None:
        self._credentials.login(access_token)

    def logout(self) -> None:
        """Forget the credential and everything cached or observed in the session.

        Open observers are closed; consumers observe again after the next
        login.
        """
        self._credentials.logout()
        self._cache.clear()
        self._executor.reset()
        logger.info("Logged out, cache cleared and observers closed")

    async def aclose(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> HttpSyncLayer:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
