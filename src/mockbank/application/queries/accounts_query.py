"""Accounts query - the account collection behind every dashboard view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from mockbank_contracts import Account

from mockbank.application.cache.keys import ResourceKey, accounts_key
from mockbank.application.queries.state import QueryState, build_state

if TYPE_CHECKING:
    from mockbank.application.factories import SyncLayerFactory
    from mockbank.application.queries.executor import QueryExecutor, QueryObserver
    from mockbank.infrastructure.api import BankingApi


def find_account(accounts: Iterable[Account] | None, account_id: str) -> Account | None:
    """Pick one account from the collection (there is no single-account GET)."""
    for account in accounts or ():
        if account.id == account_id:
            return account
    return None


def total_balance(accounts: Iterable[Account] | None) -> int:
    """Sum of server-reported balances, in minor units."""
    return sum(account.balance for account in accounts or ())


class AccountsQuery:
    """Query for the current user's accounts."""

    def __init__(self, executor: QueryExecutor, api: BankingApi):
        self._executor = executor
        self._api = api

    @classmethod
    def from_factory(cls, factory: SyncLayerFactory) -> AccountsQuery:
        return cls(executor=factory.executor, api=factory.banking_api)

    @property
    def key(self) -> ResourceKey:
        return accounts_key()

    def observe(self, enabled: bool = True) -> QueryObserver:
        return self._executor.observe(self.key, self._api.list_accounts, enabled=enabled)

    async def execute(self) -> QueryState:
        entry = await self._executor.fetch(self.key, self._api.list_accounts)
        return build_state(entry)

    async def find(self, account_id: str) -> Account | None:
        state = await self.execute()
        return find_account(state.data, account_id)
