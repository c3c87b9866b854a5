"""Transaction queries - paginated history and the recent activity widget."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, MutableMapping

from mockbank_contracts import Transaction, TransactionPage

from mockbank.application.cache.keys import ResourceKey, transactions_key
from mockbank.application.pagination import PageParams, PaginationController
from mockbank.application.queries.state import QueryState, build_state

if TYPE_CHECKING:
    from mockbank.application.factories import SyncLayerFactory
    from mockbank.application.queries.executor import QueryExecutor, QueryObserver
    from mockbank.infrastructure.api import BankingApi

RECENT_TRANSACTIONS_LIMIT = 5


class TransactionsQuery:
    """Paginated transactions of one account.

    Page and page-size changes open a new observer for the new key and hand
    it the previous page as placeholder, so consumers see ``refreshing``
    with the old rows instead of an empty ``loading`` state.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        api: BankingApi,
        account_id: str | None,
        pagination: PaginationController | None = None,
    ):
        self._executor = executor
        self._api = api
        self._account_id = account_id or None
        self._pagination = pagination or PaginationController()
        self._observer: QueryObserver | None = None

    @classmethod
    def from_factory(
        cls,
        factory: SyncLayerFactory,
        account_id: str | None,
        navigation_state: MutableMapping[str, str] | None = None,
    ) -> TransactionsQuery:
        return cls(
            executor=factory.executor,
            api=factory.banking_api,
            account_id=account_id,
            pagination=PaginationController(navigation_state),
        )

    @property
    def account_id(self) -> str | None:
        return self._account_id

    @property
    def enabled(self) -> bool:
        return self._account_id is not None

    @property
    def pagination(self) -> PaginationController:
        return self._pagination

    @property
    def key(self) -> ResourceKey:
        return self._pagination.key(self._account_id)

    @property
    def state(self) -> QueryState:
        return self.observe().state

    def observe(self) -> QueryObserver:
        """Observer for the page currently selected in the navigation state."""
        key = self.key
        current = self._observer
        if current is not None and not current.closed and current.key == key:
            return current

        placeholder = None
        if current is not None:
            placeholder = current.state.data
            current.close()

        self._observer = self._executor.observe(
            key,
            self._fetcher(self._pagination.params),
            enabled=self.enabled,
            placeholder=placeholder,
        )
        return self._observer

    def set_page(self, page: int) -> QueryObserver:
        self._pagination.set_page(page)
        return self.observe()

    def set_limit(self, limit: int) -> QueryObserver:
        self._pagination.set_limit(limit)
        return self.observe()

    def next_page(self) -> QueryObserver:
        self._pagination.next_page()
        return self.observe()

    def previous_page(self) -> QueryObserver:
        self._pagination.previous_page()
        return self.observe()

    def page_count(self) -> int:
        """Pages available according to the data on screen (at least one)."""
        data = self.observe().state.data
        if isinstance(data, TransactionPage):
            return data.display_page_count
        return 1

    def display_page(self) -> int:
        return self._pagination.display_page(self.page_count())

    def has_next(self) -> bool:
        return self._pagination.has_next(self.page_count())

    def has_previous(self) -> bool:
        return self._pagination.has_previous()

    async def execute(self) -> QueryState:
        if not self.enabled:
            return build_state(None, enabled=False)
        entry = await self._executor.fetch(
            self.key,
            self._fetcher(self._pagination.params),
        )
        return build_state(entry)

    def close(self) -> None:
        if self._observer is not None:
            self._observer.close()
            self._observer = None

    def _fetcher(self, params: PageParams):
        return partial(
            self._api.list_transactions,
            self._account_id,
            params.page,
            params.limit,
        )


class RecentTransactionsQuery:
    """First few transactions of the account selected on the dashboard.

    Shares the ``transactions`` key family, so mutations touching the
    account invalidate it together with the full history pages.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        api: BankingApi,
        account_id: str | None = None,
        limit: int = RECENT_TRANSACTIONS_LIMIT,
    ):
        self._executor = executor
        self._api = api
        self._account_id = account_id or None
        self._limit = limit
        self._observer: QueryObserver | None = None

    @classmethod
    def from_factory(
        cls,
        factory: SyncLayerFactory,
        account_id: str | None = None,
    ) -> RecentTransactionsQuery:
        return cls(
            executor=factory.executor,
            api=factory.banking_api,
            account_id=account_id,
        )

    @property
    def account_id(self) -> str | None:
        return self._account_id

    @property
    def key(self) -> ResourceKey:
        return transactions_key(self._account_id, page=1, limit=self._limit)

    def select(self, account_id: str | None) -> QueryObserver:
        """Switch the widget to another account."""
        if (account_id or None) != self._account_id:
            self._account_id = account_id or None
            if self._observer is not None:
                self._observer.close()
                self._observer = None
        return self.observe()

    def observe(self) -> QueryObserver:
        if self._observer is None or self._observer.closed:
            self._observer = self._executor.observe(
                self.key,
                partial(self._api.list_transactions, self._account_id, 1, self._limit),
                enabled=self._account_id is not None,
            )
        return self._observer

    def items(self) -> tuple[Transaction, ...]:
        data = self.observe().state.data
        if isinstance(data, TransactionPage):
            return data.items
        return ()
