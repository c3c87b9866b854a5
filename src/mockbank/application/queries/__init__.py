"""Queries: cache-backed reads of server collections."""

from mockbank.application.queries.accounts_query import (
    AccountsQuery,
    find_account,
    total_balance,
)
from mockbank.application.queries.executor import FetchFn, QueryExecutor, QueryObserver
from mockbank.application.queries.state import (
    QueryState,
    QueryStatus,
    build_state,
    derive_status,
    needs_fetch,
)
from mockbank.application.queries.transactions_query import (
    RECENT_TRANSACTIONS_LIMIT,
    RecentTransactionsQuery,
    TransactionsQuery,
)

__all__ = [
    # Execution
    "FetchFn",
    "QueryExecutor",
    "QueryObserver",
    # State
    "QueryState",
    "QueryStatus",
    "build_state",
    "derive_status",
    "needs_fetch",
    # Accounts
    "AccountsQuery",
    "find_account",
    "total_balance",
    # Transactions
    "RECENT_TRANSACTIONS_LIMIT",
    "RecentTransactionsQuery",
    "TransactionsQuery",
]
