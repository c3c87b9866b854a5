"""Write operations and the cache invalidation that follows them.

A failed mutation never touches the cache. A successful one marks every
dependent entry stale in a single pass and refetches the ones that are
on screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from mockbank_contracts import (
    CloseAccountRequest,
    CreateAccountRequest,
    SimulateTransactionRequest,
    TransferRequest,
)

from mockbank.application.cache.keys import (
    ACCOUNTS,
    TRANSACTIONS,
    KeyPredicate,
    ResourceKey,
)
from mockbank.domain.shared.errors import DomainError

if TYPE_CHECKING:
    from mockbank.application.cache.resource_cache import ResourceCache
    from mockbank.application.factories import SyncLayerFactory
    from mockbank.application.queries.executor import QueryExecutor
    from mockbank.infrastructure.api import BankingApi

logger = logging.getLogger(__name__)


class MutationKind(str, Enum):
    """Write operations offered by the dashboard."""

    CREATE_ACCOUNT = "create_account"
    CLOSE_ACCOUNT = "close_account"
    SIMULATE_TRANSACTION = "simulate_transaction"
    INTERNAL_TRANSFER = "internal_transfer"


@dataclass(frozen=True)
class CloseAccountPayload:
    """Account to close plus the confirmation the server checks."""

    account_id: str
    confirmation: CloseAccountRequest


@dataclass(frozen=True)
class SimulateTransactionPayload:
    """Transaction to book on one account."""

    account_id: str
    request: SimulateTransactionRequest


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a mutation.

    Exactly one of ``data`` (server response, ``None`` for 204 answers) and
    ``error`` is meaningful, depending on ``succeeded``.
    """

    operation: MutationKind
    data: Any = None
    error: DomainError | None = None
    invalidated: tuple[ResourceKey, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.error is None


_PAYLOAD_TYPES: dict[MutationKind, type] = {
    MutationKind.CREATE_ACCOUNT: CreateAccountRequest,
    MutationKind.CLOSE_ACCOUNT: CloseAccountPayload,
    MutationKind.SIMULATE_TRANSACTION: SimulateTransactionPayload,
    MutationKind.INTERNAL_TRANSFER: TransferRequest,
}


def affected_account_ids(operation: MutationKind, payload: Any) -> frozenset[str]:
    """Accounts whose transaction history changes with the mutation."""
    if operation is MutationKind.SIMULATE_TRANSACTION:
        return frozenset({payload.account_id})
    if operation is MutationKind.INTERNAL_TRANSFER:
        return frozenset(payload.account_ids)
    return frozenset()


def invalidation_predicate(operation: MutationKind, payload: Any) -> KeyPredicate:
    """Keys made stale by a successful mutation.

    Every mutation changes the account collection (membership or balances).
    Booking mutations also change the history of each affected account, on
    every cached page and page size since totals shift.
    """
    account_ids = affected_account_ids(operation, payload)

    def _predicate(key: ResourceKey) -> bool:
        if key.kind == ACCOUNTS:
            return True
        return key.kind == TRANSACTIONS and key.param("account_id") in account_ids

    return _predicate


class MutationCoordinator:
    """Execute a mutation and keep dependent queries consistent."""

    def __init__(
        self,
        api: BankingApi,
        cache: ResourceCache,
        executor: QueryExecutor,
    ):
        self._api = api
        self._cache = cache
        self._executor = executor

    @classmethod
    def from_factory(cls, factory: SyncLayerFactory) -> MutationCoordinator:
        return cls(
            api=factory.banking_api,
            cache=factory.cache,
            executor=factory.executor,
        )

    async def mutate(self, operation: MutationKind | str, payload: Any) -> MutationResult:
        operation = MutationKind(operation)
        expected = _PAYLOAD_TYPES[operation]
        if not isinstance(payload, expected):
            msg = (
                f"{operation.value} expects {expected.__name__}, "
                f"got {type(payload).__name__}"
            )
            raise TypeError(msg)

        result = await self._dispatch(operation, payload)
        if isinstance(result, DomainError):
            logger.info(
                "Mutation %s failed: %s (status=%s)",
                operation.value,
                result.kind.value,
                result.status_code,
            )
            return MutationResult(operation=operation, error=result)

        invalidated = self._cache.invalidate(invalidation_predicate(operation, payload))
        logger.info(
            "Mutation %s succeeded, %d cache entries invalidated",
            operation.value,
            len(invalidated),
        )
        await self._executor.refetch_matching(invalidated)
        return MutationResult(
            operation=operation,
            data=result,
            invalidated=tuple(invalidated),
        )

    async def _dispatch(self, operation: MutationKind, payload: Any) -> Any:
        if operation is MutationKind.CREATE_ACCOUNT:
            return await self._api.create_account(payload)
        if operation is MutationKind.CLOSE_ACCOUNT:
            return await self._api.close_account(
                payload.account_id,
                payload.confirmation,
            )
        if operation is MutationKind.SIMULATE_TRANSACTION:
            return await self._api.simulate_transaction(
                payload.account_id,
                payload.request,
            )
        return await self._api.transfer(payload)

    # -------------------------------------------------------------------------
    # Convenience wrappers
    # -------------------------------------------------------------------------

    async def create_account(self, name: str) -> MutationResult:
        return await self.mutate(
            MutationKind.CREATE_ACCOUNT,
            CreateAccountRequest(name=name),
        )

    async def close_account(
        self,
        account_id: str,
        password: str,
        confirm_name: str,
    ) -> MutationResult:
        return await self.mutate(
            MutationKind.CLOSE_ACCOUNT,
            CloseAccountPayload(
                account_id=account_id,
                confirmation=CloseAccountRequest(
                    password=password,
                    confirm_name=confirm_name,
                ),
            ),
        )

    async def simulate_transaction(
        self,
        account_id: str,
        request: SimulateTransactionRequest,
    ) -> MutationResult:
        return await self.mutate(
            MutationKind.SIMULATE_TRANSACTION,
            SimulateTransactionPayload(account_id=account_id, request=request),
        )

    async def internal_transfer(self, request: TransferRequest) -> MutationResult:
        return await self.mutate(MutationKind.INTERNAL_TRANSFER, request)
