"""Pure derivation of observable query state from cache entries.

Nothing here touches the cache or the event loop, so the state machine
can be tested on hand-built ``CacheEntry`` snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from mockbank.application.cache.entry import CacheEntry, CacheStatus
from mockbank.domain.shared.errors import DomainError


class QueryStatus(str, Enum):
    """What a consumer of a query should render."""

    IDLE = "idle"  # query disabled
    LOADING = "loading"  # no usable data yet
    SUCCESS = "success"  # fresh data present
    ERROR = "error"  # last fetch failed, last known data may be present
    REFRESHING = "refreshing"  # data present, newer data on its way


@dataclass(frozen=True)
class QueryState:
    """Snapshot handed to consumers of a query."""

    status: QueryStatus
    data: Any = None
    error: DomainError | None = None
    is_placeholder: bool = False
    updated_at: datetime | None = None

    @property
    def has_data(self) -> bool:
        return self.data is not None

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.LOADING

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def is_refreshing(self) -> bool:
        return self.status is QueryStatus.REFRESHING

    @property
    def needs_retry_affordance(self) -> bool:
        """An error with nothing to show must offer a retry."""
        return self.is_error and not self.has_data


def needs_fetch(entry: CacheEntry | None) -> bool:
    """True when observing the entry should start a fetch."""
    if entry is None:
        return True
    return entry.status in (CacheStatus.IDLE, CacheStatus.STALE)


def derive_status(entry: CacheEntry | None, enabled: bool = True) -> QueryStatus:
    if not enabled:
        return QueryStatus.IDLE
    if entry is None:
        return QueryStatus.LOADING
    if entry.status is CacheStatus.FRESH:
        return QueryStatus.SUCCESS
    if entry.status is CacheStatus.ERRORED:
        return QueryStatus.ERROR
    # idle, loading or stale
    if not entry.has_value:
        return QueryStatus.LOADING
    return QueryStatus.REFRESHING


def build_state(
    entry: CacheEntry | None,
    enabled: bool = True,
    placeholder: Any = None,
) -> QueryState:
    """Combine an entry, the enabled flag and an optional placeholder.

    The placeholder (usually the previous page) is shown only while the key
    has nothing of its own and is still loading; it is never combined with
    an error.
    """
    status = derive_status(entry, enabled)
    if status is QueryStatus.IDLE:
        return QueryState(status=status)

    if entry is None or not entry.has_value:
        if status is QueryStatus.LOADING and placeholder is not None:
            return QueryState(
                status=QueryStatus.REFRESHING,
                data=placeholder,
                is_placeholder=True,
            )
        return QueryState(
            status=status,
            error=entry.error if status is QueryStatus.ERROR and entry else None,
            updated_at=entry.updated_at if entry else None,
        )

    return QueryState(
        status=status,
        data=entry.value,
        error=entry.error if status is QueryStatus.ERROR else None,
        updated_at=entry.updated_at,
    )
