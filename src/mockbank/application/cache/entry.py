"""Cache entry value objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from mockbank.application.cache.keys import ResourceKey
from mockbank.domain.shared.errors import DomainError


class CacheStatus(Enum):
    """Lifecycle of a cache entry."""

    IDLE = "idle"
    LOADING = "loading"
    FRESH = "fresh"
    STALE = "stale"
    ERRORED = "errored"


@dataclass(frozen=True)
class CacheEntry:
    """Snapshot of one cached resource.

    Entries are immutable; the cache swaps in a new snapshot on every
    transition. ``has_value`` tells an empty committed value (``[]``)
    apart from no value at all.
    """

    key: ResourceKey
    status: CacheStatus = CacheStatus.IDLE
    value: Any = None
    has_value: bool = False
    error: DomainError | None = None
    in_flight_request_id: str | None = None
    updated_at: datetime | None = None

    @property
    def is_fetching(self) -> bool:
        return self.in_flight_request_id is not None


@dataclass(frozen=True)
class FetchTicket:
    """Outcome of ``ResourceCache.begin_fetch``.

    When ``already_in_flight`` is set the caller must wait for the request
    identified by ``request_id`` instead of issuing its own.
    """

    key: ResourceKey
    request_id: str
    already_in_flight: bool
