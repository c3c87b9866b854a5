"""In-memory resource cache with in-flight request tracking.

The cache is the only shared mutable state of the data layer. It runs on a
single event loop, so every method here executes without interleaving and
needs no lock. Ordering between overlapping fetches of one key is kept by
the in-flight marker: only the request that started last may commit.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

from mockbank.application.cache.entry import CacheEntry, CacheStatus, FetchTicket
from mockbank.application.cache.keys import KeyPredicate, ResourceKey
from mockbank.domain.shared.errors import DomainError
from mockbank.domain.shared.time import utc_now

logger = logging.getLogger(__name__)

CacheListener = Callable[[ResourceKey], None]


def _new_request_id() -> str:
    return uuid4().hex


class ResourceCache:
    """Process-lifetime store of ``CacheEntry`` snapshots keyed by resource.

    Parameters
    ----------
    clock
        Source of commit timestamps
    id_source
        Mints request identities for the in-flight marker
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_source: Callable[[], str] = _new_request_id,
    ):
        self._clock = clock
        self._id_source = id_source
        self._entries: dict[ResourceKey, CacheEntry] = {}
        self._listeners: list[CacheListener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[ResourceKey]:
        return list(self._entries)

    def get(self, key: ResourceKey) -> CacheEntry | None:
        return self._entries.get(key)

    def get_or_create(self, key: ResourceKey) -> CacheEntry:
        entry = self._entries.get(key)
        if entry is None:
            entry = CacheEntry(key=key)
            self._entries[key] = entry
        return entry

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def begin_fetch(self, key: ResourceKey) -> FetchTicket:
        entry = self.get_or_create(key)
        if entry.status is CacheStatus.LOADING and entry.in_flight_request_id:
            return FetchTicket(key, entry.in_flight_request_id, already_in_flight=True)

        request_id = self._id_source()
        self._commit(
            replace(
                entry,
                status=CacheStatus.LOADING,
                in_flight_request_id=request_id,
            )
        )
        return FetchTicket(key, request_id, already_in_flight=False)

    def resolve(self, key: ResourceKey, request_id: str, value: Any) -> bool:
        """Commit a successful fetch. Returns False if the request was superseded."""
        entry = self._current(key, request_id)
        if entry is None:
            return False
        self._commit(
            replace(
                entry,
                status=CacheStatus.FRESH,
                value=value,
                has_value=True,
                error=None,
                in_flight_request_id=None,
                updated_at=self._clock(),
            )
        )
        return True

    def fail(self, key: ResourceKey, request_id: str, error: DomainError) -> bool:
        """Commit a failed fetch, keeping the last known value."""
        entry = self._current(key, request_id)
        if entry is None:
            return False
        self._commit(
            replace(
                entry,
                status=CacheStatus.ERRORED,
                error=error,
                in_flight_request_id=None,
                updated_at=self._clock(),
            )
        )
        return True

    def abandon(self, key: ResourceKey, request_id: str) -> bool:
        """Release the in-flight marker of a fetch that ended without a result."""
        entry = self._current(key, request_id)
        if entry is None:
            return False
        if entry.error is not None and entry.status is CacheStatus.LOADING:
            status = CacheStatus.ERRORED
        elif entry.has_value:
            status = CacheStatus.STALE
        else:
            status = CacheStatus.IDLE
        self._commit(replace(entry, status=status, in_flight_request_id=None))
        return True

    def invalidate(self, predicate: KeyPredicate) -> list[ResourceKey]:
        """Mark matching entries stale, keeping their values for display.

        A request still in flight for a matching key may have read data from
        before the change, so its marker is dropped and its result discarded.
        A previous error is dropped too; a fetch abandoned afterwards falls
        back to stale (or idle), never to the outdated error.
        """
        invalidated = []
        for key, entry in list(self._entries.items()):
            if not predicate(key):
                continue
            invalidated.append(key)
            if entry.status is CacheStatus.STALE and not entry.is_fetching:
                continue
            self._commit(
                replace(
                    entry,
                    status=CacheStatus.STALE,
                    error=None,
                    in_flight_request_id=None,
                )
            )
        if invalidated:
            logger.debug(
                "Invalidated %d entries: %s",
                len(invalidated),
                ", ".join(str(k) for k in invalidated),
            )
        return invalidated

    def clear(self) -> None:
        """Drop every entry (used on logout)."""
        keys = list(self._entries)
        self._entries.clear()
        for key in keys:
            self._notify(key)

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: CacheListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _current(self, key: ResourceKey, request_id: str) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.in_flight_request_id != request_id:
            logger.debug(
                "Suppressed stale commit of request %s for %s",
                request_id,
                key,
            )
            return None
        return entry

    def _commit(self, entry: CacheEntry) -> None:
        self._entries[entry.key] = entry
        self._notify(entry.key)

    def _notify(self, key: ResourceKey) -> None:
        for listener in list(self._listeners):
            listener(key)
