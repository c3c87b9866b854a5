"""Get-or-fetch orchestration over the resource cache.

Observers of one key share a single fetch task. Waiting goes through
``asyncio.shield`` so a cancelled waiter never cancels the fetch that
other observers still depend on.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Iterable

from mockbank.application.cache.entry import CacheEntry, CacheStatus, FetchTicket
from mockbank.application.cache.keys import ResourceKey
from mockbank.application.cache.resource_cache import ResourceCache
from mockbank.application.queries.state import (
    QueryState,
    QueryStatus,
    build_state,
    needs_fetch,
)
from mockbank.domain.shared.errors import DomainError

logger = logging.getLogger(__name__)

# Returns the fetched value, or a DomainError describing the failure
FetchFn = Callable[[], Awaitable[Any]]


class QueryExecutor:
    """Runs fetches for resource keys and routes results into the cache."""

    def __init__(self, cache: ResourceCache):
        self._cache = cache
        self._fetchers: dict[ResourceKey, FetchFn] = {}
        self._tasks: dict[ResourceKey, tuple[str, asyncio.Task[None]]] = {}
        self._observers: defaultdict[ResourceKey, set[QueryObserver]] = defaultdict(set)

    @property
    def cache(self) -> ResourceCache:
        return self._cache

    def observe(
        self,
        key: ResourceKey,
        fetch_fn: FetchFn,
        enabled: bool = True,
        placeholder: Any = None,
    ) -> QueryObserver:
        """Start observing ``key``; fetches in the background if needed.

        Must be called from a running event loop when ``enabled``.
        """
        observer = QueryObserver(self, key, enabled=enabled, placeholder=placeholder)
        if not enabled:
            return observer

        self._fetchers[key] = fetch_fn
        self._observers[key].add(observer)
        if needs_fetch(self._cache.get(key)):
            self._start(key)
        return observer

    def observer_count(self, key: ResourceKey) -> int:
        return len(self._observers.get(key, ()))

    async def fetch(self, key: ResourceKey, fetch_fn: FetchFn | None = None) -> CacheEntry:
        """Return the cached entry, fetching first when it is idle or stale.

        Errored entries are returned as they are; retrying is up to the
        caller (``refetch``).
        """
        if fetch_fn is not None:
            self._fetchers[key] = fetch_fn
        return await self._settle(key, fetch_fn)

    async def refetch(self, key: ResourceKey) -> CacheEntry:
        """Force a fetch regardless of status, joining one already in flight."""
        fetch_fn = self._fetchers.get(key)
        await self._wait(self._start(key, fetch_fn))
        return await self._settle(key, fetch_fn)

    async def refetch_matching(self, keys: Iterable[ResourceKey]) -> list[ResourceKey]:
        """Refetch the given keys that currently have observers.

        Keys nobody observes stay stale and refetch on their next
        observation.
        """
        observed = [
            key for key in keys if self.observer_count(key) and key in self._fetchers
        ]
        if not observed:
            return []
        logger.debug(
            "Refetching %d observed keys: %s",
            len(observed),
            ", ".join(str(k) for k in observed),
        )
        # failures end up in the cache; the mutation itself already succeeded
        await asyncio.gather(
            *(self._wait(self._start(key)) for key in observed),
            return_exceptions=True,
        )
        return observed

    async def wait_for(self, key: ResourceKey) -> None:
        """Wait until no fetch is running for ``key``.

        Follows superseding requests, so it returns once the latest one is
        done.
        """
        while True:
            running = self._tasks.get(key)
            if running is None or running[1].done():
                return
            await self._wait(running[1])

    def reset(self) -> None:
        """Close every observer and forget the registered fetch functions.

        Called when the session ends, after the cache has been cleared.
        Requests still in flight find no entry to commit to.
        """
        for observers in list(self._observers.values()):
            for observer in list(observers):
                observer.close()
        self._observers.clear()
        self._fetchers.clear()
        logger.debug("Executor reset, observers closed")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _start(
        self,
        key: ResourceKey,
        fetch_fn: FetchFn | None = None,
    ) -> asyncio.Task[None]:
        fetch_fn = fetch_fn or self._fetchers.get(key)
        if fetch_fn is None:
            msg = f"No fetch function registered for {key}"
            raise LookupError(msg)

        ticket = self._cache.begin_fetch(key)
        if ticket.already_in_flight:
            running = self._tasks.get(key)
            if running is None or running[0] != ticket.request_id:
                msg = (
                    f"Request {ticket.request_id} for {key} "
                    "is not owned by this executor"
                )
                raise RuntimeError(msg)
            logger.debug("Joining in-flight request %s for %s", ticket.request_id, key)
            return running[1]

        logger.debug("Fetching %s (request %s)", key, ticket.request_id)
        task = asyncio.create_task(self._execute(ticket, fetch_fn))
        self._tasks[key] = (ticket.request_id, task)
        task.add_done_callback(lambda t: self._forget(ticket, t))
        return task

    async def _settle(
        self,
        key: ResourceKey,
        fetch_fn: FetchFn | None = None,
    ) -> CacheEntry:
        """Fetch until the entry holds a committed result.

        A fetch overtaken by an invalidation leaves the entry stale, and for
        a key nobody observes no one else would start the next request.
        """
        fetch_fn = fetch_fn or self._fetchers.get(key)
        entry = self._cache.get_or_create(key)
        while needs_fetch(entry) or entry.status is CacheStatus.LOADING:
            await self._wait(self._start(key, fetch_fn))
            await self.wait_for(key)
            entry = self._cache.get_or_create(key)
        return entry

    async def _execute(self, ticket: FetchTicket, fetch_fn: FetchFn) -> None:
        try:
            result = await fetch_fn()
        except BaseException:
            self._cache.abandon(ticket.key, ticket.request_id)
            raise

        if isinstance(result, DomainError):
            if self._cache.fail(ticket.key, ticket.request_id, result):
                logger.debug("Fetch of %s failed: %r", ticket.key, result)
        else:
            self._cache.resolve(ticket.key, ticket.request_id, result)

    def _forget(self, ticket: FetchTicket, task: asyncio.Task[None]) -> None:
        running = self._tasks.get(ticket.key)
        if running is not None and running[0] == ticket.request_id:
            del self._tasks[ticket.key]
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                "Fetch of %s raised %s",
                ticket.key,
                type(task.exception()).__name__,
                exc_info=task.exception(),
            )

    @staticmethod
    async def _wait(task: asyncio.Task[None]) -> None:
        await asyncio.shield(task)

    def detach(self, observer: QueryObserver) -> None:
        observers = self._observers.get(observer.key)
        if observers is None:
            return
        observers.discard(observer)
        if not observers:
            del self._observers[observer.key]


class QueryObserver:
    """One consumer's view of a resource key.

    Closing an observer detaches it from mutation-driven refetches; the
    underlying fetch keeps running for everyone else.
    """

    def __init__(
        self,
        executor: QueryExecutor,
        key: ResourceKey,
        enabled: bool = True,
        placeholder: Any = None,
    ):
        self._executor = executor
        self._key = key
        self._enabled = enabled
        self._placeholder = placeholder
        self._closed = False

    def __enter__(self) -> QueryObserver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def key(self) -> ResourceKey:
        return self._key

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def active(self) -> bool:
        return self._enabled and not self._closed

    @property
    def state(self) -> QueryState:
        """Current state; a closed observer reports ``idle``."""
        entry = self._executor.cache.get(self._key)
        return build_state(entry, enabled=self.active, placeholder=self._placeholder)

    @property
    def data(self) -> Any:
        return self.state.data

    @property
    def status(self) -> QueryStatus:
        return self.state.status

    @property
    def error(self) -> DomainError | None:
        return self.state.error

    @property
    def is_fetching(self) -> bool:
        entry = self._executor.cache.get(self._key)
        return self.active and entry is not None and entry.is_fetching

    async def refetch(self) -> QueryState:
        if self.active:
            await self._executor.refetch(self._key)
        return self.state

    async def settled(self) -> QueryState:
        """Wait for the in-flight fetch of this key, then return the state."""
        if self.active:
            await self._executor.wait_for(self._key)
        return self.state

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._executor.detach(self)
