"""Resource cache."""

from mockbank.application.cache.entry import CacheEntry, CacheStatus, FetchTicket
from mockbank.application.cache.keys import (
    ACCOUNTS,
    TRANSACTIONS,
    KeyPredicate,
    ResourceKey,
    accounts_key,
    key_matches,
    transactions_key,
)
from mockbank.application.cache.resource_cache import CacheListener, ResourceCache

__all__ = [
    # Keys
    "ACCOUNTS",
    "TRANSACTIONS",
    "KeyPredicate",
    "ResourceKey",
    "accounts_key",
    "key_matches",
    "transactions_key",
    # Entries
    "CacheEntry",
    "CacheStatus",
    "FetchTicket",
    # Cache
    "CacheListener",
    "ResourceCache",
]
