"""MockBank remote data synchronization layer."""
