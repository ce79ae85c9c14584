"""Persistent caching for network directory fetches."""

from chain_rpc_resolver.cache.memoizer import CacheEntry, DiskMemoizer, memoize

__all__ = [
    "CacheEntry",
    "DiskMemoizer",
    "memoize",
]
