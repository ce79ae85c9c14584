"""Settings loading and bundled defaults."""

from chain_rpc_resolver.data.loader import (
    CACHE_PATH_ENV,
    ResolverSettings,
    load_defaults,
    load_settings,
)

__all__ = [
    "CACHE_PATH_ENV",
    "ResolverSettings",
    "load_defaults",
    "load_settings",
]
