"""Core functionality including models, errors, and the network map."""

from chain_rpc_resolver.core.exceptions import (
    CacheIOError,
    FetchError,
    ResolverError,
    UnsupportedChainError,
)
from chain_rpc_resolver.core.models import ChainID, NetworkInfo, NetworkMap, NetworkProduct
from chain_rpc_resolver.core.networks import (
    AlchemyNetworksInfo,
    build_network_map,
    clear_cache,
    explorer_url,
    get_default_context,
    network_map,
)

__all__ = [
    "AlchemyNetworksInfo",
    "CacheIOError",
    "ChainID",
    "FetchError",
    "NetworkInfo",
    "NetworkMap",
    "NetworkProduct",
    "ResolverError",
    "UnsupportedChainError",
    "build_network_map",
    "clear_cache",
    "explorer_url",
    "get_default_context",
    "network_map",
]
