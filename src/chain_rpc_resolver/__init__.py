"""Resolve RPC endpoint URLs for blockchain networks."""

from chain_rpc_resolver.core import (
    AlchemyNetworksInfo,
    CacheIOError,
    ChainID,
    FetchError,
    NetworkInfo,
    NetworkMap,
    NetworkProduct,
    ResolverError,
    UnsupportedChainError,
    clear_cache,
    explorer_url,
    network_map,
)
from chain_rpc_resolver.providers import AlchemyRpcProvider, RpcProvider, RpcProxyProvider

__all__ = [
    "AlchemyNetworksInfo",
    "AlchemyRpcProvider",
    "CacheIOError",
    "ChainID",
    "FetchError",
    "NetworkInfo",
    "NetworkMap",
    "NetworkProduct",
    "ResolverError",
    "RpcProvider",
    "RpcProxyProvider",
    "UnsupportedChainError",
    "clear_cache",
    "explorer_url",
    "network_map",
]
