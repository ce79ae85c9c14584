"""RPC endpoint providers."""

from chain_rpc_resolver.providers.alchemy import AlchemyRpcProvider
from chain_rpc_resolver.providers.base import RpcProvider
from chain_rpc_resolver.providers.proxy import RpcProxyProvider

__all__ = [
    "AlchemyRpcProvider",
    "RpcProvider",
    "RpcProxyProvider",
]
