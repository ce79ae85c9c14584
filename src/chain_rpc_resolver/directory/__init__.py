"""Remote network directory clients."""

from chain_rpc_resolver.directory.alchemy import AlchemyDirectoryClient, fetch_alchemy_networks

__all__ = [
    "AlchemyDirectoryClient",
    "fetch_alchemy_networks",
]
