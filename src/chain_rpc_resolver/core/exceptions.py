"""Exceptions raised while resolving RPC endpoints."""


class ResolverError(Exception):
    """Base class for all resolver errors."""


class FetchError(ResolverError):
    """Exception raised when the network directory cannot be fetched or parsed."""


class CacheIOError(ResolverError):
    """Exception raised when the on-disk cache cannot be read or written."""


class UnsupportedChainError(ResolverError):
    """
    Exception raised when a provider has no endpoint for a chain.

    Parameters
    ----------
    chain_id : int
        Requested chain id
    provider : str
        Provider name used in the error message

    """

    def __init__(self, chain_id: int, provider: str = "alchemy") -> None:
        self.chain_id = chain_id
        self.provider = provider
        super().__init__(f"{provider} does not support chain {chain_id}")
