"""Common interface for RPC endpoint providers."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RpcProvider(Protocol):
    """
    Interface that all RPC providers implement.

    Methods
    -------
    url_for_chain(chain_id)
        Build the RPC endpoint URL for a chain

    """

    def url_for_chain(self, chain_id: int) -> str:
        """
        Build the RPC endpoint URL for a chain.

        Parameters
        ----------
        chain_id : int
            Numeric chain id

        Returns
        -------
        str
            Endpoint URL

        """
        ...
