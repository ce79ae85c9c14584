"""RPC provider for a chain-id routed reverse proxy."""


class RpcProxyProvider:
    """
    Provider for proxies serving each chain under ``<base_url>/<chain_id>``.

    The base URL is used as given; a trailing slash produces a double slash.

    Parameters
    ----------
    base_url : str
        Proxy base URL (e.g. 'http://localhost:8545')

    """

    name = "rpc-proxy"

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url

    def url_for_chain(self, chain_id: int) -> str:
        """Build the proxy URL for a chain."""
        return f"{self.base_url}/{chain_id}"
