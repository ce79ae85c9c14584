"""Alchemy node-hosting RPC provider."""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from chain_rpc_resolver.core.exceptions import UnsupportedChainError
from chain_rpc_resolver.core.models import ChainID, NetworkMap
from chain_rpc_resolver.core.networks import AlchemyNetworksInfo, get_default_context
from chain_rpc_resolver.data import load_settings

logger = logging.getLogger(__name__)


class AlchemyRpcProvider:
    """
    RPC provider for Alchemy-hosted nodes.

    Instances are built with ``create()``, which loads the network map and keeps
    only networks offering the node API under a subdomain. The table is fixed for the lifetime of
    the instance.

    Parameters
    ----------
    api_key : str
        Alchemy API key, embedded verbatim in generated URLs
    networks : NetworkMap
        Full network map to filter

    """

    name = "alchemy"

    def __init__(self, api_key: str, networks: NetworkMap) -> None:
        if not api_key:
            msg = "Alchemy API key must not be empty"
            raise ValueError(msg)
        settings = load_settings()
        self._api_key = api_key
        self._url_template = settings.url_template
        self.networks: Mapping[ChainID, str] = MappingProxyType(
            {
                chain_id: network.kebab_case_id
                for chain_id, network in networks.items()
                if network.kebab_case_id and network.supports(settings.required_product)
            }
        )
        logger.debug("Alchemy provider serves %d of %d networks", len(self.networks), len(networks))

    @classmethod
    async def create(
        cls,
        api_key: str,
        cache_path: str | Path | None = None,
        *,
        context: AlchemyNetworksInfo | None = None,
    ) -> "AlchemyRpcProvider":
        """
        Create a provider from the current network map.

        Parameters
        ----------
        api_key : str
            Alchemy API key
        cache_path : str | Path | None
            Directory for persisted network metadata
        context : AlchemyNetworksInfo | None
            Resolver context to read the map from. Uses the default context if None.

        Returns
        -------
        AlchemyRpcProvider
            Provider with its subdomain table populated

        Raises
        ------
        FetchError
            If the network directory has to be fetched and the fetch fails

        """
        context = context or get_default_context()
        return cls(api_key, await context.network_map(cache_path))

    def supports(self, chain_id: ChainID) -> bool:
        """Check whether the provider has an endpoint for a chain."""
        return chain_id in self.networks

    def url_for_chain(self, chain_id: ChainID) -> str:
        """
        Build the Alchemy endpoint URL for a chain.

        Parameters
        ----------
        chain_id : ChainID
            Numeric chain id

        Returns
        -------
        str
            URL of the form ``https://<subdomain>.g.alchemy.com/v2/<api_key>``

        Raises
        ------
        UnsupportedChainError
            If the chain has no node API on Alchemy

        """
        if chain_id not in self.networks:
            raise UnsupportedChainError(chain_id, provider=self.name)
        return self._url_template.format(subdomain=self.networks[chain_id], api_key=self._api_key)
