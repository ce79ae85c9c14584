"""Alchemy network map with in-memory and on-disk caching."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter

from chain_rpc_resolver.cache import DiskMemoizer
from chain_rpc_resolver.core.models import ChainID, NetworkInfo, NetworkMap
from chain_rpc_resolver.data import load_settings
from chain_rpc_resolver.directory import fetch_alchemy_networks

logger = logging.getLogger(__name__)

NetworkFetcher = Callable[[], Awaitable[list[NetworkInfo]]]

_RECORDS = TypeAdapter(list[NetworkInfo])


def build_network_map(networks: Iterable[NetworkInfo]) -> NetworkMap:
    """
    Index network records by numeric chain id.

    Later records replace earlier ones with the same chain id.

    Parameters
    ----------
    networks : Iterable[NetworkInfo]
        Records in directory order

    Returns
    -------
    NetworkMap
        Read-only mapping of chain id to record

    """
    network_map: dict[ChainID, NetworkInfo] = {}
    for network in networks:
        if network.network_chain_id in network_map:
            logger.debug(
                "Duplicate chain id %d: %s replaces %s",
                network.network_chain_id,
                network.id,
                network_map[network.network_chain_id].id,
            )
        network_map[network.network_chain_id] = network
    return MappingProxyType(network_map)


class AlchemyNetworksInfo:
    """
    Resolver context holding the Alchemy network map for one cache epoch.

    The first ``network_map()`` call binds an on-disk memoizer to its
    ``cache_path`` and populates the map; later calls return the same map until
    ``clear_cache()`` starts a new epoch.

    Parameters
    ----------
    fetch : NetworkFetcher
        Coroutine function returning the directory records
    cache_id : str | None
        Identity of the persisted entry. Uses the configured ``cache_id`` if None.

    """

    def __init__(
        self,
        fetch: NetworkFetcher = fetch_alchemy_networks,
        cache_id: str | None = None,
    ) -> None:
        self.fetch = fetch
        self.cache_id = cache_id or load_settings().cache_id
        self._network_map: NetworkMap | None = None
        self._memoizer: DiskMemoizer[list[NetworkInfo]] | None = None

    def _get_memoizer(self, cache_path: str | Path | None) -> DiskMemoizer[list[NetworkInfo]]:
        # Synchronous, so concurrent first callers share one handle.
        if self._memoizer is None:
            path = cache_path if cache_path is not None else load_settings().cache_path
            self._memoizer = DiskMemoizer(path, self.cache_id, _RECORDS)
        return self._memoizer

    async def network_map(self, cache_path: str | Path | None = None) -> NetworkMap:
        """
        Get every directory network keyed by chain id.

        Parameters
        ----------
        cache_path : str | Path | None
            Directory for persisted metadata. Only used when the map is not
            built yet. Uses the configured ``cache_path`` if None.

        Returns
        -------
        NetworkMap
            Read-only mapping of chain id to record

        Raises
        ------
        FetchError
            If the directory has to be fetched and the fetch fails

        """
        if self._network_map is not None:
            return self._network_map

        memoizer = self._get_memoizer(cache_path)
        get_networks = memoizer.fn(self.fetch)
        networks = await get_networks()

        # Another caller may have populated the map, or clear_cache() may have
        # ended this epoch, while the fetch was in flight.
        if self._network_map is not None:
            return self._network_map
        network_map = build_network_map(networks)
        if self._memoizer is not memoizer:
            return network_map

        self._network_map = network_map
        logger.debug("Built network map with %d chains", len(self._network_map))
        return self._network_map

    async def explorer_url(self, chain_id: ChainID, cache_path: str | Path | None = None) -> str | None:
        """
        Get the block explorer URL for a chain.

        Parameters
        ----------
        chain_id : ChainID
            Numeric chain id
        cache_path : str | Path | None
            Directory for persisted metadata

        Returns
        -------
        str | None
            Explorer base URL, or None for unknown chains

        """
        network = (await self.network_map(cache_path)).get(chain_id)
        return network.explorer_url if network else None

    def clear_cache(self) -> None:
        """Drop the in-memory map and memoizer (useful for testing)."""
        self._network_map = None
        self._memoizer = None

    def purge_cache(self, cache_path: str | Path | None = None) -> bool:
        """
        Drop the in-memory map and delete the persisted directory entry.

        Parameters
        ----------
        cache_path : str | Path | None
            Directory holding the entry. Defaults to the bound memoizer's
            directory, else the configured ``cache_path``.

        Returns
        -------
        bool
            True if an on-disk entry was removed

        Raises
        ------
        CacheIOError
            If the entry cannot be removed

        """
        if cache_path is None and self._memoizer is not None:
            memoizer = self._memoizer
        else:
            path = cache_path if cache_path is not None else load_settings().cache_path
            memoizer = DiskMemoizer(path, self.cache_id, _RECORDS)
        self.clear_cache()
        return memoizer.invalidate()


_default_context = AlchemyNetworksInfo()


def get_default_context() -> AlchemyNetworksInfo:
    """Get the process-wide resolver context."""
    return _default_context


async def network_map(cache_path: str | Path | None = None) -> NetworkMap:
    """Get the network map from the default context."""
    return await _default_context.network_map(cache_path)


async def explorer_url(chain_id: ChainID, cache_path: str | Path | None = None) -> str | None:
    """Get a chain's explorer URL from the default context."""
    return await _default_context.explorer_url(chain_id, cache_path)


def clear_cache() -> None:
    """Reset the default context."""
    _default_context.clear_cache()
