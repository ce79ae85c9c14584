"""Alchemy network directory client."""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from chain_rpc_resolver.core.exceptions import FetchError
from chain_rpc_resolver.core.models import NetworkInfo
from chain_rpc_resolver.data import load_settings

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[NetworkInfo])


class AlchemyDirectoryClient:
    """
    Async client for Alchemy's public network configuration endpoint.

    Parameters
    ----------
    url : str | None
        Directory endpoint. Uses the configured ``networks_url`` if None.
    timeout : float | None
        Request timeout in seconds. Uses the configured ``request_timeout`` if None.
    transport : httpx.AsyncBaseTransport | None
        Custom transport, mainly for tests

    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = load_settings()
        self.url = url or settings.networks_url
        self.client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def fetch_networks(self) -> list[NetworkInfo]:
        """
        Fetch every network listed in the directory.

        Returns
        -------
        list[NetworkInfo]
            Records in directory order

        Raises
        ------
        FetchError
            If the request fails or the body is not in the expected shape

        """
        logger.debug("Fetching Alchemy network directory from %s", self.url)
        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            msg = f"Request timeout: {e}"
            raise FetchError(msg) from e
        except httpx.HTTPStatusError as e:
            msg = f"HTTP error {e.response.status_code}: {e}"
            raise FetchError(msg) from e
        except httpx.HTTPError as e:
            msg = f"HTTP request failed: {e}"
            raise FetchError(msg) from e
        except ValueError as e:
            msg = f"Invalid JSON in directory response: {e}"
            raise FetchError(msg) from e

        networks = self._parse(body)
        logger.debug("Fetched %d networks", len(networks))
        return networks

    def _parse(self, body: Any) -> list[NetworkInfo]:
        """
        Extract ``result.data`` from a directory response body.

        Parameters
        ----------
        body : Any
            Decoded JSON body

        Returns
        -------
        list[NetworkInfo]
            Validated records

        Raises
        ------
        FetchError
            If ``result.data`` is missing or a record is malformed

        """
        try:
            data = body["result"]["data"]
        except (KeyError, TypeError) as e:
            msg = f"Directory response has no result.data field: {e!r}"
            raise FetchError(msg) from e

        if not isinstance(data, list):
            msg = f"Directory result.data is {type(data).__name__}, expected list"
            raise FetchError(msg)

        try:
            return _RECORDS.validate_python(data)
        except ValidationError as e:
            msg = f"Malformed network record: {e}"
            raise FetchError(msg) from e

    async def aclose(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "AlchemyDirectoryClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.aclose()


async def fetch_alchemy_networks() -> list[NetworkInfo]:
    """
    Fetch the Alchemy network directory with a one-shot client.

    Returns
    -------
    list[NetworkInfo]
        Records in directory order

    """
    async with AlchemyDirectoryClient() as client:
        return await client.fetch_networks()
