"""Data models for Alchemy network directory records."""

from collections.abc import Mapping
from enum import StrEnum
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

ChainID: TypeAlias = int


class NetworkProduct(StrEnum):
    """Capability tags advertised in ``supportedProducts``."""

    NODE_API = "node-api"
    BLOCK_TIMESTAMP_API = "block-timestamp-api"


class NetworkInfo(BaseModel):
    """
    One network entry from the Alchemy network directory.

    Attributes
    ----------
    id : str
        Stable Alchemy network identifier
    name : str
        Human readable network name
    chain_id : str
        Chain id as published by the directory (string form)
    network_chain_id : int
        Numeric chain id, the canonical lookup key
    kebab_case_id : str
        URL-safe subdomain token (e.g. 'eth-mainnet')
    explorer_url : str | None
        Block explorer base URL
    block_speed : str | float | None
        Average block time
    supported_products : frozenset[str]
        Capability tags (e.g. 'node-api')
    availability : str
        Availability tag (e.g. 'public')
    currency : str
        Native currency symbol

    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    chain_id: str = Field(alias="chainId")
    network_chain_id: ChainID = Field(alias="networkChainId")
    kebab_case_id: str = Field(alias="kebabCaseId")
    explorer_url: str | None = Field(default=None, alias="explorerUrl")
    block_speed: str | float | None = Field(default=None, alias="blockSpeed")
    supported_products: frozenset[str] = Field(default_factory=frozenset, alias="supportedProducts")
    availability: str = "public"
    currency: str = ""

    def supports(self, product: str) -> bool:
        """
        Check whether the network advertises a capability tag.

        Parameters
        ----------
        product : str
            Capability tag, e.g. ``NetworkProduct.NODE_API``

        Returns
        -------
        bool
            True if the tag is in ``supported_products``

        """
        return product in self.supported_products


NetworkMap: TypeAlias = Mapping[ChainID, NetworkInfo]
