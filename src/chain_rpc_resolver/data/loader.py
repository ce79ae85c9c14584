"""Resolver settings loader."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from chain_rpc_resolver.core.models import NetworkProduct

CACHE_PATH_ENV = "CHAIN_RPC_CACHE_PATH"


class ResolverSettings(BaseModel):
    """
    Settings for the Alchemy network directory and URL generation.

    Attributes
    ----------
    networks_url : str
        Alchemy network directory endpoint
    cache_id : str
        Identity of the persisted directory entry
    cache_path : str
        Directory holding persisted network metadata
    url_template : str
        Endpoint template with ``{subdomain}`` and ``{api_key}`` fields
    required_product : NetworkProduct
        Capability tag a network needs to be served by the provider
    request_timeout : float
        Directory request timeout in seconds

    """

    networks_url: str
    cache_id: str
    cache_path: str = "./memoized"
    url_template: str
    required_product: NetworkProduct = NetworkProduct.NODE_API
    request_timeout: float = 30.0


def load_defaults() -> dict[str, Any]:
    """
    Load bundled defaults from defaults.yaml.

    Returns
    -------
    dict[str, Any]
        Raw settings mapping

    """
    path = Path(__file__).parent / "defaults.yaml"
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@lru_cache(maxsize=1)
def load_settings() -> ResolverSettings:
    """
    Load resolver settings, applying environment overrides.

    Returns
    -------
    ResolverSettings
        Validated settings, cached for the process lifetime

    """
    raw = load_defaults()
    cache_path = os.getenv(CACHE_PATH_ENV)
    if cache_path:
        raw["cache_path"] = cache_path
    return ResolverSettings.model_validate(raw)
