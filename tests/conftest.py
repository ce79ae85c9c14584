"""Pytest configuration for chain-rpc-resolver tests."""

import copy
from typing import Any

import pytest

from chain_rpc_resolver.core import networks as networks_module
from chain_rpc_resolver.core.exceptions import FetchError
from chain_rpc_resolver.core.models import NetworkInfo
from chain_rpc_resolver.core.networks import AlchemyNetworksInfo
from chain_rpc_resolver.data import load_settings

DIRECTORY_RESPONSE: dict[str, Any] = {
    "result": {
        "data": [
            {
                "id": "eth-mainnet",
                "name": "Ethereum Mainnet",
                "chainId": "1",
                "networkChainId": 1,
                "kebabCaseId": "eth-mainnet",
                "explorerUrl": "https://etherscan.io",
                "blockSpeed": "12",
                "supportedProducts": ["node-api", "block-timestamp-api"],
                "availability": "public",
                "currency": "ETH",
            },
            {
                "id": "arb-mainnet",
                "name": "Arbitrum Mainnet",
                "chainId": "42161",
                "networkChainId": 42161,
                "kebabCaseId": "arb-mainnet",
                "explorerUrl": "https://arbiscan.io",
                "blockSpeed": "0.25",
                "supportedProducts": ["node-api"],
                "availability": "public",
                "currency": "ETH",
            },
            {
                "id": "some-unsupported",
                "name": "Some Network",
                "chainId": "99999",
                "networkChainId": 99999,
                "kebabCaseId": "some-unsupported",
                "explorerUrl": "https://example.com",
                "blockSpeed": "1",
                "supportedProducts": ["block-timestamp-api"],  # no node-api
                "availability": "public",
                "currency": "ETH",
            },
        ]
    }
}


class CountingFetch:
    """Stand-in directory fetch that records how often it was called."""

    def __init__(self, records: list[NetworkInfo]) -> None:
        self.records = records
        self.calls = 0

    async def __call__(self) -> list[NetworkInfo]:
        self.calls += 1
        return list(self.records)


class FailingFetch:
    """Directory fetch that always fails."""

    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> list[NetworkInfo]:
        self.calls += 1
        msg = "HTTP request failed: connection refused"
        raise FetchError(msg)


@pytest.fixture
def directory_response() -> dict[str, Any]:
    """Raw directory response body."""
    return copy.deepcopy(DIRECTORY_RESPONSE)


@pytest.fixture
def network_records(directory_response) -> list[NetworkInfo]:
    """Parsed directory records."""
    return [NetworkInfo.model_validate(r) for r in directory_response["result"]["data"]]


@pytest.fixture
def counting_fetch(network_records) -> CountingFetch:
    """Fetch returning the sample records."""
    return CountingFetch(network_records)


@pytest.fixture
def failing_fetch() -> FailingFetch:
    """Fetch that always raises FetchError."""
    return FailingFetch()


@pytest.fixture
def cache_dir(tmp_path):
    """Per-test network metadata cache directory."""
    return tmp_path / "memoized"


@pytest.fixture
def context(counting_fetch) -> AlchemyNetworksInfo:
    """Resolver context backed by the counting fetch."""
    return AlchemyNetworksInfo(fetch=counting_fetch)


@pytest.fixture
def default_context(monkeypatch, counting_fetch) -> AlchemyNetworksInfo:
    """Replace the process-wide resolver context for the duration of a test."""
    ctx = AlchemyNetworksInfo(fetch=counting_fetch)
    monkeypatch.setattr(networks_module, "_default_context", ctx)
    return ctx


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so environment overrides don't leak between tests."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
