"""Tests for the command line interface."""

import json

import pytest
from typer.testing import CliRunner

from chain_rpc_resolver.cli.main import app
from chain_rpc_resolver.core import networks as networks_module
from chain_rpc_resolver.core.networks import AlchemyNetworksInfo

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_env_api_key(monkeypatch):
    monkeypatch.delenv("ALCHEMY_API_KEY", raising=False)


def test_url_with_api_key(default_context, cache_dir):
    result = runner.invoke(app, ["url", "1", "--api-key", "k", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    assert "https://eth-mainnet.g.alchemy.com/v2/k" in result.output


def test_url_api_key_from_environment(monkeypatch, default_context, cache_dir):
    monkeypatch.setenv("ALCHEMY_API_KEY", "env-key")

    result = runner.invoke(app, ["url", "42161", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    assert "https://arb-mainnet.g.alchemy.com/v2/env-key" in result.output


def test_url_unsupported_chain(default_context, cache_dir):
    result = runner.invoke(app, ["url", "99999", "--api-key", "k", "--cache-path", str(cache_dir)])

    assert result.exit_code == 1


def test_url_with_proxy(default_context, counting_fetch):
    """The proxy provider needs no network directory."""
    result = runner.invoke(app, ["url", "31337", "--proxy-url", "http://localhost:8545"])

    assert result.exit_code == 0, result.output
    assert "http://localhost:8545/31337" in result.output
    assert counting_fetch.calls == 0


def test_url_requires_provider(default_context):
    result = runner.invoke(app, ["url", "1"])

    assert result.exit_code == 2


def test_url_fetch_failure(monkeypatch, failing_fetch, cache_dir):
    monkeypatch.setattr(networks_module, "_default_context", AlchemyNetworksInfo(fetch=failing_fetch))

    result = runner.invoke(app, ["url", "1", "--api-key", "k", "--cache-path", str(cache_dir)])

    assert result.exit_code == 1
    assert failing_fetch.calls == 1


def test_networks_json(default_context, cache_dir):
    result = runner.invoke(app, ["networks", "--format", "json", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [n["networkChainId"] for n in data] == [1, 42161]


def test_networks_json_all(default_context, cache_dir):
    result = runner.invoke(app, ["networks", "--all", "--format", "json", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert [n["networkChainId"] for n in data] == [1, 42161, 99999]


def test_networks_table(default_context, cache_dir):
    result = runner.invoke(app, ["networks", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    assert "eth-mainnet" in result.output
    assert "arb-mainnet" in result.output
    assert "some-unsupported" not in result.output


def test_explorer(default_context, cache_dir):
    result = runner.invoke(app, ["explorer", "1", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    assert "https://etherscan.io" in result.output


def test_explorer_unknown_chain(default_context, cache_dir):
    result = runner.invoke(app, ["explorer", "12345", "--cache-path", str(cache_dir)])

    assert result.exit_code == 0, result.output
    assert "No explorer known for chain 12345" in result.output


def test_clear_cache(default_context, counting_fetch, cache_dir):
    runner.invoke(app, ["explorer", "1", "--cache-path", str(cache_dir)])
    assert (cache_dir / "alchemy-networks.json").exists()

    result = runner.invoke(app, ["clear-cache", "--cache-path", str(cache_dir)])
    assert result.exit_code == 0, result.output
    assert "Cache cleared" in result.output
    assert not (cache_dir / "alchemy-networks.json").exists()

    result = runner.invoke(app, ["clear-cache", "--cache-path", str(cache_dir)])
    assert "Cache already empty" in result.output

    runner.invoke(app, ["explorer", "1", "--cache-path", str(cache_dir)])
    assert counting_fetch.calls == 2
