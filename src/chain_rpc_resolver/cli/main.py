"""CLI for chain RPC resolver."""

import asyncio
import json
import logging
from collections.abc import Coroutine
from enum import StrEnum
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from chain_rpc_resolver.core import (
    CacheIOError,
    FetchError,
    UnsupportedChainError,
    get_default_context,
)
from chain_rpc_resolver.data import load_settings
from chain_rpc_resolver.providers import AlchemyRpcProvider, RpcProvider, RpcProxyProvider

# Install rich traceback handler
install(show_locals=False)

app = typer.Typer(
    name="chain-rpc-resolver",
    help="Resolve RPC endpoint URLs for EVM chains via Alchemy or a local RPC proxy",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _setup_logging(debug: bool) -> None:
    """Route library logs through rich when debugging."""
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # Keep httpx connection chatter out of the debug output
    logging.getLogger("httpcore").setLevel(logging.INFO)


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a resolver coroutine, exiting on fetch failure.

    Parameters
    ----------
    coro : Coroutine
        Coroutine reading from the default resolver context

    Returns
    -------
    T
        Coroutine result

    Raises
    ------
    typer.Exit
        If the network directory cannot be fetched

    """
    try:
        return asyncio.run(coro)
    except FetchError as e:
        err_console.print(f"[bold red]Failed to load Alchemy networks:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()
def url(
    chain_id: int = typer.Argument(..., help="Numeric chain id (e.g. 1 for Ethereum mainnet)"),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        "-k",
        envvar="ALCHEMY_API_KEY",
        help="Alchemy API key",
    ),
    proxy_url: str | None = typer.Option(None, "--proxy-url", "-p", help="RPC proxy base URL"),
    cache_path: str | None = typer.Option(None, "--cache-path", help="Network metadata cache directory"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Print the RPC endpoint URL for a chain.

    Examples:

        # Alchemy endpoint
        chain-rpc-resolver url 1 --api-key YOUR_KEY

        # Local RPC proxy
        chain-rpc-resolver url 42161 --proxy-url http://localhost:8080
    """
    _setup_logging(debug)

    provider: RpcProvider
    if proxy_url:
        provider = RpcProxyProvider(proxy_url)
    elif api_key:
        provider = AlchemyRpcProvider(api_key, _run(get_default_context().network_map(cache_path)))
    else:
        err_console.print("[bold red]Provide --api-key or --proxy-url[/bold red]")
        err_console.print("[dim]  Or export ALCHEMY_API_KEY='your_key'[/dim]")
        raise typer.Exit(code=2)

    try:
        console.print(provider.url_for_chain(chain_id), markup=False, highlight=False, soft_wrap=True)
    except UnsupportedChainError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e


@app.command()
def networks(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include networks without node API support"),
    cache_path: str | None = typer.Option(None, "--cache-path", help="Network metadata cache directory"),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """List Alchemy networks."""
    _setup_logging(debug)

    network_map = _run(get_default_context().network_map(cache_path))
    required = load_settings().required_product
    rows = [n for _, n in sorted(network_map.items()) if show_all or n.supports(required)]

    if format == OutputFormat.JSON:
        data = [n.model_dump(mode="json", by_alias=True) for n in rows]
        console.print(json.dumps(data, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True)
        return

    table = Table(title="Alchemy Networks", show_header=True, header_style="bold magenta")
    table.add_column("Chain ID", style="cyan", justify="right", no_wrap=True)
    table.add_column("Subdomain", style="green", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Currency", style="yellow", no_wrap=True)
    table.add_column("Products", style="blue")

    for network in rows:
        table.add_row(
            str(network.network_chain_id),
            network.kebab_case_id,
            network.name,
            network.currency,
            ", ".join(sorted(network.supported_products)),
        )

    console.print(table)


@app.command()
def explorer(
    chain_id: int = typer.Argument(..., help="Numeric chain id"),
    cache_path: str | None = typer.Option(None, "--cache-path", help="Network metadata cache directory"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Print the block explorer URL for a chain."""
    _setup_logging(debug)

    explorer_url = _run(get_default_context().explorer_url(chain_id, cache_path))
    if explorer_url is None:
        console.print(f"[yellow]No explorer known for chain {chain_id}[/yellow]")
        return
    console.print(explorer_url, markup=False, highlight=False, soft_wrap=True)


@app.command()
def clear_cache(
    cache_path: str | None = typer.Option(None, "--cache-path", help="Network metadata cache directory"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Delete the persisted Alchemy network directory."""
    _setup_logging(debug)

    try:
        removed = get_default_context().purge_cache(cache_path)
    except CacheIOError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    if removed:
        console.print("[green]✓ Cache cleared[/green]")
    else:
        console.print("[dim]Cache already empty[/dim]")


if __name__ == "__main__":
    app()
