"""Command line interface for inspecting and editing a registry."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any

import click
from rich import box
from rich.console import Console
from rich.table import Table

from .application.registry import ServiceRegistry
from .domain.exceptions import ClerqError
from .infrastructure.config import RegistryConfig

console = Console()


def build_registry(options: dict[str, Any]) -> ServiceRegistry:
    """Create the registry used by CLI commands."""
    return ServiceRegistry(RegistryConfig.from_env(**options))


def _run(ctx: click.Context, action: Callable[[ServiceRegistry], Awaitable[Any]]) -> Any:
    async def runner() -> Any:
        async with build_registry(ctx.obj) as registry:
            return await action(registry)

    try:
        return asyncio.run(runner())
    except ClerqError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        sys.exit(1)


def _print_list(title: str, column: str, rows: list[str]) -> None:
    if not rows:
        console.print(f"[yellow]No {column.lower()}s found[/yellow]")
        return
    table = Table(title=title, box=box.ROUNDED)
    table.add_column(column, style="cyan")
    for row in sorted(rows):
        table.add_row(row)
    console.print(table)


@click.group()
@click.option("--redis-url", "-r", envvar="REDIS_URL", help="Redis connection URL")
@click.option("--prefix", "-p", help="Registry key prefix")
@click.option("--delimiter", "-d", help="Registry key delimiter")
@click.option("--expire", "-e", type=int, help="Key TTL in seconds")
@click.option("--iface", help="Network interface for the local address")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, redis_url, prefix, delimiter, expire, iface, debug):
    """Register and discover services in a clerq registry."""
    ctx.obj = {
        "prefix": prefix,
        "delimiter": delimiter,
        "expire": expire,
        "iface": iface,
        "debug": debug or None,
        "redis": {"url": redis_url} if redis_url else None,
    }


@main.command()
@click.argument("service")
@click.argument("target")
@click.pass_context
def up(ctx, service, target):
    """Register TARGET (a port or host:port) for SERVICE."""
    added = _run(ctx, lambda registry: registry.up(service, target))
    console.print(f"[green]✓[/green] {service}: {added} address(es) added")


@main.command()
@click.argument("service")
@click.argument("target")
@click.pass_context
def down(ctx, service, target):
    """Remove TARGET (a port or host:port) from SERVICE."""
    removed = _run(ctx, lambda registry: registry.down(service, target))
    console.print(f"[green]✓[/green] {service}: {removed} address(es) removed")


@main.command()
@click.argument("service")
@click.pass_context
def get(ctx, service):
    """Print one address of SERVICE."""
    address = _run(ctx, lambda registry: registry.get(service))
    if address is None:
        console.print(f"[yellow]No address registered for {service}[/yellow]")
        sys.exit(1)
    console.print(address)


@main.command(name="all")
@click.argument("service")
@click.pass_context
def all_(ctx, service):
    """Print every address of SERVICE."""
    addresses = _run(ctx, lambda registry: registry.all(service))
    _print_list(f"Addresses of {service}", "Address", addresses)


@main.command()
@click.pass_context
def services(ctx):
    """List registered services."""
    names = _run(ctx, lambda registry: registry.services())
    _print_list("Services", "Service", names)


@main.command()
@click.argument("service")
@click.pass_context
def destroy(ctx, service):
    """Expire SERVICE and all of its addresses."""
    _run(ctx, lambda registry: registry.destroy(service))
    console.print(f"[green]✓[/green] {service} scheduled for removal")


@main.command(name="find-port")
@click.option("--start", "-s", type=int, help="Lowest acceptable port")
@click.option("--host", "-H", help="Claim the port for this host")
@click.pass_context
def find_port(ctx, start, host):
    """Find a free port, optionally claiming it for a host."""
    port = _run(ctx, lambda registry: registry.find_port(start, host))
    console.print(str(port))


@main.command(name="release-port")
@click.argument("port", type=int)
@click.argument("host")
@click.pass_context
def release_port(ctx, port, host):
    """Release PORT previously claimed for HOST."""
    removed = _run(ctx, lambda registry: registry.release_port(port, host))
    if removed:
        console.print(f"[green]✓[/green] Released {host}:{port}")
    else:
        console.print(f"[yellow]{host}:{port} was not claimed[/yellow]")


if __name__ == "__main__":
    main()
