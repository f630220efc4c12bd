"""CLI entry point for liststore.

Invoked as::

    liststore [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m liststore.cli.main

Commands
--------
init        Allocate a new empty record
append      Append an item to a record
show        Print a record's items as a table
list        List every record in the store with its item count
dump        Export a record as JSON or YAML
backends    List registered storage backends
version     Show version information

Principals are derived from seed strings (``--payer`` / ``--as``) and are
treated as signers: the local operator is the authenticated party.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from liststore.convenience import ListStore
    from liststore.model.record import RecordRef

console = Console()
err_console = Console(stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    sys.exit(1)


def _store(ctx: click.Context) -> "ListStore":
    """Build the store described by the group options, exiting on bad config."""
    from liststore.config import load_config
    from liststore.convenience import ListStore
    from liststore.storage import BackendNotFoundError

    options = ctx.obj
    overrides = {key: options[key] for key in ("data_dir", "backend") if options[key] is not None}
    try:
        config = replace(load_config(options["config"], backend="file"), **overrides)
        return ListStore(config=config)
    except (OSError, ValueError, BackendNotFoundError) as exc:
        _fail(f"Invalid configuration: {exc}")


def _resolve_or_exit(store: "ListStore", address: str) -> "RecordRef":
    from liststore.errors import RecordNotFoundError
    from liststore.model.identity import Identity

    try:
        return store.resolve(Identity.from_hex(address))
    except ValueError:
        _fail(f"Not a 64-character hex address: {address!r}")
    except RecordNotFoundError as exc:
        _fail(str(exc))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="liststore")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option("--data-dir", default=None, help="Directory for the file backend")
@click.option("--backend", default=None, help="Registered storage backend name")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    data_dir: str | None,
    backend: str | None,
    verbose: bool,
) -> None:
    """Fixed-capacity, append-only persistent list store."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )
    ctx.obj = {"config": config_path, "data_dir": data_dir, "backend": backend}


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from liststore import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]liststore[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# backends command
# ---------------------------------------------------------------------------


@cli.command(name="backends")
def backends_command() -> None:
    """List registered storage backends, including entry-point plugins."""
    from liststore.storage import backend_registry

    backend_registry.load_entrypoints()
    console.print("[bold]Registered storage backends:[/bold]")
    for name in backend_registry.list_backends():
        cls = backend_registry.get(name)
        console.print(f"  {name}  [dim]{cls.__module__}.{cls.__qualname__}[/dim]")


# ---------------------------------------------------------------------------
# init command
# ---------------------------------------------------------------------------


@cli.command(name="init")
@click.option("--payer", default="operator", show_default=True, help="Seed of the paying principal")
@click.option("--address", default=None, help="Hex address to allocate at (random if omitted)")
@click.pass_context
def init_command(ctx: click.Context, payer: str, address: str | None) -> None:
    """Allocate a new empty record and print its address."""
    from liststore.errors import AllocationError
    from liststore.model.identity import Identity, Principal

    store = _store(ctx)
    target: Identity | None = None
    if address is not None:
        try:
            target = Identity.from_hex(address)
        except ValueError:
            _fail(f"Not a 64-character hex address: {address!r}")

    try:
        ref = store.initialize(Principal.from_seed(payer), target)
    except AllocationError as exc:
        _fail(str(exc))

    console.print(
        f"[green]Created[/green] record {ref.address} "
        f"[dim]({ref.capacity} bytes reserved)[/dim]"
    )


# ---------------------------------------------------------------------------
# append command
# ---------------------------------------------------------------------------


@cli.command(name="append")
@click.argument("address")
@click.argument("content")
@click.option("--as", "caller", default="operator", show_default=True, help="Seed of the calling principal")
@click.pass_context
def append_command(ctx: click.Context, address: str, content: str, caller: str) -> None:
    """Append CONTENT to the record at ADDRESS.

    Examples:

    \b
        liststore append 3f2a...9c "ipfs://bafy..."
        liststore append 3f2a...9c "https://example.com/a.gif" --as alice
    """
    from liststore.errors import ListStoreError
    from liststore.model.identity import Principal

    if not content:
        _fail("Content must not be empty")

    store = _store(ctx)
    ref = _resolve_or_exit(store, address)
    try:
        store.append(ref, Principal.from_seed(caller), content)
    except ListStoreError as exc:
        _fail(f"{type(exc).__name__}: {exc}")

    console.print(f"[green]Appended[/green] to {ref.address}")


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("address")
@click.pass_context
def show_command(ctx: click.Context, address: str) -> None:
    """Print the items of the record at ADDRESS."""
    from liststore.errors import SerializationError
    from liststore.model.layout import record_size

    store = _store(ctx)
    ref = _resolve_or_exit(store, address)
    try:
        record = store.fetch(ref)
    except SerializationError as exc:
        _fail(f"Corrupt record {ref.address}: {exc}")

    if not record.items:
        console.print(f"[dim]Record {ref.address} is empty.[/dim]")
    else:
        table = Table(title=f"Record {ref.address}", show_lines=True)
        table.add_column("#", justify="right", style="bold")
        table.add_column("Content")
        table.add_column("Owner", style="dim")
        for index, item in enumerate(record.items):
            table.add_row(str(index), item.content, item.owner.hex())
        console.print(table)

    console.print(
        f"\n[bold]{record.total_items}[/bold] item(s), "
        f"{record_size(record)}/{record.capacity} bytes used"
    )


# ---------------------------------------------------------------------------
# list command
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """List every record in the store with its item count."""
    from liststore.errors import SerializationError
    from liststore.program.reader import Reader

    store = _store(ctx)
    reader = Reader(store.backend)
    addresses = store.backend.addresses()
    if not addresses:
        console.print("[dim]No records.[/dim]")
        return

    table = Table(show_lines=False)
    table.add_column("Address")
    table.add_column("Items", justify="right")
    table.add_column("Capacity", justify="right")
    for address in addresses:
        ref = reader.resolve(address)
        try:
            count = str(reader.count(ref))
        except SerializationError:
            count = "[red]corrupt[/red]"
        table.add_row(address.hex(), count, str(ref.capacity))
    console.print(table)


# ---------------------------------------------------------------------------
# dump command
# ---------------------------------------------------------------------------


@cli.command(name="dump")
@click.argument("address")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@click.pass_context
def dump_command(ctx: click.Context, address: str, output_format: str, output: str | None) -> None:
    """Export the record at ADDRESS as JSON or YAML."""
    from liststore.errors import SerializationError
    from liststore.model.serializer import RecordSerializer

    store = _store(ctx)
    ref = _resolve_or_exit(store, address)
    try:
        record = store.fetch(ref)
    except SerializationError as exc:
        _fail(f"Corrupt record {ref.address}: {exc}")

    serializer = RecordSerializer()
    if output_format.lower() == "json":
        text = serializer.to_json(record, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(record)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Record written to[/green] {output}")
    else:
        console.print(Syntax(text, lang, line_numbers=False))


if __name__ == "__main__":
    cli()
