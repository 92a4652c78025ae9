"""
vpniptable command line interface.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from vpniptable import __version__
from vpniptable.cidr.cli import cidr
from vpniptable.cidr.core import EXPORT_FORMATS
from vpniptable.cidr.models import CidrError
from vpniptable.config import get_config
from vpniptable.logging_config import configure_logging
from vpniptable.storage.yaml_store import StorageError, YamlStorage
from vpniptable.table import NoAddressesFoundError, RangeTable


@click.group()
@click.version_option(__version__, prog_name="vpniptable")
@click.option("--store", type=click.Path(dir_okay=False), default=None,
              help="YAML file holding the range list (default: $VPNIPTABLE_STORAGE)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--log-file", is_flag=True, help="Also log to ~/.vpniptable/logs")
@click.pass_context
def main(ctx: click.Context, store: str | None, debug: bool, log_file: bool):
    """Maintain a minimal list of IPv4 ranges for VPN routing."""
    config = get_config()
    configure_logging(debug=debug, log_to_file=log_file or config.log_to_file, level=config.log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = Path(store) if store else config.storage_path


main.add_command(cidr)


def _load_table(ctx: click.Context) -> RangeTable:
    table = RangeTable(YamlStorage(ctx.obj["store"]))
    table.load()
    return table


@main.command("list")
@click.pass_context
def list_ranges(ctx: click.Context):
    """Show the stored ranges.

    Examples:
        vpniptable list
        vpniptable --store ./work.yaml list
    """
    console = Console()
    table = _load_table(ctx)

    if not len(table):
        console.print("[dim]No ranges stored[/dim]")
        return

    out = Table(title=f"Ranges ({len(table)})", box=None)
    out.add_column("Range", style="cyan")
    out.add_column("Network", style="white")
    out.add_column("Netmask", style="white")
    out.add_column("Addresses", style="white", justify="right")

    for r in table.sorted():
        out.add_row(str(r), r.network, r.netmask, f"{r.num_addresses:,}")

    console.print(out)


@main.command()
@click.argument("tokens", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, tokens: tuple[str, ...]):
    """Add addresses or CIDRs, dropping ranges they cover.

    Nothing is added if any token is invalid.

    Examples:
        vpniptable add 10.0.0.0/8 192.168.1.0/24
        vpniptable add 8.8.8.8
    """
    console = Console()
    table = _load_table(ctx)
    before = len(table)

    try:
        table.add_tokens(tokens)
    except (CidrError, StorageError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]Added {len(tokens)} address(es)[/green] - {before} -> {len(table)} range(s)")


@main.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_file(ctx: click.Context, path: str):
    """Extract addresses from a text file and add them.

    Examples:
        vpniptable import blocklist.txt
    """
    console = Console()
    table = _load_table(ctx)
    before = len(table)

    try:
        found = table.add_file(path)
    except NoAddressesFoundError as e:
        console.print(f"[yellow]Warning:[/yellow] {e}")
        raise SystemExit(1)
    except (CidrError, StorageError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[cyan]Found:[/cyan] {len(found)} address(es)")
    console.print(f"[green]Ranges:[/green] {before} -> {len(table)}")


@main.command()
@click.argument("token")
@click.pass_context
def remove(ctx: click.Context, token: str):
    """Remove a stored range by its exact CIDR text.

    Examples:
        vpniptable remove 192.168.1.0/24
    """
    console = Console()
    table = _load_table(ctx)

    try:
        removed = table.remove(token)
    except (CidrError, StorageError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if removed:
        console.print(f"[green]Removed[/green] {token}")
    else:
        console.print(f"[yellow]Not found:[/yellow] {token}")
        raise SystemExit(1)


@main.command()
@click.argument("fmt", metavar="FORMAT", type=click.Choice(sorted(EXPORT_FORMATS)))
@click.option("--output", "-o", type=click.Path(dir_okay=False),
              help="Write to a file; '.' uses the default file name")
@click.option("--sort/--no-sort", default=None, help="Order ranges by CIDR text")
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None, sort: bool | None):
    """Export stored ranges as CSV or Windows route commands.

    Examples:
        vpniptable export csv
        vpniptable export route --sort
        vpniptable export route -o .
    """
    console = Console(stderr=True)
    config = ctx.obj["config"]
    table = _load_table(ctx)

    if not len(table):
        console.print("[yellow]Warning:[/yellow] range list is empty")
        raise SystemExit(1)

    if sort is None:
        sort = config.sort_exports

    if not output:
        click.echo(table.export(fmt, sort=sort))
        return

    path = Path(config.export_filename(fmt)) if output == "." else Path(output)
    try:
        written = table.export_to_file(fmt, path, sort=sort)
    except StorageError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]Saved[/green] {written}")


if __name__ == "__main__":
    main()
