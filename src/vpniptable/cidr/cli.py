"""
CIDR CLI commands.

Stateless helpers that never touch the stored range list.
"""

import sys

import click
from rich.console import Console
from rich.table import Table

from vpniptable.cidr.core import (
    extract_addresses,
    is_subset_of,
    parse_cidr,
    try_parse_cidr,
)
from vpniptable.cidr.models import CidrError


@click.group()
def cidr():
    """Parse, validate and compare IPv4 CIDR ranges."""
    pass


@cidr.command()
@click.argument("tokens", nargs=-1, required=True)
def check(tokens: tuple[str, ...]):
    """Validate addresses or CIDRs and show their network and mask.

    Exits with status 1 if any token is invalid.

    Examples:
        vpniptable cidr check 192.168.1.0/24 10.0.0.1
        vpniptable cidr check 192.168.1.5/24
    """
    console = Console()

    table = Table(title="CIDR Check", box=None)
    table.add_column("Input", style="white")
    table.add_column("Range", style="cyan")
    table.add_column("Network", style="white")
    table.add_column("Netmask", style="white")
    table.add_column("Status", style="white")

    failed = False
    for token in tokens:
        result = try_parse_cidr(token)
        if not result.ok:
            failed = True
            # undecodable argv bytes arrive as surrogates
            shown = token.encode("utf-8", "backslashreplace").decode("utf-8")
            table.add_row(shown, "", "", "", f"[red]{result.error}[/red]")
            continue

        r = result.range
        status = "[green]Valid[/green]"
        if r.address != r.network_address():
            status = "[yellow]Host bits set[/yellow]"
        table.add_row(token, str(r), r.network, r.netmask, status)

    console.print(table)

    if failed:
        raise SystemExit(1)


@cidr.command()
@click.argument("reference")
@click.argument("candidate")
def contains(reference: str, candidate: str):
    """Check if REFERENCE fully covers CANDIDATE.

    Examples:
        vpniptable cidr contains 192.168.0.0/16 192.168.1.0/24
        vpniptable cidr contains 10.0.0.0/8 10.1.2.3
    """
    console = Console()

    try:
        result = is_subset_of(parse_cidr(candidate), parse_cidr(reference))
    except CidrError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if result:
        console.print(f"[green]Yes[/green] - {candidate} is within {reference}")
    else:
        console.print(f"[red]No[/red] - {candidate} is not within {reference}")


@cidr.command()
@click.argument("text", required=False)
@click.option("--file", "-f", "path", type=click.Path(exists=True, dir_okay=False),
              help="Read text from a file instead")
def extract(text: str | None, path: str | None):
    """Find IPv4 addresses and CIDRs in free-form text.

    Reads stdin when neither TEXT nor --file is given.

    Examples:
        vpniptable cidr extract "gw 10.0.0.1, lan 192.168.1.0/24"
        vpniptable cidr extract -f firewall.log
    """
    if path:
        with open(path, encoding="utf-8", errors="replace") as f:
            text = f.read()
    elif text is None:
        text = sys.stdin.read()

    for address in extract_addresses(text):
        click.echo(address)
