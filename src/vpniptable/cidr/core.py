"""
Core CIDR range algebra.

Parsing, validation, containment and the smart merge that keeps a range
list minimal, plus the CSV and route-command renderers.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from netaddr import AddrFormatError, IPAddress, INET_PTON, valid_ipv4

from vpniptable.cidr.models import (
    AddressRange,
    CidrError,
    CidrErrorKind,
    InvalidAddressError,
    InvalidPrefixLengthError,
    InvalidCidrFormatError,
    MAX_PREFIX_LENGTH,
)

logger = logging.getLogger(__name__)


# Dotted quad with each octet bounded to 0-255, optional /NN suffix
ADDRESS_PATTERN = re.compile(
    r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)(?:/\d{1,2})?\b"
)

# No sign, whitespace or leading zeros so the text round-trips
PREFIX_PATTERN = re.compile(r"0|[1-9][0-9]?")

ROUTE_GATEWAY = "0.0.0.0"


@dataclass
class ParseResult:
    """Outcome of parsing a single token."""
    token: str | None
    range: AddressRange | None = None
    error_kind: CidrErrorKind | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.range is not None


# =============================================================================
# Parsing
# =============================================================================

def _parse_address(text: str, token: str) -> int:
    # netaddr raises rather than returning False for "", NUL bytes and surrogates
    try:
        if text and valid_ipv4(text, flags=INET_PTON):
            return int(IPAddress(text, 4, flags=INET_PTON))
    except (AddrFormatError, ValueError, UnicodeError) as e:
        raise InvalidAddressError(f"Invalid IP address: {text!r}", token=token) from e
    raise InvalidAddressError(f"Invalid IP address: {text!r}", token=token)


def parse_cidr(token: str) -> AddressRange:
    """Parse "a.b.c.d/nn" or a bare "a.b.c.d" (treated as /32).

    Raises:
        InvalidCidrFormatError: empty token or more than one "/"
        InvalidAddressError: address part is not a dotted-quad IPv4 address
        InvalidPrefixLengthError: prefix is not an integer in 0-32
    """
    if token is None or not token.strip():
        raise InvalidCidrFormatError("CIDR string cannot be empty", token=token)

    trimmed = token.strip()
    parts = trimmed.split("/")

    if len(parts) == 1:
        return AddressRange(_parse_address(trimmed, token), MAX_PREFIX_LENGTH)

    if len(parts) != 2:
        raise InvalidCidrFormatError(
            f"Invalid CIDR format: {token!r}. Expected x.x.x.x/prefix or x.x.x.x",
            token=token,
        )

    address = _parse_address(parts[0], token)

    prefix = parts[1]
    if not PREFIX_PATTERN.fullmatch(prefix) or int(prefix) > MAX_PREFIX_LENGTH:
        raise InvalidPrefixLengthError(
            f"Invalid prefix length: {prefix!r}. Must be between 0 and 32",
            token=token,
        )

    return AddressRange(address, int(prefix))


def try_parse_cidr(token: str) -> ParseResult:
    """Parse a token without raising on malformed input."""
    try:
        return ParseResult(token=token, range=parse_cidr(token))
    except CidrError as e:
        return ParseResult(token=token, error_kind=e.kind, error=str(e))


def is_valid_cidr(token: str) -> bool:
    """Check whether a token parses as an IPv4 address or CIDR."""
    return try_parse_cidr(token).ok


# =============================================================================
# Containment and merge
# =============================================================================

def is_subset_of(candidate: AddressRange, reference: AddressRange) -> bool:
    """Check whether candidate lies entirely within reference."""
    # A shorter prefix covers more addresses than the reference
    if candidate.prefix_length < reference.prefix_length:
        return False
    return (candidate.network_address() & reference.subnet_mask()) == reference.network_address()


def merge_ranges(existing: Sequence[AddressRange], incoming: AddressRange) -> list[AddressRange]:
    """Add a range, dropping everything it covers.

    Ranges covered by incoming are removed first. Incoming is then only
    appended if no remaining range already covers it. The input sequence
    is never modified.
    """
    result = [r for r in existing if not is_subset_of(r, incoming)]

    removed = len(existing) - len(result)
    if removed:
        logger.debug(f"{incoming} supersedes {removed} existing range(s)")

    for r in result:
        if is_subset_of(incoming, r):
            logger.debug(f"{incoming} already covered by {r}, skipping")
            return result

    result.append(incoming)
    return result


def add_ranges(existing: Sequence[AddressRange], tokens: Iterable[str]) -> list[AddressRange]:
    """Parse tokens and merge them in order.

    The first invalid token aborts the whole call; nothing is applied.
    """
    current = list(existing)
    for token in tokens:
        current = merge_ranges(current, parse_cidr(token))
    return current


def remove_range(existing: Sequence[AddressRange], token: str) -> list[AddressRange]:
    """Drop every range whose canonical form equals the parsed token."""
    target = parse_cidr(token)
    return [r for r in existing if r != target]


def sort_ranges(ranges: Iterable[AddressRange]) -> list[AddressRange]:
    """Order ranges by canonical text."""
    return sorted(ranges, key=str)


# =============================================================================
# Extraction
# =============================================================================

def extract_addresses(text: str) -> list[str]:
    """Find IPv4 addresses and CIDRs in free-form text.

    Matches failing validation are dropped. Result is deduplicated in
    first-seen order.
    """
    if not text or not text.strip():
        return []

    found: dict[str, None] = {}
    for match in ADDRESS_PATTERN.finditer(text):
        candidate = match.group(0)
        if candidate not in found and is_valid_cidr(candidate):
            found[candidate] = None
    return list(found)


# =============================================================================
# Export
# =============================================================================

def export_csv(ranges: Iterable[AddressRange]) -> str:
    """Comma-joined canonical forms, in the order given."""
    return ",".join(str(r) for r in ranges)


def format_route_command(r: AddressRange) -> str:
    return f"route ADD {r.network} MASK {r.netmask} {ROUTE_GATEWAY}"


def export_route_commands(ranges: Iterable[AddressRange]) -> str:
    """Windows "route ADD" commands, one per line."""
    return os.linesep.join(format_route_command(r) for r in ranges)


EXPORT_FORMATS = {
    "csv": export_csv,
    "route": export_route_commands,
}


def export_ranges(ranges: Iterable[AddressRange], fmt: str) -> str:
    """Render ranges in a named export format."""
    try:
        renderer = EXPORT_FORMATS[fmt]
    except KeyError:
        raise ValueError(f"Unknown export format: {fmt}. Choose from {', '.join(EXPORT_FORMATS)}")
    return renderer(ranges)


class CidrService:
    """Operations on CIDR range lists."""

    parse = staticmethod(parse_cidr)
    try_parse = staticmethod(try_parse_cidr)
    is_valid = staticmethod(is_valid_cidr)
    is_subset_of = staticmethod(is_subset_of)
    merge = staticmethod(merge_ranges)
    add_many = staticmethod(add_ranges)
    remove = staticmethod(remove_range)
    extract = staticmethod(extract_addresses)
    export_csv = staticmethod(export_csv)
    export_route_commands = staticmethod(export_route_commands)
