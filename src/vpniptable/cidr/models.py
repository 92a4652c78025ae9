"""
Data models for IPv4 CIDR ranges.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass
from enum import Enum

from netaddr import IPAddress


MAX_PREFIX_LENGTH = 32
ALL_ONES = 0xFFFFFFFF


# =============================================================================
# Errors
# =============================================================================

class CidrErrorKind(str, Enum):
    """Classification of CIDR parse failures."""
    INVALID_ADDRESS = "invalid_address"
    INVALID_PREFIX_LENGTH = "invalid_prefix_length"
    INVALID_CIDR_FORMAT = "invalid_cidr_format"


class CidrError(ValueError):
    """Base error for malformed CIDR input."""

    kind: CidrErrorKind = CidrErrorKind.INVALID_CIDR_FORMAT

    def __init__(self, message: str, token: str | None = None):
        super().__init__(message)
        self.token = token


class InvalidAddressError(CidrError):
    """Address portion is not a dotted-decimal IPv4 address."""
    kind = CidrErrorKind.INVALID_ADDRESS


class InvalidPrefixLengthError(CidrError):
    """Prefix length is missing, non-numeric or outside 0-32."""
    kind = CidrErrorKind.INVALID_PREFIX_LENGTH


class InvalidCidrFormatError(CidrError):
    """Token is structurally malformed (empty, too many separators)."""
    kind = CidrErrorKind.INVALID_CIDR_FORMAT


# =============================================================================
# Address range
# =============================================================================

def format_ipv4(value: int) -> str:
    """Render a 32-bit value as dotted decimal."""
    return str(IPAddress(value, 4))


@dataclass(frozen=True)
class AddressRange:
    """A single IPv4 range in CIDR notation.

    The address is stored exactly as given, host bits included, so
    192.168.1.5/24 and 192.168.1.0/24 are different ranges even though
    they share a network.
    """
    address: int
    prefix_length: int

    def __post_init__(self):
        if isinstance(self.prefix_length, bool) or not isinstance(self.prefix_length, int):
            raise InvalidPrefixLengthError(
                f"Prefix length must be an integer, got {self.prefix_length!r}"
            )
        if not 0 <= self.prefix_length <= MAX_PREFIX_LENGTH:
            raise InvalidPrefixLengthError(
                f"Prefix length must be between 0 and 32, got {self.prefix_length}"
            )
        if not 0 <= self.address <= ALL_ONES:
            raise InvalidAddressError(f"Address {self.address} is outside the IPv4 space")

    def subnet_mask(self) -> int:
        """Mask with the top prefix_length bits set."""
        return (ALL_ONES << (MAX_PREFIX_LENGTH - self.prefix_length)) & ALL_ONES

    def network_address(self) -> int:
        """Stored address with the host bits cleared."""
        return self.address & self.subnet_mask()

    @property
    def netmask(self) -> str:
        return format_ipv4(self.subnet_mask())

    @property
    def network(self) -> str:
        return format_ipv4(self.network_address())

    @property
    def ip(self) -> str:
        return format_ipv4(self.address)

    @property
    def num_addresses(self) -> int:
        return 1 << (MAX_PREFIX_LENGTH - self.prefix_length)

    def to_text(self) -> str:
        """Canonical CIDR form, e.g. "192.168.1.0/24"."""
        return f"{self.ip}/{self.prefix_length}"

    def __str__(self) -> str:
        return self.to_text()
