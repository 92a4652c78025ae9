"""
CIDR Range Module

Provides the IPv4 range model, parsing and validation, subset testing,
the smart merge that keeps a range list minimal, address extraction
from free text, and CSV / route-command export.
"""

from vpniptable.cidr.models import (
    AddressRange,
    CidrError,
    CidrErrorKind,
    InvalidAddressError,
    InvalidPrefixLengthError,
    InvalidCidrFormatError,
)
from vpniptable.cidr.core import (
    CidrService,
    ParseResult,
    parse_cidr,
    try_parse_cidr,
    is_valid_cidr,
    is_subset_of,
    merge_ranges,
    add_ranges,
    remove_range,
    sort_ranges,
    extract_addresses,
    export_csv,
    export_route_commands,
    export_ranges,
)

__all__ = [
    "AddressRange",
    "CidrError",
    "CidrErrorKind",
    "InvalidAddressError",
    "InvalidPrefixLengthError",
    "InvalidCidrFormatError",
    "CidrService",
    "ParseResult",
    "parse_cidr",
    "try_parse_cidr",
    "is_valid_cidr",
    "is_subset_of",
    "merge_ranges",
    "add_ranges",
    "remove_range",
    "sort_ranges",
    "extract_addresses",
    "export_csv",
    "export_route_commands",
    "export_ranges",
]
