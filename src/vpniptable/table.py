"""
Range table service.

Owns the current range list, applies the pure CIDR operations to it and
saves the result after every change.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from pathlib import Path
from typing import Iterable

from vpniptable.cidr.core import (
    add_ranges,
    export_ranges,
    extract_addresses,
    remove_range,
    sort_ranges,
)
from vpniptable.cidr.models import AddressRange
from vpniptable.storage.yaml_store import StorageError, YamlStorage

logger = logging.getLogger(__name__)


class NoAddressesFoundError(ValueError):
    """Raised when input text contains no valid addresses."""


class RangeTable:
    """
    A persisted, minimal list of IPv4 ranges.

    Usage:
        table = RangeTable(YamlStorage(path))
        table.load()
        table.add_text("route 10.0.0.0/8 and host 192.168.1.10")
        print(table.export("route"))
    """

    def __init__(self, storage: YamlStorage, ranges: Iterable[AddressRange] | None = None):
        self.storage = storage
        self._ranges: list[AddressRange] = list(ranges or [])

    @property
    def ranges(self) -> list[AddressRange]:
        """Snapshot of the current ranges, in insertion order."""
        return list(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)

    def sorted(self) -> list[AddressRange]:
        return sort_ranges(self._ranges)

    def load(self) -> list[AddressRange]:
        self._ranges = self.storage.load()
        return self.ranges

    def save(self) -> None:
        self.storage.save(self._ranges)

    def _replace(self, ranges: list[AddressRange]) -> None:
        # Keep the held list unchanged if the write fails
        self.storage.save(ranges)
        self._ranges = ranges

    def add_tokens(self, tokens: Iterable[str]) -> list[AddressRange]:
        """Merge CIDR tokens into the table. All or nothing."""
        tokens = list(tokens)
        updated = add_ranges(self._ranges, tokens)
        logger.info(f"Merged {len(tokens)} token(s): {len(self._ranges)} -> {len(updated)} range(s)")
        self._replace(updated)
        return self.ranges

    def add_text(self, text: str) -> list[str]:
        """Extract addresses from free text and merge them.

        Returns the extracted candidates.
        """
        candidates = extract_addresses(text)
        if not candidates:
            raise NoAddressesFoundError("No valid CIDR addresses found in text")
        self.add_tokens(candidates)
        return candidates

    def add_file(self, path: Path | str) -> list[str]:
        """Extract addresses from a text file and merge them."""
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        return self.add_text(text)

    def remove(self, token: str) -> bool:
        """Remove a range by its CIDR text. Returns whether anything changed."""
        updated = remove_range(self._ranges, token)
        if len(updated) == len(self._ranges):
            return False
        self._replace(updated)
        return True

    def export(self, fmt: str, sort: bool = False) -> str:
        ranges = self.sorted() if sort else self._ranges
        return export_ranges(ranges, fmt)

    def export_to_file(self, fmt: str, path: Path | str, sort: bool = False) -> Path:
        """Render an export and write it to a file."""
        out = Path(path).expanduser()
        content = self.export(fmt, sort=sort)
        try:
            out.write_text(content, encoding="utf-8", newline="")
        except OSError as e:
            raise StorageError(f"Cannot write {out}: {e}") from e
        logger.info(f"Exported {len(self._ranges)} range(s) as {fmt} to {out}")
        return out
