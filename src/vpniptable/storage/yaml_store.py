"""
YAML persistence for range lists.

The document is a single mapping with an ``addresses`` key holding the
canonical CIDR strings in order:

    addresses:
    - 10.0.0.0/8
    - 192.168.1.0/24

Loading never fails on bad data. Unreadable documents load as an empty
list and invalid entries are skipped, both logged and tracked.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from pathlib import Path
from typing import Iterable

import yaml

from vpniptable.cidr.core import try_parse_cidr
from vpniptable.cidr.models import AddressRange
from vpniptable.logging_config import track_error

logger = logging.getLogger(__name__)

ADDRESSES_KEY = "addresses"


class StorageError(Exception):
    """Raised when the range list cannot be written."""


class YamlStorage:
    """
    Reads and writes a range list as a YAML document.

    Usage:
        store = YamlStorage("~/.config/vpniptable/addresses.yaml")
        ranges = store.load()
        store.save(ranges)
    """

    def __init__(self, path: Path | str):
        if not str(path).strip():
            raise ValueError("File path cannot be empty")
        self.path = Path(path).expanduser()

    def save(self, ranges: Iterable[AddressRange]) -> None:
        """Write ranges as canonical strings, preserving order."""
        self.save_strings([str(r) for r in ranges])

    def save_strings(self, addresses: list[str]) -> None:
        document = yaml.safe_dump({ADDRESSES_KEY: list(addresses)}, default_flow_style=False)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(document, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.info(f"Saved {len(addresses)} range(s) to {self.path}")

    def load_strings(self) -> list[str]:
        """Read the valid canonical strings from the document."""
        return [str(r) for r in self.load()]

    def load(self) -> list[AddressRange]:
        """Read ranges, skipping anything that does not parse."""
        if not self.path.exists():
            logger.debug(f"No stored ranges at {self.path}")
            return []

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            track_error("storage_unreadable", f"Cannot read {self.path}", e)
            return []

        if not text.strip():
            return []

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            track_error("storage_corrupt", f"Invalid YAML in {self.path}", e)
            return []

        if not isinstance(data, dict) or ADDRESSES_KEY not in data:
            track_error("storage_corrupt", f"No '{ADDRESSES_KEY}' mapping in {self.path}")
            return []

        entries = data[ADDRESSES_KEY]
        if entries is None:
            return []
        if not isinstance(entries, list):
            track_error("storage_corrupt", f"'{ADDRESSES_KEY}' in {self.path} is not a list")
            return []

        ranges = []
        for entry in entries:
            result = try_parse_cidr(entry) if isinstance(entry, str) else None
            if result is None or not result.ok:
                track_error(
                    "storage_invalid_entry",
                    f"Skipping invalid entry {entry!r}",
                    context={"path": str(self.path)},
                )
                continue
            ranges.append(result.range)

        logger.info(f"Loaded {len(ranges)} range(s) from {self.path}")
        return ranges
