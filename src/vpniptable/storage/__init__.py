"""
Storage Module

Persists range lists as YAML documents.
"""

from vpniptable.storage.yaml_store import (
    YamlStorage,
    StorageError,
    ADDRESSES_KEY,
)

__all__ = [
    "YamlStorage",
    "StorageError",
    "ADDRESSES_KEY",
]
