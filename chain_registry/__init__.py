"""
Read-only, in-memory access to a local chain registry checkout.

The path cache indexes IBC path records by participating chain and by
unordered chain pair; chain and asset records sit in flat stores.
"""
from chain_registry.data.registry import RegistryHandle, RegistrySnapshot, load_snapshot
from chain_registry.domain.errors import DuplicatePathError, RegistryError, RegistryNotLoadedError
from chain_registry.domain.models import (
    AssetList,
    ChainInfo,
    DuplicatePolicy,
    PathRecord,
    RegistryConfig,
)
from chain_registry.domain.path_cache import PathCache
from chain_registry.storage.json_source import JsonRegistrySource

__all__ = [
    "AssetList",
    "ChainInfo",
    "DuplicatePathError",
    "DuplicatePolicy",
    "JsonRegistrySource",
    "PathCache",
    "PathRecord",
    "RegistryConfig",
    "RegistryError",
    "RegistryHandle",
    "RegistryNotLoadedError",
    "RegistrySnapshot",
    "load_snapshot",
]
