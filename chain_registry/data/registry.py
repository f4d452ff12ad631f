from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from chain_registry.data.stores import AssetStore, ChainStore
from chain_registry.domain.errors import RegistryError, RegistryNotLoadedError
from chain_registry.domain.models import RegistryConfig
from chain_registry.domain.path_cache import PathCache
from chain_registry.storage.source import RegistrySource

logger = logging.getLogger(__name__)

# Failures that leave the previous snapshot in place; an unreadable registry
# directory surfaces as OSError.
RELOAD_ERRORS = (RegistryError, OSError)


@dataclass(frozen=True)
class RegistrySnapshot:
    """
    Everything read from the registry at one point in time.

    Never modified after creation; a reload produces a new snapshot.
    """

    chains: ChainStore = field(default_factory=ChainStore)
    assets: AssetStore = field(default_factory=AssetStore)
    paths: PathCache = field(default_factory=PathCache)
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def load_snapshot(source: RegistrySource, config: Optional[RegistryConfig] = None) -> RegistrySnapshot:
    """
    Read all chain, asset and path documents and index them.

    Raises DuplicatePathError (when the duplicate policy is "error") before
    any snapshot is produced.
    """
    config = config or RegistryConfig()

    chain_names = source.list_chains()
    chains = ChainStore(
        chain for chain in (source.get_chain(name) for name in chain_names) if chain is not None
    )
    assets = AssetStore(
        asset_list
        for asset_list in (source.get_assets(name) for name in chain_names)
        if asset_list is not None
    )
    paths = PathCache.build(source.load_paths(), config.duplicate_policy)

    snapshot = RegistrySnapshot(chains=chains, assets=assets, paths=paths)
    logger.info(
        f"Loaded registry snapshot: {len(chains)} chains, "
        f"{len(assets)} asset lists, {len(paths)} paths"
    )
    return snapshot


class RegistryHandle:
    """
    Caller-owned reference to the current registry snapshot.

    Readers call current() without locking. reload() builds a complete new
    snapshot first and only then swaps the reference, so a failed reload
    leaves the previous snapshot in place.
    """

    def __init__(
        self,
        source: RegistrySource,
        config: Optional[RegistryConfig] = None,
        snapshot: Optional[RegistrySnapshot] = None,
    ):
        self._source = source
        self._config = config or RegistryConfig()
        self._snapshot = snapshot
        self._reload_lock = threading.Lock()

    @property
    def source(self) -> RegistrySource:
        return self._source

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def current(self) -> RegistrySnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise RegistryNotLoadedError("Registry has not been loaded yet")
        return snapshot

    def swap(self, snapshot: RegistrySnapshot) -> Optional[RegistrySnapshot]:
        """Replace the current snapshot and return the previous one."""
        previous, self._snapshot = self._snapshot, snapshot
        return previous

    def reload(self) -> RegistrySnapshot:
        with self._reload_lock:
            try:
                snapshot = load_snapshot(self._source, self._config)
            except RELOAD_ERRORS as e:
                logger.error(f"Registry reload failed, keeping previous snapshot: {e}", exc_info=True)
                raise
            self.swap(snapshot)
        return snapshot


async def periodic_reload(handle: RegistryHandle, interval_seconds: Optional[float] = None) -> None:
    """
    Background task that rebuilds the snapshot every refresh interval.
    """
    while True:
        await asyncio.sleep(interval_seconds or handle.config.refresh_interval_seconds)
        try:
            await asyncio.to_thread(handle.reload)
        except RELOAD_ERRORS:
            # Already logged by reload(); keep serving the previous snapshot.
            continue
