import asyncio
import json

import pytest

from chain_registry.data.registry import RegistryHandle, load_snapshot, periodic_reload
from chain_registry.data.stores import AssetStore, ChainStore
from chain_registry.domain.errors import DuplicatePathError, RegistryNotLoadedError
from chain_registry.domain.models import ChainInfo, DuplicatePolicy, RegistryConfig
from chain_registry.domain.registry_utils import pair_key
from chain_registry.storage.json_source import JsonRegistrySource
from chain_registry.storage.source import RegistrySource


def _add_duplicate(registry_root):
    (registry_root / "_IBC" / "osmosis-cosmoshub.json").write_text(
        json.dumps({"chain_1": {"chain_name": "osmosis"}, "chain_2": {"chain_name": "cosmoshub"}}),
        encoding="utf-8",
    )


def test_load_snapshot(registry_root):
    snapshot = load_snapshot(JsonRegistrySource(registry_root))

    assert snapshot.chains.names() == ["cosmoshub", "juno", "osmosis"]
    assert snapshot.chains.get("juno").bech32_prefix == "juno"
    assert snapshot.chains.by_chain_id("osmosis-1").chain_name == "osmosis"
    assert snapshot.assets.names() == ["cosmoshub"]
    assert [r.name for r in snapshot.paths.by_chain("osmosis")] == ["cosmoshub-osmosis", "juno-osmosis"]
    assert snapshot.paths.by_pair("osmosis", "juno").source == "_IBC/juno-osmosis.json"


def test_load_snapshot_duplicate_policy(registry_root):
    _add_duplicate(registry_root)
    source = JsonRegistrySource(registry_root)

    with pytest.raises(DuplicatePathError) as exc_info:
        load_snapshot(source)
    assert exc_info.value.first_source == "_IBC/cosmoshub-osmosis.json"
    assert exc_info.value.second_source == "_IBC/osmosis-cosmoshub.json"

    snapshot = load_snapshot(source, RegistryConfig(duplicate_policy=DuplicatePolicy.LAST_WINS))
    assert snapshot.paths.by_pair("cosmoshub", "osmosis").source == "_IBC/osmosis-cosmoshub.json"
    assert len(snapshot.paths) == 2


def test_handle_not_loaded(registry_root):
    handle = RegistryHandle(JsonRegistrySource(registry_root))

    assert not handle.is_loaded
    with pytest.raises(RegistryNotLoadedError):
        handle.current()


def test_reload_swaps_snapshot(registry_root):
    handle = RegistryHandle(JsonRegistrySource(registry_root))
    first = handle.reload()
    held_paths = first.paths.all()

    (registry_root / "_IBC" / "cosmoshub-juno.json").write_text(
        json.dumps({"chain_1": {"chain_name": "cosmoshub"}, "chain_2": {"chain_name": "juno"}}),
        encoding="utf-8",
    )
    second = handle.reload()

    assert handle.current() is second
    assert second is not first
    assert len(second.paths) == 3
    # Readers holding the old snapshot are unaffected
    assert len(first.paths) == 2
    assert first.paths.all() == held_paths


def test_failed_reload_keeps_previous_snapshot(registry_root):
    handle = RegistryHandle(JsonRegistrySource(registry_root))
    first = handle.reload()

    _add_duplicate(registry_root)
    with pytest.raises(DuplicatePathError):
        handle.reload()

    assert handle.current() is first


def test_swap_returns_previous(registry_root):
    handle = RegistryHandle(JsonRegistrySource(registry_root))
    snapshot = load_snapshot(handle.source)

    assert handle.swap(snapshot) is None
    replacement = load_snapshot(handle.source)
    assert handle.swap(replacement) is snapshot
    assert handle.current() is replacement


def test_stores_keyed_by_chain_name():
    chains = ChainStore([ChainInfo(chain_name="a", chain_id="a-1"), ChainInfo(chain_name="b")])

    assert "a" in chains
    assert len(chains) == 2
    assert chains.get("c") is None
    assert chains.by_chain_id("missing") is None
    assert [c.chain_name for c in chains.get_all()] == ["a", "b"]
    assert AssetStore().get_all() == []


def test_periodic_reload_survives_failures(registry_root):
    handle = RegistryHandle(JsonRegistrySource(registry_root))
    first = handle.reload()
    _add_duplicate(registry_root)

    async def run():
        task = asyncio.create_task(periodic_reload(handle, interval_seconds=0.01))
        await asyncio.sleep(0.1)
        assert not task.done()
        task.cancel()

    asyncio.run(run())
    assert handle.current() is first


class InMemorySource(RegistrySource):
    def __init__(self, chains, paths):
        self._chains = {c.chain_name: c for c in chains}
        self._paths = {p.pair_key: p for p in paths}

    def list_chains(self):
        return list(self._chains)

    def list_paths(self):
        return [f"{a}-{b}" for a, b in self._paths]

    def get_chain(self, name):
        return self._chains.get(name)

    def get_assets(self, name):
        return None

    def get_path(self, chain_a, chain_b):
        return self._paths.get(pair_key(chain_a, chain_b))


def test_load_snapshot_from_custom_source(path_factory):
    paths = [path_factory("osmosis", "cosmoshub", "live"), path_factory("juno", "osmosis", "live")]
    source = InMemorySource([ChainInfo(chain_name="osmosis")], paths)

    snapshot = load_snapshot(source)

    assert snapshot.paths.all() == tuple(paths)
    assert snapshot.chains.names() == ["osmosis"]
    assert len(snapshot.assets) == 0


class UnreadableSource(JsonRegistrySource):
    """Registry checkout that stops being readable after the first load."""

    readable = True

    def list_chains(self):
        if not self.readable:
            raise PermissionError("registry directory is not readable")
        return super().list_chains()


def test_reload_keeps_snapshot_when_registry_unreadable(registry_root, caplog):
    source = UnreadableSource(registry_root)
    handle = RegistryHandle(source)
    first = handle.reload()
    source.readable = False

    with pytest.raises(PermissionError):
        handle.reload()

    assert handle.current() is first
    assert "Registry reload failed" in caplog.text


def test_periodic_reload_survives_unreadable_registry(registry_root, caplog):
    source = UnreadableSource(registry_root)
    handle = RegistryHandle(source)
    first = handle.reload()
    source.readable = False

    async def run():
        task = asyncio.create_task(periodic_reload(handle, interval_seconds=0.01))
        await asyncio.sleep(0.1)
        assert not task.done()
        task.cancel()

    asyncio.run(run())
    assert handle.current() is first
    assert "registry directory is not readable" in caplog.text


def test_load_snapshot_with_hyphenated_chain_names(path_factory):
    paths = [path_factory("cosmos-hub", "osmosis", "live"), path_factory("juno", "terra-2", "live")]
    source = InMemorySource([], paths)

    assert source.list_paths() == ["cosmos-hub-osmosis", "juno-terra-2"]
    snapshot = load_snapshot(source)

    assert snapshot.paths.all() == tuple(paths)
    assert snapshot.paths.by_pair("osmosis", "cosmos-hub") is paths[0]
