"""Pytest configuration and shared fixtures for the chain registry cache."""
import json
from pathlib import Path

import pytest

from chain_registry.domain.models import PathRecord


def make_path(chain_a, chain_b, *statuses, source=None, dex="", preferred=False, port="transfer"):
    """Build a path record with one channel per status."""
    channels = [
        {
            "chain_1": {"channel_id": f"channel-{i}", "port_id": port},
            "chain_2": {"channel_id": f"channel-{i + 100}", "port_id": port},
            "ordering": "unordered",
            "version": "ics20-1",
            "tags": {"status": status, "dex": dex, "preferred": preferred},
        }
        for i, status in enumerate(statuses)
    ]
    record = PathRecord.model_validate(
        {
            "chain_1": {"chain_name": chain_a, "client_id": "07-tendermint-0", "connection_id": "connection-0"},
            "chain_2": {"chain_name": chain_b, "client_id": "07-tendermint-1", "connection_id": "connection-1"},
            "channels": channels,
        }
    )
    if source is not None:
        record = record.model_copy(update={"source": source})
    return record


@pytest.fixture
def path_factory():
    return make_path


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def registry_root(tmp_path):
    """
    A miniature registry checkout:
    cosmoshub, osmosis and juno chains, two IBC paths.
    """
    root = tmp_path / "chain-registry"

    for name, chain_id, prefix in [
        ("cosmoshub", "cosmoshub-4", "cosmos"),
        ("osmosis", "osmosis-1", "osmo"),
        ("juno", "juno-1", "juno"),
    ]:
        _write_json(
            root / name / "chain.json",
            {
                "$schema": "../chain.schema.json",
                "chain_name": name,
                "status": "live",
                "network_type": "mainnet",
                "chain_id": chain_id,
                "bech32_prefix": prefix,
                "slip44": 118,
                "apis": {"rpc": [{"address": f"https://rpc.{name}.example", "provider": "example"}]},
                "some_future_field": {"nested": True},
            },
        )

    _write_json(
        root / "cosmoshub" / "assetlist.json",
        {
            "chain_name": "cosmoshub",
            "assets": [
                {
                    "base": "uatom",
                    "display": "atom",
                    "symbol": "ATOM",
                    "denom_units": [{"denom": "uatom", "exponent": 0}, {"denom": "atom", "exponent": 6}],
                    "logo_URIs": {"png": "https://example/atom.png"},
                    "coingecko_id": "cosmos",
                }
            ],
        },
    )

    _write_json(
        root / "_IBC" / "cosmoshub-osmosis.json",
        {
            "$schema": "../ibc_data.schema.json",
            "chain_1": {"chain_name": "cosmoshub", "client_id": "07-tendermint-259", "connection_id": "connection-257"},
            "chain_2": {"chain_name": "osmosis", "client_id": "07-tendermint-1", "connection_id": "connection-1"},
            "channels": [
                {
                    "chain_1": {"channel_id": "channel-141", "port_id": "transfer"},
                    "chain_2": {"channel_id": "channel-0", "port_id": "transfer"},
                    "ordering": "unordered",
                    "version": "ics20-1",
                    "tags": {"status": "live", "preferred": True, "dex": "osmosis"},
                }
            ],
        },
    )
    _write_json(
        root / "_IBC" / "juno-osmosis.json",
        {
            "chain_1": {"chain_name": "juno", "client_id": "07-tendermint-0", "connection_id": "connection-0"},
            "chain_2": {"chain_name": "osmosis", "client_id": "07-tendermint-1457", "connection_id": "connection-1142"},
            "channels": [
                {
                    "chain_1": {"channel_id": "channel-0", "port_id": "transfer"},
                    "chain_2": {"channel_id": "channel-42", "port_id": "transfer"},
                    "tags": {"status": "killed"},
                }
            ],
        },
    )

    # Not part of the registry content
    (root / ".github").mkdir()
    (root / "_non-cosmos").mkdir()
    _write_json(root / "_IBC" / "_template.json", {"chain_1": {}, "chain_2": {}})
    (root / "README.md").write_text("registry", encoding="utf-8")

    return root
