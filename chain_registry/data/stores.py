"""
Flat, read-only stores of chain records and asset lists keyed by chain name.
"""
from __future__ import annotations

from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from chain_registry.domain.models import AssetList, ChainInfo

RecordT = TypeVar("RecordT", ChainInfo, AssetList)


class _ChainKeyedStore(Generic[RecordT]):
    def __init__(self, records: Iterable[RecordT] = ()):
        self._records: Dict[str, RecordT] = {}
        for record in records:
            self._records[record.chain_name] = record

    def get(self, chain_name: str) -> Optional[RecordT]:
        return self._records.get(chain_name)

    def get_all(self) -> List[RecordT]:
        return list(self._records.values())

    def names(self) -> List[str]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, chain_name: object) -> bool:
        return chain_name in self._records


class ChainStore(_ChainKeyedStore[ChainInfo]):
    """Chain records from <chain_name>/chain.json."""

    def by_chain_id(self, chain_id: str) -> Optional[ChainInfo]:
        """Look up a chain by its network chain id, e.g. "cosmoshub-4"."""
        for chain in self._records.values():
            if chain.chain_id == chain_id:
                return chain
        return None


class AssetStore(_ChainKeyedStore[AssetList]):
    """Asset lists from <chain_name>/assetlist.json."""
