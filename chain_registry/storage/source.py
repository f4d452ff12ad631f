from abc import ABC, abstractmethod
from typing import List, Optional

from chain_registry.domain.models import AssetList, ChainInfo, PathRecord


class RegistrySource(ABC):
    """
    Abstract base class for reading registry documents.

    Implementations are read-only and tolerant: a missing or unreadable
    document yields None (or is left out of a listing) instead of an error.
    """

    @abstractmethod
    def list_chains(self) -> List[str]:
        """Names of all chains present in the registry."""
        pass

    @abstractmethod
    def list_paths(self) -> List[str]:
        """Path names in the form <chain_a>-<chain_b>."""
        pass

    @abstractmethod
    def get_chain(self, name: str) -> Optional[ChainInfo]:
        """The chain record for ``name``, if present."""
        pass

    @abstractmethod
    def get_assets(self, name: str) -> Optional[AssetList]:
        """The asset list for ``name``, if present."""
        pass

    @abstractmethod
    def get_path(self, chain_a: str, chain_b: str) -> Optional[PathRecord]:
        """The path between two chains, in either order, if present."""
        pass

    def load_paths(self) -> List[PathRecord]:
        """
        Every readable path record, in list_paths() order.

        Chain names may themselves contain "-", so each split point of a
        path name is tried until get_path returns the record with that name.
        """
        records: List[PathRecord] = []
        for name in self.list_paths():
            record = self._path_by_name(name)
            if record is not None:
                records.append(record)
        return records

    def _path_by_name(self, name: str) -> Optional[PathRecord]:
        for index, char in enumerate(name):
            if char != "-":
                continue
            record = self.get_path(name[:index], name[index + 1:])
            if record is not None and record.name == name:
                return record
        return None
