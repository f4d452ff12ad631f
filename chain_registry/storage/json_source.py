import json
import logging
from pathlib import Path
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from chain_registry.storage.source import RegistrySource
from chain_registry.domain.models import AssetList, ChainInfo, PathRecord
from chain_registry.domain.registry_utils import PATHS_DIR, path_file

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

CHAIN_FILE = "chain.json"
ASSETS_FILE = "assetlist.json"


class JsonRegistrySource(RegistrySource):
    """
    Reads a local checkout of the chain registry.

    Layout:
        <root>/<chain_name>/chain.json
        <root>/<chain_name>/assetlist.json
        <root>/_IBC/<chain_a>-<chain_b>.json
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def list_chains(self) -> List[str]:
        if not self._root.is_dir():
            logger.warning(f"Registry root does not exist: {self._root}")
            return []

        names = []
        for chain_dir in self._root.iterdir():
            if not chain_dir.is_dir():
                continue
            # Skip _IBC, _non-cosmos, .github and similar
            if chain_dir.name.startswith(("_", ".")):
                continue
            if not (chain_dir / CHAIN_FILE).is_file():
                continue
            names.append(chain_dir.name)
        return sorted(names)

    def list_paths(self) -> List[str]:
        return [p.stem for p in self._path_files()]

    def get_chain(self, name: str) -> Optional[ChainInfo]:
        chain = self._read_model(self._root / name / CHAIN_FILE, ChainInfo)
        if chain is not None and not chain.chain_name:
            # The folder name is the registry key; only fill it in when missing.
            chain = chain.model_copy(update={"chain_name": name})
        return chain

    def get_assets(self, name: str) -> Optional[AssetList]:
        assets = self._read_model(self._root / name / ASSETS_FILE, AssetList)
        if assets is not None and not assets.chain_name:
            assets = assets.model_copy(update={"chain_name": name})
        return assets

    def get_path(self, chain_a: str, chain_b: str) -> Optional[PathRecord]:
        # Path files order the chain names alphabetically
        return self._read_path(self._root / path_file(chain_a, chain_b))

    def load_paths(self) -> List[PathRecord]:
        """
        Every readable path document under _IBC, in file name order.

        Files are read directly rather than through get_path so that two
        documents describing the same pair are both returned.
        """
        records: List[PathRecord] = []
        for path_json in self._path_files():
            record = self._read_path(path_json)
            if record is not None:
                records.append(record)
        logger.debug(f"Loaded {len(records)} path documents from {self._root / PATHS_DIR}")
        return records

    def _path_files(self) -> List[Path]:
        paths_dir = self._root / PATHS_DIR
        if not paths_dir.is_dir():
            return []
        return sorted(
            p
            for p in paths_dir.iterdir()
            if p.is_file() and p.suffix == ".json" and not p.name.startswith("_")
        )

    def _read_path(self, path_json: Path) -> Optional[PathRecord]:
        record = self._read_model(path_json, PathRecord)
        if record is None:
            return None
        source = path_json.relative_to(self._root).as_posix()
        update = {"source": source}

        # Fall back to the "<chain_a>-<chain_b>" file name for missing chain names.
        parts = path_json.stem.split("-")
        if len(parts) == 2:
            if not record.chain_1.chain_name:
                update["chain_1"] = record.chain_1.model_copy(update={"chain_name": parts[0]})
            if not record.chain_2.chain_name:
                update["chain_2"] = record.chain_2.model_copy(update={"chain_name": parts[1]})
        return record.model_copy(update=update)

    def _read_model(self, path: Path, model: Type[ModelT]) -> Optional[ModelT]:
        if not path.is_file():
            logger.debug(f"Registry document not found: {path}")
            return None
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return model.model_validate(raw)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Skipping unreadable registry document {path}: {e}")
            return None
