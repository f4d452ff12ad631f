"""
In-memory index over IBC path records.

A PathCache is built once from the complete set of path records and is
read-only afterwards, so it can be shared between any number of readers.
Refreshing means building a new cache and swapping the reference (see
chain_registry.data.registry.RegistryHandle).
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from chain_registry.domain.errors import DuplicatePathError
from chain_registry.domain.models import DuplicatePolicy, PathRecord
from chain_registry.domain.registry_utils import pair_key

logger = logging.getLogger(__name__)

PathPredicate = Callable[[PathRecord], bool]


class PathCache:
    """
    Path records indexed by participating chain and by unordered chain pair.

    Query methods never mutate the cache and never raise for a missing
    match; they return an empty tuple or None instead.
    """

    def __init__(
        self,
        records: Iterable[PathRecord] = (),
        policy: DuplicatePolicy = DuplicatePolicy.ERROR,
    ):
        self._records: Tuple[PathRecord, ...] = _resolve_duplicates(records, policy)

        by_chain: Dict[str, List[PathRecord]] = {}
        by_pair: Dict[Tuple[str, str], PathRecord] = {}
        for record in self._records:
            by_pair[record.pair_key] = record
            # dict.fromkeys keeps a self-referencing path from being listed twice
            for chain_name in dict.fromkeys(record.chain_names):
                by_chain.setdefault(chain_name, []).append(record)

        self._by_chain: Dict[str, Tuple[PathRecord, ...]] = {
            chain_name: tuple(bucket) for chain_name, bucket in by_chain.items()
        }
        self._by_pair = by_pair

    @classmethod
    def build(
        cls,
        records: Iterable[PathRecord],
        policy: DuplicatePolicy = DuplicatePolicy.ERROR,
    ) -> "PathCache":
        """
        Build a cache from already deserialized path records.

        Raises DuplicatePathError when two records name the same unordered
        chain pair and ``policy`` is DuplicatePolicy.ERROR.
        """
        cache = cls(records, policy)
        logger.debug(
            f"Built path cache: {len(cache)} paths across {len(cache._by_chain)} chains"
        )
        return cache

    def by_chain(self, chain_name: str) -> Tuple[PathRecord, ...]:
        """Every path in which ``chain_name`` is either side, in insertion order."""
        return self._by_chain.get(chain_name, ())

    def by_pair(self, chain_a: str, chain_b: str) -> Optional[PathRecord]:
        """The path connecting the two chains, regardless of argument order."""
        return self._by_pair.get(pair_key(chain_a, chain_b))

    def filter(self, predicate: PathPredicate) -> Tuple[PathRecord, ...]:
        """Every path for which ``predicate`` holds, in insertion order."""
        return tuple(record for record in self._records if predicate(record))

    def all(self) -> Tuple[PathRecord, ...]:
        return self._records

    def chains(self) -> List[str]:
        """Chains participating in at least one path, in first-seen order."""
        return list(self._by_chain)

    def names(self) -> List[str]:
        """Canonical ``<chain_a>-<chain_b>`` names of all paths."""
        return [record.name for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PathRecord]:
        return iter(self._records)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        return self.by_pair(pair[0], pair[1]) is not None

    def __repr__(self) -> str:
        return f"PathCache(paths={len(self._records)}, chains={len(self._by_chain)})"


def _resolve_duplicates(
    records: Iterable[PathRecord], policy: DuplicatePolicy
) -> Tuple[PathRecord, ...]:
    """
    Apply the duplicate policy and return the surviving records in input order.
    """
    survivors: List[Optional[PathRecord]] = []
    positions: Dict[Tuple[str, str], int] = {}

    for record in records:
        key = record.pair_key
        if key in positions:
            existing = survivors[positions[key]]
            if policy == DuplicatePolicy.ERROR:
                raise DuplicatePathError(key, existing.describe(), record.describe())
            if policy == DuplicatePolicy.FIRST_WINS:
                logger.warning(
                    f"Skipping duplicate path {record.describe()}: "
                    f"{existing.describe()} already covers {key[0]}-{key[1]}"
                )
                continue
            logger.warning(
                f"Replacing path {existing.describe()} with {record.describe()} "
                f"for {key[0]}-{key[1]}"
            )
            survivors[positions[key]] = None

        positions[key] = len(survivors)
        survivors.append(record)

    return tuple(record for record in survivors if record is not None)
