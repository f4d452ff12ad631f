from typing import Optional, Tuple


class RegistryError(Exception):
    """Base class for errors raised by the registry cache."""


class DuplicatePathError(RegistryError):
    """
    Two path records resolve to the same unordered chain pair.

    Raised by PathCache.build; no cache is produced when this happens.
    """

    def __init__(
        self,
        pair: Tuple[str, str],
        first_source: Optional[str],
        second_source: Optional[str],
    ):
        self.pair = pair
        self.first_source = first_source
        self.second_source = second_source
        super().__init__(
            f"Duplicate path for chains {pair[0]!r} and {pair[1]!r}: "
            f"{first_source or '<unknown>'} conflicts with {second_source or '<unknown>'}"
        )


class RegistryNotLoadedError(RegistryError):
    """The registry handle was read before any snapshot was loaded."""
