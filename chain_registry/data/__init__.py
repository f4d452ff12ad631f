"""
Read-only registry state built from a RegistrySource.

This package is responsible for:
* Holding chain records and asset lists in flat stores keyed by chain name.
* Assembling stores and the path cache into an immutable snapshot.
* Swapping snapshots through a caller-owned handle on reload.
"""
