"""
Region storage backends.

- RegionStore: abstract interface used by the batch core
- InMemoryRegionStore: dict-backed store
- SQLiteRegionStore / SQLiteIdentityDirectory: persistent regions and players
"""

from region_batch.storage.memory_store import InMemoryRegionStore
from region_batch.storage.region_store import RegionStore, build_region_store
from region_batch.storage.sqlite_store import SQLiteIdentityDirectory, SQLiteRegionStore

__all__ = [
    "InMemoryRegionStore",
    "RegionStore",
    "SQLiteIdentityDirectory",
    "SQLiteRegionStore",
    "build_region_store",
]
