"""
Abstract region store interface.

Defines the RegionStore ABC with two backends:
- InMemoryRegionStore (tests, embedding in a host process)
- SQLiteRegionStore (persistent, stdlib sqlite3)

The batch core only reads regions through ``regions_of`` and writes through
``set_flag``; region creation and world registration are here so that hosts
and tests can populate a store.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Mapping

from region_batch.regions.models import Region

LOG = logging.getLogger("storage.region_store")

STORAGE_DIR_NAME = ".region_batch"


class RegionStore(ABC):
    """
    Abstract interface for the per-world region containers.

    Implementations must return regions in a stable order (insertion order)
    so that batch output is reproducible.
    """

    @abstractmethod
    def worlds(self) -> list[str]:
        """Names of all worlds that have a region container."""

    @abstractmethod
    def add_world(self, world: str) -> None:
        """Create an empty region container for a world (idempotent)."""

    @abstractmethod
    def regions_of(self, world: str) -> Mapping[str, Region]:
        """
        Snapshot of the regions of a world, keyed by identifier.

        Raises:
            WorldUnavailable: The world has no region container
        """

    @abstractmethod
    def add_region(self, world: str, region: Region) -> None:
        """
        Store or replace a region. Creates the world container if needed.

        Raises:
            ValueError: The region's parent does not exist in the world
        """

    @abstractmethod
    def set_flag(self, world: str, region_id: str, flag_key: str, value: Any) -> bool:
        """
        Set one flag on one region. ``None`` removes the flag.

        Returns False if the region no longer exists.
        """

    def get_region(self, world: str, region_id: str) -> Region | None:
        return self.regions_of(world).get(region_id)

    def close(self) -> None:
        """Release storage resources."""


def build_region_store(backend: str, project_path: Path | None = None) -> RegionStore:
    """
    Factory: create a RegionStore of the requested backend type.

    Args:
        backend: "memory" or "sqlite"
        project_path: Directory under which the SQLite database lives
            (``project_path / .region_batch / regions.db``). Ignored for
            the memory backend.

    Raises:
        ValueError: Unknown backend, or sqlite without a path
    """
    if backend == "memory":
        from region_batch.storage.memory_store import InMemoryRegionStore

        return InMemoryRegionStore()

    elif backend == "sqlite":
        if project_path is None:
            raise ValueError("The sqlite region store needs a project path")
        from region_batch.storage.sqlite_store import SQLiteRegionStore

        storage_dir = project_path / STORAGE_DIR_NAME
        storage_dir.mkdir(parents=True, exist_ok=True)
        return SQLiteRegionStore(storage_dir / "regions.db")

    else:
        raise ValueError(f"Unknown region store backend: {backend!r}. Supported: 'memory', 'sqlite'")
