"""In-memory region store."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping

from region_batch.errors import WorldUnavailable
from region_batch.regions.models import Region
from region_batch.storage.region_store import RegionStore

LOG = logging.getLogger("storage.memory_store")


class InMemoryRegionStore(RegionStore):
    """Dict-backed store. Regions keep insertion order per world."""

    def __init__(self) -> None:
        self._worlds: dict[str, dict[str, Region]] = {}

    def worlds(self) -> list[str]:
        return list(self._worlds)

    def add_world(self, world: str) -> None:
        self._worlds.setdefault(world, {})

    def regions_of(self, world: str) -> Mapping[str, Region]:
        container = self._worlds.get(world)
        if container is None:
            raise WorldUnavailable(world)
        # Copies, so later set_flag calls do not leak into a snapshot.
        return {rid: dataclasses.replace(r, flags=dict(r.flags)) for rid, r in container.items()}

    def add_region(self, world: str, region: Region) -> None:
        container = self._worlds.setdefault(world, {})
        if region.parent_id is not None and region.parent_id not in container:
            raise ValueError(f"Parent {region.parent_id!r} of {region.id!r} not found in world {world!r}")
        container[region.id] = region

    def set_flag(self, world: str, region_id: str, flag_key: str, value: Any) -> bool:
        region = self._worlds.get(world, {}).get(region_id)
        if region is None:
            LOG.warning("Cannot set flag %s: region %s missing in %s", flag_key, region_id, world)
            return False
        if value is None:
            region.flags.pop(flag_key, None)
        else:
            region.flags[flag_key] = value
        return True
