"""
Flag mutator: validates and applies one flag change on one region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from region_batch.errors import InvalidFlagValue
from region_batch.flags.types import FlagContext, FlagDefinition
from region_batch.models import Applied, MutationOutcome, Rejected
from region_batch.regions.models import Identity, Region
from region_batch.storage.region_store import RegionStore

LOG = logging.getLogger("mutation.mutator")


@dataclass(frozen=True)
class MutationRequest:
    """
    One flag change for one region.

    ``raw_input`` of None asks for the flag to be removed.
    """

    world: str
    region: Region
    flag: FlagDefinition
    actor: Identity
    raw_input: Optional[str] = None


class FlagMutator:
    """Parses raw input with the flag's parser and writes through the store."""

    def __init__(self, store: RegionStore) -> None:
        self._store = store

    def apply_flag(self, request: MutationRequest) -> MutationOutcome:
        region_id = request.region.id

        if request.raw_input is None:
            value = None
        else:
            context = FlagContext(
                actor=request.actor,
                region=request.region,
                raw_input=request.raw_input,
                world=request.world,
            )
            try:
                value = request.flag.parse(request.raw_input, context)
            except InvalidFlagValue as exc:
                LOG.info("Rejected %s on %s: %s", request.flag.name, region_id, exc)
                return Rejected(region_id, str(exc))

        if not self._store.set_flag(request.world, region_id, request.flag.name, value):
            return Rejected(region_id, f"Region {region_id!r} could not be updated")

        LOG.debug("Set %s=%r on %s", request.flag.name, value, region_id)
        return Applied(region_id)
