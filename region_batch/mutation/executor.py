"""
Batch executor.

Pipeline for one invocation:

1. look up the flag (UnknownFlag aborts before anything else)
2. snapshot the world's regions (WorldUnavailable aborts)
3. select (UnknownIdentity, InvalidBound, InvalidPattern abort)
4. mutate every selected region in selection order
5. aggregate the outcomes

Step 4 never stops early: a rejected region is recorded and the batch moves on.
Each mutation commits on its own; there is no transaction spanning the batch.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from region_batch.flags.registry import FlagRegistry
from region_batch.flags.types import FlagDefinition
from region_batch.identity import IdentityResolver
from region_batch.models import BatchResult, MutationOutcome, SelectionPreview
from region_batch.mutation.mutator import FlagMutator, MutationRequest
from region_batch.regions.models import Identity, Region
from region_batch.selection.criteria import SelectionCriterion
from region_batch.selection.selector import RegionSelector
from region_batch.storage.region_store import RegionStore

LOG = logging.getLogger("mutation.executor")


class BatchExecutor:
    """Applies one flag mutation to every region matched by one criterion."""

    def __init__(
        self,
        store: RegionStore,
        resolver: IdentityResolver,
        registry: FlagRegistry,
    ) -> None:
        """
        Initialize the BatchExecutor.

        Args:
            store: Region containers to read from and write to
            resolver: Resolves player names used by player criteria
            registry: Flags that may be mutated
        """
        self._store = store
        self._registry = registry
        self._selector = RegionSelector(resolver)
        self._mutator = FlagMutator(store)

    @property
    def registry(self) -> FlagRegistry:
        return self._registry

    def select(self, world: str, criterion: SelectionCriterion) -> list[Region]:
        regions = self._store.regions_of(world)
        return self._selector.select(regions, criterion)

    def preview(self, world: str, criterion: SelectionCriterion) -> SelectionPreview:
        """Run the selection only; nothing is mutated."""
        matched = self.select(world, criterion)
        return SelectionPreview(world=world, regionIds=[r.id for r in matched])

    def run_batch(
        self,
        world: str,
        criterion: SelectionCriterion,
        flag: Union[FlagDefinition, str],
        actor: Identity,
        raw_input: Optional[str] = None,
    ) -> BatchResult:
        """
        Run a batch.

        Args:
            world: World whose regions are selected
            criterion: Which regions to change
            flag: Flag definition, or a name looked up (fuzzily) in the registry
            actor: Identity on whose behalf the flag is set
            raw_input: Raw value text; None removes the flag

        Returns:
            BatchResult with one outcome per selected region, in selection order

        Raises:
            UnknownFlag: ``flag`` is a name that matches no registered flag
            WorldUnavailable: ``world`` has no region container
            UnknownIdentity: A player criterion names an unknown player
            InvalidPattern: A NameRegex pattern does not compile
        """
        definition = flag if isinstance(flag, FlagDefinition) else self._registry.lookup(flag)

        matched = self.select(world, criterion)
        LOG.info(
            "Applying %s to %d regions in %s (actor=%s)",
            definition.name,
            len(matched),
            world,
            actor.name,
        )

        outcomes: list[MutationOutcome] = []
        for region in matched:
            request = MutationRequest(
                world=world,
                region=region,
                flag=definition,
                actor=actor,
                raw_input=raw_input,
            )
            outcomes.append(self._mutator.apply_flag(request))

        result = BatchResult(world=world, flag=definition.name, outcomes=outcomes)
        LOG.info(
            "Batch %s on %s finished: %d applied, %d rejected",
            definition.name,
            world,
            result.applied,
            result.rejected,
        )
        return result
