"""
Region selector.

Evaluates a selection criterion against a snapshot of one world's regions.
Pure: the region mapping is only read, and the same input always gives the
same output. Output follows the mapping's iteration order, except for
NameCountRange which follows the counter.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, Mapping

from region_batch.errors import InvalidPattern
from region_batch.identity import IdentityResolver
from region_batch.regions.models import Identity, Region
from region_batch.selection.criteria import (
    All,
    ChildOf,
    MemberOnly,
    MemberOrOwner,
    NameCountRange,
    NameRegex,
    OwnerOnly,
    PLAYER_CRITERIA,
    SelectionCriterion,
)

LOG = logging.getLogger("selection.selector")


class RegionSelector:
    """Chooses the regions a batch applies to."""

    def __init__(self, resolver: IdentityResolver) -> None:
        self._resolver = resolver

    def select(self, regions: Mapping[str, Region], criterion: SelectionCriterion) -> list[Region]:
        """
        Return the regions matching ``criterion``, without duplicates.

        Raises:
            UnknownIdentity: A player criterion names an unknown player
            InvalidPattern: A NameRegex pattern does not compile
            TypeError: ``criterion`` is not a selection criterion
        """
        if isinstance(criterion, PLAYER_CRITERIA):
            identity = self._resolver.resolve(criterion.player)
            result = self._filter(regions.values(), lambda r: identity_matches(r, identity, criterion))
        elif isinstance(criterion, NameRegex):
            result = self._select_by_regex(regions, criterion.pattern)
        elif isinstance(criterion, NameCountRange):
            result = self._select_by_count(regions, criterion)
        elif isinstance(criterion, ChildOf):
            result = self._select_children(regions, criterion.parent_name)
        elif isinstance(criterion, All):
            result = list(regions.values())
        else:
            raise TypeError(f"Unsupported selection criterion: {criterion!r}")

        LOG.debug("%r matched %d of %d regions", criterion, len(result), len(regions))
        return result

    @staticmethod
    def _filter(regions: Iterable[Region], predicate: Callable[[Region], bool]) -> list[Region]:
        return [region for region in regions if predicate(region)]

    def _select_by_regex(self, regions: Mapping[str, Region], pattern: str) -> list[Region]:
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise InvalidPattern(pattern, str(exc)) from exc
        return self._filter(regions.values(), lambda r: compiled.fullmatch(r.id) is not None)

    def _select_by_count(self, regions: Mapping[str, Region], criterion: NameCountRange) -> list[Region]:
        if not criterion.is_valid:
            LOG.warning(
                "Count range [%d, %d) for %r is not a valid range; nothing selected",
                criterion.minimum,
                criterion.maximum,
                criterion.template,
            )
            return []

        result: list[Region] = []
        seen: set[str] = set()
        for name in criterion.candidate_names():
            # A template without a placeholder yields the same name every time.
            if name in seen:
                continue
            seen.add(name)
            region = regions.get(name)
            if region is not None:
                result.append(region)
        return result

    def _select_children(self, regions: Mapping[str, Region], parent_name: str) -> list[Region]:
        wanted = parent_name.lower()

        def is_child(region: Region) -> bool:
            if region.is_root:
                return False
            parent = regions.get(region.parent_id)
            return parent is not None and parent.id.lower() == wanted

        return self._filter(regions.values(), is_child)


def identity_matches(region: Region, identity: Identity, criterion: SelectionCriterion) -> bool:
    """Evaluate a player criterion for one region with an already resolved identity."""
    if isinstance(criterion, MemberOrOwner):
        return region.is_member(identity)
    if isinstance(criterion, OwnerOnly):
        return region.is_owner(identity)
    if isinstance(criterion, MemberOnly):
        return region.is_member_only(identity)
    raise TypeError(f"{criterion!r} is not a player criterion")
