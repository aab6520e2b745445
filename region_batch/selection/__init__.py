"""
Region selection: criteria and the selector that evaluates them.

Usage:
    from region_batch.selection import NameRegex, RegionSelector

    selector = RegionSelector(resolver)
    shops = selector.select(store.regions_of("world"), NameRegex(r"shop_[0-9]+"))
"""

from region_batch.selection.criteria import (
    All,
    ChildOf,
    MemberOnly,
    MemberOrOwner,
    NameCountRange,
    NameRegex,
    OwnerOnly,
    SelectionCriterion,
)
from region_batch.selection.selector import RegionSelector, identity_matches

__all__ = [
    "All",
    "ChildOf",
    "MemberOnly",
    "MemberOrOwner",
    "NameCountRange",
    "NameRegex",
    "OwnerOnly",
    "RegionSelector",
    "SelectionCriterion",
    "identity_matches",
]
