"""
Selection criteria.

A closed set of frozen dataclasses. Player based criteria carry the display
name; the selector resolves it before evaluating anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from region_batch.errors import InvalidBound

LOG = logging.getLogger("selection.criteria")

PLACEHOLDER = "*"


@dataclass(frozen=True)
class MemberOrOwner:
    """Regions where the player is owner or member."""

    player: str


@dataclass(frozen=True)
class OwnerOnly:
    player: str


@dataclass(frozen=True)
class MemberOnly:
    """Regions where the player is a member but not an owner."""

    player: str


@dataclass(frozen=True)
class NameRegex:
    """Identifier must match the whole pattern."""

    pattern: str


@dataclass(frozen=True)
class NameCountRange:
    """
    Numbered identifiers: ``template`` with ``*`` replaced by each integer
    in ``[minimum, maximum)``.

    Examples:
        >>> NameCountRange("zone_*", 2, 5).candidate_names()
        ['zone_2', 'zone_3', 'zone_4']
        >>> NameCountRange.from_tokens("plot*", "3").candidate_names()
        ['plot0', 'plot1', 'plot2']
    """

    template: str
    minimum: int
    maximum: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.minimum <= self.maximum

    def candidate_names(self) -> list[str]:
        """Substituted names in ascending counter order; empty for invalid bounds."""
        if not self.is_valid:
            return []
        return [self.template.replace(PLACEHOLDER, str(i), 1) for i in range(self.minimum, self.maximum)]

    @classmethod
    def from_tokens(cls, template: str, first: str, second: Optional[str] = None) -> "NameCountRange":
        """
        Build a range from textual bounds.

        A single bound is the exclusive maximum and the counter starts at 0.
        Two bounds are the inclusive minimum and the exclusive maximum.

        Raises:
            InvalidBound: A bound is not an integer
        """
        lower = _parse_bound(first)
        if second is None:
            return cls(template=template, minimum=0, maximum=lower)
        return cls(template=template, minimum=lower, maximum=_parse_bound(second))


@dataclass(frozen=True)
class ChildOf:
    """Direct children of the named region (name compared case-insensitively)."""

    parent_name: str


@dataclass(frozen=True)
class All:
    pass


SelectionCriterion = Union[MemberOrOwner, OwnerOnly, MemberOnly, NameRegex, NameCountRange, ChildOf, All]

PLAYER_CRITERIA = (MemberOrOwner, OwnerOnly, MemberOnly)


def _parse_bound(text: Optional[str]) -> int:
    if text is None:
        raise InvalidBound(text)
    try:
        return int(text.strip())
    except ValueError as exc:
        raise InvalidBound(text) from exc
