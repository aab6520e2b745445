"""
Protected region data model.

Regions are owned by a RegionStore. The parent relation is kept as an
identifier (``parent_id``) and resolved through the store, so a region never
holds another region object.

Membership is expressed with a Domain, modelled on the WorldGuard default
domain: a set of player unique ids, legacy player names and group names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Identity:
    """
    Resolved handle for a player.

    Examples:
        >>> Identity("4f1c", "Steve", groups=frozenset({"builders"}))
        Identity('Steve')
    """

    unique_id: str
    name: str
    groups: frozenset[str] = frozenset()
    online: bool = False

    def __post_init__(self) -> None:
        if not self.unique_id:
            raise ValueError("unique_id cannot be empty")
        if not self.name:
            raise ValueError("name cannot be empty")

    def __repr__(self) -> str:
        return f"Identity({self.name!r})"


@dataclass(frozen=True)
class Domain:
    """
    Membership set of a region.

    A domain has three tiers. An identity is contained if its unique id, its
    name (case-insensitive) or any of its groups (case-insensitive) is listed.
    """

    unique_ids: frozenset[str] = frozenset()
    player_names: frozenset[str] = frozenset()
    groups: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        # Name and group tiers compare case-insensitively, so store them folded.
        object.__setattr__(self, "player_names", frozenset(n.lower() for n in self.player_names))
        object.__setattr__(self, "groups", frozenset(g.lower() for g in self.groups))

    def contains(self, identity: Identity) -> bool:
        if identity.unique_id in self.unique_ids:
            return True
        if identity.name.lower() in self.player_names:
            return True
        return any(g.lower() in self.groups for g in identity.groups)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "unique_ids": sorted(self.unique_ids),
            "player_names": sorted(self.player_names),
            "groups": sorted(self.groups),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any] | None) -> "Domain":
        if not d:
            return cls()
        return cls(
            unique_ids=frozenset(d.get("unique_ids", ())),
            player_names=frozenset(d.get("player_names", ())),
            groups=frozenset(d.get("groups", ())),
        )

    @classmethod
    def of_players(cls, *identities: Identity) -> "Domain":
        """Create a domain listing the given identities by unique id."""
        return cls(unique_ids=frozenset(i.unique_id for i in identities))


@dataclass
class Region:
    """
    A named protected region of one world.

    ``flags`` maps flag names to their current (unmarshalled) values. Code
    outside the store must treat a Region as read-only and request changes
    through ``RegionStore.set_flag``.
    """

    id: str
    parent_id: Optional[str] = None
    owners: Domain = field(default_factory=Domain)
    members: Domain = field(default_factory=Domain)
    flags: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("region id cannot be empty")
        if self.parent_id == self.id:
            raise ValueError(f"region {self.id!r} cannot be its own parent")

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def is_owner(self, identity: Identity) -> bool:
        return self.owners.contains(identity)

    def is_member(self, identity: Identity) -> bool:
        """Owner or member of this region."""
        return self.owners.contains(identity) or self.members.contains(identity)

    def is_member_only(self, identity: Identity) -> bool:
        """Listed as a member but not as an owner."""
        return self.members.contains(identity) and not self.owners.contains(identity)

    def __repr__(self) -> str:
        return f"Region({self.id!r})"
