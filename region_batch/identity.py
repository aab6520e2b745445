"""
Player identity resolution.

Resolution is case-insensitive on the display name and prefers a player who
is currently connected; otherwise the most recently seen historical record
wins. Empty names never resolve.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from region_batch.errors import UnknownIdentity
from region_batch.regions.models import Identity

LOG = logging.getLogger("identity")


class IdentityResolver(ABC):
    """Resolves display names to identities."""

    @abstractmethod
    def resolve(self, name: str | None) -> Identity:
        """
        Resolve a display name.

        Raises:
            UnknownIdentity: Name is empty or no player with that name is known
        """


class InMemoryIdentityDirectory(IdentityResolver):
    """
    Directory of online and previously seen players.

    Later sightings of the same unique id replace earlier ones; among
    offline players with the same name the latest sighting wins.
    """

    def __init__(self, identities: Iterable[Identity] = ()) -> None:
        self._known: dict[str, Identity] = {}
        for identity in identities:
            self.remember(identity)

    def remember(self, identity: Identity) -> None:
        # Re-insert so that dict order reflects recency.
        self._known.pop(identity.unique_id, None)
        self._known[identity.unique_id] = identity

    def forget(self, unique_id: str) -> None:
        self._known.pop(unique_id, None)

    def resolve(self, name: str | None) -> Identity:
        if not name:
            raise UnknownIdentity(name)

        wanted = name.lower()
        historical: Identity | None = None
        for identity in self._known.values():
            if identity.name.lower() != wanted:
                continue
            if identity.online:
                return identity
            historical = identity

        if historical is None:
            LOG.debug("No player named %r", name)
            raise UnknownIdentity(name)
        return historical
