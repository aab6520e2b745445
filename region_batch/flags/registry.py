"""
Flag registry.

Registries are plain objects handed to the batch executor; there is no
process-wide registry. ``default_registry()`` builds a fresh one holding the
stock region flags.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from region_batch.errors import DuplicateFlagError, UnknownFlag
from region_batch.flags.types import (
    BooleanFlag,
    DoubleFlag,
    FlagDefinition,
    IntegerFlag,
    SetFlag,
    StateFlag,
    StringFlag,
)

LOG = logging.getLogger("flags.registry")


def _normalize(name: str) -> str:
    return name.replace("-", "").replace("_", "").lower()


class FlagRegistry:
    """Named collection of flag definitions."""

    def __init__(self, flags: Iterable[FlagDefinition] = ()) -> None:
        self._flags: dict[str, FlagDefinition] = {}
        for flag in flags:
            self.register(flag)

    def register(self, flag: FlagDefinition) -> None:
        key = flag.name.lower()
        if key in self._flags:
            raise DuplicateFlagError(f"A flag named {flag.name!r} is already registered")
        self._flags[key] = flag

    def get(self, name: str) -> FlagDefinition | None:
        """Exact (case-insensitive) lookup."""
        return self._flags.get(name.lower())

    def lookup(self, fuzzy_name: str) -> FlagDefinition:
        """
        Find a flag by a loosely typed name.

        Case is ignored, as are dashes and underscores, so ``HealAmount``,
        ``heal_amount`` and ``heal-amount`` all find ``heal-amount``.

        Raises:
            UnknownFlag: No flag matches
        """
        exact = self.get(fuzzy_name)
        if exact is not None:
            return exact

        wanted = _normalize(fuzzy_name)
        for flag in self._flags.values():
            if _normalize(flag.name) == wanted:
                return flag

        LOG.debug("No flag matches %r", fuzzy_name)
        raise UnknownFlag(fuzzy_name)

    def names(self) -> list[str]:
        return [flag.name for flag in self._flags.values()]

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._flags

    def __iter__(self) -> Iterator[FlagDefinition]:
        return iter(list(self._flags.values()))

    def __len__(self) -> int:
        return len(self._flags)


_STATE_FLAGS = (
    "passthrough", "build", "interact", "block-break", "block-place", "use",
    "damage-animals", "chest-access", "ride", "pvp", "sleep", "tnt",
    "lighter", "fire-spread", "lava-flow", "water-flow", "mob-spawning",
    "mob-damage", "creeper-explosion", "entry", "exit", "item-pickup",
    "item-drop", "invincible", "fall-damage", "enderpearl",
)

_STRING_FLAGS = ("greeting", "farewell", "deny-message", "entry-deny-message", "exit-deny-message")


def default_registry() -> FlagRegistry:
    """Build a new registry populated with the stock region flags."""
    registry = FlagRegistry(StateFlag(name) for name in _STATE_FLAGS)
    for name in _STRING_FLAGS:
        registry.register(StringFlag(name))
    registry.register(IntegerFlag("heal-delay"))
    registry.register(IntegerFlag("heal-amount"))
    registry.register(IntegerFlag("feed-delay"))
    registry.register(IntegerFlag("feed-amount"))
    registry.register(DoubleFlag("price"))
    registry.register(BooleanFlag("buyable"))
    registry.register(BooleanFlag("notify-enter"))
    registry.register(BooleanFlag("notify-leave"))
    registry.register(SetFlag("blocked-cmds", StringFlag("command")))
    registry.register(SetFlag("allowed-cmds", StringFlag("command")))
    return registry
