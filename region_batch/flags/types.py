"""
Typed flag definitions.

Each flag knows how to turn untyped user input into a typed value. Parsers
raise InvalidFlagValue; they never touch the region.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Optional

from region_batch.errors import InvalidFlagValue
from region_batch.regions.models import Identity, Region

_VALID_NAME = re.compile(r"^[A-Za-z0-9\-_:]+$")


class State(StrEnum):
    """Value of a state flag."""

    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class FlagContext:
    """What a parser may look at besides the raw text."""

    actor: Identity
    region: Region
    raw_input: Optional[str]
    world: str = ""


class FlagDefinition(ABC):
    """A named, typed region attribute."""

    value_type: ClassVar[type] = object

    def __init__(self, name: str) -> None:
        if not _VALID_NAME.match(name):
            raise ValueError(f"Invalid flag name: {name!r}")
        self.name = name

    @abstractmethod
    def parse(self, raw: str, context: FlagContext) -> Any:
        """
        Convert raw user input into a flag value.

        Raises:
            InvalidFlagValue: Input does not describe a valid value
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class StateFlag(FlagDefinition):
    """allow / deny. ``none`` parses to None, which clears the flag."""

    value_type = State

    def parse(self, raw: str, context: FlagContext) -> Optional[State]:
        text = raw.strip().lower()
        if text == "allow":
            return State.ALLOW
        if text == "deny":
            return State.DENY
        if text == "none":
            return None
        raise InvalidFlagValue(f"Expected none/allow/deny for {self.name}, got {raw!r}")


class BooleanFlag(FlagDefinition):
    value_type = bool

    _TRUE = frozenset({"true", "yes", "on", "allow", "1"})
    _FALSE = frozenset({"false", "no", "off", "deny", "0"})

    def parse(self, raw: str, context: FlagContext) -> bool:
        text = raw.strip().lower()
        if text in self._TRUE:
            return True
        if text in self._FALSE:
            return False
        raise InvalidFlagValue(f"Not a yes/no value for {self.name}: {raw!r}")


class StringFlag(FlagDefinition):
    """Free text. A literal ``\\n`` becomes a line break."""

    value_type = str

    def parse(self, raw: str, context: FlagContext) -> str:
        return re.sub(r"(?<!\\)\\n", "\n", raw.strip())


class IntegerFlag(FlagDefinition):
    value_type = int

    def parse(self, raw: str, context: FlagContext) -> int:
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise InvalidFlagValue(f"Not a whole number for {self.name}: {raw!r}") from exc


class DoubleFlag(FlagDefinition):
    value_type = float

    def parse(self, raw: str, context: FlagContext) -> float:
        try:
            value = float(raw.strip())
        except ValueError as exc:
            raise InvalidFlagValue(f"Not a number for {self.name}: {raw!r}") from exc
        if value != value or value in (float("inf"), float("-inf")):
            raise InvalidFlagValue(f"Not a finite number for {self.name}: {raw!r}")
        return value


class SetFlag(FlagDefinition):
    """Comma separated values, each parsed by a sub-flag."""

    value_type = frozenset

    def __init__(self, name: str, sub_flag: FlagDefinition) -> None:
        super().__init__(name)
        self.sub_flag = sub_flag

    def parse(self, raw: str, context: FlagContext) -> frozenset:
        items = [part.strip() for part in raw.split(",")]
        return frozenset(self.sub_flag.parse(item, context) for item in items if item)
