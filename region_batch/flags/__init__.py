"""
Region flags: typed definitions, their parsers, and the registry used to look
them up by a loosely typed name.
"""

from region_batch.flags.registry import FlagRegistry, default_registry
from region_batch.flags.types import (
    BooleanFlag,
    DoubleFlag,
    FlagContext,
    FlagDefinition,
    IntegerFlag,
    SetFlag,
    State,
    StateFlag,
    StringFlag,
)

__all__ = [
    "BooleanFlag",
    "DoubleFlag",
    "FlagContext",
    "FlagDefinition",
    "FlagRegistry",
    "IntegerFlag",
    "SetFlag",
    "State",
    "StateFlag",
    "StringFlag",
    "default_registry",
]
