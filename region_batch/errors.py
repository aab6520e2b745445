"""
Error taxonomy for batch flag operations.

Selection-level errors (UnknownIdentity, InvalidBound, InvalidPattern,
WorldUnavailable) and UnknownFlag abort a batch before any region is touched.
InvalidFlagValue is local to a single region and is turned into a rejected
outcome by the mutator.
"""

from __future__ import annotations


class BatchError(Exception):
    """Base class for all region-batch errors."""

    pass


class UnknownIdentity(BatchError):
    """Raised when a player name cannot be resolved to an identity."""

    def __init__(self, name: str | None) -> None:
        self.name = name
        super().__init__(f"Unknown player: {name!r}")


class InvalidBound(BatchError):
    """Raised when a count range bound is not an integer."""

    def __init__(self, bound: str | None) -> None:
        self.bound = bound
        super().__init__(f"Invalid range bound: {bound!r} is not a number")


class InvalidPattern(BatchError):
    """Raised when a region name pattern does not compile."""

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid region name pattern {pattern!r}: {detail}")


class UnknownFlag(BatchError):
    """Raised when a flag name does not match any registered flag."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown flag: {name!r}")


class DuplicateFlagError(BatchError):
    """Raised when two flags with the same name are registered."""

    pass


class InvalidFlagValue(BatchError):
    """Raised by flag parsers when raw input cannot be converted."""

    pass


class WorldUnavailable(BatchError):
    """Raised when a world has no backing region container."""

    def __init__(self, world: str) -> None:
        self.world = world
        super().__init__(f"No region data for world {world!r}")


class CommandError(BatchError):
    """Raised when command tokens cannot be parsed."""

    pass
