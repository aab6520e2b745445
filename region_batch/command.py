"""
Command token parsing.

Commands arrive already split into tokens:

    fset    <mode> <target...> <flag> <value...>
    fremove <mode> <target...> <flag>

Modes and their targets:

    all                          no target
    player <name>                regions the player owns or is a member of
    owner <name>                 regions the player owns
    member <name>                regions the player is only a member of
    regex <pattern>              identifiers matching the whole pattern
    count <template> <min> <max> template with '*' replaced by min..max-1
    child <parent>               direct children of a region

For ``fset`` the remaining tokens are joined with single spaces into the raw
value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Sequence

from region_batch.errors import BatchError, CommandError
from region_batch.models import BatchResult
from region_batch.mutation.executor import BatchExecutor
from region_batch.regions.models import Identity
from region_batch.reporting import ResultSink, report
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

LOG = logging.getLogger("command")


class Action(StrEnum):
    SET = "fset"
    REMOVE = "fremove"


# mode -> (number of target tokens, criterion factory)
_MODES: dict[str, tuple[int, Callable[..., SelectionCriterion]]] = {
    "all": (0, All),
    "player": (1, MemberOrOwner),
    "owner": (1, OwnerOnly),
    "member": (1, MemberOnly),
    "regex": (1, NameRegex),
    "count": (3, NameCountRange.from_tokens),
    "child": (1, ChildOf),
}


@dataclass(frozen=True)
class BatchCommand:
    action: Action
    criterion: SelectionCriterion
    flag_name: str
    raw_input: Optional[str]


def build_criterion(mode: str, targets: Sequence[str]) -> SelectionCriterion:
    """
    Build the criterion for a selection mode from its target tokens.

    Raises:
        CommandError: Unknown mode or wrong number of target tokens
        InvalidBound: A count bound is not a number
    """
    key = mode.lower()
    if key not in _MODES:
        raise CommandError(f"Unknown selection mode {mode!r}. {usage()}")
    target_count, factory = _MODES[key]
    if len(targets) != target_count:
        raise CommandError(f"Mode {key!r} takes {target_count} target argument(s), got {len(targets)}")
    return factory(*targets)


def usage() -> str:
    return "Usage: <fset|fremove> <" + "|".join(_MODES) + "> <target...> <flag> [value...]"


def _split(tokens: Sequence[str]) -> tuple[Action, str, int]:
    """Validate action and mode; return them with the index of the flag token."""
    if len(tokens) < 2:
        raise CommandError(f"Too few arguments. {usage()}")

    try:
        action = Action(tokens[0].lower())
    except ValueError as exc:
        raise CommandError(f"Unknown action {tokens[0]!r}. {usage()}") from exc

    mode = tokens[1].lower()
    if mode not in _MODES:
        raise CommandError(f"Unknown selection mode {tokens[1]!r}. {usage()}")
    flag_index = 2 + _MODES[mode][0]
    if len(tokens) <= flag_index:
        raise CommandError(f"Too few arguments for mode {mode!r}. {usage()}")
    return action, mode, flag_index


def parse_command(tokens: Sequence[str]) -> BatchCommand:
    """
    Parse command tokens.

    Raises:
        CommandError: Unknown action or mode, or too few tokens
        InvalidBound: A count bound is not a number
    """
    action, mode, flag_index = _split(tokens)
    criterion = build_criterion(mode, tokens[2:flag_index])
    flag_name = tokens[flag_index]

    if action == Action.SET:
        raw_input: Optional[str] = " ".join(tokens[flag_index + 1:])
    else:
        if len(tokens) > flag_index + 1:
            raise CommandError(f"fremove takes no value. {usage()}")
        raw_input = None

    return BatchCommand(action=action, criterion=criterion, flag_name=flag_name, raw_input=raw_input)


def execute_command(
    executor: BatchExecutor,
    world: str,
    actor: Identity,
    tokens: Sequence[str],
    sink: ResultSink,
) -> Optional[BatchResult]:
    """
    Parse and run a command, reporting everything to ``sink``.

    The flag is looked up before the target tokens are parsed, so an unknown
    flag is always the reported error.

    Returns the BatchResult, or None if the batch was aborted (the reason has
    then been sent to the sink).
    """
    try:
        _, _, flag_index = _split(tokens)
        definition = executor.registry.lookup(tokens[flag_index])
        command = parse_command(tokens)
        result = executor.run_batch(
            world,
            command.criterion,
            definition,
            actor,
            command.raw_input,
        )
    except BatchError as exc:
        LOG.info("Command %r aborted: %s", " ".join(tokens), exc)
        sink.aborted(exc)
        return None

    report(result, sink)
    return result
