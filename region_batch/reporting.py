"""
Presentation of batch results.

A ResultSink receives one line per region outcome and one total line, or a
single explanation when the batch was aborted. The total line is always
emitted for a completed batch, including when nothing matched.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from region_batch.errors import BatchError
from region_batch.models import BatchResult, MutationOutcome, OutcomeStatus

LOG = logging.getLogger("reporting")


def format_outcome(outcome: MutationOutcome) -> str:
    if outcome.status == OutcomeStatus.APPLIED:
        return f"Region {outcome.regionId} modified."
    return f"Region {outcome.regionId} not modified: {outcome.reason}"


def format_total(result: BatchResult) -> str:
    line = f"Total modified regions: {result.applied}"
    if result.rejected:
        line += f" ({result.rejected} rejected)"
    return line


def format_error(error: BatchError) -> str:
    return f"Batch aborted: {error}"


class ResultSink(ABC):
    """Consumer of batch outcomes."""

    @abstractmethod
    def outcome(self, outcome: MutationOutcome) -> None:
        """Present one region's outcome."""

    @abstractmethod
    def total(self, result: BatchResult) -> None:
        """Present the aggregate line."""

    @abstractmethod
    def aborted(self, error: BatchError) -> None:
        """Present the reason a batch did not run."""


class LoggingSink(ResultSink):
    """Writes messages to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or LOG

    def outcome(self, outcome: MutationOutcome) -> None:
        level = logging.INFO if outcome.status == OutcomeStatus.APPLIED else logging.WARNING
        self._log.log(level, "%s", format_outcome(outcome))

    def total(self, result: BatchResult) -> None:
        self._log.info("%s", format_total(result))

    def aborted(self, error: BatchError) -> None:
        self._log.error("%s", format_error(error))


class CollectingSink(ResultSink):
    """Keeps the formatted lines, e.g. to return them from a tool call."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def outcome(self, outcome: MutationOutcome) -> None:
        self.lines.append(format_outcome(outcome))

    def total(self, result: BatchResult) -> None:
        self.lines.append(format_total(result))

    def aborted(self, error: BatchError) -> None:
        self.lines.append(format_error(error))


def report(result: BatchResult, sink: ResultSink) -> None:
    for outcome in result.outcomes:
        sink.outcome(outcome)
    sink.total(result)
