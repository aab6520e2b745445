"""
region-batch: select protected regions of a world and change one flag on all
of them at once.

The selection engine (``region_batch.selection``) chooses regions by
membership, ownership, name pattern, numbered name range or parent. The batch
executor (``region_batch.mutation``) validates the raw flag value for every
selected region and reports a per-region outcome plus totals.
"""

from region_batch.errors import (
    BatchError,
    CommandError,
    InvalidBound,
    InvalidFlagValue,
    InvalidPattern,
    UnknownFlag,
    UnknownIdentity,
    WorldUnavailable,
)
from region_batch.models import BatchResult, MutationOutcome, OutcomeStatus
from region_batch.mutation import BatchExecutor
from region_batch.regions import Domain, Identity, Region

__version__ = "0.1.0"

__all__ = [
    "BatchError",
    "BatchExecutor",
    "BatchResult",
    "CommandError",
    "Domain",
    "Identity",
    "InvalidBound",
    "InvalidFlagValue",
    "InvalidPattern",
    "MutationOutcome",
    "OutcomeStatus",
    "Region",
    "UnknownFlag",
    "UnknownIdentity",
    "WorldUnavailable",
]
