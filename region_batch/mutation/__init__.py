"""
Flag mutation: the per-region mutator and the batch executor built on it.
"""

from region_batch.mutation.executor import BatchExecutor
from region_batch.mutation.mutator import FlagMutator, MutationRequest

__all__ = [
    "BatchExecutor",
    "FlagMutator",
    "MutationRequest",
]
