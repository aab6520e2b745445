"""
Protected region model for region-batch.

A region belongs to one world and has:
- a case-sensitive identifier, unique within the world
- an optional parent (stored as the parent's identifier)
- owner and member domains
- a mapping of flag name to value
"""

from region_batch.regions.models import Domain, Identity, Region

__all__ = [
    "Domain",
    "Identity",
    "Region",
]
