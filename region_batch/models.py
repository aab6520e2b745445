from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, computed_field


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


class MutationOutcome(BaseModel):
    regionId: str
    status: OutcomeStatus
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.status == OutcomeStatus.APPLIED


def Applied(region_id: str) -> MutationOutcome:
    return MutationOutcome(regionId=region_id, status=OutcomeStatus.APPLIED)


def Rejected(region_id: str, reason: str) -> MutationOutcome:
    return MutationOutcome(regionId=region_id, status=OutcomeStatus.REJECTED, reason=reason)


class BatchResult(BaseModel):
    world: str
    flag: str
    outcomes: List[MutationOutcome]

    @computed_field
    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.APPLIED)

    @computed_field
    @property
    def rejected(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.REJECTED)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.outcomes)

    def applied_ids(self) -> List[str]:
        return [o.regionId for o in self.outcomes if o.status == OutcomeStatus.APPLIED]

    def rejected_ids(self) -> List[str]:
        return [o.regionId for o in self.outcomes if o.status == OutcomeStatus.REJECTED]


class SelectionPreview(BaseModel):
    world: str
    regionIds: List[str]

    @computed_field
    @property
    def total(self) -> int:
        return len(self.regionIds)
