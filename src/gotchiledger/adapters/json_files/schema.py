"""Pydantic models for the snapshot, checkpoint and report files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gotchiledger.domain.model import (
    CheckStage,
    CreatureRecord,
    DiscrepancyData,
    DiscrepancyRecord,
)
from gotchiledger.domain.ports import FetchProgress


class CamelModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)


class SnapshotCreaturePayload(CamelModel):
    """The subset of an exported creature the inventory check needs."""

    name: str
    items: list[int] = Field(default_factory=list[int])
    equipped_wearables: list[int] | None = None

    def to_domain(self, creature_id: int) -> CreatureRecord:
        return CreatureRecord(
            creature_id=creature_id,
            name=self.name,
            items=tuple(self.items),
            equipped_wearables=(
                tuple(self.equipped_wearables) if self.equipped_wearables is not None else None
            ),
        )


class ProgressPayload(CamelModel):
    last_completed_batch: int = Field(default=-1, ge=-1)
    fetched_ids: list[int] = Field(default_factory=list[int])

    @classmethod
    def from_domain(cls, progress: FetchProgress) -> ProgressPayload:
        return cls(
            last_completed_batch=progress.last_completed_batch,
            fetched_ids=list(progress.fetched_ids),
        )

    def to_domain(self) -> FetchProgress:
        return FetchProgress(
            last_completed_batch=self.last_completed_batch,
            fetched_ids=tuple(self.fetched_ids),
        )


class ErrorDataPayload(CamelModel):
    owners_total: int | None = None
    custody_balance: int | None = None
    equipped_count: int | None = None
    direct_balance: int | None = None
    unequipped_owned_count: int | None = None
    discrepancy: int | None = None
    unequipped_holder_ids: list[int] | None = None


class ReportEntryPayload(CamelModel):
    item_id: int
    item_name: str
    max_quantity: int
    error_type: CheckStage
    error_data: ErrorDataPayload
    message: str
    degraded: bool | None = None

    @classmethod
    def from_domain(cls, record: DiscrepancyRecord) -> ReportEntryPayload:
        data = record.data
        return cls(
            item_id=record.item_id,
            item_name=record.item_name,
            max_quantity=record.max_quantity,
            error_type=record.stage,
            error_data=ErrorDataPayload(
                owners_total=data.owners_total,
                custody_balance=data.custody_balance,
                equipped_count=data.equipped_count,
                direct_balance=data.direct_balance,
                unequipped_owned_count=data.unequipped_owned_count,
                discrepancy=data.discrepancy,
                unequipped_holder_ids=(
                    list(data.unequipped_holder_ids)
                    if data.unequipped_holder_ids is not None
                    else None
                ),
            ),
            message=record.message,
            degraded=True if record.degraded else None,
        )

    def to_domain(self) -> DiscrepancyRecord:
        data = self.error_data
        return DiscrepancyRecord(
            item_id=self.item_id,
            item_name=self.item_name,
            max_quantity=self.max_quantity,
            stage=self.error_type,
            message=self.message,
            data=DiscrepancyData(
                owners_total=data.owners_total,
                custody_balance=data.custody_balance,
                equipped_count=data.equipped_count,
                direct_balance=data.direct_balance,
                unequipped_owned_count=data.unequipped_owned_count,
                discrepancy=data.discrepancy,
                unequipped_holder_ids=(
                    tuple(data.unequipped_holder_ids)
                    if data.unequipped_holder_ids is not None
                    else None
                ),
            ),
            degraded=bool(self.degraded),
        )
