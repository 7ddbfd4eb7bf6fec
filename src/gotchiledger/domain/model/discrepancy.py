"""Discrepancy records produced by item reconciliation."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import CheckStage


@dataclass(frozen=True, slots=True)
class OwnerBalance:
    owner: str
    balance: int


@dataclass(frozen=True, slots=True, kw_only=True)
class DiscrepancyData:
    """Stage-specific numbers; fields a stage did not compute stay ``None``."""

    owners_total: int | None = None
    custody_balance: int | None = None
    equipped_count: int | None = None
    direct_balance: int | None = None
    unequipped_owned_count: int | None = None
    discrepancy: int | None = None
    unequipped_holder_ids: tuple[int, ...] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DiscrepancyRecord:
    item_id: int
    item_name: str
    max_quantity: int
    stage: CheckStage
    message: str
    data: DiscrepancyData = field(default_factory=DiscrepancyData)
    # set when the inventory stage could not run and the record reports stage 2
    degraded: bool = False
