"""Per-item reconciliation outcomes.

Every call to the reconciler yields exactly one of these; callers dispatch with
``match`` instead of probing for ``None`` or catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gotchiledger.domain.model import CheckStage, DiscrepancyRecord, ItemType


@dataclass(frozen=True, slots=True)
class Consistent:
    """The item's accounting was explained at ``stage``."""

    item: ItemType
    stage: CheckStage


@dataclass(frozen=True, slots=True)
class DiscrepancyFound:
    record: DiscrepancyRecord


@dataclass(frozen=True, slots=True)
class NotApplicable:
    """The id is the void item or is absent from the catalog."""

    item_id: int
    reason: str


@dataclass(frozen=True, slots=True)
class CheckFailed:
    """A data source raised; ``record.stage`` is the stage that was being evaluated."""

    record: DiscrepancyRecord
    cause: Exception


ItemOutcome = Consistent | DiscrepancyFound | NotApplicable | CheckFailed
