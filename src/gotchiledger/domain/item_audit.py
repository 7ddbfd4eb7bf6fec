"""Application services for auditing item balances across the catalog."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import DEBUG, getLogger
from typing import TYPE_CHECKING

from gotchiledger.config.audit import (
    DEFAULT_AUDIT_GROUP_DELAY_SECONDS,
    DEFAULT_AUDIT_GROUP_SIZE,
    DEFAULT_AUDIT_ITEM_DELAY_SECONDS,
)
from gotchiledger.domain.reconciliation import (
    CheckFailed,
    Consistent,
    DiscrepancyFound,
    NotApplicable,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gotchiledger.domain.model import DiscrepancyRecord, ItemCatalog
    from gotchiledger.domain.ports import DiscrepancyReport
    from gotchiledger.domain.reconciliation import ItemReconciler

Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)


class ItemCheckError(RuntimeError):
    """Raised when a single-item audit cannot complete its checks."""

    def __init__(self, record: DiscrepancyRecord) -> None:
        super().__init__(
            f"Item {record.item_id} ({record.item_name}) failed at check "
            f"{record.stage.index}: {record.message}"
        )
        self.record = record


@dataclass(frozen=True, slots=True)
class AuditPacing:
    """Delays that keep the audit under third-party rate limits."""

    group_size: int = DEFAULT_AUDIT_GROUP_SIZE
    item_delay_seconds: float = DEFAULT_AUDIT_ITEM_DELAY_SECONDS
    group_delay_seconds: float = DEFAULT_AUDIT_GROUP_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.group_size < 1:
            raise ValueError("Audit group size must be at least 1")


@dataclass(slots=True)
class ItemAuditResult:
    """Outcome of an audit run."""

    checked: int = 0
    consistent: int = 0
    discrepancies: list[DiscrepancyRecord] = field(default_factory=list["DiscrepancyRecord"])
    skipped: list[int] = field(default_factory=list[int])
    failed: list[int] = field(default_factory=list[int])


def auditable_item_ids(catalog: ItemCatalog) -> list[int]:
    return catalog.auditable_ids()


def _groups(item_ids: Sequence[int], size: int) -> list[list[int]]:
    return [list(item_ids[start : start + size]) for start in range(0, len(item_ids), size)]


async def run_item_audit(
    item_ids: Iterable[int],
    *,
    reconciler: ItemReconciler,
    report: DiscrepancyReport,
    pacing: AuditPacing | None = None,
    sleep: Sleep = asyncio.sleep,
) -> ItemAuditResult:
    """Reconcile ``item_ids`` group by group, rewriting the report after every discrepancy."""

    effective_pacing = pacing or AuditPacing()
    groups = _groups(list(item_ids), effective_pacing.group_size)
    result = ItemAuditResult()
    log.info(
        "Processing %s groups of up to %s items each", len(groups), effective_pacing.group_size
    )

    for group_index, group in enumerate(groups):
        log.info("Processing group %s/%s", group_index + 1, len(groups))
        for position, item_id in enumerate(group):
            await _audit_item(item_id, reconciler=reconciler, report=report, result=result)
            if position < len(group) - 1:
                await sleep(effective_pacing.item_delay_seconds)

        if group_index < len(groups) - 1:
            log.info(
                "Group complete. Pausing for %s seconds before next group...",
                effective_pacing.group_delay_seconds,
            )
            await sleep(effective_pacing.group_delay_seconds)

    return result


async def _audit_item(
    item_id: int,
    *,
    reconciler: ItemReconciler,
    report: DiscrepancyReport,
    result: ItemAuditResult,
) -> None:
    try:
        outcome = await reconciler.reconcile(item_id)
    except Exception as exc:
        log.error(
            "Failed to check item %s: %s",
            item_id,
            exc,
            exc_info=log.isEnabledFor(DEBUG),
        )
        result.failed.append(item_id)
        return

    match outcome:
        case NotApplicable():
            result.skipped.append(item_id)
        case Consistent():
            result.checked += 1
            result.consistent += 1
        case DiscrepancyFound(record=record):
            result.checked += 1
            result.discrepancies.append(record)
            log.warning(
                "Discrepancy found for item %s (%s): %s",
                record.item_id,
                record.item_name,
                record.message,
            )
            report.write(result.discrepancies)
        case CheckFailed(record=record):
            result.checked += 1
            result.failed.append(item_id)
            log.error("Excluding item %s from the report: %s", item_id, record.message)


async def audit_single_item(
    item_id: int,
    *,
    reconciler: ItemReconciler,
    report: DiscrepancyReport,
) -> ItemAuditResult:
    """Reconcile one item without pacing; a data-source failure is fatal here."""

    result = ItemAuditResult()
    outcome = await reconciler.reconcile(item_id)
    match outcome:
        case NotApplicable(reason=reason):
            log.warning("Item %s was not checked: %s", item_id, reason)
            result.skipped.append(item_id)
        case Consistent():
            result.checked = result.consistent = 1
        case DiscrepancyFound(record=record):
            result.checked = 1
            result.discrepancies.append(record)
            log.warning(
                "Discrepancy found for item %s (%s): %s",
                record.item_id,
                record.item_name,
                record.message,
            )
            report.write(result.discrepancies)
        case CheckFailed(record=record, cause=cause):
            raise ItemCheckError(record) from cause
    return result
