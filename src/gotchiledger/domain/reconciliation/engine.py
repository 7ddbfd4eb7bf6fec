"""Staged balance reconciliation for a single item.

The four checks run in order and each one gates the next:

0. supply: the subgraph's owner balances must add up to the catalog's max quantity.
1. custody: the diamond's indexed balance must equal the number of creatures
   the subgraph reports as wearing the item.
2. direct balance: the gap may be items the diamond holds unequipped, read
   straight from the contract.
3. inventory: the rest may be items sitting in creature pockets, counted from
   the local metadata snapshot.

Stages 1-3 each end the check as soon as the custody balance is explained.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gotchiledger.domain.model import (
    VOID_ITEM_ID,
    CheckStage,
    DiscrepancyData,
    DiscrepancyRecord,
)
from gotchiledger.domain.ports.metadata import SnapshotUnavailableError

from .outcome import CheckFailed, Consistent, DiscrepancyFound, NotApplicable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gotchiledger.domain.model import ItemCatalog, ItemType, OwnerBalance
    from gotchiledger.domain.ports import CreatureSnapshot, OwnershipLedger

    from .outcome import ItemOutcome

log = getLogger(__name__)


def _relation(passed: bool) -> str:
    return "==" if passed else "!="


def _log_check(stage: CheckStage, passed: bool, detail: str) -> None:
    if passed:
        log.info("Check %s passed: %s", stage.index, detail)
    else:
        log.warning("Check %s failed: %s", stage.index, detail)


@dataclass(slots=True)
class _StageCursor:
    stage: CheckStage = CheckStage.SUPPLY


@dataclass(slots=True)
class ItemReconciler:
    """Run the staged checks for one item against the ledger and the snapshot."""

    catalog: ItemCatalog
    ledger: OwnershipLedger
    snapshot: CreatureSnapshot
    custody_address: str

    async def reconcile(self, item_id: int) -> ItemOutcome:
        item = self.catalog.lookup(item_id)
        if item_id == VOID_ITEM_ID or item is None:
            log.warning("Skipping item ID %s (not a valid item)", item_id)
            reason = "void item" if item_id == VOID_ITEM_ID else "not in catalog"
            return NotApplicable(item_id=item_id, reason=reason)

        log.info("Checking item ID %s (%s)", item.item_id, item.name)
        cursor = _StageCursor()
        try:
            return await self._run_checks(item, cursor)
        except Exception as exc:  # noqa: BLE001
            message = str(exc) or type(exc).__name__
            log.error(
                "Error checking item ID %s at check %s: %s", item_id, cursor.stage.index, message
            )
            return CheckFailed(
                record=DiscrepancyRecord(
                    item_id=item.item_id,
                    item_name=item.name,
                    max_quantity=item.max_quantity,
                    stage=cursor.stage,
                    message=message,
                ),
                cause=exc,
            )

    async def _run_checks(self, item: ItemType, cursor: _StageCursor) -> ItemOutcome:
        owners = await self.ledger.owners_of(item.item_id)
        owners_total = sum(owner.balance for owner in owners)
        passed = owners_total == item.max_quantity
        detail = (
            f"Owners total balance ({owners_total}) {_relation(passed)} "
            f"item max quantity ({item.max_quantity})"
        )
        _log_check(CheckStage.SUPPLY, passed, detail)
        if not passed:
            data = DiscrepancyData(owners_total=owners_total)
            return self._discrepancy(item, CheckStage.SUPPLY, data, detail)

        cursor.stage = CheckStage.CUSTODY
        custody_balance = self._custody_balance(owners)
        equipped_count = await self.ledger.equipped_holder_count(item.item_id)
        passed = custody_balance == equipped_count
        _log_check(
            CheckStage.CUSTODY,
            passed,
            f"Custody balance ({custody_balance}) {_relation(passed)} "
            f"creatures with item equipped ({equipped_count})",
        )
        if passed:
            return Consistent(item=item, stage=CheckStage.CUSTODY)

        cursor.stage = CheckStage.DIRECT_BALANCE
        direct_balance = await self.ledger.custody_balance_direct(item.item_id)
        explained = equipped_count + direct_balance
        passed = custody_balance == explained
        detail = (
            f"Custody balance ({custody_balance}) {_relation(passed)} "
            f"creatures with item equipped ({equipped_count}) + "
            f"direct custody balance ({direct_balance})"
        )
        _log_check(CheckStage.DIRECT_BALANCE, passed, detail)
        if passed:
            return Consistent(item=item, stage=CheckStage.DIRECT_BALANCE)

        cursor.stage = CheckStage.INVENTORY
        try:
            creatures = self.snapshot.load()
        except SnapshotUnavailableError as exc:
            log.warning(
                "Inventory check unavailable for item %s, reporting check 2: %s",
                item.item_id,
                exc,
            )
            data = DiscrepancyData(
                custody_balance=custody_balance,
                equipped_count=equipped_count,
                direct_balance=direct_balance,
                discrepancy=custody_balance - explained,
            )
            return self._discrepancy(item, CheckStage.DIRECT_BALANCE, data, detail, degraded=True)

        holders = sorted(
            (
                creature
                for creature in creatures.values()
                if creature.holds_unequipped(item.item_id)
            ),
            key=lambda creature: creature.creature_id,
        )
        unequipped = len(holders)
        log.info(
            "Found %s creatures with item %s in inventory but not equipped",
            unequipped,
            item.item_id,
        )
        for creature in holders:
            log.info("  creature %s: %s", creature.creature_id, creature.name)
        explained += unequipped
        passed = custody_balance == explained
        detail = (
            f"Custody balance ({custody_balance}) {_relation(passed)} "
            f"creatures with item equipped ({equipped_count}) + "
            f"direct custody balance ({direct_balance}) + "
            f"creatures with item unequipped in inventory ({unequipped})"
        )
        _log_check(CheckStage.INVENTORY, passed, detail)
        if passed:
            return Consistent(item=item, stage=CheckStage.INVENTORY)

        log.error(
            "All checks FAILED for item %s: check 1 sum %s, check 2 sum %s, check 3 sum %s",
            item.item_id,
            equipped_count,
            equipped_count + direct_balance,
            explained,
        )
        data = DiscrepancyData(
            custody_balance=custody_balance,
            equipped_count=equipped_count,
            direct_balance=direct_balance,
            unequipped_owned_count=unequipped,
            discrepancy=custody_balance - explained,
            unequipped_holder_ids=tuple(creature.creature_id for creature in holders),
        )
        return self._discrepancy(item, CheckStage.INVENTORY, data, detail)

    def _custody_balance(self, owners: Sequence[OwnerBalance]) -> int:
        custody = self.custody_address.lower()
        return sum(owner.balance for owner in owners if owner.owner.lower() == custody)

    @staticmethod
    def _discrepancy(
        item: ItemType,
        stage: CheckStage,
        data: DiscrepancyData,
        message: str,
        *,
        degraded: bool = False,
    ) -> DiscrepancyFound:
        return DiscrepancyFound(
            DiscrepancyRecord(
                item_id=item.item_id,
                item_name=item.name,
                max_quantity=item.max_quantity,
                stage=stage,
                data=data,
                message=message,
                degraded=degraded,
            )
        )
