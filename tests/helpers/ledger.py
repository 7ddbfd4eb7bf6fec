"""Reusable fakes for reconciliation and audit tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gotchiledger.config import AAVEGOTCHI_DIAMOND
from gotchiledger.domain.model import (
    CreatureRecord,
    DiscrepancyRecord,
    ItemCatalog,
    ItemType,
    OwnerBalance,
)
from gotchiledger.domain.ports import SnapshotUnavailableError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from gotchiledger.domain.reconciliation import ItemOutcome

OTHER_OWNER = "0x1111111111111111111111111111111111111111"


def make_catalog(*items: tuple[int, str, int]) -> ItemCatalog:
    return ItemCatalog(
        ItemType(item_id=item_id, name=name, max_quantity=max_quantity)
        for item_id, name, max_quantity in items
    )


def owners_with_custody(custody: int, others: int) -> list[OwnerBalance]:
    owners = [OwnerBalance(owner=AAVEGOTCHI_DIAMOND, balance=custody)]
    if others:
        owners.append(OwnerBalance(owner=OTHER_OWNER, balance=others))
    return owners


@dataclass
class FakeLedger:
    owners: dict[int, list[OwnerBalance]] = field(default_factory=dict[int, list[OwnerBalance]])
    equipped: dict[int, int] = field(default_factory=dict[int, int])
    direct: dict[int, int] = field(default_factory=dict[int, int])
    errors: dict[str, Exception] = field(default_factory=dict[str, Exception])
    calls: list[tuple[str, int]] = field(default_factory=list[tuple[str, int]])

    async def owners_of(self, item_id: int) -> list[OwnerBalance]:
        self._record("owners_of", item_id)
        return self.owners.get(item_id, [])

    async def equipped_holder_count(self, item_id: int) -> int:
        self._record("equipped_holder_count", item_id)
        return self.equipped.get(item_id, 0)

    async def custody_balance_direct(self, item_id: int) -> int:
        self._record("custody_balance_direct", item_id)
        return self.direct.get(item_id, 0)

    def _record(self, name: str, item_id: int) -> None:
        self.calls.append((name, item_id))
        if name in self.errors:
            raise self.errors[name]


class FakeSnapshot:
    def __init__(
        self,
        records: Mapping[int, CreatureRecord] | None = None,
        *,
        error: SnapshotUnavailableError | None = None,
    ) -> None:
        self.records = dict(records or {})
        self.error = error
        self.loads = 0

    def load(self) -> Mapping[int, CreatureRecord]:
        self.loads += 1
        if self.error is not None:
            raise self.error
        return self.records


def creatures_holding(
    item_id: int, *, unequipped: int, equipped: int = 0
) -> dict[int, CreatureRecord]:
    """Snapshot with ``unequipped`` pocket holders and ``equipped`` wearers of ``item_id``."""

    records: dict[int, CreatureRecord] = {}
    next_id = 1
    for _ in range(unequipped):
        records[next_id] = CreatureRecord(
            creature_id=next_id,
            name=f"pocket-{next_id}",
            items=(item_id,),
            equipped_wearables=(0,) * 16,
        )
        next_id += 1
    for _ in range(equipped):
        records[next_id] = CreatureRecord(
            creature_id=next_id,
            name=f"wearer-{next_id}",
            items=(item_id,),
            equipped_wearables=(item_id,) + (0,) * 15,
        )
        next_id += 1
    return records


@dataclass
class FakeReport:
    writes: list[list[DiscrepancyRecord]] = field(default_factory=list[list[DiscrepancyRecord]])

    def write(self, records: Sequence[DiscrepancyRecord]) -> None:
        self.writes.append(list(records))


@dataclass
class ScriptedReconciler:
    """Returns canned outcomes per item id and records the call order."""

    outcomes: dict[int, ItemOutcome]
    errors: dict[int, Exception] = field(default_factory=dict[int, Exception])
    calls: list[int] = field(default_factory=list[int])

    async def reconcile(self, item_id: int) -> ItemOutcome:
        self.calls.append(item_id)
        if item_id in self.errors:
            raise self.errors[item_id]
        return self.outcomes[item_id]


class SleepRecorder:
    def __init__(self, events: list[object] | None = None) -> None:
        self.delays: list[float] = []
        self.events = events

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.events is not None:
            self.events.append(("sleep", seconds))
