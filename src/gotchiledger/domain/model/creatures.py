"""Creature (Aavegotchi) records as exported from the diamond contract."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CreatureRecord:
    """Point-in-time inventory view of one creature, read from the snapshot."""

    creature_id: int
    name: str
    items: tuple[int, ...]
    equipped_wearables: tuple[int, ...] | None = None

    def holds_unequipped(self, item_id: int) -> bool:
        if item_id not in self.items:
            return False
        return self.equipped_wearables is None or item_id not in self.equipped_wearables


@dataclass(frozen=True, slots=True, kw_only=True)
class CreatureMetadata:
    """Full on-chain record.

    Unbounded uint256 fields are decimal strings; timestamps, counters that fit
    comfortably and trait values are plain ints.
    """

    name: str
    owner: str
    random_number: str
    status: int
    numeric_traits: tuple[int, ...]
    temporary_trait_boosts: tuple[int, ...]
    equipped_wearables: tuple[int, ...]
    collateral_type: str
    escrow: str
    minimum_stake: str
    used_skill_points: str
    experience: str
    interaction_count: str
    claim_time: int
    last_temporary_boost: int
    haunt_id: int
    last_interacted: int
    locked: bool
    items: tuple[int, ...]
    respec_count: str

    def to_record(self, creature_id: int) -> CreatureRecord:
        return CreatureRecord(
            creature_id=creature_id,
            name=self.name,
            items=self.items,
            equipped_wearables=self.equipped_wearables,
        )
