"""Translate decoded contract tuples into domain creature metadata."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gotchiledger.domain.model import CreatureMetadata


def _to_decimal_string(value: object) -> object:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _to_int_tuple(value: object) -> object:
    if isinstance(value, Sequence) and not isinstance(value, str | bytes):
        return tuple(int(entry) for entry in value)
    return value


class BridgedAavegotchiPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    name: str
    owner: str
    random_number: str = Field(alias="randomNumber")
    status: int
    numeric_traits: tuple[int, ...] = Field(alias="numericTraits")
    temporary_trait_boosts: tuple[int, ...] = Field(alias="temporaryTraitBoosts")
    equipped_wearables: tuple[int, ...] = Field(alias="equippedWearables")
    collateral_type: str = Field(alias="collateralType")
    escrow: str
    minimum_stake: str = Field(alias="minimumStake")
    used_skill_points: str = Field(alias="usedSkillPoints")
    experience: str
    interaction_count: str = Field(alias="interactionCount")
    claim_time: int = Field(alias="claimTime")
    last_temporary_boost: int = Field(alias="lastTemporaryBoost")
    haunt_id: int = Field(alias="hauntId")
    last_interacted: int = Field(alias="lastInteracted")
    locked: bool
    items: tuple[int, ...]
    respec_count: str = Field(alias="respecCount")

    _big_ints = field_validator(
        "random_number",
        "minimum_stake",
        "used_skill_points",
        "experience",
        "interaction_count",
        "respec_count",
        mode="before",
    )(_to_decimal_string)
    _arrays = field_validator(
        "numeric_traits",
        "temporary_trait_boosts",
        "equipped_wearables",
        "items",
        mode="before",
    )(_to_int_tuple)

    @classmethod
    def from_domain(cls, metadata: CreatureMetadata) -> BridgedAavegotchiPayload:
        return cls.model_validate(
            {field_name: getattr(metadata, field_name) for field_name in cls.model_fields}
        )

    def to_domain(self) -> CreatureMetadata:
        return CreatureMetadata(
            name=self.name,
            owner=self.owner,
            random_number=self.random_number,
            status=self.status,
            numeric_traits=self.numeric_traits,
            temporary_trait_boosts=self.temporary_trait_boosts,
            equipped_wearables=self.equipped_wearables,
            collateral_type=self.collateral_type,
            escrow=self.escrow,
            minimum_stake=self.minimum_stake,
            used_skill_points=self.used_skill_points,
            experience=self.experience,
            interaction_count=self.interaction_count,
            claim_time=self.claim_time,
            last_temporary_boost=self.last_temporary_boost,
            haunt_id=self.haunt_id,
            last_interacted=self.last_interacted,
            locked=self.locked,
            items=self.items,
            respec_count=self.respec_count,
        )


def translate_aavegotchi(raw: dict[str, object]) -> CreatureMetadata:
    """Normalize one decoded ``AavegotchiInfo`` mapping."""

    return BridgedAavegotchiPayload.model_validate(raw).to_domain()
