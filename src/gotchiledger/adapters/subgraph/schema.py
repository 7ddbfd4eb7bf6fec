"""Pydantic models describing the subgraph responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubgraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphQLErrorPayload(SubgraphBaseModel):
    message: str


class GraphQLEnvelope(SubgraphBaseModel):
    data: dict[str, object] | None = None
    errors: list[GraphQLErrorPayload] | None = None


class OwnerPayload(SubgraphBaseModel):
    owner: str
    balance: int = Field(ge=0)

    @field_validator("balance", mode="before")
    @classmethod
    def _parse_decimal(cls, value: object) -> object:
        # BigInt scalars arrive as decimal strings
        if isinstance(value, str):
            return int(value.strip())
        return value


class ItemTypeOwners(SubgraphBaseModel):
    id: str
    owners: list[OwnerPayload] = Field(default_factory=list[OwnerPayload])


class ItemOwnersData(SubgraphBaseModel):
    item_type: ItemTypeOwners | None = Field(default=None, alias="itemType")


class AavegotchiRef(SubgraphBaseModel):
    id: str


class EquippedHoldersData(SubgraphBaseModel):
    aavegotchis: list[AavegotchiRef]
