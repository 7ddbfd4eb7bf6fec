"""Public domain model surface."""

from __future__ import annotations

from gotchiledger.domain.model.catalog import VOID_ITEM_ID, CatalogError, ItemCatalog, ItemType
from gotchiledger.domain.model.creatures import CreatureMetadata, CreatureRecord
from gotchiledger.domain.model.discrepancy import DiscrepancyData, DiscrepancyRecord, OwnerBalance
from gotchiledger.domain.model.enums import CheckStage

__all__ = [
    "VOID_ITEM_ID",
    "CatalogError",
    "CheckStage",
    "CreatureMetadata",
    "CreatureRecord",
    "DiscrepancyData",
    "DiscrepancyRecord",
    "ItemCatalog",
    "ItemType",
    "OwnerBalance",
]
