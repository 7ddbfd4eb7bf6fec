"""Load the item catalog from JSON."""

from __future__ import annotations

import json
from importlib import resources
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from gotchiledger.domain.model import CatalogError, ItemCatalog, ItemType

if TYPE_CHECKING:
    from pathlib import Path

BUNDLED_CATALOG = "item_types.json"

log = getLogger(__name__)


class ItemTypePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int = Field(ge=0)
    name: str
    max_quantity: int = Field(alias="maxQuantity", ge=0)


_ITEM_TYPES = TypeAdapter(list[ItemTypePayload])


def parse_item_catalog(raw: object) -> ItemCatalog:
    try:
        payloads = _ITEM_TYPES.validate_python(raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid item catalog: {exc}") from exc
    return ItemCatalog(
        ItemType(item_id=payload.id, name=payload.name, max_quantity=payload.max_quantity)
        for payload in payloads
    )


def load_item_catalog(path: Path | None = None) -> ItemCatalog:
    """Read ``path`` or, when omitted, the catalog bundled with the package."""

    try:
        if path is None:
            text = (
                resources.files("gotchiledger").joinpath("data", BUNDLED_CATALOG).read_text("utf-8")
            )
        else:
            text = path.read_text(encoding="utf-8")
        raw = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Could not read item catalog: {exc}") from exc
    catalog = parse_item_catalog(raw)
    if path is None:
        log.warning(
            "Using the bundled starter catalog with %s item types; "
            "set GOTCHILEDGER_ITEM_CATALOG to audit the full catalog",
            len(catalog),
        )
    return catalog
