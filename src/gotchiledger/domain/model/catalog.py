"""Item catalog: the fixed set of wearable types and their mintable supply."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

VOID_ITEM_ID = 0


class CatalogError(ValueError):
    """Raised when catalog entries violate the catalog invariants."""


@dataclass(frozen=True, slots=True)
class ItemType:
    item_id: int
    name: str
    max_quantity: int

    @property
    def auditable(self) -> bool:
        return self.item_id != VOID_ITEM_ID


class ItemCatalog(Mapping[int, ItemType]):
    """Immutable ``item_id -> ItemType`` mapping validated on construction."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[ItemType]) -> None:
        by_id: dict[int, ItemType] = {}
        for item in items:
            if item.item_id < 0:
                raise CatalogError(f"Item id must be non-negative: {item.item_id}")
            if item.max_quantity < 0:
                raise CatalogError(
                    f"Item {item.item_id} has negative max quantity {item.max_quantity}"
                )
            if item.item_id in by_id:
                raise CatalogError(f"Duplicate catalog entry for item {item.item_id}")
            by_id[item.item_id] = item
        self._items: Mapping[int, ItemType] = MappingProxyType(by_id)

    def __getitem__(self, item_id: int) -> ItemType:
        return self._items[item_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def lookup(self, item_id: int) -> ItemType | None:
        return self._items.get(item_id)

    def auditable_ids(self) -> list[int]:
        """Catalog ids worth reconciling, ascending; the void item is excluded."""

        return sorted(item_id for item_id, item in self._items.items() if item.auditable)
