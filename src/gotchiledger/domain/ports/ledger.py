"""Ports for reading item ownership from the chain and its index."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gotchiledger.domain.model import OwnerBalance


@runtime_checkable
class OwnershipLedger(Protocol):
    """Read-only item accounting queries.

    ``owners_of`` and ``equipped_holder_count`` are answered by the indexed
    subgraph; ``custody_balance_direct`` reads contract state directly.
    """

    async def owners_of(self, item_id: int) -> Sequence[OwnerBalance]: ...

    async def equipped_holder_count(self, item_id: int) -> int: ...

    async def custody_balance_direct(self, item_id: int) -> int: ...


__all__ = ["OwnershipLedger"]
