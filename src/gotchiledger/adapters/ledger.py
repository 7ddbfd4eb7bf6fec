"""Ownership ledger backed by the subgraph and the diamond contract."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gotchiledger.domain.model import OwnerBalance

if TYPE_CHECKING:
    from .chain import DiamondContract
    from .subgraph import SubgraphClient


@dataclass(slots=True)
class OnChainLedger:
    subgraph: SubgraphClient
    contract: DiamondContract

    async def owners_of(self, item_id: int) -> list[OwnerBalance]:
        payloads = await self.subgraph.item_owners(item_id)
        return [OwnerBalance(owner=payload.owner, balance=payload.balance) for payload in payloads]

    async def equipped_holder_count(self, item_id: int) -> int:
        return await self.subgraph.count_equipped_holders(item_id)

    async def custody_balance_direct(self, item_id: int) -> int:
        return await self.contract.custody_balance(item_id)
