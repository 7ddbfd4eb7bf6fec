"""Read-only access to the Aavegotchi diamond contract."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .abi import (
    decode_batch_get_bridged,
    decode_uint256,
    encode_balance_of,
    encode_batch_get_bridged,
)
from .translator import translate_aavegotchi

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gotchiledger.domain.model import CreatureMetadata

    from .rpc import JsonRpcClient

log = getLogger(__name__)


class DiamondContract:
    """Typed calls against the diamond at the configured address."""

    def __init__(self, rpc: JsonRpcClient) -> None:
        self._rpc = rpc

    @property
    def address(self) -> str:
        return self._rpc.config.diamond_address

    async def balance_of(self, owner: str, item_id: int) -> int:
        result = await self._rpc.eth_call(self.address, encode_balance_of(owner, item_id))
        return decode_uint256(result)

    async def custody_balance(self, item_id: int) -> int:
        """Balance of ``item_id`` the diamond holds on its own account."""

        return await self.balance_of(self.address, item_id)

    async def fetch_batch(self, creature_ids: Sequence[int]) -> list[CreatureMetadata]:
        result = await self._rpc.eth_call(self.address, encode_batch_get_bridged(creature_ids))
        rows = decode_batch_get_bridged(result)
        log.debug("Decoded %s creature records for %s ids", len(rows), len(creature_ids))
        return [translate_aavegotchi(row) for row in rows]
