"""ABI encoding for the diamond functions this project reads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

if TYPE_CHECKING:
    from collections.abc import Sequence

BALANCE_OF_SIGNATURE: Final[str] = "balanceOf(address,uint256)"
BATCH_GET_BRIDGED_SIGNATURE: Final[str] = "batchGetBridgedAavegotchi(uint256[])"

# AavegotchiInfo as returned by batchGetBridgedAavegotchi, in ABI order.
AAVEGOTCHI_INFO_FIELDS: Final[tuple[tuple[str, str], ...]] = (
    ("name", "string"),
    ("owner", "address"),
    ("randomNumber", "uint256"),
    ("status", "uint256"),
    ("numericTraits", "int16[6]"),
    ("temporaryTraitBoosts", "int16[6]"),
    ("equippedWearables", "uint16[16]"),
    ("collateralType", "string"),
    ("escrow", "address"),
    ("minimumStake", "uint256"),
    ("usedSkillPoints", "uint256"),
    ("experience", "uint256"),
    ("interactionCount", "uint256"),
    ("claimTime", "uint256"),
    ("lastTemporaryBoost", "uint256"),
    ("hauntId", "uint256"),
    ("lastInteracted", "uint256"),
    ("locked", "bool"),
    ("items", "uint16[]"),
    ("respecCount", "uint256"),
)
AAVEGOTCHI_INFO_ARRAY: Final[str] = (
    "(" + ",".join(abi_type for _, abi_type in AAVEGOTCHI_INFO_FIELDS) + ")[]"
)


def encode_balance_of(owner: str, item_id: int) -> bytes:
    selector = function_signature_to_4byte_selector(BALANCE_OF_SIGNATURE)
    return selector + encode(["address", "uint256"], [to_checksum_address(owner), item_id])


def decode_uint256(data: bytes) -> int:
    (value,) = decode(["uint256"], data)
    return int(value)


def encode_batch_get_bridged(token_ids: Sequence[int]) -> bytes:
    selector = function_signature_to_4byte_selector(BATCH_GET_BRIDGED_SIGNATURE)
    return selector + encode(["uint256[]"], [list(token_ids)])


def decode_batch_get_bridged(data: bytes) -> list[dict[str, object]]:
    """Decode the tuple array into one name-keyed mapping per creature."""

    (rows,) = decode([AAVEGOTCHI_INFO_ARRAY], data)
    names = [name for name, _ in AAVEGOTCHI_INFO_FIELDS]
    return [dict(zip(names, row, strict=True)) for row in rows]
