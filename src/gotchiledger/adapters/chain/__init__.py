"""Public interface for the diamond contract adapter."""

from __future__ import annotations

from .contract import DiamondContract
from .rpc import JsonRpcClient, RpcError
from .translator import BridgedAavegotchiPayload, translate_aavegotchi

__all__ = [
    "BridgedAavegotchiPayload",
    "DiamondContract",
    "JsonRpcClient",
    "RpcError",
    "translate_aavegotchi",
]
