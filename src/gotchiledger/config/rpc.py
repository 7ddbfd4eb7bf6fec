"""Blockchain RPC configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

# Aavegotchi diamond on Polygon; it also holds equipped wearables in custody.
AAVEGOTCHI_DIAMOND: Final[str] = "0x86935F11C86623deC8a25696E1C19a8659CbF95d"
RPC_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class RpcConfig:
    url: str
    diamond_address: str
    resilience: ResilienceConfig


def get_rpc_config(*, resilience: ResilienceConfig | None = None) -> RpcConfig:
    values = require_env_vars(("RPC_URL",))
    url = values["RPC_URL"]
    return RpcConfig(
        url=url,
        diamond_address=AAVEGOTCHI_DIAMOND,
        resilience=resilience
        or ResilienceConfig(
            name="rpc",
            timeout_seconds=RPC_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=3),
        ),
    )
