"""Subgraph configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SUBGRAPH_URL_TEMPLATE = (
    "https://subgraph.satsuma-prod.com/{key}/aavegotchi/aavegotchi-core-matic"
    "/version/matic-add-owners-to-wearables-6/api"
)
SUBGRAPH_TIMEOUT_SECONDS = 30.0
SUBGRAPH_PAGE_SIZE = 1000


@dataclass(frozen=True, slots=True)
class SubgraphConfig:
    """Holds the indexed-subgraph endpoint and paging settings."""

    endpoint: str
    resilience: ResilienceConfig
    page_size: int = SUBGRAPH_PAGE_SIZE


def get_subgraph_config(*, resilience: ResilienceConfig | None = None) -> SubgraphConfig:
    values = require_env_vars(("SUBGRAPH_KEY",))
    endpoint = optional_env_var("SUBGRAPH_URL") or SUBGRAPH_URL_TEMPLATE.format(
        key=values["SUBGRAPH_KEY"]
    )
    return SubgraphConfig(
        endpoint=endpoint,
        resilience=resilience
        or ResilienceConfig(
            name="subgraph",
            timeout_seconds=SUBGRAPH_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            retry=RetryPolicy(total=4),
        ),
    )
