"""Retry, rate-limit and timeout settings shared by the HTTP adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import metadata

import httpx


def _user_agent() -> str:
    try:
        version = metadata.version("gotchiledger")
    except metadata.PackageNotFoundError:
        version = "0.0.0+local"
    return f"gotchiledger/{version}"


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Transport-level retries; GraphQL queries and ``eth_call`` are both safe to resend."""

    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 30.0
    respect_retry_after_header: bool = True
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    user_agent: str = field(default_factory=_user_agent)
