from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from gotchiledger.adapters.http_resilience import ResilienceConfig, ResilientClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_client_factory() -> Callable[[Handler], Callable[[ResilienceConfig], ResilientClient]]:
    def build(handler: Handler) -> Callable[[ResilienceConfig], ResilientClient]:
        async def async_handler(request: httpx.Request) -> httpx.Response:
            return handler(request)

        def factory(resilience: ResilienceConfig) -> ResilientClient:
            client = ResilientClient(resilience)
            mock = httpx.AsyncClient(transport=httpx.MockTransport(async_handler))
            client._client = mock  # noqa: SLF001  # pyright: ignore[reportPrivateUsage]
            return client

        return factory

    return build
