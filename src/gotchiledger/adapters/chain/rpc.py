"""Minimal JSON-RPC client for read-only contract calls."""

from __future__ import annotations

import itertools
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from gotchiledger.adapters.http_resilience import ResilientClient
from gotchiledger.config.rpc import get_rpc_config

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from gotchiledger.config.http_resilience import ResilienceConfig
    from gotchiledger.config.rpc import RpcConfig

log = getLogger(__name__)


class RpcError(RuntimeError):
    """Raised when the node returns a JSON-RPC error object or malformed result."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class _RpcModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RpcErrorPayload(_RpcModel):
    code: int | None = None
    message: str = "unknown error"


class RpcResponse(_RpcModel):
    result: str | None = None
    error: RpcErrorPayload | None = None


class JsonRpcClient:
    """Sends ``eth_call`` requests; the RPC configuration is resolved on first use."""

    def __init__(
        self,
        *,
        config: RpcConfig | None = None,
        config_provider: Callable[[], RpcConfig] = get_rpc_config,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._config_provider = config_provider
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None
        self._ids = itertools.count(1)

    @property
    def config(self) -> RpcConfig:
        if self._config is None:
            self._config = self._config_provider()
        return self._config

    async def __aenter__(self) -> JsonRpcClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def eth_call(self, to: str, data: bytes, *, block: str = "latest") -> bytes:
        """Execute a read-only call and return the raw ABI-encoded result."""

        config = self.config
        if self._client is None:
            self._client = self._client_factory(config.resilience)
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": "eth_call",
            "params": [{"to": to, "data": "0x" + data.hex()}, block],
        }
        body = await self._client.post_json(config.url, payload)
        parsed = RpcResponse.model_validate(body)
        if parsed.error is not None:
            log.error("RPC error %s: %s", parsed.error.code, parsed.error.message)
            raise RpcError(parsed.error.message, code=parsed.error.code)
        if parsed.result is None or not parsed.result.startswith("0x"):
            raise RpcError("RPC response carried no call result")
        return bytes.fromhex(parsed.result[2:])
