"""HTTP client for the Aavegotchi core subgraph."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from gotchiledger.adapters.http_resilience import ResilientClient

from . import queries
from .schema import EquippedHoldersData, GraphQLEnvelope, ItemOwnersData, OwnerPayload

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from gotchiledger.config.http_resilience import ResilienceConfig
    from gotchiledger.config.subgraph import SubgraphConfig

log = getLogger(__name__)


class SubgraphQueryError(RuntimeError):
    """Raised when the subgraph answers with GraphQL errors or an unusable payload."""


class SubgraphClient:
    """Issues the item ownership queries; one HTTP client is shared per instance."""

    def __init__(
        self,
        *,
        config: SubgraphConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient
        self._client: ResilientClient | None = None

    async def __aenter__(self) -> SubgraphClient:
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

    async def item_owners(self, item_id: int) -> list[OwnerPayload]:
        """Every (owner, balance) pair the subgraph records for ``item_id``."""

        page_size = self._config.page_size
        owners: list[OwnerPayload] = []
        skip = 0
        while True:
            data = await self._query(
                queries.ITEM_OWNERS,
                {"id": str(item_id), "first": page_size, "skip": skip},
            )
            page = ItemOwnersData.model_validate(data)
            if page.item_type is None:
                log.info("Subgraph has no item type %s", item_id)
                return owners
            owners.extend(page.item_type.owners)
            if len(page.item_type.owners) < page_size:
                return owners
            skip += page_size

    async def count_equipped_holders(self, item_id: int) -> int:
        """Number of creatures whose indexed equipped wearables contain ``item_id``."""

        page_size = self._config.page_size
        count = 0
        last_id = ""
        while True:
            data = await self._query(
                queries.EQUIPPED_HOLDERS,
                {"equipped": [item_id], "lastId": last_id, "first": page_size},
            )
            page = EquippedHoldersData.model_validate(data)
            count += len(page.aavegotchis)
            if len(page.aavegotchis) < page_size:
                return count
            last_id = page.aavegotchis[-1].id

    async def _query(self, query: str, variables: dict[str, object]) -> dict[str, object]:
        body = await self._http().post_json(
            self._config.endpoint, {"query": query, "variables": variables}
        )
        envelope = GraphQLEnvelope.model_validate(body)
        if envelope.errors:
            messages = "; ".join(error.message for error in envelope.errors)
            raise SubgraphQueryError(f"Subgraph query failed: {messages}")
        if envelope.data is None:
            raise SubgraphQueryError("Subgraph response carried no data")
        return envelope.data

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._config.resilience)
        return self._client
