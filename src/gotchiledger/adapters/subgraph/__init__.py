"""Public interface for the subgraph adapter."""

from __future__ import annotations

from .client import SubgraphClient, SubgraphQueryError
from .schema import OwnerPayload

__all__ = ["OwnerPayload", "SubgraphClient", "SubgraphQueryError"]
