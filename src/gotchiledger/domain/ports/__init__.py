"""Domain port definitions for adapters."""

from __future__ import annotations

from .ledger import OwnershipLedger
from .metadata import (
    CreatureMetadataSource,
    CreatureSnapshot,
    FetchProgress,
    MetadataExportStore,
    SnapshotUnavailableError,
)
from .reporting import DiscrepancyReport

__all__ = [
    "CreatureMetadataSource",
    "CreatureSnapshot",
    "DiscrepancyReport",
    "FetchProgress",
    "MetadataExportStore",
    "OwnershipLedger",
    "SnapshotUnavailableError",
]
