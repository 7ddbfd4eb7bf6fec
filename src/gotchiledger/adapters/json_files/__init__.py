"""JSON file adapters: snapshot, export store and discrepancy report."""

from __future__ import annotations

from .export_store import ExportStoreError, JsonMetadataExportStore
from .report import JsonDiscrepancyReport
from .snapshot import JsonCreatureSnapshot

__all__ = [
    "ExportStoreError",
    "JsonCreatureSnapshot",
    "JsonDiscrepancyReport",
    "JsonMetadataExportStore",
]
