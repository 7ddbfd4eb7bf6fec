"""Ports for creature metadata: the contract source, the export store and the snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from gotchiledger.domain.model import CreatureMetadata, CreatureRecord


class SnapshotUnavailableError(RuntimeError):
    """Raised when the local metadata snapshot is missing, unreadable or stale."""


@dataclass(frozen=True, slots=True)
class FetchProgress:
    """Export checkpoint.

    ``fetched_ids`` holds every id of every completed batch; the checkpoint is
    only written after the metadata it describes.
    """

    last_completed_batch: int = -1
    fetched_ids: tuple[int, ...] = ()

    def advance(self, batch_ids: Sequence[int]) -> FetchProgress:
        return FetchProgress(
            last_completed_batch=self.last_completed_batch + 1,
            fetched_ids=(*self.fetched_ids, *batch_ids),
        )


@runtime_checkable
class CreatureMetadataSource(Protocol):
    """Batch read of creature records, returned in request order."""

    async def fetch_batch(self, creature_ids: Sequence[int]) -> Sequence[CreatureMetadata]: ...


@runtime_checkable
class MetadataExportStore(Protocol):
    def load_records(self) -> dict[int, CreatureMetadata]: ...

    def save_records(self, records: Mapping[int, CreatureMetadata]) -> None: ...

    def load_progress(self) -> FetchProgress: ...

    def save_progress(self, progress: FetchProgress) -> None: ...


@runtime_checkable
class CreatureSnapshot(Protocol):
    def load(self) -> Mapping[int, CreatureRecord]:
        """Return the snapshot or raise ``SnapshotUnavailableError``."""
        ...


__all__ = [
    "CreatureMetadataSource",
    "CreatureSnapshot",
    "FetchProgress",
    "MetadataExportStore",
    "SnapshotUnavailableError",
]
