"""Resumable export of creature metadata from the diamond contract.

Creature ids ``1..total_creatures`` are fetched in fixed-size batches. After
each batch the accumulated metadata is saved first and the checkpoint second,
so a crash can never leave a checkpoint that claims unsaved data. A restart
derives the remaining ids from the checkpoint's ``fetched_ids`` and regroups
them into fresh batches.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gotchiledger.config.audit import (
    DEFAULT_EXPORT_BATCH_SIZE,
    DEFAULT_EXPORT_MAX_ATTEMPTS,
    DEFAULT_EXPORT_RETRY_DELAY_SECONDS,
    DEFAULT_EXPORT_TOTAL_CREATURES,
)
from gotchiledger.config.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from gotchiledger.domain.model import CreatureMetadata
    from gotchiledger.domain.ports import (
        CreatureMetadataSource,
        FetchProgress,
        MetadataExportStore,
    )

Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)


class MetadataExportError(RuntimeError):
    """Raised when a batch keeps failing after every retry attempt."""

    def __init__(self, message: str, *, batch: Sequence[int]) -> None:
        super().__init__(message)
        self.batch = tuple(batch)


@dataclass(frozen=True, slots=True)
class ExportSettings:
    total_creatures: int = DEFAULT_EXPORT_TOTAL_CREATURES
    batch_size: int = DEFAULT_EXPORT_BATCH_SIZE
    max_attempts: int = DEFAULT_EXPORT_MAX_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_EXPORT_RETRY_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("Export batch size must be at least 1")
        if self.max_attempts < 1:
            raise ValueError("Export max attempts must be at least 1")


@dataclass(frozen=True, slots=True)
class MetadataExportResult:
    batches_fetched: int
    creatures_fetched: int
    total_records: int

    @property
    def already_complete(self) -> bool:
        return self.batches_fetched == 0


def remaining_ids(total_creatures: int, progress: FetchProgress) -> list[int]:
    fetched = set(progress.fetched_ids)
    return [
        creature_id for creature_id in range(1, total_creatures + 1) if creature_id not in fetched
    ]


def chunk(values: Sequence[int], size: int) -> list[list[int]]:
    return [list(values[start : start + size]) for start in range(0, len(values), size)]


def apply_batch(
    records: Mapping[int, CreatureMetadata],
    progress: FetchProgress,
    batch: Sequence[int],
    fetched: Sequence[CreatureMetadata],
) -> tuple[dict[int, CreatureMetadata], FetchProgress]:
    """Fold one fetched batch into the accumulated records and checkpoint."""

    merged = dict(records)
    for creature_id, metadata in zip(batch, fetched, strict=True):
        merged[creature_id] = metadata
    return merged, progress.advance(batch)


async def export_creature_metadata(
    *,
    source: CreatureMetadataSource,
    store: MetadataExportStore,
    settings: ExportSettings | None = None,
    sleep: Sleep = asyncio.sleep,
) -> MetadataExportResult:
    """Fetch every creature not yet in the checkpoint, saving after each batch."""

    effective = settings or ExportSettings()
    records = store.load_records()
    progress = store.load_progress()
    if progress.last_completed_batch >= 0:
        log.info(
            "Resuming after batch %s with %s creatures already fetched",
            progress.last_completed_batch,
            len(progress.fetched_ids),
        )

    batches = chunk(remaining_ids(effective.total_creatures, progress), effective.batch_size)
    log.info("Total batches to process: %s", len(batches))

    creatures_fetched = 0
    for index, batch in enumerate(batches, start=1):
        fetched = await _fetch_with_retry(
            source,
            batch,
            label=f"{index}/{len(batches)}",
            settings=effective,
            sleep=sleep,
        )
        records, progress = apply_batch(records, progress, batch, fetched)
        store.save_records(records)
        store.save_progress(progress)
        creatures_fetched += len(batch)
        log.info("Successfully processed and saved batch %s/%s", index, len(batches))

    log.info("Finished fetching creature metadata; total creatures stored: %s", len(records))
    return MetadataExportResult(
        batches_fetched=len(batches),
        creatures_fetched=creatures_fetched,
        total_records=len(records),
    )


async def _fetch_with_retry(
    source: CreatureMetadataSource,
    batch: Sequence[int],
    *,
    label: str,
    settings: ExportSettings,
    sleep: Sleep,
) -> Sequence[CreatureMetadata]:
    last_error: Exception | None = None
    for attempt in range(1, settings.max_attempts + 1):
        try:
            log.info("Fetching batch %s", label)
            fetched = await source.fetch_batch(batch)
            if len(fetched) != len(batch):
                raise ValueError(  # noqa: TRY301
                    f"Contract returned {len(fetched)} records for {len(batch)} ids"
                )
        except ConfigurationError:
            raise
        except Exception as exc:  # noqa: BLE001
            last_error = exc
            log.warning(
                "Error processing batch %s. Attempt %s/%s: %s",
                label,
                attempt,
                settings.max_attempts,
                exc,
            )
            if attempt < settings.max_attempts:
                log.info("Retrying in %s seconds...", settings.retry_delay_seconds)
                await sleep(settings.retry_delay_seconds)
        else:
            return fetched

    raise MetadataExportError(
        f"Failed to process batch {label} after {settings.max_attempts} attempts: {last_error}",
        batch=batch,
    ) from last_error
