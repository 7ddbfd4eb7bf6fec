"""Local creature-metadata snapshot used by the inventory check."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from gotchiledger.domain.ports import SnapshotUnavailableError

from .schema import SnapshotCreaturePayload

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    from gotchiledger.domain.model import CreatureRecord

log = getLogger(__name__)

_SNAPSHOT = TypeAdapter(dict[str, SnapshotCreaturePayload])


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JsonCreatureSnapshot:
    """Reads the exported metadata file once and serves it for the rest of the run.

    A failed read is remembered too, so every item in the run sees the same
    snapshot state.
    """

    def __init__(
        self,
        path: Path,
        *,
        max_age: timedelta | None = None,
        now_provider: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.path = path
        self._max_age = max_age
        self._now_provider = now_provider
        self._records: Mapping[int, CreatureRecord] | None = None
        self._error: SnapshotUnavailableError | None = None

    def load(self) -> Mapping[int, CreatureRecord]:
        if self._records is not None:
            return self._records
        if self._error is not None:
            raise self._error
        try:
            self._records = self._read()
        except SnapshotUnavailableError as exc:
            self._error = exc
            raise
        log.info("Loaded %s creatures from snapshot %s", len(self._records), self.path)
        return self._records

    def _read(self) -> dict[int, CreatureRecord]:
        log.info("Looking for metadata snapshot at: %s", self.path)
        try:
            stat = self.path.stat()
        except FileNotFoundError as exc:
            raise SnapshotUnavailableError(f"Snapshot not found at {self.path}") from exc
        except OSError as exc:
            raise SnapshotUnavailableError(f"Cannot access snapshot {self.path}: {exc}") from exc

        if self._max_age is not None:
            modified = datetime.fromtimestamp(stat.st_mtime, tz=UTC)
            age = self._now_provider() - modified
            if age > self._max_age:
                raise SnapshotUnavailableError(
                    f"Snapshot {self.path} is stale: last written {modified.isoformat()}"
                )

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            payloads = _SNAPSHOT.validate_python(raw)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise SnapshotUnavailableError(f"Snapshot {self.path} is unreadable: {exc}") from exc

        records: dict[int, CreatureRecord] = {}
        for key, payload in payloads.items():
            try:
                creature_id = int(key)
            except ValueError as exc:
                raise SnapshotUnavailableError(
                    f"Snapshot {self.path} has a non-numeric creature id {key!r}"
                ) from exc
            records[creature_id] = payload.to_domain(creature_id)
        return records
