"""Discrepancy report written as a JSON array."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import TypeAdapter

from gotchiledger.common.storage import read_json, write_json_atomic

from .schema import ReportEntryPayload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from gotchiledger.domain.model import DiscrepancyRecord

log = getLogger(__name__)

_ENTRIES = TypeAdapter(list[ReportEntryPayload])


class JsonDiscrepancyReport:
    def __init__(self, path: Path) -> None:
        self.path = path

    def write(self, records: Sequence[DiscrepancyRecord]) -> None:
        payload = [
            ReportEntryPayload.from_domain(record).model_dump(
                mode="json", by_alias=True, exclude_none=True
            )
            for record in records
        ]
        write_json_atomic(self.path, payload)
        log.info("Updated error report at %s", self.path)

    def read(self) -> list[DiscrepancyRecord]:
        raw = read_json(self.path)
        if raw is None:
            return []
        return [entry.to_domain() for entry in _ENTRIES.validate_python(raw)]
