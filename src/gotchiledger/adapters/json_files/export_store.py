"""JSON-file store for the metadata export and its checkpoint."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from gotchiledger.adapters.chain.translator import BridgedAavegotchiPayload
from gotchiledger.common.storage import read_json, write_json_atomic
from gotchiledger.domain.ports import FetchProgress

from .schema import ProgressPayload

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from gotchiledger.domain.model import CreatureMetadata

_RECORDS = TypeAdapter(dict[str, BridgedAavegotchiPayload])


class ExportStoreError(RuntimeError):
    """Raised when an existing metadata or progress file cannot be parsed."""


class JsonMetadataExportStore:
    """Accumulated metadata keyed by decimal creature id, plus a progress file."""

    def __init__(self, *, metadata_path: Path, progress_path: Path) -> None:
        self.metadata_path = metadata_path
        self.progress_path = progress_path

    def load_records(self) -> dict[int, CreatureMetadata]:
        raw = self._read(self.metadata_path)
        if raw is None:
            return {}
        try:
            payloads = _RECORDS.validate_python(raw)
            return {int(key): payload.to_domain() for key, payload in payloads.items()}
        except (ValidationError, ValueError) as exc:
            raise ExportStoreError(f"Malformed metadata file {self.metadata_path}: {exc}") from exc

    def save_records(self, records: Mapping[int, CreatureMetadata]) -> None:
        payload = {
            str(creature_id): BridgedAavegotchiPayload.from_domain(metadata).model_dump(
                mode="json", by_alias=True
            )
            for creature_id, metadata in sorted(records.items())
        }
        write_json_atomic(self.metadata_path, payload)

    def load_progress(self) -> FetchProgress:
        raw = self._read(self.progress_path)
        if raw is None:
            return FetchProgress()
        try:
            return ProgressPayload.model_validate(raw).to_domain()
        except ValidationError as exc:
            raise ExportStoreError(f"Malformed progress file {self.progress_path}: {exc}") from exc

    def save_progress(self, progress: FetchProgress) -> None:
        payload = ProgressPayload.from_domain(progress).model_dump(mode="json", by_alias=True)
        write_json_atomic(self.progress_path, payload)

    @staticmethod
    def _read(path: Path) -> object | None:
        try:
            return read_json(path)
        except (OSError, json.JSONDecodeError) as exc:
            raise ExportStoreError(f"Cannot read {path}: {exc}") from exc
