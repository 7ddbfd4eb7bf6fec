"""File locations for exported metadata, checkpoints and reports."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

METADATA_DIR_NAME: Final[str] = "metadata"
METADATA_FILENAME: Final[str] = "aavegotchiMetadata.json"
PROGRESS_FILENAME: Final[str] = "fetch_progress.json"
REPORT_FILENAME: Final[str] = "item-errors.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    snapshot_override: Path | None = None
    catalog_override: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def metadata_dir(self, *, ensure: bool = False) -> Path:
        path = self.resolve_data_dir() / METADATA_DIR_NAME
        if ensure:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def metadata_path(self, *, ensure: bool = False) -> Path:
        return self.metadata_dir(ensure=ensure) / METADATA_FILENAME

    def progress_path(self, *, ensure: bool = False) -> Path:
        return self.metadata_dir(ensure=ensure) / PROGRESS_FILENAME

    def snapshot_path(self) -> Path:
        """The snapshot read by the audit defaults to the exporter's output."""

        if self.snapshot_override is not None:
            return self.snapshot_override.expanduser().resolve()
        return self.metadata_path()

    def report_path(self) -> Path:
        return self.resolve_data_dir() / REPORT_FILENAME


def _optional_path(name: str) -> Path | None:
    raw = optional_env_var(name)
    return Path(raw) if raw else None


def get_storage_config() -> StorageConfig:
    data_dir = _optional_path("GOTCHILEDGER_DATA_DIR") or Path.cwd()
    return StorageConfig(
        data_dir=data_dir,
        snapshot_override=_optional_path("GOTCHILEDGER_SNAPSHOT_PATH"),
        catalog_override=_optional_path("GOTCHILEDGER_ITEM_CATALOG"),
    )
