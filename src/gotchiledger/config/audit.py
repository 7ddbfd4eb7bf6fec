"""Pacing and batching defaults for the audit and export jobs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_float_env_var

DEFAULT_AUDIT_GROUP_SIZE = 5
DEFAULT_AUDIT_ITEM_DELAY_SECONDS = 1.0
DEFAULT_AUDIT_GROUP_DELAY_SECONDS = 5.0

DEFAULT_EXPORT_TOTAL_CREATURES = 25_000
DEFAULT_EXPORT_BATCH_SIZE = 20
DEFAULT_EXPORT_MAX_ATTEMPTS = 3
DEFAULT_EXPORT_RETRY_DELAY_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class AuditConfig:
    group_size: int = DEFAULT_AUDIT_GROUP_SIZE
    item_delay_seconds: float = DEFAULT_AUDIT_ITEM_DELAY_SECONDS
    group_delay_seconds: float = DEFAULT_AUDIT_GROUP_DELAY_SECONDS
    snapshot_max_age_hours: float | None = None


@dataclass(frozen=True, slots=True)
class ExportConfig:
    total_creatures: int = DEFAULT_EXPORT_TOTAL_CREATURES
    batch_size: int = DEFAULT_EXPORT_BATCH_SIZE
    max_attempts: int = DEFAULT_EXPORT_MAX_ATTEMPTS
    retry_delay_seconds: float = DEFAULT_EXPORT_RETRY_DELAY_SECONDS


def get_audit_config() -> AuditConfig:
    return AuditConfig(
        snapshot_max_age_hours=optional_float_env_var("GOTCHILEDGER_SNAPSHOT_MAX_AGE_HOURS"),
    )


def get_export_config() -> ExportConfig:
    return ExportConfig()
