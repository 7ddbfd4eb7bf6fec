from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from gotchiledger.adapters.json_files import (
    ExportStoreError,
    JsonCreatureSnapshot,
    JsonDiscrepancyReport,
    JsonMetadataExportStore,
)
from gotchiledger.domain.model import CheckStage, DiscrepancyData, DiscrepancyRecord
from gotchiledger.domain.ports import FetchProgress, SnapshotUnavailableError
from tests.helpers.creatures import make_metadata

if TYPE_CHECKING:
    from pathlib import Path


def _write(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_report_uses_camel_case_and_omits_absent_fields(tmp_path: Path) -> None:
    report = JsonDiscrepancyReport(tmp_path / "item-errors.json")
    records = [
        DiscrepancyRecord(
            item_id=7,
            item_name="Sushi Bandana",
            max_quantity=100,
            stage=CheckStage.SUPPLY,
            message="Owners total balance (99) != item max quantity (100)",
            data=DiscrepancyData(owners_total=99),
        ),
        DiscrepancyRecord(
            item_id=8,
            item_name="Sushi Coat",
            max_quantity=100,
            stage=CheckStage.DIRECT_BALANCE,
            message="Custody balance (10) != ...",
            data=DiscrepancyData(
                custody_balance=10, equipped_count=5, direct_balance=2, discrepancy=3
            ),
            degraded=True,
        ),
    ]

    report.write(records)

    written = json.loads(report.path.read_text(encoding="utf-8"))
    assert written == [
        {
            "itemId": 7,
            "itemName": "Sushi Bandana",
            "maxQuantity": 100,
            "errorType": "check0",
            "errorData": {"ownersTotal": 99},
            "message": "Owners total balance (99) != item max quantity (100)",
        },
        {
            "itemId": 8,
            "itemName": "Sushi Coat",
            "maxQuantity": 100,
            "errorType": "check2",
            "errorData": {
                "custodyBalance": 10,
                "equippedCount": 5,
                "directBalance": 2,
                "discrepancy": 3,
            },
            "message": "Custody balance (10) != ...",
            "degraded": True,
        },
    ]
    assert report.read() == records
    assert not (tmp_path / "item-errors.json.tmp").exists()


def test_report_lists_unequipped_holders_for_check3(tmp_path: Path) -> None:
    report = JsonDiscrepancyReport(tmp_path / "item-errors.json")
    record = DiscrepancyRecord(
        item_id=7,
        item_name="Sushi Bandana",
        max_quantity=100,
        stage=CheckStage.INVENTORY,
        message="Custody balance (10) != ...",
        data=DiscrepancyData(
            custody_balance=10,
            equipped_count=5,
            direct_balance=2,
            unequipped_owned_count=2,
            discrepancy=1,
            unequipped_holder_ids=(12, 15),
        ),
    )

    report.write([record])

    written = json.loads(report.path.read_text(encoding="utf-8"))
    assert written[0]["errorType"] == "check3"
    assert written[0]["errorData"]["unequippedOwnedCount"] == 2
    assert written[0]["errorData"]["unequippedHolderIds"] == [12, 15]
    assert report.read() == [record]


def test_snapshot_reads_creatures_keyed_by_decimal_id(tmp_path: Path) -> None:
    path = tmp_path / "aavegotchiMetadata.json"
    _write(
        path,
        {
            "12": {"name": "Pocket", "items": [7], "equippedWearables": [0] * 16, "status": 3},
            "15": {"name": "Legacy", "items": [7, 9]},
        },
    )

    creatures = JsonCreatureSnapshot(path).load()

    assert sorted(creatures) == [12, 15]
    assert creatures[12].holds_unequipped(7)
    assert creatures[15].equipped_wearables is None
    assert creatures[15].holds_unequipped(9)


def test_missing_snapshot_is_unavailable_and_remembered(tmp_path: Path) -> None:
    snapshot = JsonCreatureSnapshot(tmp_path / "missing.json")

    with pytest.raises(SnapshotUnavailableError) as first:
        snapshot.load()
    _write(tmp_path / "missing.json", {})
    with pytest.raises(SnapshotUnavailableError) as second:
        snapshot.load()

    assert first.value is second.value


def test_stale_snapshot_is_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "aavegotchiMetadata.json"
    _write(path, {})
    snapshot = JsonCreatureSnapshot(
        path,
        max_age=timedelta(hours=1),
        now_provider=lambda: datetime.now(UTC) + timedelta(days=2),
    )

    with pytest.raises(SnapshotUnavailableError, match="stale"):
        snapshot.load()


def test_malformed_snapshot_is_unavailable(tmp_path: Path) -> None:
    path = tmp_path / "aavegotchiMetadata.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotUnavailableError, match="unreadable"):
        JsonCreatureSnapshot(path).load()


def test_export_store_defaults_when_files_are_absent(tmp_path: Path) -> None:
    store = JsonMetadataExportStore(
        metadata_path=tmp_path / "metadata" / "aavegotchiMetadata.json",
        progress_path=tmp_path / "metadata" / "fetch_progress.json",
    )

    assert store.load_records() == {}
    assert store.load_progress() == FetchProgress()


def test_export_store_persists_records_and_progress(tmp_path: Path) -> None:
    store = JsonMetadataExportStore(
        metadata_path=tmp_path / "metadata" / "aavegotchiMetadata.json",
        progress_path=tmp_path / "metadata" / "fetch_progress.json",
    )
    records = {2: make_metadata(2, items=(7,)), 1: make_metadata(1)}

    store.save_records(records)
    store.save_progress(FetchProgress(last_completed_batch=0, fetched_ids=(1, 2)))

    raw = json.loads(store.metadata_path.read_text(encoding="utf-8"))
    assert list(raw) == ["1", "2"]
    assert raw["2"]["items"] == [7]
    assert raw["2"]["randomNumber"] == str(10**40 + 2)
    assert raw["1"]["equippedWearables"] == [0] * 16
    progress_raw = json.loads(store.progress_path.read_text(encoding="utf-8"))
    assert progress_raw == {"lastCompletedBatch": 0, "fetchedIds": [1, 2]}
    assert store.load_records() == records
    assert store.load_progress() == FetchProgress(last_completed_batch=0, fetched_ids=(1, 2))


def test_exported_metadata_doubles_as_audit_snapshot(tmp_path: Path) -> None:
    path = tmp_path / "aavegotchiMetadata.json"
    store = JsonMetadataExportStore(metadata_path=path, progress_path=tmp_path / "progress.json")
    store.save_records({3: make_metadata(3, items=(7,))})

    creatures = JsonCreatureSnapshot(path).load()

    assert creatures[3].name == "Gotchi 3"
    assert creatures[3].holds_unequipped(7)


def test_malformed_progress_file_raises(tmp_path: Path) -> None:
    progress_path = tmp_path / "fetch_progress.json"
    _write(progress_path, {"lastCompletedBatch": "soon", "fetchedIds": []})
    store = JsonMetadataExportStore(
        metadata_path=tmp_path / "aavegotchiMetadata.json", progress_path=progress_path
    )

    with pytest.raises(ExportStoreError):
        store.load_progress()
