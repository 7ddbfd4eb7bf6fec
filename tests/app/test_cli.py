from __future__ import annotations

import pytest

from gotchiledger.adapters.json_files import ExportStoreError
from gotchiledger.config import MissingConfigurationError
from gotchiledger.domain.item_audit import ItemAuditResult, ItemCheckError
from gotchiledger.domain.metadata_export import MetadataExportError, MetadataExportResult
from gotchiledger.domain.model import CatalogError, CheckStage, DiscrepancyRecord
from gotchiledger.ui import cli


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "load_dotenv", lambda: False)
    monkeypatch.setattr(cli, "signal", lambda *_: None)


def test_audit_without_argument_checks_the_catalog(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[int | None] = []

    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        captured.append(item_id)
        return ItemAuditResult()

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    cli.main([])

    assert captured == [None]


def test_audit_with_item_id(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[int | None] = []

    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        captured.append(item_id)
        return ItemAuditResult()

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    cli.main(["42"])

    assert captured == [42]


def test_non_numeric_item_id_exits_with_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        raise AssertionError("audit must not run")

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["sushi"])

    assert excinfo.value.code == 2


def test_missing_configuration_exits_with_failure(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        raise MissingConfigurationError(
            "Missing configuration for: SUBGRAPH_KEY", missing=("SUBGRAPH_KEY",)
        )

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "Item audit failed: Missing configuration for: SUBGRAPH_KEY" in caplog.text
    assert "Traceback" not in caplog.text
    assert all(record.exc_info is None for record in caplog.records)


def test_single_item_check_failure_exits_with_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    record = DiscrepancyRecord(
        item_id=7,
        item_name="Sushi Bandana",
        max_quantity=100,
        stage=CheckStage.CUSTODY,
        message="subgraph timeout",
    )

    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        raise ItemCheckError(record)

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["7"])

    assert excinfo.value.code == 1


def test_export_runs_without_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_export() -> MetadataExportResult:
        calls.append("export")
        return MetadataExportResult(batches_fetched=0, creatures_fetched=0, total_records=0)

    monkeypatch.setattr(cli, "export_metadata", fake_export)

    cli.export_main([])

    assert calls == ["export"]


def test_export_retry_exhaustion_exits_with_failure(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_export() -> MetadataExportResult:
        raise MetadataExportError("Failed to process batch 1/3", batch=[1, 2])

    monkeypatch.setattr(cli, "export_metadata", fake_export)

    with pytest.raises(SystemExit) as excinfo:
        cli.export_main([])

    assert excinfo.value.code == 1
    assert "Metadata export failed: Failed to process batch 1/3" in caplog.text
    assert "Traceback" not in caplog.text


def test_verbose_audit_failure_includes_the_traceback(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        raise CatalogError("Could not read item catalog: missing file")

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    with pytest.raises(SystemExit):
        cli.main(["--verbose"])

    failures = [record for record in caplog.records if record.levelname == "ERROR"]
    assert failures[-1].exc_info is not None


def test_unexpected_audit_error_keeps_the_traceback(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_audit(item_id: int | None = None) -> ItemAuditResult:
        raise KeyError("boom")

    monkeypatch.setattr(cli, "audit_items", fake_audit)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "Fatal error during item audit" in caplog.text
    assert "Traceback" in caplog.text


def test_unreadable_export_store_is_reported_without_traceback(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def fake_export() -> MetadataExportResult:
        raise ExportStoreError("Progress file is malformed")

    monkeypatch.setattr(cli, "export_metadata", fake_export)

    with pytest.raises(SystemExit) as excinfo:
        cli.export_main([])

    assert excinfo.value.code == 1
    assert "Metadata export failed: Progress file is malformed" in caplog.text
    assert "Traceback" not in caplog.text


def test_sigint_exits_cleanly() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.sigint_handler(2, None)

    assert excinfo.value.code == 0
