from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from gotchiledger import app
from gotchiledger.adapters.chain import DiamondContract
from gotchiledger.config import ExportConfig, MissingConfigurationError
from tests.helpers.creatures import FakeMetadataSource
from tests.helpers.ledger import FakeLedger, owners_with_custody

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    catalog = tmp_path / "items.json"
    catalog.write_text(
        json.dumps(
            [
                {"id": 0, "name": "The Void", "maxQuantity": 0},
                {"id": 7, "name": "Sushi Bandana", "maxQuantity": 100},
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("SUBGRAPH_KEY", "test-key")
    monkeypatch.setenv("RPC_URL", "https://rpc.example/polygon")
    monkeypatch.setenv("GOTCHILEDGER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("GOTCHILEDGER_ITEM_CATALOG", str(catalog))
    monkeypatch.delenv("GOTCHILEDGER_SNAPSHOT_PATH", raising=False)
    monkeypatch.delenv("GOTCHILEDGER_SNAPSHOT_MAX_AGE_HOURS", raising=False)
    return tmp_path


def test_single_item_audit_writes_degraded_report_without_snapshot(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    ledger = FakeLedger(
        owners={7: owners_with_custody(custody=10, others=90)},
        equipped={7: 5},
        direct={7: 2},
    )
    monkeypatch.setattr(app, "OnChainLedger", lambda **_: ledger)

    result = app.audit_items(7)

    assert [record.item_id for record in result.discrepancies] == [7]
    written = json.loads((data_dir / "item-errors.json").read_text(encoding="utf-8"))
    assert written[0]["errorType"] == "check2"
    assert written[0]["degraded"] is True
    assert written[0]["errorData"]["discrepancy"] == 3


def test_export_resumes_to_completion(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    source = FakeMetadataSource()
    monkeypatch.setattr(app, "DiamondContract", lambda _rpc: source)
    monkeypatch.setattr(
        app, "get_export_config", lambda: ExportConfig(total_creatures=6, batch_size=4)
    )

    export = app.export_metadata()

    assert export.total_records == 6
    assert source.requests == [[1, 2, 3, 4], [5, 6]]
    progress = json.loads((data_dir / "metadata" / "fetch_progress.json").read_text("utf-8"))
    assert progress["lastCompletedBatch"] == 1

    again = app.export_metadata()

    assert again.already_complete
    assert len(source.requests) == 2


def test_audit_requires_rpc_url_before_any_subgraph_call(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    monkeypatch.delenv("RPC_URL")
    opened: list[object] = []
    monkeypatch.setattr(app, "SubgraphClient", lambda **kwargs: opened.append(kwargs))

    with pytest.raises(MissingConfigurationError) as excinfo:
        app.audit_items(None)

    assert excinfo.value.missing == ("RPC_URL",)
    assert opened == []
    assert not (data_dir / "item-errors.json").exists()


def test_clean_catalog_audit_replaces_an_earlier_report(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    report = data_dir / "item-errors.json"
    report.write_text(json.dumps([{"itemId": 7, "errorType": "check0"}]), encoding="utf-8")
    ledger = FakeLedger(
        owners={7: owners_with_custody(custody=5, others=95)},
        equipped={7: 5},
    )
    monkeypatch.setattr(app, "OnChainLedger", lambda **_: ledger)

    result = app.audit_items(None)

    assert result.consistent == 1
    assert json.loads(report.read_text(encoding="utf-8")) == []


def test_export_resolves_rpc_url_only_when_a_batch_is_fetched(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    monkeypatch.delenv("RPC_URL")
    monkeypatch.setattr(
        app, "get_export_config", lambda: ExportConfig(total_creatures=6, batch_size=4)
    )

    with pytest.raises(MissingConfigurationError):
        app.export_metadata()

    assert not (data_dir / "metadata" / "fetch_progress.json").exists()


def test_completed_export_needs_no_rpc_url(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    source = FakeMetadataSource()
    monkeypatch.setattr(app, "DiamondContract", lambda _rpc: source)
    monkeypatch.setattr(
        app, "get_export_config", lambda: ExportConfig(total_creatures=6, batch_size=4)
    )
    app.export_metadata()
    monkeypatch.setattr(app, "DiamondContract", DiamondContract)
    monkeypatch.delenv("RPC_URL")

    again = app.export_metadata()

    assert again.already_complete
    assert again.total_records == 6
