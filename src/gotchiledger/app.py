"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from gotchiledger.adapters.catalog import load_item_catalog
from gotchiledger.adapters.chain import DiamondContract, JsonRpcClient
from gotchiledger.adapters.json_files import (
    JsonCreatureSnapshot,
    JsonDiscrepancyReport,
    JsonMetadataExportStore,
)
from gotchiledger.adapters.ledger import OnChainLedger
from gotchiledger.adapters.subgraph import SubgraphClient
from gotchiledger.config import (
    AAVEGOTCHI_DIAMOND,
    get_audit_config,
    get_export_config,
    get_rpc_config,
    get_storage_config,
    get_subgraph_config,
)
from gotchiledger.domain.item_audit import (
    AuditPacing,
    ItemAuditResult,
    audit_single_item,
    auditable_item_ids,
    run_item_audit,
)
from gotchiledger.domain.metadata_export import (
    ExportSettings,
    MetadataExportResult,
    export_creature_metadata,
)
from gotchiledger.domain.reconciliation import ItemReconciler

if TYPE_CHECKING:
    from gotchiledger.config import AuditConfig, StorageConfig

log = getLogger(__name__)


def audit_items(item_id: int | None = None) -> ItemAuditResult:
    """Audit one item, or every auditable item in the catalog when ``item_id`` is None."""

    storage = get_storage_config()
    audit_config = get_audit_config()
    subgraph_config = get_subgraph_config()
    rpc_config = get_rpc_config()
    catalog = load_item_catalog(storage.catalog_override)
    log.info("Loaded %s item types", len(catalog))

    async def run() -> ItemAuditResult:
        async with (
            SubgraphClient(config=subgraph_config) as subgraph,
            JsonRpcClient(config=rpc_config) as rpc,
        ):
            reconciler = ItemReconciler(
                catalog=catalog,
                ledger=OnChainLedger(subgraph=subgraph, contract=DiamondContract(rpc)),
                snapshot=_build_snapshot(storage, audit_config),
                custody_address=AAVEGOTCHI_DIAMOND,
            )
            report = JsonDiscrepancyReport(storage.report_path())
            if item_id is not None:
                return await audit_single_item(item_id, reconciler=reconciler, report=report)
            item_ids = auditable_item_ids(catalog)
            log.info("Found %s valid items to check", len(item_ids))
            result = await run_item_audit(
                item_ids,
                reconciler=reconciler,
                report=report,
                pacing=AuditPacing(
                    group_size=audit_config.group_size,
                    item_delay_seconds=audit_config.item_delay_seconds,
                    group_delay_seconds=audit_config.group_delay_seconds,
                ),
            )
            if not result.discrepancies:
                report.write([])
                log.info("No discrepancies found; cleared %s", report.path)
            return result

    result = asyncio.run(run())
    log.info(
        "Finished item audit: checked=%s, consistent=%s, discrepancies=%s, skipped=%s, failed=%s",
        result.checked,
        result.consistent,
        len(result.discrepancies),
        len(result.skipped),
        len(result.failed),
    )
    if result.discrepancies:
        log.info("Found %s items with errors", len(result.discrepancies))
    return result


def export_metadata() -> MetadataExportResult:
    """Fetch creature metadata from the diamond into the local snapshot files."""

    storage = get_storage_config()
    export_config = get_export_config()
    store = JsonMetadataExportStore(
        metadata_path=storage.metadata_path(ensure=True),
        progress_path=storage.progress_path(ensure=True),
    )
    settings = ExportSettings(
        total_creatures=export_config.total_creatures,
        batch_size=export_config.batch_size,
        max_attempts=export_config.max_attempts,
        retry_delay_seconds=export_config.retry_delay_seconds,
    )

    async def run() -> MetadataExportResult:
        async with JsonRpcClient() as rpc:
            return await export_creature_metadata(
                source=DiamondContract(rpc),
                store=store,
                settings=settings,
            )

    result = asyncio.run(run())
    if result.already_complete:
        log.info("All batches have already been processed")
    log.info(
        "Finished metadata export: batches=%s, fetched=%s, stored=%s",
        result.batches_fetched,
        result.creatures_fetched,
        result.total_records,
    )
    return result


def _build_snapshot(storage: StorageConfig, audit_config: AuditConfig) -> JsonCreatureSnapshot:
    max_age = (
        timedelta(hours=audit_config.snapshot_max_age_hours)
        if audit_config.snapshot_max_age_hours is not None
        else None
    )
    return JsonCreatureSnapshot(storage.snapshot_path(), max_age=max_age)
