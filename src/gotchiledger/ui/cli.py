from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from gotchiledger.adapters.json_files import ExportStoreError
from gotchiledger.app import audit_items, export_metadata
from gotchiledger.config import ConfigurationError, configure_logging
from gotchiledger.domain.item_audit import ItemCheckError
from gotchiledger.domain.metadata_export import MetadataExportError
from gotchiledger.domain.model import CatalogError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

# Failures with a complete message of their own; logged without a traceback.
AUDIT_ERRORS = (ConfigurationError, CatalogError, ItemCheckError)
EXPORT_ERRORS = (ConfigurationError, ExportStoreError, MetadataExportError)


def _parse_audit_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gotchiledger-audit",
        description="Reconcile wearable ownership balances against the item catalog",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "item_id",
        nargs="?",
        type=str,
        help="Audit a single item id instead of the whole catalog",
    )
    return parser.parse_args(list(argv))


def _parse_export_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gotchiledger-export",
        description="Fetch creature metadata into the local snapshot, resuming from the checkpoint",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


def _parse_item_id(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        item_id = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid item id: {value}") from exc
    if item_id < 0:
        raise ValueError(f"Invalid item id: {value}")
    return item_id


def _prepare() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)


def _log_failure(message: str, exc: Exception, *, verbose: bool) -> None:
    if verbose:
        log.exception(message)
    else:
        log.error("%s: %s", message, exc)


def main(argv: Sequence[str] | None = None) -> None:
    """Audit entry point."""
    _prepare()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_audit_args(args_list)
        configure_logging(verbose=parsed_args.verbose)
        item_id = _parse_item_id(parsed_args.item_id)
    except ValueError as exc:
        log.error("CLI validation error: %s", exc)
        sys.exit(2)

    try:
        audit_items(item_id)
    except AUDIT_ERRORS as exc:
        _log_failure("Item audit failed", exc, verbose=parsed_args.verbose)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during item audit")
        sys.exit(1)


def export_main(argv: Sequence[str] | None = None) -> None:
    """Metadata export entry point."""
    _prepare()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_export_args(args_list)
    configure_logging(verbose=parsed_args.verbose)

    try:
        export_metadata()
    except EXPORT_ERRORS as exc:
        _log_failure("Metadata export failed", exc, verbose=parsed_args.verbose)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during metadata export")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
