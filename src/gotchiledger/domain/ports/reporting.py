"""Port for persisting the discrepancy report."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gotchiledger.domain.model import DiscrepancyRecord


@runtime_checkable
class DiscrepancyReport(Protocol):
    def write(self, records: Sequence[DiscrepancyRecord]) -> None:
        """Replace the stored report with ``records``."""
        ...


__all__ = ["DiscrepancyReport"]
