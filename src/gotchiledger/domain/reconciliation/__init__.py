"""Item balance reconciliation: staged checks and their outcomes."""

from __future__ import annotations

from .engine import ItemReconciler
from .outcome import CheckFailed, Consistent, DiscrepancyFound, ItemOutcome, NotApplicable

__all__ = [
    "CheckFailed",
    "Consistent",
    "DiscrepancyFound",
    "ItemOutcome",
    "ItemReconciler",
    "NotApplicable",
]
