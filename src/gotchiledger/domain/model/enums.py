"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CheckStage(StrEnum):
    """Ordered reconciliation stages; the value is the report's ``errorType``."""

    SUPPLY = "check0"
    CUSTODY = "check1"
    DIRECT_BALANCE = "check2"
    INVENTORY = "check3"

    @property
    def index(self) -> int:
        return int(self.value.removeprefix("check"))
