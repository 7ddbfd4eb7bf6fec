"""File helpers shared by the JSON persistence adapters."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def write_json_atomic(path: Path, payload: object, *, indent: int = 2) -> None:
    """Write ``payload`` to a sibling temp file, then swap it into place."""

    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + ".tmp")
    with temp_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=indent)
        handle.flush()
        os.fsync(handle.fileno())
    os.replace(temp_path, path)


def read_json(path: Path) -> object | None:
    """Return the parsed file, or ``None`` when it does not exist."""

    if not path.exists():
        return None
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)
