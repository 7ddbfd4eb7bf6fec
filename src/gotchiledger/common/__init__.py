from __future__ import annotations

from .storage import read_json, write_json_atomic

__all__ = ["read_json", "write_json_atomic"]
