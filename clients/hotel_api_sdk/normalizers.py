from __future__ import annotations

from typing import Any


def normalize_rows(payload: Any) -> list[dict[str, Any]]:
    rows: Any = []
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in ("rows", "items", "data"):
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break
    return [row for row in rows if isinstance(row, dict)]


def normalize_counters(payload: Any, keys: list[str]) -> dict[str, int | None]:
    source = payload if isinstance(payload, dict) else {}
    return {key: _to_int(source.get(key)) for key in keys}


def _to_int(value: Any) -> int | None:
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
