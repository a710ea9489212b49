from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

EMPTY_VALUE = "—"
SENSITIVE_KEYS = {"token", "secret", "password", "access_token"}


@dataclass(frozen=True)
class ColumnDef:
    key: str
    label: str


@dataclass(frozen=True)
class SortSpec:
    field: str
    ascending: bool = True

    @property
    def direction(self) -> str:
        return "asc" if self.ascending else "desc"


def toggle_sort(current: SortSpec | None, field: str) -> SortSpec:
    if current is not None and current.field == field:
        return SortSpec(field=field, ascending=not current.ascending)
    return SortSpec(field=field, ascending=True)


def sort_value(value: Any) -> str:
    if value is None:
        return ""
    return str(value).casefold()


def sort_rows(rows: Iterable[Mapping[str, Any]], spec: SortSpec | None) -> list[Mapping[str, Any]]:
    if spec is None:
        return list(rows)
    # sorted() stays stable with reverse=True, ties keep data order in both directions
    return sorted(rows, key=lambda row: sort_value(row.get(spec.field)), reverse=not spec.ascending)


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, (list, tuple)):
        joined = ", ".join(str(item) for item in value)
        return joined or EMPTY_VALUE
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    return str(value)


def sanitize_row(row: Mapping[str, Any], headers: list[str]) -> dict[str, str]:
    sanitized: dict[str, str] = {}
    for header in headers:
        if any(token in header.lower() for token in SENSITIVE_KEYS):
            sanitized[header] = EMPTY_VALUE
            continue
        value = row.get(header)
        if isinstance(value, (list, tuple)):
            sanitized[header] = ";".join(str(item) for item in value) or EMPTY_VALUE
            continue
        sanitized[header] = normalize_value(value)
    return sanitized


def format_counter(value: Any) -> str:
    return EMPTY_VALUE if value is None else str(value)


def format_amount(value: Any) -> str:
    if value is None or value == "":
        return EMPTY_VALUE
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return str(value)
    return f"₹{amount:,.0f}" if amount.is_integer() else f"₹{amount:,.2f}"
