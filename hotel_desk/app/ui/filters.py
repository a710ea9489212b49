from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FilterSpec:
    """Free-text query plus exact-match field filters, all ANDed together."""

    text: str = ""
    fields: Mapping[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return bool(self.text) or bool(self.fields)

    def with_text(self, text: str | None) -> "FilterSpec":
        return FilterSpec(text=normalize_query(text), fields=dict(self.fields))

    def with_field(self, name: str, value: Any) -> "FilterSpec":
        updated = dict(self.fields)
        updated[name] = value
        return FilterSpec(text=self.text, fields=clean_filters(updated))

    def describe(self) -> dict[str, Any]:
        described: dict[str, Any] = {"q": self.text} if self.text else {}
        described.update(self.fields)
        return described


def clean_filters(filters: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in filters.items() if value not in (None, "")}


def normalize_query(text: str | None) -> str:
    return (text or "").strip().casefold()


def matches_text(row: Mapping[str, Any], query: str, searchable_fields: Sequence[str]) -> bool:
    if not query:
        return True
    for name in searchable_fields:
        value = row.get(name)
        if value is None:
            continue
        if query in str(value).casefold():
            return True
    return False


def matches_fields(row: Mapping[str, Any], fields: Mapping[str, Any]) -> bool:
    return all(row.get(name) == expected for name, expected in fields.items())


def apply_filters(
    rows: Iterable[Mapping[str, Any]],
    spec: FilterSpec,
    searchable_fields: Sequence[str],
) -> list[Mapping[str, Any]]:
    if not spec.is_active():
        return list(rows)
    return [
        row
        for row in rows
        if matches_fields(row, spec.fields) and matches_text(row, spec.text, searchable_fields)
    ]
