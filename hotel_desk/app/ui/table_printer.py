from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from hotel_desk.app.ui.listing_view import ColumnDef, SortSpec, normalize_value
from hotel_desk.app.ui.pagination import pagination_label
from hotel_desk.app.ui.table_view import VisibleSlice

MAX_CELL_WIDTH = 40


def format_table(rows: Sequence[Mapping[str, Any]], columns: Sequence[ColumnDef], sort: SortSpec | None = None) -> list[str]:
    headers = [_header(column, sort) for column in columns]
    cells = [[_cell(row.get(column.key)) for column in columns] for row in rows]
    widths = [
        max([len(header)] + [len(line[idx]) for line in cells])
        for idx, header in enumerate(headers)
    ]

    lines = [" | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))]
    lines.append("-+-".join("-" * width for width in widths))
    for line in cells:
        lines.append(" | ".join(value.ljust(widths[idx]) for idx, value in enumerate(line)))
    return lines


def render_slice(
    title: str,
    visible: VisibleSlice,
    columns: Sequence[ColumnDef],
    sort: SortSpec | None = None,
    empty_message: str = "(no results)",
) -> None:
    print(f"\n{title}")
    if visible.rows:
        for line in format_table(visible.rows, columns, sort):
            print(line)
    else:
        print(empty_message)
    print(
        pagination_label(
            visible.range_start,
            visible.range_end,
            visible.total_filtered,
            visible.current_page,
            visible.total_pages,
        )
    )
    prev_label = "prev" if visible.has_prev else "prev (disabled)"
    next_label = "next" if visible.has_next else "next (disabled)"
    print(f"[{prev_label}] [{next_label}]")


def _header(column: ColumnDef, sort: SortSpec | None) -> str:
    if sort is None or sort.field != column.key:
        return column.label
    return f"{column.label} {'^' if sort.ascending else 'v'}"


def _cell(value: Any) -> str:
    text = normalize_value(value).replace("\n", " ")
    if len(text) > MAX_CELL_WIDTH:
        return text[: MAX_CELL_WIDTH - 1] + "…"
    return text
