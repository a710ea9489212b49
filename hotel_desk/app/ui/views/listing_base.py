from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from hotel_desk.app.ui.listing_view import ColumnDef
from hotel_desk.app.ui.table_view import Row, TableViewController


@dataclass(frozen=True)
class ViewCommand:
    key: str
    label: str
    # returns True when the view must reload its rows afterwards
    handler: Callable[[], bool]


class ListingView:
    module: str = ""
    title: str = ""
    key_field: str = "id"
    columns: tuple[ColumnDef, ...] = ()
    searchable_fields: tuple[str, ...] = ()
    filter_fields: tuple[str, ...] = ()
    empty_message: str = "(no results)"

    def __init__(self, *, page_size: int, refresh_seconds: float | None = None, role: str = "staff") -> None:
        self.refresh_seconds = refresh_seconds
        self.role = role
        self.loaded_rows: list[Row] = []
        self.controller = TableViewController(
            page_size=page_size,
            searchable_fields=self.searchable_fields,
            filter_fields=self.filter_fields,
        )

    @property
    def background_seconds(self) -> float | None:
        return None

    def fetch_rows(self) -> list[Row]:
        raise NotImplementedError

    def load_header(self) -> None:
        """Fetch whatever `print_header` shows. Runs next to `fetch_rows`, never on redraw."""
        return None

    def apply_rows(self, rows: list[Row]) -> None:
        self.loaded_rows = list(rows)
        self.controller.set_data(self.loaded_rows)

    def commands(self) -> list[ViewCommand]:
        return []

    def print_header(self) -> None:
        return None

    def background_refresh(self) -> None:
        return None

    def find_row(self, key_value: str) -> Mapping[str, Any] | None:
        wanted = str(key_value).strip()
        for row in self.loaded_rows:
            if str(row.get(self.key_field)) == wanted:
                return row
        return None
