from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from hotel_desk.app.ui.filters import FilterSpec, apply_filters
from hotel_desk.app.ui.listing_view import SortSpec, sort_rows, toggle_sort
from hotel_desk.app.ui.pagination import PageState, clamp_page, display_range, page_bounds, total_pages

Row = Mapping[str, Any]


@dataclass(frozen=True)
class VisibleSlice:
    rows: list[Row]
    total_filtered: int
    current_page: int
    total_pages: int
    range_start: int
    range_end: int

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


class TableViewController:
    """Filter, sort and paginate one table's rows in memory.

    The visible slice is always rebuilt from the full data set in the same
    order: field filters and free-text query, then the single-column sort, then
    the page window. Rows are never mutated. A fresh ``set_data`` or any filter
    change goes back to page 1; a sort change keeps the page and only re-clamps
    it.
    """

    def __init__(
        self,
        *,
        page_size: int,
        searchable_fields: Sequence[str] = (),
        filter_fields: Sequence[str] = (),
    ) -> None:
        self.searchable_fields = tuple(searchable_fields)
        self.filter_fields = tuple(filter_fields)
        self._rows: list[Row] = []
        self._filter = FilterSpec()
        self._sort: SortSpec | None = None
        self._page = PageState(current_page=1, page_size=max(1, int(page_size)))

    @property
    def filter_spec(self) -> FilterSpec:
        return self._filter

    @property
    def sort_spec(self) -> SortSpec | None:
        return self._sort

    @property
    def page_state(self) -> PageState:
        return PageState(current_page=self._page.current_page, page_size=self._page.page_size)

    @property
    def page_size(self) -> int:
        return self._page.page_size

    @property
    def current_page(self) -> int:
        return self._page.current_page

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def set_data(self, rows: Iterable[Row] | None) -> None:
        self._rows = list(rows or [])
        self._page.current_page = 1

    def set_filter_text(self, text: str | None) -> None:
        self._filter = self._filter.with_text(text)
        self._page.current_page = 1

    def set_field_filter(self, field: str, value: Any = None) -> None:
        self._filter = self._filter.with_field(field, value)
        self._page.current_page = 1

    def clear_filters(self) -> None:
        self._filter = FilterSpec()
        self._page.current_page = 1

    def set_sort(self, field: str) -> None:
        self._sort = toggle_sort(self._sort, field)
        self._clamp(len(self._filtered()))

    def clear_sort(self) -> None:
        self._sort = None

    def change_page(self, delta: int) -> None:
        self._page.current_page = max(1, self._page.current_page + int(delta))
        self._clamp(len(self._filtered()))

    def filtered_rows(self) -> list[Row]:
        return sort_rows(self._filtered(), self._sort)

    def get_visible_slice(self) -> VisibleSlice:
        ordered = self.filtered_rows()
        count = len(ordered)
        pages = self._clamp(count)
        page = self._page.current_page
        start, stop = page_bounds(page, self._page.page_size)
        window = ordered[start:stop]
        range_start, range_end = display_range(start, len(window), count)
        return VisibleSlice(
            rows=window,
            total_filtered=count,
            current_page=page,
            total_pages=pages,
            range_start=range_start,
            range_end=range_end,
        )

    def _filtered(self) -> list[Row]:
        return apply_filters(self._rows, self._filter, self.searchable_fields)

    def _clamp(self, count: int) -> int:
        pages = total_pages(count, self._page.page_size)
        self._page.current_page = clamp_page(self._page.current_page, pages)
        return pages
