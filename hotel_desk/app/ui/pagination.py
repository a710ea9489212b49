from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class PageState:
    current_page: int = 1
    page_size: int = 10


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(max(0, count) / max(1, page_size)))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def page_bounds(page: int, page_size: int) -> tuple[int, int]:
    start = (page - 1) * page_size
    return start, start + page_size


def display_range(start: int, shown: int, count: int) -> tuple[int, int]:
    """1-based inclusive bounds of the shown rows, both clamped to [0, count]."""
    if count <= 0 or shown <= 0:
        return 0, 0
    return min(count, start + 1), min(count, start + shown)


def pagination_label(range_start: int, range_end: int, total: int, page: int, pages: int) -> str:
    return f"Showing {range_start}–{range_end} of {total} — Page {page} / {pages}"
