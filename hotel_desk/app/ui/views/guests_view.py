from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from clients.hotel_api_sdk.staff_client import StaffClient

from hotel_desk.app.error_presenter import build_validation_payload, print_error_banner
from hotel_desk.app.ui.listing_view import EMPTY_VALUE, ColumnDef, normalize_value
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand


class GuestsView(ListingView):
    module = "guests"
    title = "GUESTS"
    key_field = "guest_id"
    columns = (
        ColumnDef("name", "Name"),
        ColumnDef("room_no", "Room"),
        ColumnDef("check_in", "Check-in"),
        ColumnDef("check_out", "Check-out"),
        ColumnDef("phone", "Phone"),
        ColumnDef("notes", "Notes"),
    )
    searchable_fields = ("name", "room_no", "phone")
    empty_message = "No guests in house."

    def __init__(self, client: StaffClient, *, page_size: int = 10, role: str = "staff") -> None:
        super().__init__(page_size=page_size, refresh_seconds=None, role=role)
        self.client = client

    def fetch_rows(self) -> list[Row]:
        return self.client.guests()

    def commands(self) -> list[ViewCommand]:
        return [ViewCommand("g", "view guest", self.show_guest)]

    def show_guest(self) -> bool:
        requested = input("guest_id: ").strip()
        row = self.find_row(requested) if requested else None
        if row is None:
            print_error_banner(build_validation_payload(f"Unknown guest_id: {requested or EMPTY_VALUE}"))
            return False
        print_guest_detail(row)
        return False


def print_guest_detail(row: Mapping[str, Any]) -> None:
    print(f"\nGuest #{normalize_value(row.get('guest_id'))} • {normalize_value(row.get('name'))}")
    print(f"Room: {normalize_value(row.get('room_no'))}")
    print(f"Stay: {normalize_value(row.get('check_in'))} → {normalize_value(row.get('check_out'))}")
    print(f"Phone: {normalize_value(row.get('phone'))}")
    if row.get("notes"):
        print(f"Notes: {normalize_value(row.get('notes'))}")
