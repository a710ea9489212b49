from __future__ import annotations

from collections import Counter
from typing import Any

from clients.hotel_api_sdk.admin_client import AdminClient
from clients.hotel_api_sdk.errors import ApiError

from hotel_desk.app.error_presenter import build_error_payload, print_error_banner
from hotel_desk.app.infrastructure.logging.logger import get_logger, log_action
from hotel_desk.app.ui.listing_view import EMPTY_VALUE, ColumnDef, format_amount, format_counter, normalize_value
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand

OCCUPIED = "occupied"
EMPTY_SUMMARY: dict[str, Any] = {"total_users": None, "total_staff": None, "total_guests": None, "total_revenue": None}

logger = get_logger("hotel_desk.rooms")


class RoomsView(ListingView):
    """Admin overview: hotel counters, occupancy and the room list."""

    module = "rooms"
    title = "ROOMS"
    key_field = "room_no"
    columns = (
        ColumnDef("room_no", "Room"),
        ColumnDef("room_type", "Type"),
        ColumnDef("price_per_night", "Price / Night"),
        ColumnDef("status", "Status"),
    )
    searchable_fields = ("room_no", "room_type")
    filter_fields = ("status", "room_type")
    empty_message = "No rooms match the current filters."

    def __init__(self, client: AdminClient, *, page_size: int = 10, role: str = "admin") -> None:
        super().__init__(page_size=page_size, refresh_seconds=None, role=role)
        self.client = client
        self.summary: dict[str, Any] = dict(EMPTY_SUMMARY)

    def fetch_rows(self) -> list[Row]:
        return self.client.rooms()

    def load_header(self) -> None:
        try:
            self.summary = self.client.summary()
        except ApiError as error:
            log_action(logger, self.module, "summary", self.role, "error", code=error.code, trace_id=error.trace_id)
            self.summary = dict(EMPTY_SUMMARY)

    def occupancy(self) -> dict[str, int]:
        total = len(self.loaded_rows)
        occupied = sum(1 for row in self.loaded_rows if str(row.get("status") or "").lower() == OCCUPIED)
        return {"total": total, "occupied": occupied, "available": total - occupied}

    def rooms_by_type(self) -> dict[str, int]:
        return dict(Counter(normalize_value(row.get("room_type")) for row in self.loaded_rows))

    def print_header(self) -> None:
        print(
            f"Users: {format_counter(self.summary.get('total_users'))} | "
            f"Staff: {format_counter(self.summary.get('total_staff'))} | "
            f"Guests: {format_counter(self.summary.get('total_guests'))} | "
            f"Revenue: {format_amount(self.summary.get('total_revenue') or None)}"
        )
        occupancy = self.occupancy()
        print(
            f"Occupancy: {occupancy['occupied']} occupied / {occupancy['available']} available "
            f"({occupancy_label(occupancy)})"
        )
        by_type = self.rooms_by_type()
        if by_type:
            print("By type: " + ", ".join(f"{room_type} {count}" for room_type, count in by_type.items()))

    def commands(self) -> list[ViewCommand]:
        return [ViewCommand("rb", "recent bookings", self.show_recent_bookings)]

    def show_recent_bookings(self) -> bool:
        try:
            bookings = self.client.recent_bookings()
        except ApiError as error:
            print_error_banner(build_error_payload(error))
            bookings = []
        print("\nRecent bookings")
        if not bookings:
            print("No recent bookings")
            return False
        for booking in bookings:
            print(
                f"  #{normalize_value(booking.get('booking_id'))} "
                f"{normalize_value(booking.get('guest_name'))} • room {normalize_value(booking.get('room_no'))} • "
                f"{normalize_value(booking.get('check_in'))} • {normalize_value(booking.get('status'))}"
            )
        return False


def occupancy_label(occupancy: dict[str, int]) -> str:
    if not occupancy.get("total"):
        return EMPTY_VALUE
    return f"{occupancy['occupied'] * 100 // occupancy['total']}%"
