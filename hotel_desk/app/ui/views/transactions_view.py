from __future__ import annotations

from clients.hotel_api_sdk.transactions_client import TransactionsClient

from hotel_desk.app.ui.listing_view import ColumnDef
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView


class TransactionsView(ListingView):
    module = "transactions"
    title = "TRANSACTIONS"
    key_field = "payment_id"
    columns = (
        ColumnDef("payment_id", "Payment ID"),
        ColumnDef("booking_id", "Booking ID"),
        ColumnDef("guest_name", "Guest"),
        ColumnDef("amount", "Amount"),
        ColumnDef("mode", "Mode"),
        ColumnDef("date", "Date"),
        ColumnDef("status", "Status"),
    )
    searchable_fields = ("booking_id", "guest_name")
    filter_fields = ("status", "mode")
    empty_message = "No transactions recorded yet."

    def __init__(self, client: TransactionsClient, *, page_size: int = 6, role: str = "staff") -> None:
        super().__init__(page_size=page_size, refresh_seconds=None, role=role)
        self.client = client

    def fetch_rows(self) -> list[Row]:
        return self.client.list_transactions()
