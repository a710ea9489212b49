from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from clients.hotel_api_sdk.errors import ApiError
from clients.hotel_api_sdk.queries_client import QueriesClient

from hotel_desk.app.error_presenter import build_validation_payload, print_error_banner
from hotel_desk.app.infrastructure.logging.logger import get_logger, log_action
from hotel_desk.app.ui.listing_view import EMPTY_VALUE, ColumnDef, format_counter, normalize_value
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand

MAX_NOTIFICATIONS = 6
EMPTY_SUMMARY = {"total": None, "pending": None, "resolved": None}
PENDING = "Pending"

logger = get_logger("hotel_desk.queries")


class QueriesView(ListingView):
    module = "queries"
    title = "GUEST QUERIES"
    key_field = "query_id"
    columns = (
        ColumnDef("query_id", "Query ID"),
        ColumnDef("user_name", "User"),
        ColumnDef("subject", "Subject"),
        ColumnDef("message", "Message"),
        ColumnDef("status", "Status"),
        ColumnDef("created_at", "Date"),
    )
    searchable_fields = ("user_name", "subject", "message", "query_id")
    filter_fields = ("status",)
    empty_message = "No queries match the current filters."

    def __init__(
        self,
        client: QueriesClient,
        *,
        page_size: int = 6,
        refresh_seconds: float | None = 30,
        recent_refresh_seconds: float | None = 45,
        role: str = "staff",
    ) -> None:
        super().__init__(page_size=page_size, refresh_seconds=refresh_seconds, role=role)
        self.client = client
        self.recent_refresh_seconds = recent_refresh_seconds
        self.recent: list[Row] = []
        self.summary: dict[str, int | None] = dict(EMPTY_SUMMARY)

    @property
    def background_seconds(self) -> float | None:
        return self.recent_refresh_seconds

    def fetch_rows(self) -> list[Row]:
        return self.client.list_queries()

    def load_summary(self) -> dict[str, int | None]:
        try:
            return self.client.summary()
        except ApiError as error:
            log_action(logger, self.module, "summary", self.role, "error", code=error.code, trace_id=error.trace_id)
            return dict(EMPTY_SUMMARY)

    def load_recent(self) -> list[Row]:
        try:
            self.recent = self.client.recent()
        except ApiError as error:
            log_action(logger, self.module, "recent", self.role, "error", code=error.code, trace_id=error.trace_id)
            self.recent = []
        return self.recent

    def load_header(self) -> None:
        self.summary = self.load_summary()
        self.load_recent()

    def print_header(self) -> None:
        summary = self.summary
        print(
            f"Total: {format_counter(summary.get('total'))} | "
            f"Pending: {format_counter(summary.get('pending'))} | "
            f"Resolved: {format_counter(summary.get('resolved'))}"
        )
        self._print_notifications(self.recent)

    def background_refresh(self) -> None:
        previous = len(self.recent)
        current = self.load_recent()
        if len(current) != previous:
            print(f"\n[notifications] {len(current)} pending queries")

    def commands(self) -> list[ViewCommand]:
        commands = [
            ViewCommand("o", "open query", self.open_query),
            ViewCommand("y", "reply", self.reply),
            ViewCommand("v", "resolve", self.resolve),
        ]
        if self.role == "admin":
            commands.append(ViewCommand("del", "delete", self.delete))
        return commands

    def open_query(self) -> bool:
        row = self._prompt_row()
        if row is None:
            return False
        print_query_detail(row)
        return False

    def reply(self) -> bool:
        row = self._prompt_row()
        if row is None:
            return False
        text = input("reply: ").strip()
        if not text:
            print_error_banner(build_validation_payload("Please enter a reply."))
            return False
        self.client.reply(row.get(self.key_field), text)
        print("[ok] Reply sent")
        return True

    def resolve(self) -> bool:
        row = self._prompt_row()
        if row is None:
            return False
        if row.get("status") != PENDING:
            status = normalize_value(row.get("status"))
            print_error_banner(build_validation_payload(f"Only Pending queries can be resolved (status: {status})."))
            return False
        self.client.resolve(row.get(self.key_field))
        print("[ok] Query resolved")
        return True

    def delete(self) -> bool:
        if self.role != "admin":
            print_error_banner(build_validation_payload("Only admin can delete.", code="PERMISSION_DENIED"))
            return False
        row = self._prompt_row()
        if row is None:
            return False
        confirm = input("Delete this query? (y/N): ").strip().lower()
        if confirm != "y":
            return False
        self.client.delete(row.get(self.key_field))
        print("[ok] Query deleted")
        return True

    def _prompt_row(self) -> Mapping[str, Any] | None:
        requested = input("query_id: ").strip()
        row = self.find_row(requested) if requested else None
        if row is None:
            print_error_banner(build_validation_payload(f"Unknown query_id: {requested or EMPTY_VALUE}"))
        return row

    def _print_notifications(self, recent: list[Row]) -> None:
        if not recent:
            print("Notifications: No new pending queries")
            return
        print(f"Notifications: {len(recent)} pending")
        for item in recent[:MAX_NOTIFICATIONS]:
            print(
                f"  #{normalize_value(item.get('query_id'))} {normalize_value(item.get('user_name'))} — "
                f"{normalize_value(item.get('subject'))} ({normalize_value(item.get('created_at'))})"
            )


def print_query_detail(row: Mapping[str, Any]) -> None:
    print(
        f"\nQuery #{normalize_value(row.get('query_id'))} • "
        f"{normalize_value(row.get('user_name') or row.get('user_id'))} • "
        f"{normalize_value(row.get('created_at'))}"
    )
    print(f"Status: {normalize_value(row.get('status'))}")
    print(normalize_value(row.get("message")))
    replies = row.get("replies") or []
    if not replies:
        print("No replies yet")
        return
    print("History:")
    for item in replies:
        if not isinstance(item, Mapping):
            continue
        print(f"  {normalize_value(item.get('by'))} • {normalize_value(item.get('at'))}")
        print(f"    {normalize_value(item.get('msg'))}")
