from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.errors import ApiError
from clients.hotel_api_sdk.staff_client import StaffClient

from hotel_desk.app.error_presenter import build_validation_payload, print_error_banner
from hotel_desk.app.infrastructure.logging.logger import get_logger, log_action
from hotel_desk.app.ui.listing_view import EMPTY_VALUE, ColumnDef, format_counter
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand

TASK_STATUSES = ("pending", "in_progress", "completed")
EMPTY_SUMMARY: dict[str, int | None] = {
    "assigned_tasks": None,
    "pending_queries": None,
    "guests_assisted": None,
    "completed_today": None,
}

logger = get_logger("hotel_desk.tasks")


class TasksView(ListingView):
    module = "tasks"
    title = "STAFF TASKS"
    key_field = "task_id"
    columns = (
        ColumnDef("task_id", "Task ID"),
        ColumnDef("assigned_to", "Assigned To"),
        ColumnDef("description", "Description"),
        ColumnDef("priority", "Priority"),
        ColumnDef("status", "Status"),
        ColumnDef("due_date", "Due"),
    )
    searchable_fields = ("description", "assigned_to", "task_id")
    filter_fields = ("status", "priority")
    empty_message = "No tasks assigned."

    def __init__(self, client: StaffClient, *, page_size: int = 10, role: str = "staff") -> None:
        super().__init__(page_size=page_size, refresh_seconds=None, role=role)
        self.client = client
        self.summary: dict[str, int | None] = dict(EMPTY_SUMMARY)

    def fetch_rows(self) -> list[Row]:
        return self.client.tasks()

    def load_header(self) -> None:
        try:
            self.summary = self.client.summary()
        except ApiError as error:
            log_action(logger, self.module, "summary", self.role, "error", code=error.code, trace_id=error.trace_id)
            self.summary = dict(EMPTY_SUMMARY)

    def print_header(self) -> None:
        print(
            f"Assigned: {format_counter(self.summary.get('assigned_tasks'))} | "
            f"Pending queries: {format_counter(self.summary.get('pending_queries'))} | "
            f"Guests assisted: {format_counter(self.summary.get('guests_assisted'))} | "
            f"Completed today: {format_counter(self.summary.get('completed_today'))}"
        )

    def commands(self) -> list[ViewCommand]:
        return [ViewCommand("u", "update task", self.update_task)]

    def update_task(self) -> bool:
        requested = input("task_id: ").strip()
        row = self.find_row(requested) if requested else None
        if row is None:
            print_error_banner(build_validation_payload(f"Unknown task_id: {requested or EMPTY_VALUE}"))
            return False

        current = task_status_key(row.get("status"))
        status = input(f"status {list(TASK_STATUSES)} [{current}]: ").strip().lower() or current
        if status not in TASK_STATUSES:
            print_error_banner(build_validation_payload(f"Invalid task status: {status}"))
            return False
        remarks = input("remarks (optional): ").strip()

        self.client.update_task(row.get(self.key_field), status, remarks)
        print("[ok] Task updated")
        return True


def task_status_key(value: Any) -> str:
    """Map a displayed status such as ``In Progress`` to its form value."""
    if value is None or not str(value).strip():
        return "pending"
    return str(value).strip().lower().replace(" ", "_")
