from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient
from clients.hotel_api_sdk.normalizers import normalize_counters, normalize_rows

STAFF_PATH = "/api/staff"
SUMMARY_KEYS = ["assigned_tasks", "pending_queries", "guests_assisted", "completed_today"]


class StaffClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def summary(self) -> dict[str, int | None]:
        return normalize_counters(self.http_client.get(f"{STAFF_PATH}/summary"), SUMMARY_KEYS)

    def tasks(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{STAFF_PATH}/tasks"))

    def guests(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{STAFF_PATH}/guests"))

    def update_task(self, task_id: Any, status: str, remarks: str = "") -> Any:
        return self.http_client.post(
            f"{STAFF_PATH}/update_task",
            {"task_id": task_id, "status": status, "remarks": remarks},
        )
