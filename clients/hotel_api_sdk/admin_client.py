from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient
from clients.hotel_api_sdk.normalizers import normalize_counters, normalize_rows

ADMIN_PATH = "/api/admin"
SUMMARY_KEYS = ["total_users", "total_staff", "total_guests"]


class AdminClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def summary(self) -> dict[str, Any]:
        payload = self.http_client.get(f"{ADMIN_PATH}/summary")
        counters: dict[str, Any] = normalize_counters(payload, SUMMARY_KEYS)
        # revenue is a decimal amount, not a counter
        counters["total_revenue"] = payload.get("total_revenue") if isinstance(payload, dict) else None
        return counters

    def rooms(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{ADMIN_PATH}/rooms"))

    def recent_bookings(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{ADMIN_PATH}/recent_bookings"))
