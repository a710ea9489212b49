from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient
from clients.hotel_api_sdk.normalizers import normalize_counters, normalize_rows

QUERIES_PATH = "/api/queries"


class QueriesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_queries(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(QUERIES_PATH))

    def summary(self) -> dict[str, int | None]:
        payload = self.http_client.get(f"{QUERIES_PATH}/summary")
        return normalize_counters(payload, ["total", "pending", "resolved"])

    def recent(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{QUERIES_PATH}/recent"))

    def reply(self, query_id: Any, reply: str) -> Any:
        return self.http_client.post(f"{QUERIES_PATH}/reply/{query_id}", {"reply": reply})

    def resolve(self, query_id: Any) -> Any:
        return self.http_client.post(f"{QUERIES_PATH}/resolve/{query_id}")

    def delete(self, query_id: Any) -> Any:
        return self.http_client.post(f"{QUERIES_PATH}/delete/{query_id}")
