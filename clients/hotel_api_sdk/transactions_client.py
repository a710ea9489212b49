from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient
from clients.hotel_api_sdk.normalizers import normalize_rows


class TransactionsClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_transactions(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get("/api/transactions"))
