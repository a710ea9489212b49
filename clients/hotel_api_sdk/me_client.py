from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient

DEFAULT_ROLE = "staff"


class MeClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def get_me(self) -> dict[str, Any]:
        payload = self.http_client.get("/api/me")
        return payload if isinstance(payload, dict) else {}

    def resolve_role(self) -> str:
        role = str(self.get_me().get("role") or "").strip().lower()
        return role or DEFAULT_ROLE
