from __future__ import annotations

from typing import Any

from clients.hotel_api_sdk.http_client import HttpClient
from clients.hotel_api_sdk.normalizers import normalize_rows

USERS_PATH = "/api/users"


class UsersClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    def list_users(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(USERS_PATH))

    def audit(self) -> list[dict[str, Any]]:
        return normalize_rows(self.http_client.get(f"{USERS_PATH}/audit"))

    def update_access(self, user_id: Any, role: str, status: str, privileges: list[str]) -> Any:
        return self.http_client.post(
            f"{USERS_PATH}/update/{user_id}",
            {"role": role, "status": status, "privileges": list(privileges)},
        )

    def bulk_update(self, ids: list[int], role: str | None = None, status: str | None = None) -> Any:
        body = _build_body(ids=list(ids), role=role, status=status)
        return self.http_client.post(f"{USERS_PATH}/bulk_update", body)


def _build_body(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
