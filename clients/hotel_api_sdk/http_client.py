from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Union

import httpx

from clients.hotel_api_sdk.errors import ApiError

DEFAULT_BASE_URL = "http://127.0.0.1:5000/"
FALSE_VALUES = {"0", "false", "no", "off"}

# Flask list endpoints return bare arrays; everything else returns an object.
Payload = Union[dict[str, Any], list[Any]]


@dataclass(frozen=True)
class ApiSettings:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True

    @classmethod
    def from_env(cls) -> "ApiSettings":
        base_url = os.getenv("HOTEL_API_BASE_URL", "").strip() or DEFAULT_BASE_URL
        verify = os.getenv("HOTEL_API_VERIFY_SSL", "true").strip().lower()
        return cls(
            base_url=base_url if base_url.endswith("/") else f"{base_url}/",
            timeout_seconds=float(os.getenv("HOTEL_API_TIMEOUT_SECONDS", "30")),
            verify_ssl=verify not in FALSE_VALUES,
        )


class HttpClient:
    """JSON over HTTP against the hotel backend, one attempt per call.

    Failures surface as :class:`ApiError`; callers decide whether to show an
    empty table or a banner.
    """

    def __init__(self, settings: ApiSettings | None = None, client: httpx.Client | None = None) -> None:
        self.settings = settings or ApiSettings.from_env()
        self._client = client or httpx.Client(
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_seconds,
            verify=self.settings.verify_ssl,
        )

    def get(self, path: str, params: dict[str, Any] | None = None) -> Payload:
        return self._send("GET", path, params=params)

    def post(self, path: str, body: dict[str, Any] | None = None) -> Payload:
        return self._send("POST", path, json=body if body is not None else {})

    def close(self) -> None:
        self._client.close()

    def _send(self, method: str, path: str, **kwargs: Any) -> Payload:
        try:
            response = self._client.request(method, path.lstrip("/"), **kwargs)
        except httpx.TransportError as exc:
            raise ApiError.unreachable(exc) from exc
        if response.is_error:
            raise ApiError.from_response(response)
        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError:
            # plain-text acknowledgements such as "OK"
            return {}
        return payload if isinstance(payload, (dict, list)) else {}
