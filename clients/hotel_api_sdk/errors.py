from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

# Flask routes answer failures with a bare status and {"error": "..."}; the
# status is the only machine-readable part, so codes are derived from it.
STATUS_CODE_NAMES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "VALIDATION_ERROR",
}


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int | None = None
    trace_id: str | None = None
    details: Any = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        body = _decode(response)
        message = None
        if isinstance(body, dict):
            message = body.get("error") or body.get("message")
        if not message:
            message = response.text.strip() or response.reason_phrase or f"HTTP {response.status_code}"
        return cls(
            code=code_for_status(response.status_code),
            message=str(message),
            status_code=response.status_code,
            trace_id=response.headers.get("X-Request-ID"),
            details=body,
        )

    @classmethod
    def unreachable(cls, exc: httpx.TransportError) -> "ApiError":
        return cls(
            code="NETWORK_ERROR",
            message="Could not reach the hotel server",
            details=f"{exc.__class__.__name__}: {exc}",
        )


def code_for_status(status_code: int) -> str:
    if status_code >= 500:
        return "SERVER_ERROR"
    return STATUS_CODE_NAMES.get(status_code, "HTTP_ERROR")


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
