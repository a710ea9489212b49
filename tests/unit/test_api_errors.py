import httpx
import pytest

from clients.hotel_api_sdk.errors import ApiError, code_for_status


def test_api_error_reads_flask_error_key() -> None:
    request = httpx.Request("POST", "http://hotel.test/api/users/update/3")
    response = httpx.Response(422, request=request, json={"error": "bad role", "field": "role"})

    error = ApiError.from_response(response)

    assert error.status_code == 422
    assert error.code == "VALIDATION_ERROR"
    assert error.message == "bad role"
    assert error.details == {"error": "bad role", "field": "role"}
    assert str(error) == "VALIDATION_ERROR: bad role"


def test_api_error_falls_back_to_message_key() -> None:
    request = httpx.Request("GET", "http://hotel.test/api/me")
    response = httpx.Response(401, request=request, json={"message": "login required"})

    assert ApiError.from_response(response).message == "login required"


def test_api_error_non_json_uses_text_and_request_id() -> None:
    request = httpx.Request("GET", "http://hotel.test/api/queries")
    response = httpx.Response(502, request=request, text="bad gateway", headers={"X-Request-ID": "trace-h"})

    error = ApiError.from_response(response)

    assert error.code == "SERVER_ERROR"
    assert error.message == "bad gateway"
    assert error.trace_id == "trace-h"
    assert error.details is None


def test_api_error_empty_body_uses_reason_phrase() -> None:
    request = httpx.Request("GET", "http://hotel.test/api/rooms")
    response = httpx.Response(404, request=request)

    error = ApiError.from_response(response)

    assert error.code == "NOT_FOUND"
    assert error.message == "Not Found"


@pytest.mark.parametrize(
    "status,code",
    [(400, "BAD_REQUEST"), (409, "CONFLICT"), (418, "HTTP_ERROR"), (500, "SERVER_ERROR"), (504, "SERVER_ERROR")],
)
def test_code_for_status(status, code) -> None:
    assert code_for_status(status) == code
