from collections.abc import Iterator

from clients.hotel_api_sdk.errors import ApiError
from hotel_desk.app.ui.views.queries_view import QueriesView, print_query_detail

ROWS = [
    {"query_id": 1, "user_name": "John", "subject": "Towels", "message": "Need towels", "status": "Pending",
     "created_at": "2024-05-01", "replies": [{"by": "staff", "msg": "Sent", "at": "2024-05-01 10:00"}]},
    {"query_id": 2, "user_name": "Mary", "subject": "Wifi", "message": "No signal", "status": "Resolved",
     "created_at": "2024-05-02", "replies": []},
]


class StubQueriesClient:
    def __init__(self, rows=None, fail_summary=False) -> None:
        self.rows = rows if rows is not None else list(ROWS)
        self.fail_summary = fail_summary
        self.replies: list[tuple] = []
        self.resolved: list = []
        self.deleted: list = []

    def list_queries(self):
        return list(self.rows)

    def summary(self):
        if self.fail_summary:
            raise ApiError(code="NETWORK_ERROR", message="offline")
        return {"total": 2, "pending": 1, "resolved": 1}

    def recent(self):
        return [row for row in self.rows if row.get("status") == "Pending"]

    def reply(self, query_id, text):
        self.replies.append((query_id, text))
        return {}

    def resolve(self, query_id):
        self.resolved.append(query_id)
        return {}

    def delete(self, query_id):
        self.deleted.append(query_id)
        return {}


def _answers(monkeypatch, values: list[str]) -> None:
    answers: Iterator[str] = iter(values)
    monkeypatch.setattr("builtins.input", lambda _: next(answers))


def _view(client: StubQueriesClient, role: str = "staff") -> QueriesView:
    view = QueriesView(client, page_size=6, role=role)
    view.apply_rows(client.list_queries())
    return view


def test_queries_view_configuration() -> None:
    view = _view(StubQueriesClient())

    assert view.controller.page_size == 6
    assert view.controller.searchable_fields == ("user_name", "subject", "message", "query_id")
    assert view.controller.filter_fields == ("status",)
    assert view.background_seconds == 45


def test_search_matches_query_id_string_form() -> None:
    view = _view(StubQueriesClient())

    view.controller.set_filter_text("2")

    assert [row["query_id"] for row in view.controller.get_visible_slice().rows] == [2]


def test_reply_sends_text_and_requests_reload(monkeypatch) -> None:
    client = StubQueriesClient()
    view = _view(client)
    _answers(monkeypatch, ["1", "  On the way  "])

    assert view.reply() is True
    assert client.replies == [(1, "On the way")]


def test_reply_requires_text(monkeypatch, capsys) -> None:
    client = StubQueriesClient()
    view = _view(client)
    _answers(monkeypatch, ["1", "   "])

    assert view.reply() is False
    assert client.replies == []
    assert "Please enter a reply." in capsys.readouterr().out


def test_resolve_skips_already_resolved(monkeypatch, capsys) -> None:
    client = StubQueriesClient()
    view = _view(client)
    _answers(monkeypatch, ["2"])

    assert view.resolve() is False
    assert client.resolved == []
    assert "Only Pending queries can be resolved (status: Resolved)" in capsys.readouterr().out


def test_resolve_refuses_any_status_other_than_pending(monkeypatch, capsys) -> None:
    rows = [
        {"query_id": 7, "user_name": "Ann", "status": "In Progress"},
        {"query_id": 8, "user_name": "Bo"},
        {"query_id": 9, "user_name": "Cy", "status": "Pending"},
    ]
    client = StubQueriesClient(rows=rows)
    view = _view(client)
    _answers(monkeypatch, ["7", "8", "9"])

    assert view.resolve() is False
    assert view.resolve() is False
    assert view.resolve() is True
    assert client.resolved == [9]
    out = capsys.readouterr().out
    assert "(status: In Progress)" in out
    assert "(status: —)" in out


def test_unknown_query_id_is_a_validation_error(monkeypatch, capsys) -> None:
    view = _view(StubQueriesClient())
    _answers(monkeypatch, ["99"])

    assert view.resolve() is False
    assert "UI_VALIDATION" in capsys.readouterr().out


def test_delete_only_offered_to_admin(monkeypatch) -> None:
    client = StubQueriesClient()
    staff_view = _view(client, role="staff")
    admin_view = _view(client, role="admin")

    assert "del" not in [command.key for command in staff_view.commands()]
    assert "del" in [command.key for command in admin_view.commands()]
    assert staff_view.delete() is False

    _answers(monkeypatch, ["1", "y"])
    assert admin_view.delete() is True
    assert client.deleted == [1]


def test_header_falls_back_to_dash_when_summary_fails(capsys) -> None:
    view = _view(StubQueriesClient(fail_summary=True))

    view.load_header()
    view.print_header()

    out = capsys.readouterr().out
    assert "Total: — | Pending: — | Resolved: —" in out
    assert "Notifications: 1 pending" in out


def test_background_refresh_announces_new_pending(capsys) -> None:
    client = StubQueriesClient()
    view = _view(client)
    view.load_recent()
    client.rows.append({"query_id": 3, "user_name": "Ann", "subject": "Late checkout", "status": "Pending"})

    view.background_refresh()

    assert "[notifications] 2 pending queries" in capsys.readouterr().out


def test_query_detail_prints_history(capsys) -> None:
    print_query_detail(ROWS[0])
    print_query_detail(ROWS[1])

    out = capsys.readouterr().out
    assert "Query #1 • John • 2024-05-01" in out
    assert "staff • 2024-05-01 10:00" in out
    assert "No replies yet" in out


def test_print_header_only_shows_loaded_values(capsys) -> None:
    client = StubQueriesClient()
    view = _view(client)
    calls = []
    client.summary = lambda: calls.append("summary") or {"total": 2, "pending": 1, "resolved": 1}

    view.print_header()
    assert calls == []
    assert "Total: — | Pending: — | Resolved: —" in capsys.readouterr().out

    view.load_header()
    view.print_header()
    view.print_header()

    assert calls == ["summary"]
    assert capsys.readouterr().out.count("Total: 2 | Pending: 1 | Resolved: 1") == 2
