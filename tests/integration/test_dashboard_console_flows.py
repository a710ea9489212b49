from collections.abc import Iterator

from clients.hotel_api_sdk.errors import ApiError
from hotel_desk.app.config import AppConfig
from hotel_desk.app.dashboard_console import DashboardConsole
from hotel_desk.app.ui.listing_view import ColumnDef
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand
from hotel_desk.app.ui.views.queries_view import QueriesView
from hotel_desk.app.ui.views.tasks_view import TasksView
from hotel_desk.app.ui.views.transactions_view import TransactionsView


def _config(tmp_path, debounce_ms: int = 300) -> AppConfig:
    return AppConfig(
        queries_page_size=6,
        access_page_size=10,
        transactions_page_size=6,
        rooms_page_size=10,
        tasks_page_size=10,
        guests_page_size=10,
        queries_refresh_seconds=30,
        access_refresh_seconds=60,
        recent_refresh_seconds=45,
        search_debounce_ms=debounce_ms,
        export_dir=str(tmp_path / "exports"),
    )


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def start(self):
        pass

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.fired = True
            self.callback()


class FakeTimers:
    def __init__(self):
        self.created: list[FakeTimer] = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.created.append(timer)
        return timer

    def active(self) -> list[FakeTimer]:
        return [timer for timer in self.created if not (timer.cancelled or timer.fired)]


class StubTransactionsClient:
    def __init__(self, batches: list) -> None:
        self.batches = batches
        self.calls = 0

    def list_transactions(self):
        batch = self.batches[min(self.calls, len(self.batches) - 1)]
        self.calls += 1
        if isinstance(batch, Exception):
            raise batch
        return list(batch)


def _transactions(count: int = 15) -> list[dict]:
    return [
        {
            "payment_id": index,
            "booking_id": 1000 + index,
            "guest_name": "John Smith" if index % 3 == 0 else f"Guest {index}",
            "amount": 100 * index,
            "mode": "Card" if index % 2 else "Cash",
            "status": "Success" if index <= 10 else "Failed",
        }
        for index in range(1, count + 1)
    ]


def _answers(monkeypatch, values: list[str]) -> None:
    answers: Iterator[str] = iter(values)
    monkeypatch.setattr("builtins.input", lambda _: next(answers))


def test_listing_loop_pages_filters_and_sorts(monkeypatch, tmp_path, capsys) -> None:
    view = TransactionsView(StubTransactionsClient([_transactions()]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    _answers(monkeypatch, ["n", "n", "n", "f", "status", "Success", "s", "guest_name", "b"])

    console.run_view(view)

    out = capsys.readouterr().out
    assert "Showing 7–12 of 15 — Page 2 / 3" in out
    assert "Showing 13–15 of 15 — Page 3 / 3" in out
    assert "[prev] [next (disabled)]" in out
    assert "Showing 1–6 of 10 — Page 1 / 2" in out
    assert view.controller.filter_spec.fields == {"status": "Success"}
    assert view.controller.sort_spec.field == "guest_name"
    visible = view.controller.get_visible_slice()
    assert visible.current_page == 1
    assert [row["guest_name"] for row in visible.rows][:4] == ["Guest 1", "Guest 10", "Guest 2", "Guest 4"]


def test_search_is_debounced_and_committed_on_enter(monkeypatch, tmp_path) -> None:
    timers = FakeTimers()
    view = TransactionsView(StubTransactionsClient([_transactions()]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=timers)
    view.apply_rows(_transactions())

    console.handle_search_input(view, "j")
    console.handle_search_input(view, "jo")
    console.handle_search_input(view, "john")
    assert view.controller.filter_spec.text == ""

    timers.active()[-1].fire()

    assert view.controller.filter_spec.text == "john"
    assert view.controller.get_visible_slice().total_filtered == 5

    _answers(monkeypatch, ["1003"])
    console.dispatch(view, "/")
    assert view.controller.filter_spec.text == "1003"
    assert [row["payment_id"] for row in view.controller.get_visible_slice().rows] == [3]


def test_failed_load_shows_empty_table_and_banner(monkeypatch, tmp_path, capsys) -> None:
    client = StubTransactionsClient([ApiError(code="NETWORK_ERROR", message="offline"), _transactions(3)])
    view = TransactionsView(client, page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    _answers(monkeypatch, ["r", "b"])

    console.run_view(view)

    out = capsys.readouterr().out
    assert "could not load the list" in out
    assert "code=NETWORK_ERROR" in out
    assert "Showing 0–0 of 0 — Page 1 / 1" in out
    assert "Showing 1–3 of 3 — Page 1 / 1" in out


def test_reload_resets_page_to_one(tmp_path) -> None:
    view = TransactionsView(StubTransactionsClient([_transactions()]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)
    console.dispatch(view, "n")
    assert view.controller.current_page == 2

    console.dispatch(view, "r")

    assert view.controller.current_page == 1


class PollingView(ListingView):
    module = "polling"
    title = "POLLING"
    key_field = "id"
    columns = (ColumnDef("id", "ID"),)

    def __init__(self) -> None:
        super().__init__(page_size=10, refresh_seconds=30)
        self.fetches = 0
        self.background_ticks = 0

    @property
    def background_seconds(self):
        return 45

    def fetch_rows(self):
        self.fetches += 1
        return [{"id": index} for index in range(self.fetches)]

    def background_refresh(self) -> None:
        self.background_ticks += 1


def test_auto_refresh_toggle_polls_until_disabled(tmp_path, capsys) -> None:
    timers = FakeTimers()
    view = PollingView()
    console = DashboardConsole([view], _config(tmp_path), timer_factory=timers)
    console.enter_view(view)

    assert console.toggle_auto_refresh(view) is True
    assert console.is_auto_refresh_on(view) is True
    assert timers.active()[-1].delay == 30
    timers.active()[-1].fire()
    assert view.fetches == 2
    assert view.controller.row_count == 2

    assert console.toggle_auto_refresh(view) is False
    assert console.is_auto_refresh_on(view) is False
    assert [timer.delay for timer in timers.active()] == [45]
    assert "Auto-refresh disabled" in capsys.readouterr().out


def test_leaving_view_cancels_background_tasks(monkeypatch, tmp_path) -> None:
    timers = FakeTimers()
    view = PollingView()
    console = DashboardConsole([view], _config(tmp_path), timer_factory=timers)
    _answers(monkeypatch, ["a", "b"])

    console.run_view(view)

    assert [timer.delay for timer in timers.created] == [45, 30]
    assert timers.active() == []


def test_background_task_ticks_while_view_open(monkeypatch, tmp_path) -> None:
    timers = FakeTimers()
    view = PollingView()
    console = DashboardConsole([view], _config(tmp_path), timer_factory=timers)

    def _input(_prompt: str) -> str:
        timers.active()[0].fire()
        return "b"

    monkeypatch.setattr("builtins.input", _input)
    console.run_view(view)

    assert view.background_ticks == 1


def test_export_writes_all_filtered_rows(monkeypatch, tmp_path, capsys) -> None:
    view = TransactionsView(StubTransactionsClient([_transactions()]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)
    view.controller.set_field_filter("status", "Success")

    console.dispatch(view, "x")

    exported = list((tmp_path / "exports").glob("transactions_*.csv"))
    assert len(exported) == 1
    lines = exported[0].read_text(encoding="utf-8-sig").splitlines()
    assert lines[3] == "Payment ID,Booking ID,Guest,Amount,Mode,Date,Status"
    assert len(lines) == 4 + 10
    assert "CSV exported" in capsys.readouterr().out


class ActionView(PollingView):
    module = "actions"

    def __init__(self, error: ApiError | None = None) -> None:
        super().__init__()
        self.error = error

    @property
    def background_seconds(self):
        return None

    def commands(self):
        return [ViewCommand("z", "zap", self._zap)]

    def _zap(self) -> bool:
        if self.error is not None:
            raise self.error
        return True


def test_view_command_success_reloads_rows(tmp_path) -> None:
    view = ActionView()
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)

    assert console.run_command(view, view.commands()[0]) is True
    assert view.fetches == 2


def test_view_command_api_error_is_reported(tmp_path, capsys) -> None:
    view = ActionView(error=ApiError(code="HTTP_ERROR", message="forbidden", status_code=403, trace_id="t-9"))
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)

    console.dispatch(view, "z", view.commands())

    out = capsys.readouterr().out
    assert "trace_id=t-9" in out
    assert "category=403" in out
    assert view.fetches == 1


def test_unknown_command_and_sort_column_are_validation_errors(monkeypatch, tmp_path, capsys) -> None:
    view = TransactionsView(StubTransactionsClient([_transactions()]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)
    _answers(monkeypatch, ["nope"])

    console.dispatch(view, "?")
    console.dispatch(view, "s")

    out = capsys.readouterr().out
    assert "Unknown command: ?" in out
    assert "Unknown column: nope" in out
    assert view.controller.sort_spec is None


def test_main_menu_routes_to_view_and_exits(monkeypatch, tmp_path, capsys) -> None:
    view = TransactionsView(StubTransactionsClient([_transactions(2)]), page_size=6)
    console = DashboardConsole([view], _config(tmp_path), role="admin", timer_factory=FakeTimers())
    _answers(monkeypatch, ["9", "1", "b", "0"])

    console.run()

    out = capsys.readouterr().out
    assert "Unknown option: 9" in out
    assert "TRANSACTIONS" in out
    assert "Role: admin" in out


class LeavingView(PollingView):
    module = "leaving"
    title = "LEAVING"

    def __init__(self) -> None:
        super().__init__()
        self.on_fetch = None

    def fetch_rows(self):
        rows = super().fetch_rows()
        if self.on_fetch is not None:
            self.on_fetch()
        return rows


def test_auto_refresh_in_flight_does_not_render_after_leaving(tmp_path, capsys) -> None:
    view = LeavingView()
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.enter_view(view)
    capsys.readouterr()

    view.on_fetch = lambda: console.leave_view(view)
    console.auto_refresh(view)

    out = capsys.readouterr().out
    assert view.fetches == 2
    assert "[refresh] Reloading..." in out
    assert "LEAVING" not in out

    console.auto_refresh(view)
    assert view.fetches == 2
    assert capsys.readouterr().out == ""


class CountingQueriesClient:
    def __init__(self, rows: list[dict]) -> None:
        self.rows = rows
        self.summary_calls = 0
        self.recent_calls = 0

    def list_queries(self):
        return list(self.rows)

    def summary(self):
        self.summary_calls += 1
        return {"total": len(self.rows), "pending": len(self.rows), "resolved": 0}

    def recent(self):
        self.recent_calls += 1
        return self.rows[:2]


def test_redraws_reuse_loaded_summary_and_notifications(tmp_path, capsys) -> None:
    rows = [{"query_id": index, "user_name": f"guest {index}", "status": "Pending"} for index in range(1, 21)]
    client = CountingQueriesClient(rows)
    view = QueriesView(client, page_size=6)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)

    for _ in range(3):
        console.dispatch(view, "n")
        console.render(view)

    assert (client.summary_calls, client.recent_calls) == (1, 1)
    out = capsys.readouterr().out
    assert out.count("Total: 20 | Pending: 20 | Resolved: 0") == 3
    assert "Notifications: 2 pending" in out

    console.dispatch(view, "r")
    assert (client.summary_calls, client.recent_calls) == (2, 2)


class StubStaffClient:
    def __init__(self) -> None:
        self.statuses = {1: "pending", 2: "in_progress"}
        self.summary_calls = 0

    def tasks(self):
        return [{"task_id": task_id, "description": f"task {task_id}", "status": status}
                for task_id, status in self.statuses.items()]

    def summary(self):
        self.summary_calls += 1
        done = sum(1 for status in self.statuses.values() if status == "completed")
        return {"assigned_tasks": len(self.statuses), "completed_today": done}

    def update_task(self, task_id, status, remarks=""):
        self.statuses[task_id] = status
        return {"message": "Task updated"}


def test_task_update_reloads_table_and_staff_summary(monkeypatch, tmp_path, capsys) -> None:
    client = StubStaffClient()
    view = TasksView(client, page_size=10)
    console = DashboardConsole([view], _config(tmp_path), timer_factory=FakeTimers())
    console.load(view)
    _answers(monkeypatch, ["2", "completed", ""])

    console.dispatch(view, "u", view.commands())
    console.render(view)

    assert client.summary_calls == 2
    assert view.find_row("2")["status"] == "completed"
    out = capsys.readouterr().out
    assert "[ok] Task updated" in out
    assert "Completed today: 1" in out
