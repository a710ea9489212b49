from __future__ import annotations

import threading
from collections.abc import Sequence

from clients.hotel_api_sdk.errors import ApiError

from hotel_desk.app.config import AppConfig
from hotel_desk.app.error_presenter import build_error_payload, build_validation_payload, print_error_banner
from hotel_desk.app.export.csv_exporter import export_current_view
from hotel_desk.app.infrastructure.logging.logger import get_logger, log_action
from hotel_desk.app.scheduling import DebouncedTask, RepeatingTask, TimerFactory
from hotel_desk.app.ui.table_printer import render_slice
from hotel_desk.app.ui.table_view import VisibleSlice
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand

BASE_COMMANDS = (
    "n=next, p=prev, /=search, f=field filter, c=clear filters, s=sort, "
    "r=reload, a=auto-refresh ({auto}), x=export csv, b=back"
)


class DashboardConsole:
    def __init__(
        self,
        views: Sequence[ListingView],
        config: AppConfig,
        role: str = "staff",
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.views = list(views)
        self.config = config
        self.role = role
        self.logger = get_logger("hotel_desk.console")
        self._timer_factory = timer_factory
        # timer callbacks and the input loop share the controllers
        self._lock = threading.RLock()
        self._auto_refresh: dict[str, RepeatingTask] = {}
        self._background: dict[str, RepeatingTask] = {}
        self._search: dict[str, DebouncedTask] = {}
        self._active: set[str] = set()

    def run(self) -> None:
        while True:
            print("\nHotel desk")
            print(f"Role: {self.role}")
            for index, view in enumerate(self.views, start=1):
                print(f"{index}. {view.title.title()}")
            print("0. Exit")
            choice = input("Select an option: ").strip()
            if choice == "0":
                return
            if choice.isdigit() and 1 <= int(choice) <= len(self.views):
                self.run_view(self.views[int(choice) - 1])
                continue
            print_error_banner(build_validation_payload(f"Unknown option: {choice}"))

    def enter_view(self, view: ListingView) -> None:
        self._active.add(view.module)
        self.load(view)
        self._start_background(view)

    def run_view(self, view: ListingView) -> None:
        try:
            self.enter_view(view)
            while True:
                self.render(view)
                extra = view.commands()
                print("\nCommands: " + BASE_COMMANDS.format(auto="ON" if self.is_auto_refresh_on(view) else "OFF"))
                if extra:
                    print("View actions: " + ", ".join(f"{command.key}={command.label}" for command in extra))
                command = input("cmd: ").strip().lower()
                if command == "b":
                    return
                self.dispatch(view, command, extra)
        finally:
            self.leave_view(view)

    def dispatch(self, view: ListingView, command: str, extra: Sequence[ViewCommand] = ()) -> None:
        controller = view.controller
        if command == "n":
            with self._lock:
                controller.change_page(1)
        elif command == "p":
            with self._lock:
                controller.change_page(-1)
        elif command == "/":
            self.handle_search_input(view, input("search: "))
            self._search_task(view).flush()
        elif command == "f":
            self._prompt_field_filter(view)
        elif command == "c":
            self._search_task(view).cancel()
            with self._lock:
                controller.clear_filters()
            print("[filters] Filters cleared.")
        elif command == "s":
            self._prompt_sort(view)
        elif command == "r":
            self.load(view)
        elif command == "a":
            self.toggle_auto_refresh(view)
        elif command == "x":
            self.export(view)
        else:
            for item in extra:
                if item.key == command:
                    self.run_command(view, item)
                    return
            print_error_banner(build_validation_payload(f"Unknown command: {command}"))

    def load(self, view: ListingView) -> int:
        try:
            rows = view.fetch_rows()
        except Exception as error:  # noqa: BLE001
            payload = build_error_payload(error)
            print(f"[error] {view.module.upper()}: could not load the list, showing an empty table.")
            print_error_banner(payload)
            log_action(
                self.logger,
                view.module,
                "load",
                self.role,
                "error",
                code=payload["code"],
                trace_id=payload["trace_id"],
            )
            rows = []
        else:
            log_action(self.logger, view.module, "load", self.role, "success", rows=len(rows))
        view.load_header()
        with self._lock:
            view.apply_rows(rows)
        return len(rows)

    def render(self, view: ListingView) -> VisibleSlice:
        with self._lock:
            view.print_header()
            visible = view.controller.get_visible_slice()
            render_slice(view.title, visible, view.columns, view.controller.sort_spec, view.empty_message)
            active_filters = view.controller.filter_spec.describe()
            if active_filters:
                print(f"[filters] {active_filters}")
            return visible

    def handle_search_input(self, view: ListingView, text: str) -> None:
        self._search_task(view).trigger(text)

    def apply_search(self, view: ListingView, text: str) -> None:
        with self._lock:
            view.controller.set_filter_text(text)

    def toggle_auto_refresh(self, view: ListingView) -> bool:
        task = self._auto_refresh.get(view.module)
        if task is not None and task.is_running:
            task.cancel()
            print("[refresh] Auto-refresh disabled.")
            return False
        if not view.refresh_seconds:
            print(f"[refresh] {view.module} has no auto-refresh interval.")
            return False
        task = RepeatingTask(view.refresh_seconds, lambda: self.auto_refresh(view), self._timer_factory)
        self._auto_refresh[view.module] = task
        task.start()
        print(f"[refresh] Auto-refresh enabled every {view.refresh_seconds:g}s.")
        return True

    def is_auto_refresh_on(self, view: ListingView) -> bool:
        task = self._auto_refresh.get(view.module)
        return bool(task and task.is_running)

    def is_active(self, view: ListingView) -> bool:
        return view.module in self._active

    def auto_refresh(self, view: ListingView) -> None:
        if not self.is_active(view):
            return
        print("\n[refresh] Reloading...")
        self.load(view)
        # the user may have left the view while the request was in flight
        if self.is_active(view):
            self.render(view)

    def export(self, view: ListingView) -> None:
        with self._lock:
            rows = view.controller.filtered_rows()
            filters = view.controller.filter_spec.describe()
        path = export_current_view(
            module=view.module,
            rows=rows,
            columns=list(view.columns),
            output_dir=self.config.export_dir,
            filters=filters,
        )
        log_action(self.logger, view.module, "export_csv", self.role, "success", rows=len(rows), path=str(path))
        print(f"CSV exported: {path}")

    def run_command(self, view: ListingView, command: ViewCommand) -> bool:
        try:
            changed = command.handler()
        except ApiError as error:
            payload = build_error_payload(error)
            print_error_banner(payload)
            log_action(
                self.logger,
                view.module,
                command.label,
                self.role,
                "error",
                code=error.code,
                trace_id=error.trace_id,
            )
            return False
        if changed:
            log_action(self.logger, view.module, command.label, self.role, "success")
            self.load(view)
        return changed

    def leave_view(self, view: ListingView) -> None:
        self._active.discard(view.module)
        for tasks in (self._auto_refresh, self._background):
            task = tasks.pop(view.module, None)
            if task is not None:
                task.cancel()
        search = self._search.pop(view.module, None)
        if search is not None:
            search.cancel()

    def shutdown(self) -> None:
        for view in self.views:
            self.leave_view(view)

    def _start_background(self, view: ListingView) -> None:
        seconds = view.background_seconds
        if not seconds:
            return

        def _tick() -> None:
            if self.is_active(view):
                view.background_refresh()

        task = RepeatingTask(seconds, _tick, self._timer_factory)
        self._background[view.module] = task
        task.start()

    def _search_task(self, view: ListingView) -> DebouncedTask:
        task = self._search.get(view.module)
        if task is None:
            task = DebouncedTask(
                self.config.search_debounce_ms,
                lambda text: self.apply_search(view, text),
                self._timer_factory,
            )
            self._search[view.module] = task
        return task

    def _prompt_field_filter(self, view: ListingView) -> None:
        fields = view.controller.filter_fields
        if not fields:
            print(f"[filters] {view.module} has no field filters.")
            return
        current = view.controller.filter_spec.fields
        name = input(f"field {list(fields)}: ").strip()
        if name not in fields:
            print_error_banner(build_validation_payload(f"Unknown filter field: {name}"))
            return
        value = input(f"{name} [{current.get(name, '')}] (empty=any): ").strip()
        with self._lock:
            view.controller.set_field_filter(name, value)
        print(f"[filters] {view.controller.filter_spec.describe() or 'no filters'}")

    def _prompt_sort(self, view: ListingView) -> None:
        options = [column.key for column in view.columns]
        print(f"[sort] Columns: {options}")
        selected = input("sort by (empty=clear): ").strip()
        if not selected:
            with self._lock:
                view.controller.clear_sort()
            print("[sort] Sort cleared.")
            return
        if selected not in options:
            print_error_banner(build_validation_payload(f"Unknown column: {selected}"))
            return
        with self._lock:
            view.controller.set_sort(selected)
            spec = view.controller.sort_spec
        if spec is not None:
            print(f"[sort] {spec.field} {spec.direction}")
