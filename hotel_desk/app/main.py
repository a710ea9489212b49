from __future__ import annotations

from clients.hotel_api_sdk.admin_client import AdminClient
from clients.hotel_api_sdk.errors import ApiError
from clients.hotel_api_sdk.http_client import ApiSettings, HttpClient
from clients.hotel_api_sdk.me_client import DEFAULT_ROLE, MeClient
from clients.hotel_api_sdk.queries_client import QueriesClient
from clients.hotel_api_sdk.staff_client import StaffClient
from clients.hotel_api_sdk.transactions_client import TransactionsClient
from clients.hotel_api_sdk.users_client import UsersClient

from hotel_desk.app.config import AppConfig
from hotel_desk.app.dashboard_console import DashboardConsole
from hotel_desk.app.infrastructure.logging.logger import get_logger, log_action
from hotel_desk.app.ui.views.access_view import AccessView
from hotel_desk.app.ui.views.guests_view import GuestsView
from hotel_desk.app.ui.views.listing_base import ListingView
from hotel_desk.app.ui.views.queries_view import QueriesView
from hotel_desk.app.ui.views.rooms_view import RoomsView
from hotel_desk.app.ui.views.tasks_view import TasksView
from hotel_desk.app.ui.views.transactions_view import TransactionsView

logger = get_logger("hotel_desk.main")


def _print_runtime_config(settings: ApiSettings, config: AppConfig) -> None:
    print("HOTEL DESK")
    print(f"Base URL: {settings.base_url}")
    print(f"Timeout: {settings.timeout_seconds}s")
    print(f"Verify SSL: {settings.verify_ssl}")
    print(
        "Page sizes: "
        f"queries={config.queries_page_size} "
        f"access={config.access_page_size} "
        f"transactions={config.transactions_page_size} "
        f"rooms={config.rooms_page_size} "
        f"tasks={config.tasks_page_size} "
        f"guests={config.guests_page_size}"
    )


def resolve_role(me_client: MeClient) -> str:
    try:
        role = me_client.resolve_role()
    except ApiError as error:
        log_action(logger, "me", "resolve_role", None, "error", code=error.code, trace_id=error.trace_id)
        return DEFAULT_ROLE
    log_action(logger, "me", "resolve_role", role, "success")
    return role


def build_views(http_client: HttpClient, config: AppConfig, role: str) -> list[ListingView]:
    staff_client = StaffClient(http_client)
    views: list[ListingView] = [
        QueriesView(
            QueriesClient(http_client),
            page_size=config.queries_page_size,
            refresh_seconds=config.queries_refresh_seconds,
            recent_refresh_seconds=config.recent_refresh_seconds,
            role=role,
        ),
        AccessView(
            UsersClient(http_client),
            page_size=config.access_page_size,
            refresh_seconds=config.access_refresh_seconds,
            role=role,
        ),
        TransactionsView(
            TransactionsClient(http_client),
            page_size=config.transactions_page_size,
            role=role,
        ),
        TasksView(staff_client, page_size=config.tasks_page_size, role=role),
        GuestsView(staff_client, page_size=config.guests_page_size, role=role),
    ]
    # the admin overview is not part of the staff dashboard
    if role == "admin":
        views.append(RoomsView(AdminClient(http_client), page_size=config.rooms_page_size, role=role))
    return views


def main() -> None:
    # AppConfig loads .env first so the API settings see it too
    config = AppConfig.from_env()
    settings = ApiSettings.from_env()
    _print_runtime_config(settings, config)

    http_client = HttpClient(settings)
    role = resolve_role(MeClient(http_client))
    console = DashboardConsole(build_views(http_client, config, role), config, role=role)
    try:
        console.run()
    except (KeyboardInterrupt, EOFError):
        print("\nBye")
    finally:
        console.shutdown()
        http_client.close()


if __name__ == "__main__":
    main()
