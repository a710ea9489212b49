from __future__ import annotations

from clients.hotel_api_sdk.errors import ApiError
from clients.hotel_api_sdk.users_client import UsersClient

from hotel_desk.app.error_presenter import build_error_payload, build_validation_payload, print_error_banner
from hotel_desk.app.ui.listing_view import EMPTY_VALUE, ColumnDef, normalize_value
from hotel_desk.app.ui.table_view import Row
from hotel_desk.app.ui.views.listing_base import ListingView, ViewCommand

ROLES = ("admin", "staff", "guest")
STATUSES = ("active", "inactive")
ALL_PRIVILEGES = ("SELECT", "INSERT", "UPDATE", "DELETE")
MAX_AUDIT_ENTRIES = 50


class AccessView(ListingView):
    module = "access"
    title = "USER ACCESS"
    key_field = "user_id"
    columns = (
        ColumnDef("user_id", "User ID"),
        ColumnDef("username", "Username"),
        ColumnDef("email", "Email"),
        ColumnDef("role", "Role"),
        ColumnDef("privileges", "Privileges"),
        ColumnDef("status", "Status"),
        ColumnDef("last_updated", "Last Updated"),
    )
    searchable_fields = ("username", "email", "user_id")
    filter_fields = ("role", "status")
    empty_message = "No users match the current filters."

    def __init__(
        self,
        client: UsersClient,
        *,
        page_size: int = 10,
        refresh_seconds: float | None = 60,
        role: str = "staff",
    ) -> None:
        super().__init__(page_size=page_size, refresh_seconds=refresh_seconds, role=role)
        self.client = client

    def fetch_rows(self) -> list[Row]:
        return self.client.list_users()

    def stats(self) -> dict[str, int]:
        return {
            "total": len(self.loaded_rows),
            "admins": sum(1 for row in self.loaded_rows if row.get("role") == "admin"),
            "staff": sum(1 for row in self.loaded_rows if row.get("role") == "staff"),
        }

    def print_header(self) -> None:
        stats = self.stats()
        print(
            f"Users: {stats['total'] or EMPTY_VALUE} | "
            f"Admins: {stats['admins'] or EMPTY_VALUE} | "
            f"Staff: {stats['staff'] or EMPTY_VALUE}"
        )

    def commands(self) -> list[ViewCommand]:
        return [
            ViewCommand("e", "edit access", self.edit_access),
            ViewCommand("k", "bulk update", self.bulk_update),
            ViewCommand("l", "audit log", self.show_audit),
        ]

    def edit_access(self) -> bool:
        requested = input("user_id: ").strip()
        row = self.find_row(requested) if requested else None
        if row is None:
            print_error_banner(build_validation_payload(f"Unknown user_id: {requested or EMPTY_VALUE}"))
            return False

        current_privileges = [str(item) for item in row.get("privileges") or []]
        role = input(f"role {list(ROLES)} [{row.get('role') or ''}]: ").strip().lower() or str(row.get("role") or "")
        status = input(f"status {list(STATUSES)} [{row.get('status') or 'active'}]: ").strip().lower()
        status = status or str(row.get("status") or "active")
        raw_privileges = input(f"privileges csv {list(ALL_PRIVILEGES)} [{','.join(current_privileges)}]: ").strip()
        privileges = parse_privileges(raw_privileges) if raw_privileges else current_privileges

        problem = validate_access(role=role, status=status, privileges=privileges)
        if problem:
            print_error_banner(build_validation_payload(problem))
            return False

        self.client.update_access(row.get(self.key_field), role, status, privileges)
        print("[ok] Saved changes")
        return True

    def bulk_update(self) -> bool:
        raw_ids = input("user ids (csv): ").strip()
        ids, problem = parse_user_ids(raw_ids, known={str(row.get(self.key_field)) for row in self.loaded_rows})
        if problem:
            print_error_banner(build_validation_payload(problem))
            return False
        role = input(f"role {list(ROLES)} (empty=keep): ").strip().lower() or None
        status = input(f"status {list(STATUSES)} (empty=keep): ").strip().lower() or None
        if role is None and status is None:
            print_error_banner(build_validation_payload("Choose a role or a status to apply."))
            return False
        problem = validate_access(role=role, status=status, privileges=[])
        if problem:
            print_error_banner(build_validation_payload(problem))
            return False

        self.client.bulk_update(ids, role=role, status=status)
        print(f"[ok] Bulk update applied to {len(ids)} users")
        return True

    def show_audit(self) -> bool:
        try:
            entries = self.client.audit()
        except ApiError as error:
            print_error_banner(build_error_payload(error))
            entries = []
        print("\nRecent access changes")
        if not entries:
            print("No recent changes")
            return False
        for entry in entries[:MAX_AUDIT_ENTRIES]:
            print(f"  {normalize_value(entry.get('when'))} • {normalize_value(entry.get('actor'))}")
            print(f"    {normalize_value(entry.get('action'))} → {normalize_value(entry.get('target'))}")
        return False


def parse_privileges(raw: str) -> list[str]:
    return [item.strip().upper() for item in raw.split(",") if item.strip()]


def parse_user_ids(raw: str, known: set[str]) -> tuple[list[int], str | None]:
    tokens = [item.strip() for item in raw.split(",") if item.strip()]
    if not tokens:
        return [], "Select at least one user for bulk update."
    ids: list[int] = []
    for token in tokens:
        if not token.isdigit():
            return [], f"Invalid user id: {token}"
        if token not in known:
            return [], f"User {token} is not in the current list."
        ids.append(int(token))
    return ids, None


def validate_access(*, role: str | None, status: str | None, privileges: list[str]) -> str | None:
    if role is not None and role not in ROLES:
        return f"Invalid role: {role}"
    if status is not None and status not in STATUSES:
        return f"Invalid status: {status}"
    unknown = [item for item in privileges if item not in ALL_PRIVILEGES]
    if unknown:
        return f"Unknown privileges: {', '.join(unknown)}"
    return None
