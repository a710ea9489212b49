from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PAGE_SIZE_FIELDS = (
    "queries_page_size",
    "access_page_size",
    "transactions_page_size",
    "rooms_page_size",
    "tasks_page_size",
    "guests_page_size",
)


@dataclass(frozen=True)
class AppConfig:
    queries_page_size: int
    access_page_size: int
    transactions_page_size: int
    rooms_page_size: int
    tasks_page_size: int
    guests_page_size: int
    queries_refresh_seconds: float
    access_refresh_seconds: float
    recent_refresh_seconds: float
    search_debounce_ms: int
    export_dir: str

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        _load_dotenv(env_file)
        config = cls(
            queries_page_size=int(os.getenv("HOTEL_DESK_QUERIES_PAGE_SIZE", "6")),
            access_page_size=int(os.getenv("HOTEL_DESK_ACCESS_PAGE_SIZE", "10")),
            transactions_page_size=int(os.getenv("HOTEL_DESK_TRANSACTIONS_PAGE_SIZE", "6")),
            rooms_page_size=int(os.getenv("HOTEL_DESK_ROOMS_PAGE_SIZE", "10")),
            tasks_page_size=int(os.getenv("HOTEL_DESK_TASKS_PAGE_SIZE", "10")),
            guests_page_size=int(os.getenv("HOTEL_DESK_GUESTS_PAGE_SIZE", "10")),
            queries_refresh_seconds=float(os.getenv("HOTEL_DESK_QUERIES_REFRESH_SECONDS", "30")),
            access_refresh_seconds=float(os.getenv("HOTEL_DESK_ACCESS_REFRESH_SECONDS", "60")),
            recent_refresh_seconds=float(os.getenv("HOTEL_DESK_RECENT_REFRESH_SECONDS", "45")),
            search_debounce_ms=int(os.getenv("HOTEL_DESK_SEARCH_DEBOUNCE_MS", "300")),
            export_dir=os.getenv("HOTEL_DESK_EXPORT_DIR", "out/exports").strip(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        for name in PAGE_SIZE_FIELDS:
            if getattr(self, name) < 1:
                raise ValueError(f"HOTEL_DESK_{name.upper()} must be >= 1")
        for name in ("queries_refresh_seconds", "access_refresh_seconds", "recent_refresh_seconds"):
            if getattr(self, name) <= 0:
                raise ValueError(f"HOTEL_DESK_{name.upper()} must be greater than 0")
        if self.search_debounce_ms < 0:
            raise ValueError("HOTEL_DESK_SEARCH_DEBOUNCE_MS must be >= 0")
        if not self.export_dir:
            raise ValueError("HOTEL_DESK_EXPORT_DIR cannot be empty")


def _load_dotenv(path: str) -> None:
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
