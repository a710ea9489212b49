from __future__ import annotations

import csv
from collections.abc import Mapping
from datetime import datetime
from pathlib import Path
from typing import Any

from hotel_desk.app.ui.listing_view import ColumnDef, sanitize_row


def export_current_view(
    *,
    module: str,
    rows: list[Mapping[str, Any]],
    columns: list[ColumnDef],
    output_dir: str = "out/exports",
    filters: Mapping[str, Any] | None = None,
) -> Path:
    destination = Path(output_dir)
    destination.mkdir(parents=True, exist_ok=True)

    now = datetime.now().astimezone()
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    path = destination / f"{module}_{timestamp}.csv"

    keys = [column.key for column in columns]
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        handle.write(f"# timestamp_local: {now.isoformat()}\n")
        handle.write(f"# module: {module}\n")
        handle.write(f"# filters: {dict(filters or {})}\n")
        writer = csv.writer(handle)
        writer.writerow([column.label for column in columns])
        for row in rows:
            sanitized = sanitize_row(row, headers=keys)
            writer.writerow([sanitized[key] for key in keys])

    return path
