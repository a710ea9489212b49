import json
import logging
from datetime import datetime, timezone
from typing import Any

SENSITIVE_MARKERS = ("password", "token", "secret")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    outcome: str,
    **extra: Any,
) -> None:
    level = logging.INFO if outcome == "success" else logging.WARNING
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "actor_role": actor_role,
        "outcome": outcome,
    }
    for key, value in extra.items():
        if any(marker in key.lower() for marker in SENSITIVE_MARKERS):
            continue
        payload[key] = value
    logger.log(level, json.dumps(payload, default=str))
