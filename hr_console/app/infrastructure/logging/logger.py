import json
import logging
from datetime import datetime, timezone
from typing import Any

SENSITIVE_KEYS = {"token", "refresh_token", "secret", "password", "access_token"}


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_event(
    logger: logging.Logger,
    module: str,
    action: str,
    outcome: str,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": logging.getLevelName(level),
        "module": module,
        "action": action,
        "outcome": outcome,
    }
    for key, value in fields.items():
        if key.lower() in SENSITIVE_KEYS:
            continue
        payload[key] = value
    logger.log(level, json.dumps(payload, default=str))
