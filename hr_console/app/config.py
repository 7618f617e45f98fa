from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

PAGE_SIZE_OPTIONS = (5, 10, 20, 50, 100)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AppConfig:
    api_base_url: str = ""
    timeout_seconds: float = 10.0
    verify_ssl: bool = True
    retries: int = 2
    retry_backoff_ms: int = 150
    page_size: int = 10
    failure_report_cap: int = 10
    page_window: int = 7

    @classmethod
    def defaults(cls) -> "AppConfig":
        return cls()

    def validate(self) -> None:
        _validate(self.timeout_seconds > 0, f"Invalid HR_CONSOLE_TIMEOUT_SECONDS: expected > 0, got {self.timeout_seconds}")
        _validate(self.retries >= 0, f"Invalid HR_CONSOLE_RETRIES: expected >= 0, got {self.retries}")
        _validate(
            self.retry_backoff_ms >= 0,
            f"Invalid HR_CONSOLE_RETRY_BACKOFF_MS: expected >= 0, got {self.retry_backoff_ms}",
        )
        _validate(
            self.page_size in PAGE_SIZE_OPTIONS,
            f"Invalid HR_CONSOLE_PAGE_SIZE: expected one of {PAGE_SIZE_OPTIONS}, got {self.page_size}",
        )
        _validate(
            self.failure_report_cap >= 1,
            f"Invalid HR_CONSOLE_FAILURE_REPORT_CAP: expected >= 1, got {self.failure_report_cap}",
        )
        _validate(self.page_window >= 1, f"Invalid HR_CONSOLE_PAGE_WINDOW: expected >= 1, got {self.page_window}")


def load_config(env_file: str | None = None) -> AppConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    config = AppConfig(
        api_base_url=(os.getenv("HR_CONSOLE_API_BASE_URL") or "").strip().rstrip("/"),
        timeout_seconds=_read_float("HR_CONSOLE_TIMEOUT_SECONDS", "10"),
        verify_ssl=_coerce_bool(os.getenv("HR_CONSOLE_VERIFY_SSL"), True),
        retries=_read_int("HR_CONSOLE_RETRIES", "2"),
        retry_backoff_ms=_read_int("HR_CONSOLE_RETRY_BACKOFF_MS", "150"),
        page_size=_read_int("HR_CONSOLE_PAGE_SIZE", "10"),
        failure_report_cap=_read_int("HR_CONSOLE_FAILURE_REPORT_CAP", "10"),
        page_window=_read_int("HR_CONSOLE_PAGE_WINDOW", "7"),
    )
    config.validate()
    return config


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)
