from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

SETUP_MESSAGE = "Backend URL not configured (WINGO_BACKEND_URL)"


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _float_from_env(value: Optional[str], default: float) -> float:
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class BackendSettings:
    url: str = ""
    timeout_seconds: float = 10

    @property
    def configured(self) -> bool:
        return bool(self.url)


@dataclass(frozen=True)
class DashboardSettings:
    backend: BackendSettings = BackendSettings()
    period_poll_seconds: float = 5
    totals_poll_seconds: float = 2
    demo_amount_min: int = 500
    demo_amount_max: int = 4500
    host: str = "127.0.0.1"
    port: int = 5173

    def copy(self, **updates) -> "DashboardSettings":
        return replace(self, **updates)


def load_from_environment() -> DashboardSettings:
    # VITE_BACKEND_URL is honoured so an existing frontend .env keeps working.
    url = os.getenv("WINGO_BACKEND_URL") or os.getenv("VITE_BACKEND_URL") or ""

    backend = BackendSettings(
        url=url.strip().rstrip("/"),
        timeout_seconds=_float_from_env(os.getenv("REQUEST_TIMEOUT_SECONDS"), 10),
    )

    return DashboardSettings(
        backend=backend,
        period_poll_seconds=_float_from_env(os.getenv("PERIOD_POLL_SECONDS"), 5),
        totals_poll_seconds=_float_from_env(os.getenv("TOTALS_POLL_SECONDS"), 2),
        host=os.getenv("DASHBOARD_HOST", "127.0.0.1"),
        port=_int_from_env(os.getenv("DASHBOARD_PORT"), 5173),
    )


@lru_cache(maxsize=1)
def load_config(dotenv_path: Optional[str] = None) -> DashboardSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
