"""
Process settings read from the environment.

`Settings.from_env()` runs once at startup (see `api/main.py`); the result
lives on `app.state.settings` and is handed to components through their
constructors.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_JWT_SECRET = "dev-change-this-secret"
DEFAULT_PLACES_BASE_URL = "https://maps.googleapis.com"
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    database_url: str = ""
    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    google_maps_api_key: str = ""
    places_base_url: str = DEFAULT_PLACES_BASE_URL
    places_timeout_s: float = 10.0
    queue_pin: str = ""
    # Empty values mean "do not filter on this column".
    verification_list_mode: str = ""
    verification_list_connection_type: str = ""
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=_env_str("DATABASE_URL"),
            # Local default keeps development simple.
            # In production, set JWT_SECRET in environment.
            jwt_secret=_env_str("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=_env_str("JWT_ALG", "HS256"),
            google_maps_api_key=_env_str("GOOGLE_MAPS_API_KEY"),
            places_base_url=_env_str("PLACES_BASE_URL", DEFAULT_PLACES_BASE_URL),
            places_timeout_s=_env_float("PLACES_TIMEOUT_S", 10.0),
            queue_pin=_env_str("QUEUE_PIN"),
            verification_list_mode=_env_str("VERIFICATION_LIST_MODE"),
            verification_list_connection_type=_env_str("VERIFICATION_LIST_CONNECTION_TYPE"),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
        )
