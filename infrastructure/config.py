"""Application settings loaded from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_name: str = "Room Allocation API"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Auth
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Booking policy
    payment_timeout_seconds: float = 5.0
    max_stay_nights: Optional[int] = None
    reject_past_check_in: bool = True

    seed_demo_data: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    defaults = Settings()
    return Settings(
        app_name=os.getenv("APP_NAME", defaults.app_name),
        app_version=os.getenv("APP_VERSION", defaults.app_version),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        secret_key=os.getenv("SECRET_KEY", defaults.secret_key),
        algorithm=os.getenv("JWT_ALGORITHM", defaults.algorithm),
        access_token_expire_minutes=int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", defaults.access_token_expire_minutes)
        ),
        payment_timeout_seconds=float(
            os.getenv("PAYMENT_TIMEOUT_SECONDS", defaults.payment_timeout_seconds)
        ),
        max_stay_nights=_env_int("MAX_STAY_NIGHTS", defaults.max_stay_nights),
        reject_past_check_in=_env_bool("REJECT_PAST_CHECK_IN", defaults.reject_past_check_in),
        seed_demo_data=_env_bool("SEED_DEMO_DATA", defaults.seed_demo_data),
    )
