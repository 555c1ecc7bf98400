# campus_api/config.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings, resolved from the environment / .env.

    The pool values bound how many connections a single process holds and
    how long a request waits for one before the database is reported as
    unavailable.
    """

    database_url: str = "sqlite:///./campus.db"

    # connection pool
    db_pool_size: int = 20
    db_max_overflow: int = 0
    db_pool_timeout: float = 2.0      # seconds to wait for a pooled connection
    db_pool_recycle: int = 30         # seconds before an idle connection is recycled

    # session (JWT cookie)
    jwt_secret: str = "dev-jwt-secret-change-me-before-deploying"
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "authToken"
    session_max_age_seconds: int = 60 * 60 * 24
    cookie_secure: bool = False

    # wall-clock zone of facility opening hours
    facility_timezone: str = "UTC"

    log_level: str = "INFO"
    cors_origins: str = ""

    class Config:
        env_file = ".env"
        env_prefix = ""
        case_sensitive = False
        extra = "ignore"

    @field_validator("jwt_secret", "facility_timezone", mode="after")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
