"""Editor settings.

Values come from the environment. A `.env` file is only read when
APP_LOAD_DOTENV is set, and never overrides variables already exported.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "TRUE", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() in _TRUTHY


class EditorSettings(BaseModel):
    use_auth: bool = False
    auth_redirect_url: Optional[str] = None
    max_title_length: int = Field(default=100, gt=0)
    max_description_length: int = Field(default=500, ge=0)
    allow_past_events: bool = True
    database_url: str = "sqlite+pysqlite:///./local.db"
    secret_key: str = "dev-secret-change-me"  # in production load from env
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @classmethod
    def from_env(cls) -> "EditorSettings":
        if os.getenv("APP_LOAD_DOTENV") in _TRUTHY:  # pragma: no cover
            load_dotenv(override=False)
        values = {
            "use_auth": _flag("EDITOR_USE_AUTH", False),
            "auth_redirect_url": os.getenv("EDITOR_AUTH_REDIRECT_URL") or None,
            "max_title_length": int(os.getenv("EDITOR_MAX_TITLE_LENGTH", "100")),
            "max_description_length": int(os.getenv("EDITOR_MAX_DESCRIPTION_LENGTH", "500")),
            "allow_past_events": _flag("EDITOR_ALLOW_PAST_EVENTS", True),
            "database_url": os.getenv("DATABASE_URL", "sqlite+pysqlite:///./local.db"),
            "secret_key": os.getenv("SECRET_KEY", "dev-secret-change-me"),
        }
        cors_origins_env = os.getenv("CORS_ALLOW_ORIGINS")
        if cors_origins_env:
            values["cors_allow_origins"] = [o.strip() for o in cors_origins_env.split(",") if o.strip()]
        return cls(**values)
