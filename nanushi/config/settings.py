from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Anything path-related defaults to nanushi.config.paths so there is one source of truth.
from .paths import CONTENT_ROOT, STATE_DIR


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NANUSHI_",
        case_sensitive=False,
        extra="ignore",
    )

    # Env / mode
    env: str = "dev"
    service: str = "nanushi-site"
    log_level: str = "INFO"

    # Storage
    db_url: str = ""
    state_dir: Path = STATE_DIR
    content_root: Path = CONTENT_ROOT

    # Email (Resend)
    resend_api_key: str | None = None
    resend_api_url: str = "https://api.resend.com"
    resend_timeout_seconds: float = Field(default=10.0, gt=0)
    mail_from: str = "nanushi <hello@nanushi.org>"
    welcome_from: str = "nanushi <no-reply@nanushi.org>"

    # Links rendered into emails
    site_url: str = "https://nanushi.org"

    def sqlite_path(self) -> Path:
        return self.state_dir / "nanushi.sqlite3"

    def resolved_db_url(self) -> str:
        if self.db_url.strip():
            return self.db_url.strip()
        return f"sqlite:///{self.sqlite_path().as_posix()}"


def get_settings() -> Settings:
    return Settings()
