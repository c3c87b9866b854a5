"""Settings of the MockBank data layer.

Environment variables always win. Below them sits at most one dotenv
file: the one named by ``MOCKBANK_ENV_FILE``, else ``config/.env.dev``,
else ``config/.env`` under the project root.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "MOCKBANK_ENV_FILE"
ENV_FILE_NAMES = (".env.dev", ".env")


def _project_root() -> Path:
    here = Path(__file__).resolve()
    for directory in here.parents:
        if (directory / "pyproject.toml").is_file():
            return directory
    return Path.cwd()


def get_config_dir() -> Path:
    """Directory holding the project's dotenv files."""
    return _project_root() / "config"


def _env_file_candidates() -> Iterator[Path]:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        yield path if path.is_absolute() else _project_root() / path
    config_dir = get_config_dir()
    for name in ENV_FILE_NAMES:
        yield config_dir / name


def _resolve_env_file_path() -> Path | None:
    """First existing dotenv file, or ``None`` to use the environment only."""
    return next((path for path in _env_file_candidates() if path.is_file()), None)


class Settings(BaseSettings):
    """Where the MockBank API lives and how to talk to it.

    Field names map to upper-case environment variables
    (``mockbank_api_url`` reads ``MOCKBANK_API_URL``).
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Remote API
    mockbank_api_url: str = "http://localhost:3000"
    mockbank_api_timeout: float = 10.0

    # Bearer credential handed over by the login flow (optional)
    mockbank_access_token: SecretStr | None = None

    # Logging
    log_level: str = "INFO"

    @field_validator("mockbank_api_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("mockbank_access_token", mode="before")
    @classmethod
    def _empty_token_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def access_token(self) -> str | None:
        if self.mockbank_access_token is None:
            return None
        return self.mockbank_access_token.get_secret_value()


@lru_cache()
def get_settings() -> Settings:
    """Settings built once per process."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call rereads the environment."""
    get_settings.cache_clear()
