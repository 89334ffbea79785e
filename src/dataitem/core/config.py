# src/dataitem/core/config.py
"""Application and database configuration."""

import os
from typing import Literal

from pydantic import BaseModel, Field

ENV_PREFIX = "DATAITEM_"


def _env(name: str, default=None):
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class AppConfig(BaseModel):
    """Settings shared by the query layer and the HTTP boundary."""

    project_name: str = "dataitem-py"
    version: str = "0.1.0"
    description: str = "Analytics data item search and tracker import context"
    debug_mode: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Upper bound for rows returned by a single data item query.
    max_limit: int = Field(default=10000, gt=0)
    default_page_size: int = Field(default=50, gt=0)

    @classmethod
    def from_env(cls) -> "AppConfig":
        defaults = cls()
        return cls(
            debug_mode=_env_bool("DEBUG", defaults.debug_mode),
            log_level=_env("LOG_LEVEL", defaults.log_level).upper(),
            max_limit=int(_env("MAX_LIMIT", defaults.max_limit)),
            default_page_size=int(_env("PAGE_SIZE", defaults.default_page_size)),
        )


class DbConfig(BaseModel):
    """Connection settings for the SQLAlchemy engine."""

    url: str = "sqlite://"
    echo: bool = False
    pool_pre_ping: bool = True

    @classmethod
    def from_env(cls) -> "DbConfig":
        defaults = cls()
        return cls(
            url=_env("DB_URL", defaults.url),
            echo=_env_bool("DB_ECHO", defaults.echo),
        )
