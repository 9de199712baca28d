"""RecycleHub service settings.

Non-secret values live in YAML under ``config/base`` with per-environment
overrides in ``config/environments/<APP_ENV>``. Any value can be replaced
by an environment variable using ``__`` between section and key, e.g.
``PAGINATION__MAX_LIMIT=50``. The database password only ever comes from
the environment or ``.env``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Literal, Self

from pydantic import (
    BaseModel,
    BeforeValidator,
    PositiveFloat,
    PositiveInt,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


def parse_list(v: str | list[str]) -> list[str]:
    """Split a comma-separated env value; lists pass through."""
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return v


def _upper(v: object) -> object:
    return v.upper() if isinstance(v, str) else v


LogLevel = Annotated[
    Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(_upper),
]


class AppSettings(BaseModel):
    """Service identity, reported by health checks and the root route."""

    name: str = "RecycleHub Service"
    version: str = "0.1.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Bind address for ``python -m recyclehub.main``."""

    host: str = "127.0.0.1"
    port: int = 8000


class ApiSettings(BaseModel):
    """Route prefix and allowed browser origins."""

    v1_prefix: str = "/api/v1"
    cors_origins: Annotated[list[str], BeforeValidator(parse_list)] = []


class DatabaseSettings(BaseModel):
    """Connection to the PostgreSQL schema holding the status tables."""

    host: str = "localhost"
    port: int = 5432
    name: str = "recyclehub"
    db_schema: str = "recyclehub"
    user: str | None = None
    min_pool_size: PositiveInt = 2
    max_pool_size: PositiveInt = 10
    command_timeout: PositiveFloat = 30.0  # seconds
    ssl: bool = False

    @model_validator(mode="after")
    def _check_pool_bounds(self) -> Self:
        if self.max_pool_size < self.min_pool_size:
            msg = "max_pool_size must not be smaller than min_pool_size"
            raise ValueError(msg)
        return self


class LoggingSettings(BaseModel):
    """Loguru sinks: stdout always, plus an optional rotating file."""

    level: LogLevel = "INFO"
    format: Literal["json", "text"] = "json"
    file: Path | None = None
    rotation: str = "100 MB"
    retention: str = "7 days"
    # Floor for uvicorn/asyncpg records routed through the stdlib bridge
    third_party_level: LogLevel = "WARNING"


class SlugSettings(BaseModel):
    """Bounds for the slug uniqueness search."""

    unique_max_attempts: PositiveInt = 1000


class PaginationSettings(BaseModel):
    """Page and limit defaults applied to listing query parameters."""

    default_page: PositiveInt = 1
    default_limit: PositiveInt = 10
    max_limit: PositiveInt = 100

    @model_validator(mode="after")
    def _check_limits(self) -> Self:
        if self.default_limit > self.max_limit:
            msg = "default_limit must not exceed max_limit"
            raise ValueError(msg)
        return self


class Settings(BaseSettings):
    """All service settings.

    Sources, strongest first: constructor arguments, environment variables,
    ``.env``, environment YAML, base YAML, then the defaults above.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    database: DatabaseSettings = DatabaseSettings()
    logging: LoggingSettings = LoggingSettings()
    slug: SlugSettings = SlugSettings()
    pagination: PaginationSettings = PaginationSettings()

    DATABASE_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Slot the YAML files in below env vars and ``.env``."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def is_development(self) -> bool:
        """Development enables colored text logs."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Production hides the interactive API docs."""
        return self.APP_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
