"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]

DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)

# Keeps "now - retention" well inside the datetime range.
MAX_RETENTION_DAYS = 36500


class TmdbConfig(BaseModel):
    """Catalog (TMDB) lookup settings."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        default="https://api.themoviedb.org/3",
        description="TMDB API base URL.",
    )
    api_key: str = Field(default="", description="TMDB API key (v3).")
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for a single /find lookup (seconds).",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("tmdb.timeout_seconds must be > 0")
        return v


class NewznabConfig(BaseModel):
    """Indexer (NZBHydra / Newznab) search settings."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default="http://localhost:5076",
        description="Indexer base URL; '/api' is appended unless present.",
    )
    api_key: str = Field(default="", description="Indexer API key.")
    timeout_seconds: float = Field(
        default=15.0,
        description="Timeout for a single search request (seconds).",
    )
    retention_days: int = Field(
        default=365,
        description="Drop releases published more than N days ago.",
    )
    user_agent: str = Field(
        default=DEFAULT_BROWSER_USER_AGENT,
        description="Browser-like User-Agent; some indexers reject bare clients.",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("newznab.timeout_seconds must be > 0")
        return v

    @field_validator("retention_days")
    @classmethod
    def _validate_retention(cls, v: int) -> int:
        if not 0 <= v <= MAX_RETENTION_DAYS:
            raise ValueError(
                f"newznab.retention_days must be between 0 and {MAX_RETENTION_DAYS}"
            )
        return v

    @property
    def api_url(self) -> str:
        base = self.url.rstrip("/")
        return base if base.endswith("/api") else f"{base}/api"


class AddonConfig(BaseModel):
    """Static Stremio manifest values."""

    model_config = ConfigDict(frozen=True)

    id: str = "org.stremio.nzbio"
    name: str = "NZBio"
    version: str = "2.0.0"
    description: str = "Stream movies and series directly from Usenet via NZB sources"
    logo: str = "https://i.imgur.com/GgJcJVw.png"
    background: str = "https://i.imgur.com/yqlDCaC.jpg"
    id_prefixes: tuple[str, ...] = ("tt",)


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final, immutable).

    Note:
    - YAML is expected to be sectioned (server/logging/tmdb/newznab/addon).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    model_config = ConfigDict(frozen=True)

    # General
    app_name: str = Field(default="nzbio", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # Server (YAML section: server.*)
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("host", AliasPath("server", "host")),
        description="Bind host.",
    )
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", AliasPath("server", "port")),
        description="Bind port.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    tmdb: TmdbConfig = Field(default_factory=TmdbConfig)
    newznab: NewznabConfig = Field(default_factory=NewznabConfig)
    addon: AddonConfig = Field(default_factory=AddonConfig)

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        # Default log format: console in dev/test, json in prod.
        if not isinstance(data, dict):
            return data
        logging_section = data.get("logging")
        explicit = data.get("log_format") or (
            logging_section.get("format") if isinstance(logging_section, dict) else None
        )
        if explicit is None:
            data = dict(data)
            data["log_format"] = "json" if data.get("environment") == "prod" else "console"
        return data


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Intended usage:
    - load.py creates EnvOverrides() to read NZBIO_* variables,
      converts to dict of set values, merges into YAML/defaults,
      then validates AppConfig.

    Supported env var examples (flat, explicit):
    - NZBIO_LOG_LEVEL
    - NZBIO_HYDRA_URL (or HYDRA_URL)
    - NZBIO_TMDB_API_KEY (or TMDB_API_KEY)
    - NZBIO_PORT (or PORT)
    """

    model_config = SettingsConfigDict(
        env_prefix="NZBIO_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    host: Optional[str] = None
    port: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("NZBIO_PORT", "PORT")
    )

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    tmdb_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NZBIO_TMDB_API_KEY", "TMDB_API_KEY"),
    )
    tmdb_timeout_seconds: Optional[float] = None

    hydra_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NZBIO_HYDRA_URL", "HYDRA_URL"),
    )
    hydra_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("NZBIO_HYDRA_API_KEY", "HYDRA_API_KEY"),
    )
    search_timeout_seconds: Optional[float] = None
    retention_days: Optional[int] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
