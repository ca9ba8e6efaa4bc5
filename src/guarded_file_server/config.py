"""Configuration management for the guarded file server."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

if TYPE_CHECKING:
    from .responder import ResponderConfig


class Settings(BaseSettings):
    """Centralised runtime configuration for the file server."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_assignment=True,
        extra="ignore",
    )

    # General
    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Directory that relative storage paths are anchored to.",
    )
    storage_root: Path = Field(
        default=Path("storage/app/public"),
        description="Directory whose files are exposed over HTTP.",
    )

    # Routing
    public_base_url: str = Field(default="http://localhost:8000")
    url_prefix: str = Field(default="/file-storage")
    cache_max_age: int = Field(default=3600, ge=0)

    # Access control
    require_auth: bool = Field(default=False, description="Protect every stored file.")
    protected_prefixes: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Folders (relative to the storage root) that require authentication.",
    )
    access_tokens: Annotated[list[str], NoDecode] = Field(default_factory=list)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    log_level: str = Field(default="info")

    @field_validator("storage_root", mode="after")
    @classmethod
    def _anchor_storage_root(cls, value: Path, info) -> Path:
        if value.is_absolute():
            return value
        project_root: Path = info.data.get("project_root", Path.cwd())
        return project_root / value

    @field_validator("protected_prefixes", "access_tokens", mode="before")
    @classmethod
    def _split_csv(cls, value: object) -> object:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("url_prefix")
    @classmethod
    def _normalise_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        if value == "/":
            raise ValueError("url_prefix must not be the site root")
        return value

    @field_validator("public_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _lower_log_level(cls, value: str) -> str:
        return value.lower()

    def responder_config(self) -> "ResponderConfig":
        from .responder import ResponderConfig

        return ResponderConfig(
            storage_root=self.storage_root,
            require_auth=self.require_auth,
            protected_prefixes=tuple(self.protected_prefixes),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance and ensure the storage root exists."""
    settings = Settings()
    settings.storage_root.mkdir(parents=True, exist_ok=True)
    return settings
