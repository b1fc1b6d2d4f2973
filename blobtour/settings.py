"""Centralized walkthrough settings powered by Pydantic.

Environment matrix:

| Section     | Environment Variable              | Default            | Purpose                                   |
|-------------|-----------------------------------|--------------------|-------------------------------------------|
| Storage     | `AZURE_STORAGE_CONNECTION_STRING` | `None`             | Full connection string (takes precedence) |
| Storage     | `AZURE_STORAGE_ACCOUNT`           | `None`             | Account name for key / identity auth      |
| Storage     | `AZURE_STORAGE_ACCOUNT_KEY`       | `None`             | Shared key credential                     |
| Walkthrough | `BLOBTOUR_LOCAL_DIR`              | `./files`          | Persistent local working directory        |
| Walkthrough | `BLOBTOUR_TEMP_ROOT`              | `None` (sys temp)  | Parent of the per-run download directory  |
| Walkthrough | `BLOBTOUR_CONTAINER_PREFIX`       | `wtblob`           | Prefix of generated container names       |
| Walkthrough | `BLOBTOUR_FILE_PREFIX`            | `wtfile`           | Prefix of generated file / blob names     |
| Walkthrough | `BLOBTOUR_FILE_CONTENT`           | `Hello, World!`    | Text written into the generated file      |
| Walkthrough | `BLOBTOUR_INTERACTIVE`            | `true`             | Wait for Enter between phases             |
| Sentry      | `SENTRY_DSN`                      | `None`             | Sentry ingest DSN                         |
| Sentry      | `SENTRY_ENVIRONMENT`              | `None`             | Deployment environment label              |

The settings objects source environment variables when instantiated and are frozen.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DOWNLOAD_SUFFIX = "_DOWNLOADED.txt"


class _SettingsBase(BaseSettings):
    """Common configuration for BaseSettings subclasses."""

    model_config = SettingsConfigDict(
        env_prefix="",
        populate_by_name=True,
        extra="ignore",
        case_sensitive=True,
        frozen=True,
    )


class StorageSettings(_SettingsBase):
    """Azure Blob Storage credentials."""

    connection_string: str | None = Field(
        default=None, alias="AZURE_STORAGE_CONNECTION_STRING"
    )
    account_name: str | None = Field(default=None, alias="AZURE_STORAGE_ACCOUNT")
    account_key: str | None = Field(default=None, alias="AZURE_STORAGE_ACCOUNT_KEY")

    @field_validator("connection_string", "account_name", "account_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @computed_field
    @property
    def has_connection_string(self) -> bool:
        return bool(self.connection_string)

    @computed_field
    @property
    def has_shared_key(self) -> bool:
        return bool(self.account_name and self.account_key)

    @computed_field
    @property
    def configured(self) -> bool:
        return self.has_connection_string or bool(self.account_name)


class WalkthroughSettings(_SettingsBase):
    """Knobs for the walkthrough steps."""

    local_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "files", alias="BLOBTOUR_LOCAL_DIR"
    )
    temp_root: Path | None = Field(default=None, alias="BLOBTOUR_TEMP_ROOT")
    container_prefix: str = Field(default="wtblob", alias="BLOBTOUR_CONTAINER_PREFIX")
    file_prefix: str = Field(default="wtfile", alias="BLOBTOUR_FILE_PREFIX")
    file_content: str = Field(default="Hello, World!", alias="BLOBTOUR_FILE_CONTENT")
    interactive: bool = Field(default=True, alias="BLOBTOUR_INTERACTIVE")

    @field_validator("temp_root", mode="before")
    @classmethod
    def _blank_temp_root(cls, value: str | Path | None) -> str | Path | None:
        if value in (None, ""):
            return None
        return value

    @field_validator("container_prefix", mode="before")
    @classmethod
    def _lower_prefix(cls, value: str) -> str:
        return str(value).strip().lower()


class SentrySettings(_SettingsBase):
    """Sentry SDK configuration."""

    dsn: str | None = Field(default=None, alias="SENTRY_DSN")
    environment: str | None = Field(default=None, alias="SENTRY_ENVIRONMENT")

    @computed_field
    @property
    def enabled(self) -> bool:
        return bool(self.dsn)


class Settings(BaseModel):
    """Aggregate accessor for domain-specific settings."""

    storage: StorageSettings = Field(default_factory=StorageSettings)
    walkthrough: WalkthroughSettings = Field(default_factory=WalkthroughSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }


def get_settings() -> Settings:
    """Instantiate settings from the current environment."""
    return Settings()


def get_storage_settings() -> StorageSettings:
    return get_settings().storage


__all__ = [
    "DOWNLOAD_SUFFIX",
    "Settings",
    "get_settings",
    "get_storage_settings",
    "StorageSettings",
    "WalkthroughSettings",
    "SentrySettings",
]
