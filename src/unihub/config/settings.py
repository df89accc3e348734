"""Configuration management for the institution catalog application."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_CONFIG_DIR = PROJECT_ROOT / "config"
BUNDLED_CATALOG_FILE = PACKAGE_ROOT / "data" / "institutions.json"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""

    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Apply overrides from UNIHUB_SETTINGS__* environment variables."""

    prefix = "UNIHUB_SETTINGS__"
    result = dict(base)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = result
        for part in path[:-1]:
            cursor = cursor.setdefault(part, {})
        cursor[path[-1]] = value
    return result


class CatalogConfig(BaseModel):
    """Where the catalog resource lives and which category opens first."""

    resource_path: Path | None = Field(
        default=None,
        description="Catalog JSON file; the bundled dataset is used when unset.",
    )
    encoding: str = Field(default="utf-8", min_length=1)
    default_category: str = Field(default="public_universities", min_length=1)


class PathsConfig(BaseModel):
    """Filesystem layout for runtime artefacts."""

    logs_dir: Path = Field(default=PROJECT_ROOT / "logs")

    def ensure_exists(self) -> None:
        """Create directories backing every configured path if they are missing."""
        for field_name in type(self).model_fields:
            value = getattr(self, field_name)
            path = Path(value)
            if not path.is_absolute():
                path = PROJECT_ROOT / path
            path.mkdir(parents=True, exist_ok=True)
            object.__setattr__(self, field_name, path)


class LoggingConfig(BaseModel):
    """Sink options handed to :func:`unihub.utils.logging.configure_logging`."""

    level: str = Field(default="INFO")
    to_file: bool = Field(default=True, description="Write a rotating log file under paths.logs_dir.")
    rotation: str = Field(default="10 MB")
    retention: str = Field(default="14 days")


class Settings(BaseSettings):
    """Primary configuration object for the application.

    Precedence (highest first): explicit kwargs or CLI arguments, environment
    variables prefixed with ``UNIHUB_`` (handled by :class:`BaseSettings`),
    nested overrides via ``UNIHUB_SETTINGS__`` variables, environment-specific
    YAML (e.g. ``production.yaml``), the default YAML file, and finally the
    class defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="UNIHUB_",
        validate_assignment=True,
        extra="allow",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    create_dirs: bool = Field(
        default=False,
        description="Create filesystem directories declared in `paths` during initialisation.",
    )

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("UNIHUB_ENV", "development")
        base_config = _load_yaml_file(config_dir / "default.yaml")
        env_config = _load_yaml_file(config_dir / f"{environment}.yaml")
        merged = _deep_merge(base_config, env_config)
        hydrated = _apply_env_overrides(merged)

        return _deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

    @model_validator(mode="after")
    def _ensure_paths(self) -> "Settings":
        """Ensure filesystem paths exist when directory creation is enabled."""

        if self.create_dirs:
            self.paths.ensure_exists()
        return self

    @property
    def resource_path(self) -> Path:
        reference = self.catalog.resource_path
        if reference is None:
            return BUNDLED_CATALOG_FILE
        reference = Path(reference).expanduser()
        if not reference.is_absolute():
            reference = PROJECT_ROOT / reference
        return reference

    @property
    def log_file(self) -> Path:
        logs_dir = Path(self.paths.logs_dir)
        if not logs_dir.is_absolute():
            logs_dir = PROJECT_ROOT / logs_dir
        return logs_dir / "unihub.log"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = [
    "Settings",
    "get_settings",
    "CatalogConfig",
    "PathsConfig",
    "LoggingConfig",
    "BUNDLED_CATALOG_FILE",
]
