"""Central configuration factory based on ``pydantic-settings``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import logging
import os
import tomllib

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from linfit.configuration import DatasetSettings, LoggingSettings, TrainingSettings


logger = logging.getLogger(__name__)

_CONFIG_DIR = Path(__file__).resolve().parent
_EXPLICIT_ENVIRONMENT: str | None = None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except FileNotFoundError:
        logger.error("Configuration file not found: %s", path)
        raise
    except tomllib.TOMLDecodeError as exc:
        logger.error("Invalid TOML in %s: %s", path, exc)
        raise


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _resolve_environment_name() -> str | None:
    if _EXPLICIT_ENVIRONMENT:
        return _EXPLICIT_ENVIRONMENT
    return os.getenv("LINFIT_ENV") or None


class _TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading ``settings.toml`` and optional profile overrides."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Unused: ``__call__`` returns the whole mapping at once.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data = _read_toml(_CONFIG_DIR / "settings.toml")

        env_name = _resolve_environment_name()
        if env_name:
            profile_path = _CONFIG_DIR / f"settings.{env_name}.toml"
            if profile_path.exists():
                data = _deep_merge(data, _read_toml(profile_path))
            else:
                logger.warning("Profile configuration file not found: %s", profile_path)
        return data


class Settings(BaseSettings):
    """Typed configuration object backed by ``pydantic-settings``."""

    model_config = SettingsConfigDict(
        env_prefix="LINFIT_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    training: TrainingSettings = Field(default_factory=TrainingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            _TomlSettingsSource(settings_cls),
        )


@lru_cache(maxsize=None)
def get_settings(environment: str | None = None) -> Settings:
    """Return cached application settings, optionally for *environment*."""

    global _EXPLICIT_ENVIRONMENT
    previous = _EXPLICIT_ENVIRONMENT
    try:
        _EXPLICIT_ENVIRONMENT = environment
        return Settings()
    finally:
        _EXPLICIT_ENVIRONMENT = previous


def clear_settings_cache() -> None:
    """Clear the cached :class:`Settings` instance."""

    get_settings.cache_clear()


__all__ = [
    "Settings",
    "clear_settings_cache",
    "get_settings",
]
