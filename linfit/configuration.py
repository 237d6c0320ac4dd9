"""Typed configuration models for linfit settings."""

from __future__ import annotations

import logging
import math
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class SectionSettings(BaseSettings):
    """Base class for configuration sections.

    Sections are populated by the top-level ``config.Settings`` factory, so
    environment lookups for the individual sections are disabled and only
    the data handed over by the parent is validated.
    """

    model_config = SettingsConfigDict(extra="ignore", validate_default=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


class DatasetSettings(SectionSettings):
    """Synthetic dataset generation parameters."""

    size: int = Field(default=2000, description="Number of generated samples.")
    feature_upper_bound: float = Field(
        default=20.0,
        description="Features are drawn uniformly from [0, feature_upper_bound).",
    )
    noise_upper_bound: float = Field(
        default=1.0,
        description="Noise added to each target is drawn from [0, noise_upper_bound).",
    )
    true_slope: float = Field(default=4.0, description="Slope of the generating line.")
    true_intercept: float = Field(default=2.0, description="Intercept of the generating line.")

    @field_validator("size")
    @classmethod
    def _positive_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("size must be a positive integer")
        return value

    @field_validator("feature_upper_bound")
    @classmethod
    def _positive_bound(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("feature_upper_bound must be greater than zero")
        return value

    @field_validator("noise_upper_bound")
    @classmethod
    def _non_negative_noise(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0:
            raise ValueError("noise_upper_bound must be >= 0")
        return value

    @field_validator("true_slope", "true_intercept")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("coefficients must be finite")
        return value


class TrainingSettings(SectionSettings):
    """Gradient descent hyper-parameters."""

    seed: int = Field(default=42, description="Seed of the dataset random source.")
    learning_rate: float = Field(default=0.001, description="Step size multiplier.")
    steps: int = Field(default=100_000, description="Number of descent steps.")
    initial_slope: float = Field(default=1.0)
    initial_intercept: float = Field(default=0.0)

    @field_validator("seed")
    @classmethod
    def _seed_range(cls, value: int) -> int:
        if not 0 <= value < 2**32:
            raise ValueError("seed must be between 0 and 2**32 - 1")
        return value

    @field_validator("learning_rate")
    @classmethod
    def _positive_rate(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("learning_rate must be greater than zero")
        return value

    @field_validator("steps")
    @classmethod
    def _non_negative_steps(cls, value: int) -> int:
        if value < 0:
            raise ValueError("steps must be >= 0")
        return value

    @model_validator(mode="after")
    def _finite_guess(self) -> "TrainingSettings":
        if not (math.isfinite(self.initial_slope) and math.isfinite(self.initial_intercept)):
            raise ValueError("initial coefficients must be finite")
        return self


class LoggingSettings(SectionSettings):
    """Structured logging configuration."""

    config_path: Path | None = Field(
        default=None,
        description="Path to a YAML or JSON logging configuration file.",
    )
    fallback_level: str = Field(
        default="INFO",
        description="Level applied when no configuration file is available.",
    )

    @field_validator("fallback_level")
    @classmethod
    def _valid_level(cls, value: str) -> str:
        if not value:
            raise ValueError("fallback_level must not be empty")
        level = value.upper()
        if not isinstance(getattr(logging, level, None), int):
            raise ValueError("fallback_level must reference a standard logging level")
        return level


__all__ = [
    "DatasetSettings",
    "LoggingSettings",
    "SectionSettings",
    "TrainingSettings",
]
