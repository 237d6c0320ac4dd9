"""Utilities to configure structured JSON logging for linfit."""

from __future__ import annotations

import datetime
import importlib.resources as resources
import json
import logging
import logging.config
import os
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from config import Settings

LOGGER_NAME = "linfit"
"""Base logger name used throughout the project."""


logger = logging.getLogger(LOGGER_NAME)
"""Central application logger.

Modules obtain child loggers with :func:`get_logger` so that every record
propagates through the single ``linfit`` hierarchy. The logger itself stays
at ``NOTSET`` and lets the configured handlers decide the verbosity.
"""

logger.setLevel(logging.NOTSET)


run_id_ctx: ContextVar[str] = ContextVar("run_id", default="")


class RunIdFilter(logging.Filter):
    """Inject the current training run identifier into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = run_id_ctx.get("")
        return True


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        run_id = getattr(record, "run_id", "")
        if run_id:
            log_record["run_id"] = run_id
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def set_run_id(run_id: str) -> None:
    """Set the run identifier attached to subsequent log records."""
    run_id_ctx.set(run_id)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the application logger or one of its children.

    Module names are accepted as-is: ``get_logger("linfit.core.driver")``
    and ``get_logger("core.driver")`` both return ``linfit.core.driver``.
    """

    if name is None:
        return logger
    if name == LOGGER_NAME:
        return logger
    prefix = f"{LOGGER_NAME}."
    if name.startswith(prefix):
        name = name[len(prefix) :]
    return logger.getChild(name)


def _fallback_level(level: int | str | None) -> int:
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    return level


def _configure_from_path(
    config_path: Path, *, fallback_level: int | str | None = logging.INFO
) -> None:
    """Load logging configuration from ``config_path`` if possible."""

    if not config_path.exists():
        logging.basicConfig(level=_fallback_level(fallback_level))
        return

    with config_path.open("r", encoding="utf-8") as f:
        if config_path.suffix.lower() == ".json":
            config = json.load(f)
        else:
            config = yaml.safe_load(f)
    logging.config.dictConfig(config)


def configure(settings: Settings | None = None) -> None:
    """Configure logging from settings, ``LOGGING_CONFIG_PATH`` or ``logging.yml``.

    ``settings`` defaults to :func:`config.get_settings`; callers that already
    validated a :class:`~config.Settings` instance should pass it in.
    """
    if settings is None:
        from config import get_settings

        settings = get_settings()
    fallback_level = settings.logging.fallback_level

    config_path = settings.logging.config_path
    env_path = os.environ.get("LOGGING_CONFIG_PATH")
    if config_path is not None:
        _configure_from_path(config_path, fallback_level=fallback_level)
    elif env_path:
        _configure_from_path(Path(env_path), fallback_level=fallback_level)
    else:
        resource = resources.files("config") / "logging.yml"
        try:
            with resources.as_file(resource) as path:
                _configure_from_path(path, fallback_level=fallback_level)
        except FileNotFoundError:  # pragma: no cover - config resource missing
            logging.basicConfig(level=_fallback_level(fallback_level))

    # The application logger defers to the handlers configured on the root.
    logger.setLevel(logging.NOTSET)


__all__ = [
    "JSONFormatter",
    "LOGGER_NAME",
    "RunIdFilter",
    "configure",
    "get_logger",
    "set_run_id",
]
