"""Shared pytest fixtures for the linfit test suite."""

from __future__ import annotations

import logging
import os

import pytest

from config import clear_settings_cache
from linfit.core.coefficients import Coefficients
from linfit.core.random_source import RandomSource
from linfit.data.dataset import Dataset, generate_dataset


@pytest.fixture(autouse=True)
def configure_logging() -> None:
    """Reset logging configuration so caplog captures expected records."""

    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    logger_states: dict[logging.Logger, tuple[bool, int]] = {}
    for existing in logging.root.manager.loggerDict.values():
        if isinstance(existing, logging.Logger):
            logger_states[existing] = (existing.disabled, existing.level)
    for handler in original_handlers:
        root.removeHandler(handler)
    logging.basicConfig(level=logging.INFO)
    for existing in logger_states:
        existing.disabled = False
        existing.setLevel(logging.NOTSET)
    try:
        yield
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in original_handlers:
            root.addHandler(handler)
        root.setLevel(original_level)
        for logger_obj, (disabled, level) in logger_states.items():
            logger_obj.disabled = disabled
            logger_obj.setLevel(level)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop cached settings and any ``LINFIT_*`` variables leaked by seeding."""

    saved = dict(os.environ)
    for key in list(os.environ):
        if key.startswith("LINFIT_") or key == "LOGGING_CONFIG_PATH":
            monkeypatch.delenv(key)
    clear_settings_cache()
    try:
        yield
    finally:
        clear_settings_cache()
        os.environ.clear()
        os.environ.update(saved)


TRUE_COEFS = Coefficients(slope=4.0, intercept=2.0)


@pytest.fixture
def true_coefs() -> Coefficients:
    return TRUE_COEFS


@pytest.fixture
def noiseless_dataset() -> Dataset:
    return generate_dataset(200, TRUE_COEFS, 20, 0, source=RandomSource(7))


@pytest.fixture
def noisy_dataset() -> Dataset:
    return generate_dataset(2000, TRUE_COEFS, 20, 1, source=RandomSource(42))
