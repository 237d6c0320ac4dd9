import logging
import os

import numpy as np
import pytest

from config import Settings, clear_settings_cache, get_settings
from linfit.core.coefficients import Coefficients
from linfit.core.driver import (
    Driver,
    DriverState,
    RunReport,
    check_finite,
    format_report,
)
from linfit.core.errors import InvalidArgumentError, NumericInstabilityError
from linfit.core.random_source import RandomSource


def _settings(**training) -> Settings:
    return Settings(
        dataset={"size": 300},
        training={"steps": 5000, "learning_rate": 0.002, **training},
    )


def test_run_walks_through_every_state(monkeypatch):
    driver = Driver(_settings(steps=10))
    visited: list[DriverState] = []
    original = driver._advance

    def record(state: DriverState) -> None:
        visited.append(state)
        original(state)

    monkeypatch.setattr(driver, "_advance", record)
    driver.run()
    assert visited == [
        DriverState.GENERATING_DATA,
        DriverState.TRAINING,
        DriverState.EVALUATING,
        DriverState.REPORTING,
        DriverState.DONE,
    ]
    assert driver.state is DriverState.DONE


def test_run_returns_report():
    report = Driver(_settings()).run()
    assert report.dataset_size == 300
    assert report.steps == 5000
    assert report.loss >= 0
    assert report.elapsed_seconds >= 0
    assert report.diverged is False
    assert report.coefficients.slope == pytest.approx(4.0, abs=0.1)


def test_same_seed_gives_same_report():
    first = Driver(_settings(seed=9)).run()
    second = Driver(_settings(seed=9)).run()
    assert first.coefficients == second.coefficients
    assert first.loss == second.loss


def test_run_leaves_process_settings_untouched():
    Driver(_settings(seed=9, steps=1)).run()
    clear_settings_cache()
    assert "LINFIT_TRAINING__SEED" not in os.environ
    assert get_settings().training.seed == 42


def test_explicit_random_source_is_used():
    settings = _settings(seed=1)
    first = Driver(settings, source=RandomSource(77)).run()
    second = Driver(settings, source=RandomSource(77)).run()
    third = Driver(settings).run()
    assert first.coefficients == second.coefficients
    assert first.coefficients != third.coefficients


def test_driver_cannot_run_twice():
    driver = Driver(_settings(steps=1))
    driver.run()
    with pytest.raises(RuntimeError):
        driver.run()


def test_zero_steps_reports_initial_guess():
    report = Driver(_settings(steps=0, initial_slope=1.0, initial_intercept=0.0)).run()
    assert report.steps == 0
    assert report.coefficients == Coefficients(1.0, 0.0)


def test_divergence_is_reported_not_raised(caplog):
    caplog.set_level(logging.WARNING)
    with np.errstate(all="ignore"):
        report = Driver(_settings(learning_rate=1.0, steps=300)).run()
    assert report.diverged is True
    assert "diverged" in caplog.text
    with pytest.raises(NumericInstabilityError):
        check_finite(report.coefficients, report.loss)


def test_generation_errors_propagate(monkeypatch):
    driver = Driver(_settings())

    def broken(*args, **kwargs):
        raise InvalidArgumentError("dataset size must be a positive integer")

    monkeypatch.setattr("linfit.core.driver.generate_dataset", broken)
    with pytest.raises(InvalidArgumentError):
        driver.run()
    assert driver.state is DriverState.GENERATING_DATA


def test_check_finite_accepts_normal_values():
    check_finite(Coefficients(4.0, 2.5), 0.08)


def test_format_report():
    report = RunReport(
        dataset_size=2000,
        steps=100000,
        loss=0.08312,
        coefficients=Coefficients(3.99951, 2.50049),
        elapsed_seconds=1.23456,
    )
    assert format_report(report) == [
        "Computing regression coefficients using gradient descent.",
        "Dataset size n=2000",
        "Gradient descent finished after 100000 steps with loss=0.083",
        "Estimated coefficients: a=4.000, b=2.500",
        "Elapsed CPU time: 1.235 seconds",
    ]


def test_logs_start_and_finish(caplog):
    caplog.set_level(logging.INFO, logger="linfit")
    Driver(_settings(steps=3)).run()
    messages = [r.getMessage() for r in caplog.records if r.name == "linfit.core.driver"]
    assert any(m.startswith("training on 300 samples") for m in messages)
    assert any(m.startswith("finished:") for m in messages)
