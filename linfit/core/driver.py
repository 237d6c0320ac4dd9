"""Orchestration of a complete gradient descent run.

The :class:`Driver` generates the synthetic dataset, runs the fixed number
of descent steps, evaluates the final loss and assembles a
:class:`RunReport`. It moves through :class:`DriverState` strictly in
order and never catches errors: any failure aborts the run.
"""

from __future__ import annotations

import enum
import math
import time
import uuid
from dataclasses import dataclass

from config import Settings, get_settings

from linfit.core.coefficients import Coefficients
from linfit.core.errors import NumericInstabilityError
from linfit.core.logging_setup import get_logger, set_run_id
from linfit.core.objective import mean_squared_error
from linfit.core.optimizer import descend
from linfit.core.random_source import RandomSource
from linfit.data.dataset import Dataset, generate_dataset

logger = get_logger(__name__)


class DriverState(enum.Enum):
    INITIALIZING = "initializing"
    GENERATING_DATA = "generating_data"
    TRAINING = "training"
    EVALUATING = "evaluating"
    REPORTING = "reporting"
    DONE = "done"


@dataclass(frozen=True)
class RunReport:
    """Summary of a finished run."""

    dataset_size: int
    steps: int
    loss: float
    coefficients: Coefficients
    elapsed_seconds: float
    diverged: bool = False


def check_finite(coefs: Coefficients, loss: float) -> None:
    """Raise :class:`NumericInstabilityError` if ``coefs`` or ``loss`` is not finite."""

    if not coefs.is_finite() or not math.isfinite(loss):
        raise NumericInstabilityError(
            f"training diverged: a={coefs.slope}, b={coefs.intercept}, loss={loss}"
        )


def format_header(dataset_size: int) -> list[str]:
    """Return the lines announcing a run, printed before training starts."""

    return [
        "Computing regression coefficients using gradient descent.",
        f"Dataset size n={dataset_size}",
    ]


def format_summary(report: RunReport) -> list[str]:
    """Return the lines describing a finished run."""

    return [
        f"Gradient descent finished after {report.steps} steps with loss={report.loss:.3f}",
        f"Estimated coefficients: a={report.coefficients.slope:.3f}, "
        f"b={report.coefficients.intercept:.3f}",
        f"Elapsed CPU time: {report.elapsed_seconds:.3f} seconds",
    ]


def format_report(report: RunReport) -> list[str]:
    """Return the complete human readable report, in output order."""

    return format_header(report.dataset_size) + format_summary(report)


class Driver:
    """Run generation, training, evaluation and reporting once."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        source: RandomSource | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._source = source
        self.state = DriverState.INITIALIZING
        self.dataset: Dataset | None = None
        self.report: RunReport | None = None

    def _advance(self, state: DriverState) -> None:
        logger.debug("state %s -> %s", self.state.value, state.value)
        self.state = state

    def run(self) -> RunReport:
        if self.state is not DriverState.INITIALIZING:
            raise RuntimeError(f"driver already used (state={self.state.value})")

        data_cfg = self.settings.dataset
        train_cfg = self.settings.training
        set_run_id(uuid.uuid4().hex[:12])

        source = self._source or RandomSource(train_cfg.seed)
        true_coefs = Coefficients(data_cfg.true_slope, data_cfg.true_intercept)
        initial = Coefficients(train_cfg.initial_slope, train_cfg.initial_intercept)

        self._advance(DriverState.GENERATING_DATA)
        self.dataset = generate_dataset(
            data_cfg.size,
            true_coefs,
            data_cfg.feature_upper_bound,
            data_cfg.noise_upper_bound,
            source=source,
        )
        logger.info(
            "training on %d samples for %d steps (learning_rate=%s)",
            len(self.dataset),
            train_cfg.steps,
            train_cfg.learning_rate,
        )

        self._advance(DriverState.TRAINING)
        started = time.process_time()
        result = descend(self.dataset, initial, train_cfg.learning_rate, train_cfg.steps)
        elapsed = time.process_time() - started

        self._advance(DriverState.EVALUATING)
        loss = mean_squared_error(self.dataset, result.coefficients)
        diverged = not (result.coefficients.is_finite() and math.isfinite(loss))
        if diverged:
            logger.warning(
                "gradient descent diverged after %d steps; "
                "learning_rate=%s is likely too large",
                result.steps,
                train_cfg.learning_rate,
            )

        self._advance(DriverState.REPORTING)
        self.report = RunReport(
            dataset_size=len(self.dataset),
            steps=result.steps,
            loss=loss,
            coefficients=result.coefficients,
            elapsed_seconds=elapsed,
            diverged=diverged,
        )
        logger.info(
            "finished: loss=%.6f a=%.6f b=%.6f in %.3fs",
            loss,
            result.coefficients.slope,
            result.coefficients.intercept,
            elapsed,
        )

        self._advance(DriverState.DONE)
        return self.report


__all__ = [
    "Driver",
    "DriverState",
    "RunReport",
    "check_finite",
    "format_header",
    "format_report",
    "format_summary",
]
