"""Fixed step-size batch gradient descent."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from linfit.core.coefficients import Coefficients
from linfit.core.errors import InvalidArgumentError
from linfit.core.objective import loss_gradient, mean_squared_error
from linfit.data.dataset import Dataset


def _check_learning_rate(learning_rate: float) -> float:
    value = float(learning_rate)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(
            f"learning_rate must be a positive finite number, got {learning_rate!r}"
        )
    return value


def step(dataset: Dataset, coefs: Coefficients, learning_rate: float) -> Coefficients:
    """Move ``coefs`` one step against the loss gradient.

    Returns a new :class:`Coefficients`; ``coefs`` is left untouched. Large
    learning rates are not guarded against and may make the values diverge.
    """

    rate = _check_learning_rate(learning_rate)
    grad = loss_gradient(dataset, coefs)
    return Coefficients(
        slope=coefs.slope - rate * grad.slope,
        intercept=coefs.intercept - rate * grad.intercept,
    )


@dataclass(frozen=True)
class DescentResult:
    """Outcome of :func:`descend`."""

    coefficients: Coefficients
    steps: int
    history: tuple[tuple[int, float], ...] = field(default_factory=tuple)


def descend(
    dataset: Dataset,
    initial: Coefficients,
    learning_rate: float,
    steps: int,
    *,
    record_every: int | None = None,
) -> DescentResult:
    """Apply :func:`step` exactly ``steps`` times starting from ``initial``.

    When ``record_every`` is given the loss is sampled every ``record_every``
    steps, and after the final step, into :attr:`DescentResult.history` as
    ``(step, loss)`` pairs.
    """

    _check_learning_rate(learning_rate)
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
        raise InvalidArgumentError(f"steps must be a non-negative integer, got {steps!r}")
    if record_every is not None and record_every < 1:
        raise InvalidArgumentError(f"record_every must be a positive integer, got {record_every!r}")

    history: list[tuple[int, float]] = []
    current = initial
    completed = 0
    for completed in range(1, steps + 1):
        current = step(dataset, current, learning_rate)
        if record_every is not None and (completed % record_every == 0 or completed == steps):
            history.append((completed, mean_squared_error(dataset, current)))
    return DescentResult(coefficients=current, steps=completed, history=tuple(history))


__all__ = ["DescentResult", "descend", "step"]
