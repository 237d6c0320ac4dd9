"""Mean squared error of the line fit and its analytic gradient.

Both functions are pure: they only read the dataset and the coefficients.
Per-sample sums are reduced with :func:`numpy.sum` (pairwise summation), so
the last bits may differ from a naive left-to-right accumulation.
"""

from __future__ import annotations

import numpy as np

from linfit.core.coefficients import Coefficients
from linfit.core.errors import InvalidArgumentError
from linfit.data.dataset import Dataset


def _sample_count(dataset: Dataset, n: int | None) -> int:
    size = len(dataset)
    if n is None:
        n = size
    if n < 1:
        raise InvalidArgumentError(f"dataset size must be positive, got {n!r}")
    if n != size:
        raise InvalidArgumentError(f"n={n} does not match dataset size {size}")
    return size


def residuals(dataset: Dataset, coefs: Coefficients) -> np.ndarray:
    """Return ``target - (slope * x + intercept)`` for every sample."""

    predicted = coefs.slope * dataset.features + coefs.intercept
    return dataset.targets - predicted


def mean_squared_error(dataset: Dataset, coefs: Coefficients, n: int | None = None) -> float:
    """Return the mean squared error of ``coefs`` over ``dataset``.

    ``n`` is optional and, when given, must equal ``len(dataset)``.
    """

    size = _sample_count(dataset, n)
    r = residuals(dataset, coefs)
    return float(np.sum(r * r) / size)


def loss_gradient(dataset: Dataset, coefs: Coefficients, n: int | None = None) -> Coefficients:
    """Return ``(d loss / d slope, d loss / d intercept)`` at ``coefs``.

    With ``r_i = target_i - (slope * x_i + intercept)``::

        d/d slope     = (2 / n) * sum(-x_i * r_i)
        d/d intercept = (2 / n) * sum(-r_i)
    """

    size = _sample_count(dataset, n)
    r = residuals(dataset, coefs)
    slope_grad = float(np.sum(-dataset.features * r) * 2 / size)
    intercept_grad = float(np.sum(-r) * 2 / size)
    return Coefficients(slope=slope_grad, intercept=intercept_grad)


__all__ = ["loss_gradient", "mean_squared_error", "residuals"]
