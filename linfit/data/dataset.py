"""Index-aligned feature/target samples and their synthetic generator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from linfit.core.coefficients import Coefficients
from linfit.core.errors import InvalidArgumentError
from linfit.core.logging_setup import get_logger
from linfit.core.random_source import RandomSource

logger = get_logger(__name__)


def _frozen_vector(values: Iterable[float] | np.ndarray, name: str) -> np.ndarray:
    array = np.array(values, dtype=np.float64)
    if array.ndim != 1:
        raise InvalidArgumentError(f"{name} must be one-dimensional, got shape {array.shape}")
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class Dataset:
    """Paired feature and target values, ``features[i]`` matching ``targets[i]``.

    Both sequences are copied on construction and made read-only, so a
    dataset never changes once built.
    """

    features: np.ndarray
    targets: np.ndarray

    def __post_init__(self) -> None:
        features = _frozen_vector(self.features, "features")
        targets = _frozen_vector(self.targets, "targets")
        if features.size != targets.size:
            raise InvalidArgumentError(
                f"features and targets differ in length ({features.size} != {targets.size})"
            )
        if features.size == 0:
            raise InvalidArgumentError("dataset must contain at least one sample")
        object.__setattr__(self, "features", features)
        object.__setattr__(self, "targets", targets)

    def __len__(self) -> int:
        return int(self.features.size)

    @property
    def size(self) -> int:
        return len(self)


def generate_dataset(
    n: int,
    true_coefs: Coefficients,
    feature_upper_bound: float,
    noise_upper_bound: float,
    *,
    source: RandomSource,
) -> Dataset:
    """Sample ``n`` points of the line ``true_coefs`` with additive noise.

    Features are drawn uniformly from ``[0, feature_upper_bound)``. Each
    target is ``slope * x + intercept`` plus noise drawn uniformly from
    ``[0, noise_upper_bound)``. The noise is one-sided, so fitted intercepts
    land about ``noise_upper_bound / 2`` above ``true_coefs.intercept``.

    A ``noise_upper_bound`` of ``0`` yields noiseless targets.

    Raises
    ------
    InvalidArgumentError
        If ``n`` is not positive, ``feature_upper_bound`` is not positive or
        ``noise_upper_bound`` is negative.
    """

    if isinstance(n, bool) or int(n) != n or n < 1:
        raise InvalidArgumentError(f"dataset size must be a positive integer, got {n!r}")
    if not math.isfinite(noise_upper_bound) or noise_upper_bound < 0:
        raise InvalidArgumentError(
            f"noise_upper_bound must be a non-negative finite number, got {noise_upper_bound!r}"
        )
    n = int(n)

    features = source.uniform_array(feature_upper_bound, n)
    targets = true_coefs.slope * features + true_coefs.intercept
    if noise_upper_bound > 0:
        targets = targets + source.uniform_array(noise_upper_bound, n)

    logger.debug(
        "generated %d samples (x < %s, noise < %s)", n, feature_upper_bound, noise_upper_bound
    )
    return Dataset(features=features, targets=targets)


__all__ = ["Dataset", "generate_dataset"]
