"""Seedable source of uniformly distributed random numbers."""

from __future__ import annotations

import math

import numpy as np

from linfit.core.errors import InvalidArgumentError


def _check_upper_bound(upper_bound: float) -> float:
    value = float(upper_bound)
    if not math.isfinite(value) or value <= 0:
        raise InvalidArgumentError(
            f"upper_bound must be a positive finite number, got {upper_bound!r}"
        )
    return value


class RandomSource:
    """Draw values uniformly from ``[0, upper_bound)``.

    Each instance owns its own :class:`numpy.random.Generator` so that runs
    never depend on process-wide random state. Two sources built with the
    same ``seed`` yield identical streams.
    """

    def __init__(
        self,
        seed: int | None = None,
        *,
        generator: np.random.Generator | None = None,
    ) -> None:
        if generator is not None and seed is not None:
            raise InvalidArgumentError("pass either seed or generator, not both")
        self.seed = seed
        self._rng = generator if generator is not None else np.random.default_rng(seed)

    def uniform(self, upper_bound: float) -> float:
        """Return one value in ``[0, upper_bound)``."""

        bound = _check_upper_bound(upper_bound)
        return float(self._rng.random() * bound)

    def uniform_array(self, upper_bound: float, size: int) -> np.ndarray:
        """Return ``size`` independent values in ``[0, upper_bound)``."""

        bound = _check_upper_bound(upper_bound)
        if size < 1:
            raise InvalidArgumentError(f"size must be a positive integer, got {size!r}")
        return self._rng.random(int(size)) * bound


__all__ = ["RandomSource"]
