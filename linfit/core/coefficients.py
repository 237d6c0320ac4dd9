"""Slope/intercept pair of the fitted line."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coefficients:
    """Immutable ``(slope, intercept)`` pair of the model ``y = a * x + b``.

    The same type carries the gradient of the loss, in which case ``slope``
    and ``intercept`` hold the partial derivatives with respect to each
    coefficient.
    """

    slope: float
    intercept: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.slope, self.intercept)

    def is_finite(self) -> bool:
        return math.isfinite(self.slope) and math.isfinite(self.intercept)


__all__ = ["Coefficients"]
