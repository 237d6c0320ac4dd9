"""Exception hierarchy shared by the regression pipeline."""

from __future__ import annotations

__all__ = [
    "LinfitError",
    "InvalidArgumentError",
    "NumericInstabilityError",
]


class LinfitError(Exception):
    """Base class for errors raised by :mod:`linfit`."""


class InvalidArgumentError(LinfitError, ValueError):
    """Raised when a precondition on an input value is violated."""


class NumericInstabilityError(LinfitError, ArithmeticError):
    """Raised when training produced non-finite coefficients or loss."""
