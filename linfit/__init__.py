"""Linear regression fitted by batch gradient descent on synthetic data."""

from __future__ import annotations

__version__ = "0.1.0"
