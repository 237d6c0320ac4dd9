"""Fit ``y = a * x + b`` to synthetic data with batch gradient descent.

The dataset is generated from the true coefficients in
``config/settings.toml`` and the fit runs for the configured number of steps.
Command line flags are forwarded to :func:`linfit.cli.main`; run
``python train.py --help`` for the list of overrides.
"""

from __future__ import annotations

from linfit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
