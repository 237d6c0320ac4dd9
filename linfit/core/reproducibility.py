"""Utilities for controlling randomness across the project."""

from __future__ import annotations

import os
import random

import numpy as np

from linfit.core.logging_setup import get_logger

logger = get_logger(__name__)


def set_seed(seed: int) -> None:
    """Seed Python and NumPy global state for reproducibility.

    The function configures the :mod:`random` module, NumPy's legacy global
    generator and the ``PYTHONHASHSEED`` / ``LINFIT_TRAINING__SEED``
    environment variables. It is meant to be called once per process by the
    command line entry point; the pipeline itself draws from a
    :class:`~linfit.core.random_source.RandomSource` built from the same seed.

    Parameters
    ----------
    seed:
        The deterministic seed value used for all RNGs.
    """

    os.environ["PYTHONHASHSEED"] = str(seed)
    os.environ["LINFIT_TRAINING__SEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    logger.debug("random state seeded with %d", seed)


__all__ = ["set_seed"]
