"""Command line entry point for linfit."""

from __future__ import annotations

import argparse
import sys
from typing import Any, Sequence

from pydantic import ValidationError

from config import Settings, get_settings

from linfit import __version__
from linfit.core import logging_setup
from linfit.core.driver import Driver, check_finite, format_header, format_summary
from linfit.core.errors import InvalidArgumentError, NumericInstabilityError
from linfit.core.reproducibility import set_seed

EXIT_INVALID_ARGUMENT = 2
EXIT_NUMERIC_INSTABILITY = 3

# (flag, settings section, field, type)
_OVERRIDES: tuple[tuple[str, str, str, type], ...] = (
    ("--dataset-size", "dataset", "size", int),
    ("--feature-upper-bound", "dataset", "feature_upper_bound", float),
    ("--noise-upper-bound", "dataset", "noise_upper_bound", float),
    ("--true-slope", "dataset", "true_slope", float),
    ("--true-intercept", "dataset", "true_intercept", float),
    ("--seed", "training", "seed", int),
    ("--learning-rate", "training", "learning_rate", float),
    ("--steps", "training", "steps", int),
    ("--initial-slope", "training", "initial_slope", float),
    ("--initial-intercept", "training", "initial_intercept", float),
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linfit",
        description=(
            "Fit y = a*x + b to synthetic noisy data with batch gradient descent. "
            "Defaults come from config/settings.toml."
        ),
    )
    parser.add_argument("--version", action="version", version=f"linfit {__version__}")
    for flag, section, name, kind in _OVERRIDES:
        parser.add_argument(
            flag,
            dest=f"{section}__{name}",
            type=kind,
            default=None,
            help=f"Override {section}.{name}.",
        )
    parser.add_argument(
        "--fail-on-divergence",
        action="store_true",
        help="Exit with an error when the coefficients or loss are not finite.",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, dict[str, Any]] = {}
    for _, section, name, _ in _OVERRIDES:
        value = getattr(args, f"{section}__{name}")
        if value is not None:
            overrides.setdefault(section, {})[name] = value
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the full regression pipeline and print the report."""

    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"linfit: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT

    logging_setup.configure(settings)
    set_seed(settings.training.seed)
    for line in format_header(settings.dataset.size):
        print(line, flush=True)
    try:
        report = Driver(settings).run()
        if args.fail_on_divergence:
            check_finite(report.coefficients, report.loss)
    except InvalidArgumentError as exc:
        print(f"linfit: invalid argument: {exc}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except NumericInstabilityError as exc:
        print(f"linfit: {exc}", file=sys.stderr)
        return EXIT_NUMERIC_INSTABILITY

    for line in format_summary(report):
        print(line)
    return 0


__all__ = ["main"]
