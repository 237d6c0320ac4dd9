"""Synthetic dataset generation."""

from linfit.data.dataset import Dataset, generate_dataset

__all__ = ["Dataset", "generate_dataset"]
