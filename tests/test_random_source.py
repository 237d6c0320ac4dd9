import math

import numpy as np
import pytest

from linfit.core.errors import InvalidArgumentError
from linfit.core.random_source import RandomSource


def test_uniform_stays_within_bound():
    source = RandomSource(0)
    values = [source.uniform(3.5) for _ in range(1000)]
    assert all(0.0 <= v < 3.5 for v in values)
    assert all(isinstance(v, float) for v in values)


def test_uniform_array_shape_and_bound():
    values = RandomSource(1).uniform_array(20, 500)
    assert values.shape == (500,)
    assert values.dtype == np.float64
    assert values.min() >= 0.0
    assert values.max() < 20.0


def test_same_seed_same_stream():
    first = RandomSource(123)
    second = RandomSource(123)
    assert [first.uniform(1) for _ in range(5)] == [second.uniform(1) for _ in range(5)]
    assert np.array_equal(first.uniform_array(10, 50), second.uniform_array(10, 50))


def test_different_seeds_differ():
    assert RandomSource(1).uniform(1) != RandomSource(2).uniform(1)


def test_accepts_existing_generator():
    generator = np.random.default_rng(5)
    expected = np.random.default_rng(5).random() * 2
    assert RandomSource(generator=generator).uniform(2) == pytest.approx(expected)


def test_rejects_seed_and_generator_together():
    with pytest.raises(InvalidArgumentError):
        RandomSource(1, generator=np.random.default_rng(1))


@pytest.mark.parametrize("bound", [0, -1, -0.5, math.inf, math.nan])
def test_rejects_invalid_upper_bound(bound):
    source = RandomSource(0)
    with pytest.raises(InvalidArgumentError):
        source.uniform(bound)
    with pytest.raises(InvalidArgumentError):
        source.uniform_array(bound, 3)


def test_rejects_empty_array():
    with pytest.raises(InvalidArgumentError, match="size"):
        RandomSource(0).uniform_array(1, 0)
