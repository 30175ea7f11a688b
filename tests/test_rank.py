import numpy as np
import pytest
from rmitree.rank import (count_greater_or_equal, count_joint_greater_or_equal,
                          greater_or_equal)


def test_greater_or_equal_basic():
    assert greater_or_equal([3, 1, 2, 3], 2) == {0, 2, 3}
    assert greater_or_equal([3, 1, 2, 3], 1) == {0, 1, 2, 3}


def test_greater_or_equal_is_reflexive():
    rng = np.random.default_rng(0)
    codes = rng.integers(1, 3, size=25)
    y = rng.integers(0, 4, size=25)
    for i in range(25):
        assert i in greater_or_equal(codes, i)
        assert i in greater_or_equal(y, i)


def test_counts_match_materialised_sets():
    rng = np.random.default_rng(1)
    for _ in range(5):
        codes = rng.integers(1, 3, size=30)
        y = rng.integers(0, 3, size=30)
        size_b = count_greater_or_equal(codes)
        size_d = count_greater_or_equal(y)
        size_i = count_joint_greater_or_equal(codes, y)
        for i in range(30):
            b = greater_or_equal(codes, i)
            d = greater_or_equal(y, i)
            assert size_b[i] == len(b)
            assert size_d[i] == len(d)
            assert size_i[i] == len(b & d)
            assert size_i[i] >= 1


def test_pivot_out_of_range():
    with pytest.raises(ValueError):
        greater_or_equal([1, 2], 2)


def test_length_mismatch():
    with pytest.raises(ValueError):
        count_joint_greater_or_equal([1, 2, 2], [0, 1])
