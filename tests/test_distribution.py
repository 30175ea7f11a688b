import numpy as np
import pytest
from rmitree import Distribution


def test_shift_range_conserves_weight():
    y = np.array([0, 1, 1, 2, 0])
    w = np.array([1.0, 0.5, 2.0, 1.0, 0.25])
    dist = Distribution(2, 3)
    dist.add_range(1, y, w, 0, 5)
    total = dist.total()
    for end in range(1, 6):
        dist.shift_range(1, 0, y, w, end - 1, end)
        # weight only moves between the two bags
        assert dist.per_bag(0) + dist.per_bag(1) == pytest.approx(total)
        assert np.all(dist.counts >= 0)
    assert dist.per_bag(1) == pytest.approx(0.0)
    assert dist.per_class(1) == pytest.approx(2.5)


def test_prob_per_bag_and_overall():
    dist = Distribution(2, 2)
    dist.add(0, 0, 3.0)
    dist.add(0, 1, 1.0)
    dist.add(1, 1, 4.0)
    assert dist.prob(0, 0) == pytest.approx(0.75)
    assert dist.prob(1) == pytest.approx(5.0 / 8.0)
    # an empty bag has no class frequencies
    empty = Distribution(2, 2)
    assert empty.prob(0, 1) == 0.0


def test_add_with_unknown_spreads_missing_rows():
    values = np.array([1.0, 2.0, np.nan])
    y = np.array([0, 1, 1])
    w = np.ones(3)
    dist = Distribution(2, 2)
    dist.add(0, 0, 3.0)
    dist.add(1, 1, 1.0)
    dist.add_with_unknown(values, y, w)
    # the missing row is split 3:1 like the bags
    assert dist.counts[0, 1] == pytest.approx(0.75)
    assert dist.counts[1, 1] == pytest.approx(1.25)
    assert dist.total() == pytest.approx(5.0)


def test_invalid_shape_raises():
    with pytest.raises(ValueError):
        Distribution(0, 2)
