import numpy as np
import pytest
from rmitree.rmi import mark, rmi_score, rmi_score_naive


def _ordinal_dataset():
    values = np.array([1, 1, 2, 2, 3, 3, 4, 4, 5, 5], dtype=float)
    y = np.array([0, 0, 0, 0, 1, 1, 1, 1, 1, 1])
    return values, y


def test_mark_returns_fresh_codes():
    values = np.array([1.0, 2.0, np.nan, 3.0])
    before = values.copy()
    codes = mark(values, 2.0)
    assert codes.tolist() == [1, 1, 2, 2]
    # the caller's records are never recoded in place
    assert np.array_equal(values, before, equal_nan=True)


def test_perfect_split_score():
    values, y = _ordinal_dataset()
    # six upper rows, each contributing -ln(6 * 6 / (6 * 10))
    expected = -6 * np.log(0.6) / 10
    assert rmi_score(2.0, values, y) == pytest.approx(expected)


def test_trivial_thresholds_score_zero():
    values, y = _ordinal_dataset()
    assert rmi_score(0.0, values, y) == pytest.approx(0.0)
    assert rmi_score(5.0, values, y) == pytest.approx(0.0)


def test_rank_counts_agree_with_set_formulation():
    rng = np.random.default_rng(7)
    for _ in range(5):
        values = rng.integers(0, 8, size=40).astype(float)
        values[rng.random(40) < 0.1] = np.nan
        y = rng.integers(0, 3, size=40)
        for t in (1.0, 3.0, 6.0):
            assert rmi_score(t, values, y) == pytest.approx(rmi_score_naive(t, values, y))


def test_empty_input_raises():
    with pytest.raises(ValueError):
        rmi_score(1.0, [], [])
