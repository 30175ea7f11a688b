import numpy as np
import pytest
from rmitree import RMISplitSelector


def _tiny_dataset():
    """Return a node with a constant column, an informative column and a categorical one."""
    informative = [1, 1, 2, 2, 3, 3, 4, 4, 5, 5]
    X = np.array([[7.0, v, c] for v, c in zip(informative, "AABBAABBAA")], dtype=object)
    y = np.array(["bad"] * 4 + ["good"] * 6)
    return X, y


def test_selects_informative_feature():
    X, y = _tiny_dataset()
    sel = RMISplitSelector(min_samples_leaf=2, feature_names=["const", "num", "cat"],
                           categorical_features=["cat"])
    sel.fit(X, y)
    # classes are ordered by numpy.unique: "bad" < "good"
    assert list(sel.classes_) == ["bad", "good"]
    assert sel.best_feature_ == 1
    assert sel.best_split_.split_point == 2.5
    assert sel.splits_[0].num_subsets == 0
    assert sel.splits_[2] is None


def test_apply_and_branch_weights():
    X, y = _tiny_dataset()
    sel = RMISplitSelector(categorical_features=[2]).fit(X, y)
    Xq = np.array([[7.0, 1.0, "A"], [7.0, 4.0, "B"], [7.0, None, "A"]], dtype=object)
    assert sel.apply(Xq).tolist() == [0, 1, -1]
    bw = sel.branch_weights(Xq)
    assert bw.shape == (3, 2)
    assert np.allclose(bw.sum(axis=1), 1.0)
    assert np.allclose(bw[2], [0.4, 0.6])


def test_first_feature_wins_ties():
    col = np.array([1, 1, 2, 2, 3, 3, 4, 4, 5, 5], dtype=float)
    X = np.column_stack([col, col])
    y = np.array([0] * 4 + [1] * 6)
    sel = RMISplitSelector().fit(X, y)
    assert sel.best_feature_ == 0


def test_no_usable_split():
    X = np.full((6, 2), 1.0)
    y = np.array([0, 1, 0, 1, 0, 1])
    sel = RMISplitSelector().fit(X, y)
    assert sel.best_split_ is None
    assert sel.best_feature_ is None
    with pytest.raises(ValueError):
        sel.apply(X)


def test_not_fitted_raises():
    sel = RMISplitSelector()
    with pytest.raises(ValueError):
        sel.apply([[1.0]])
    with pytest.raises(ValueError):
        sel.branch_weights([[1.0]])


def test_sample_weight_length_checked():
    X, y = _tiny_dataset()
    with pytest.raises(ValueError):
        RMISplitSelector(categorical_features=[2]).fit(X, y, sample_weight=[1.0, 2.0])


def test_params_roundtrip():
    sel = RMISplitSelector(min_samples_leaf=3, use_mdl_correction=True)
    params = sel.get_params()
    assert params["min_samples_leaf"] == 3
    assert params["use_mdl_correction"] is True
    sel.set_params(min_samples_leaf=5)
    assert sel.min_samples_leaf == 5
