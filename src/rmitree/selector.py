# -*- coding: utf-8 -*-
"""
rmitree.selector
================

Node-level split selection in the scikit-learn estimator style.

:class:`RMISplitSelector` evaluates the RMI numeric split of every candidate
attribute of one node's data and keeps the best one.  It does not grow a
tree: a driver calls it once per node, reads ``best_split_`` and routes
records with :meth:`RMISplitSelector.apply` and
:meth:`RMISplitSelector.branch_weights`.
"""

from __future__ import annotations
import logging
import numpy as np
from sklearn.base import BaseEstimator

from .distribution import _gr
from .split import RMINumericSplit

logger = logging.getLogger(__name__)


class RMISplitSelector(BaseEstimator):
    """
    Pick the numeric attribute whose RMI split best agrees with an ordinal
    class.

    Class labels are ordered by ``numpy.unique``; a larger label is a better
    class.  Each non-categorical column is sorted (missing values last) and
    scanned with :class:`~rmitree.split.RMINumericSplit`; the column with the
    highest RMI wins, the first column on ties.

    Parameters
    ----------
    min_samples_leaf : float, default=2
        Minimum weight required in each branch of a split.
    use_mdl_correction : bool, default=False
        Passed through to each split; reserved, has no effect on RMI splits.
    feature_names : list[str] or None, default=None
        Optional column names, used for logging and to resolve categorical
        columns given by name.
    categorical_features : list[int|str] or None, default=None
        Columns excluded from numeric splitting.

    Attributes
    ----------
    classes_ : ndarray
        Sorted class labels; their positions are the ordinal class codes.
    n_features_ : int
        Number of columns seen in ``fit``.
    splits_ : list[RMINumericSplit or None]
        Evaluated split per column (``None`` for categorical columns).
    best_split_ : RMINumericSplit or None
        Winning split, ``None`` if no column yields a usable split.
    best_feature_ : int or None
        Column index of ``best_split_``.
    """

    def __init__(
        self,
        *,
        min_samples_leaf: float = 2,
        use_mdl_correction: bool = False,
        feature_names: list[str] | None = None,
        categorical_features: list[int | str] | None = None,
    ):
        self.min_samples_leaf = min_samples_leaf
        self.use_mdl_correction = bool(use_mdl_correction)
        self.feature_names = feature_names
        self.categorical_features = categorical_features

    def fit(self, X, y, sample_weight=None, feature_names=None):
        X = np.asarray(X)
        y = np.asarray(y)
        if X.ndim != 2:
            raise ValueError("X must be two-dimensional")
        if len(y) != X.shape[0]:
            raise ValueError("X and y must have the same number of rows")
        if sample_weight is None:
            w = np.ones(len(y), dtype=float)
        else:
            w = np.asarray(sample_weight, dtype=float)
            if len(w) != len(y):
                raise ValueError("sample_weight must have the same length as y")

        n_features = X.shape[1]
        if feature_names is not None:
            if len(feature_names) != n_features:
                raise ValueError("feature_names length must match X.shape[1]")
            self.feature_names_ = list(feature_names)
        elif self.feature_names is not None:
            if len(self.feature_names) != n_features:
                raise ValueError("feature_names length must match X.shape[1]")
            self.feature_names_ = list(self.feature_names)
        else:
            self.feature_names_ = [f"f{i}" for i in range(n_features)]

        cats = set()
        if self.categorical_features is not None:
            cf = list(self.categorical_features)
            if len(cf) and isinstance(cf[0], str):
                name_to_idx = {n: i for i, n in enumerate(self.feature_names_)}
                cf = [name_to_idx[c] for c in cf]
            cats = set(int(i) for i in cf)
        self.n_features_ = n_features

        self.classes_ = np.unique(y)
        y_codes = np.searchsorted(self.classes_, y)
        k = len(self.classes_)

        self.splits_ = []
        best = None
        for j in range(n_features):
            if j in cats:
                logger.debug(f"skipping categorical feature {self.feature_names_[j]}")
                self.splits_.append(None)
                continue
            split = RMINumericSplit(
                j, min_samples_leaf=self.min_samples_leaf,
                use_mdl_correction=self.use_mdl_correction,
            ).fit(X, y_codes, w, n_classes=k)
            self.splits_.append(split)
            if split.num_subsets and (best is None or _gr(split.rmi, best.rmi)):
                best = split

        self.best_split_ = best
        self.best_feature_ = None if best is None else best.attribute_index
        if best is None:
            logger.info("no feature yields a usable split")
        else:
            logger.info(f"best split: {self.feature_names_[best.attribute_index]} <= "
                        f"{best.split_point:g} (rmi={best.rmi:.6f})")
        return self

    def _check_split(self) -> RMINumericSplit:
        if not hasattr(self, "splits_"):
            raise ValueError("Estimator not fitted. Call fit(...) first.")
        if self.best_split_ is None:
            raise ValueError("No usable split was found during fit.")
        return self.best_split_

    def apply(self, X):
        """
        Branch index of every row: ``0`` for ``<=`` the threshold, ``1`` above
        it, ``-1`` for a missing value.
        """
        split = self._check_split()
        X = np.asarray(X, dtype=object)
        return np.array([split.which_subset(x) for x in X], dtype=int)

    def branch_weights(self, X):
        """
        Weight of every row in each branch, shape ``(n_samples, 2)``.

        Rows with a known value put all their weight in one branch; rows with
        a missing value are spread in proportion to the training weight of
        the branches.
        """
        split = self._check_split()
        X = np.asarray(X, dtype=object)
        out = np.zeros((len(X), split.num_subsets), dtype=float)
        for i, x in enumerate(X):
            weights = split.weights(x)
            if weights is None:
                out[i, split.which_subset(x)] = 1.0
            else:
                out[i] = weights
        return out
