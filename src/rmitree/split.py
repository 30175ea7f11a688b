# -*- coding: utf-8 -*-
"""
rmitree.split
=============

C4.5-style binary split on a numeric attribute chosen by Rank Mutual
Information.

:func:`find_rmi_split` is the split-evaluation engine.  It expects the records
of one node sorted ascending by the attribute with all missing values last,
walks every boundary between two distinct values, discards boundaries that
leave too little weight on either side and keeps the boundary with the
highest RMI score (the first one on ties).  The winning boundary becomes a
midpoint threshold and the branch distribution is rebuilt from scratch.

:class:`RMINumericSplit` wraps the engine in the split-model interface used by
a tree-growing driver: it sorts the node's data itself and answers the
"which branch" and "fractional weights" queries for single records.
"""

# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from .distribution import Distribution, _gr, _gr_or_eq, _sm, _sm_or_eq
from .rmi import rmi_score

logger = logging.getLogger(__name__)

# Adjacent sorted values closer than this are the same value.
VALUE_EPSILON = 1e-5
# Upper cap on the minimum branch weight.
MAX_MIN_SPLIT = 25.0
# Threshold reported when there is no split.
NO_SPLIT_POINT = np.inf


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _isnan_scalar(v) -> bool:
    return (v is None) or (isinstance(v, (float, np.floating)) and np.isnan(v))

def _float_column(col) -> np.ndarray:
    col = np.asarray(col)
    if col.dtype.kind == "f":
        return col.astype(float, copy=False)
    if col.dtype.kind in "iub":
        return col.astype(float)
    return np.array([np.nan if _isnan_scalar(v) else float(v) for v in col], dtype=float)

def _column(X, attribute_index: int) -> np.ndarray:
    X = np.asarray(X)
    if X.ndim == 1:
        return _float_column(X)
    if X.ndim != 2:
        raise ValueError(f"X must be one- or two-dimensional, got shape {X.shape}")
    if not 0 <= attribute_index < X.shape[1]:
        raise ValueError(f"attribute_index {attribute_index} out of range for {X.shape[1]} columns")
    return _float_column(X[:, attribute_index])

def _weights(sample_weight, n: int) -> np.ndarray:
    if sample_weight is None:
        return np.ones(n, dtype=float)
    w = np.asarray(sample_weight, dtype=float)
    if w.shape != (n,):
        raise ValueError("sample_weight must have the same length as y")
    if np.any(w < 0) or np.any(np.isnan(w)):
        raise ValueError("sample_weight must be non-negative")
    return w


# -----------------------------------------------------------------------------
# Result
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SplitResult:
    """Outcome of one split evaluation.

    Attributes
    ----------
    attribute_index : int
        Attribute the split was evaluated on.
    split_point : float
        Threshold; records with value ``<=`` it go to branch 0.  ``inf`` when
        there is no split.
    num_subsets : int
        ``2`` for a binary split, ``0`` when the attribute yields no split.
    rmi : float
        Score of the chosen boundary, ``-inf`` when there is no split.
    distribution : Distribution
        Branch x class weights of the known-value records.
    n_candidates : int
        Number of admissible boundaries seen during the scan.
    """
    attribute_index: int
    split_point: float
    num_subsets: int
    rmi: float
    distribution: Distribution
    n_candidates: int = 0

    @property
    def has_split(self) -> bool:
        return self.num_subsets > 0


def _no_split(attribute_index, y, w, first_missing, n_classes, n_candidates=0) -> SplitResult:
    dist = Distribution(2, n_classes)
    dist.add_range(0, y, w, 0, first_missing)
    return SplitResult(attribute_index, NO_SPLIT_POINT, 0, -np.inf, dist, n_candidates)


# -----------------------------------------------------------------------------
# Split evaluation
# -----------------------------------------------------------------------------
def find_rmi_split(values, y, n_classes: int, *, attribute_index: int = 0,
                   sample_weight=None, min_samples_leaf: float = 2,
                   use_mdl_correction: bool = False) -> SplitResult:
    """Choose the RMI-optimal binary split point of a sorted attribute.

    Parameters
    ----------
    values : array-like of shape (n_samples,)
        Attribute values sorted ascending, missing values (``NaN``) last.
    y : array-like of shape (n_samples,)
        Ordinal class codes in ``[0, n_classes)``.
    n_classes : int
        Number of classes.
    attribute_index : int, default=0
        Recorded in the result only.
    sample_weight : array-like of shape (n_samples,), optional
        Non-negative record weights; ones by default.
    min_samples_leaf : float, default=2
        Lower bound of the minimum weight required in each branch.
    use_mdl_correction : bool, default=False
        Reserved.  The RMI criterion applies no MDL correction.

    Returns
    -------
    SplitResult
        ``num_subsets == 2`` with the threshold and exact branch
        distribution, or ``num_subsets == 0`` if no usable split exists.

    Raises
    ------
    ValueError
        If the input is empty, misshapen, unsorted, has known values after a
        missing one, or class codes outside ``[0, n_classes)``.
    """
    values = np.asarray(values, dtype=float)
    y = np.asarray(y)
    n_classes = int(n_classes)
    if values.ndim != 1 or y.ndim != 1:
        raise ValueError("values and y must be one-dimensional")
    n = values.shape[0]
    if n == 0:
        raise ValueError("cannot split an empty set of records")
    if y.shape[0] != n:
        raise ValueError("values and y must have the same length")
    if n_classes < 1:
        raise ValueError("n_classes must be at least 1")
    if y.dtype.kind not in "iu":
        if not np.all(np.equal(np.mod(y, 1), 0)):
            raise ValueError("y must hold integer class codes")
        y = y.astype(int)
    if y.min() < 0 or y.max() >= n_classes:
        raise ValueError(f"class codes must lie in [0, {n_classes})")
    if min_samples_leaf < 0:
        raise ValueError("min_samples_leaf must be non-negative")
    w = _weights(sample_weight, n)

    missing = np.isnan(values)
    first_missing = int(np.argmax(missing)) if missing.any() else n
    if not missing[first_missing:].all():
        raise ValueError("records with a missing value must come after all known values")
    if np.any(np.diff(values[:first_missing]) < 0):
        raise ValueError("values must be sorted ascending")

    # Known values start in branch 1 and move into branch 0 as the scan advances.
    dist = Distribution(2, n_classes)
    dist.add_range(1, y, w, 0, first_missing)

    min_split = 0.1 * dist.total() / n_classes
    if _sm_or_eq(min_split, min_samples_leaf):
        min_split = float(min_samples_leaf)
    elif _gr(min_split, MAX_MIN_SPLIT):
        min_split = MAX_MIN_SPLIT

    if first_missing < 2 or _sm(first_missing, 2 * min_split):
        logger.debug(f"attribute {attribute_index}: {first_missing} known values, "
                     f"need {2 * min_split:g}; no split")
        return _no_split(attribute_index, y, w, first_missing, n_classes)

    known = values[:first_missing]
    bounds = np.flatnonzero(known[:-1] + VALUE_EPSILON < known[1:]) + 1

    best_rmi = -np.inf
    best_index = None
    n_candidates = 0
    last = 0
    # The trailing group is committed and checked like any other boundary,
    # but it has no value above it and can never be the chosen split.
    for nxt in [*bounds.tolist(), first_missing]:
        dist.shift_range(1, 0, y, w, last, nxt)
        last = nxt
        if not (_gr_or_eq(dist.per_bag(0), min_split)
                and _gr_or_eq(dist.per_bag(1), min_split)):
            continue
        n_candidates += 1
        if nxt == first_missing:
            continue
        score = rmi_score(values[nxt - 1], values, y)
        logger.debug(f"attribute {attribute_index}: candidate {nxt - 1} "
                     f"(<= {values[nxt - 1]:g}) rmi={score:.6f}")
        if _gr(score, best_rmi):
            best_rmi = score
            best_index = nxt - 1

    if best_index is None:
        logger.debug(f"attribute {attribute_index}: no admissible boundary")
        return _no_split(attribute_index, y, w, first_missing, n_classes, n_candidates)

    split_point = (values[best_index + 1] + values[best_index]) / 2
    # Adjacent doubles: the midpoint rounds up onto the next value.
    if split_point == values[best_index + 1]:
        split_point = values[best_index]

    dist = Distribution(2, n_classes)
    dist.add_range(0, y, w, 0, best_index + 1)
    dist.add_range(1, y, w, best_index + 1, first_missing)

    logger.info(f"attribute {attribute_index}: split at {split_point:g} "
                f"(rmi={best_rmi:.6f}, {n_candidates} candidates)")
    return SplitResult(attribute_index, float(split_point), 2, float(best_rmi),
                       dist, n_candidates)


# -----------------------------------------------------------------------------
# Split models
# -----------------------------------------------------------------------------
class SplitModel(ABC):
    """Interface a tree-growing driver programs against.

    Subclasses provide ``num_subsets``, ``distribution``, ``split_point``,
    ``which_subset`` and ``weights``; class probabilities are derived from
    those.
    """

    @property
    @abstractmethod
    def num_subsets(self) -> int: ...

    @property
    @abstractmethod
    def distribution(self) -> Distribution: ...

    @property
    @abstractmethod
    def split_point(self) -> float: ...

    @abstractmethod
    def which_subset(self, x) -> int:
        """Branch of record ``x``, or ``-1`` if it is spread over all branches."""

    @abstractmethod
    def weights(self, x) -> np.ndarray | None:
        """Fractional branch weights for ``x``, ``None`` if it goes to one branch."""

    def class_prob(self, cls: int, x, subset: int) -> float:
        """Probability of class ``cls`` for record ``x`` reaching ``subset``."""
        dist = self.distribution
        if subset <= -1:
            weights = self.weights(x)
            if weights is None:
                return dist.prob(cls)
            return float(sum(wi * dist.prob(cls, i) for i, wi in enumerate(weights)))
        if _gr(dist.per_bag(subset), 0):
            return dist.prob(cls, subset)
        return dist.prob(cls)


class RMINumericSplit(SplitModel):
    """Binary split on one numeric attribute selected by Rank Mutual Information.

    Parameters
    ----------
    attribute_index : int
        Column of ``X`` to split on.
    min_samples_leaf : float, default=2
        Minimum weight in each branch (raised for large nodes, see
        :func:`find_rmi_split`).
    use_mdl_correction : bool, default=False
        Stored for callers that inspect it; has no effect on the RMI split.

    Attributes
    ----------
    result_ : SplitResult
        Set by :meth:`fit`.
    """

    def __init__(self, attribute_index: int, *, min_samples_leaf: float = 2,
                 use_mdl_correction: bool = False):
        self.attribute_index = int(attribute_index)
        self.min_samples_leaf = min_samples_leaf
        self.use_mdl_correction = bool(use_mdl_correction)
        self.result_: SplitResult | None = None

    def fit(self, X, y, sample_weight=None, n_classes: int | None = None):
        """Sort the node's records by the attribute and evaluate the split."""
        values = _column(X, self.attribute_index)
        y = np.asarray(y)
        if y.shape[0] != values.shape[0]:
            raise ValueError("X and y must have the same number of rows")
        w = _weights(sample_weight, values.shape[0])
        if n_classes is None:
            n_classes = int(y.max()) + 1 if y.size else 1
        # numpy sorts NaN last
        order = np.argsort(values, kind="mergesort")
        self.result_ = find_rmi_split(
            values[order], y[order], n_classes,
            attribute_index=self.attribute_index, sample_weight=w[order],
            min_samples_leaf=self.min_samples_leaf,
            use_mdl_correction=self.use_mdl_correction,
        )
        return self

    def _fitted(self) -> SplitResult:
        if self.result_ is None:
            raise ValueError("Split not fitted. Call fit(...) first.")
        return self.result_

    @property
    def num_subsets(self) -> int:
        return self._fitted().num_subsets

    @property
    def distribution(self) -> Distribution:
        return self._fitted().distribution

    @property
    def split_point(self) -> float:
        return self._fitted().split_point

    @property
    def rmi(self) -> float:
        return self._fitted().rmi

    def coding_cost(self) -> float:
        n = self._fitted().n_candidates
        return math.log2(n) if n > 0 else 0.0

    def which_subset(self, x) -> int:
        res = self._fitted()
        if not res.has_split:
            raise ValueError(f"attribute {self.attribute_index} has no split")
        v = x[self.attribute_index]
        if _isnan_scalar(v):
            return -1
        return 0 if float(v) <= res.split_point else 1

    def weights(self, x) -> np.ndarray | None:
        res = self._fitted()
        if not _isnan_scalar(x[self.attribute_index]):
            return None
        dist = res.distribution
        tot = dist.total()
        if tot <= 0:
            return np.full(res.num_subsets, 1.0 / max(res.num_subsets, 1))
        return np.array([dist.per_bag(i) / tot for i in range(res.num_subsets)])

    def set_split_point(self, X):
        """Move the threshold down to the largest known value not above it."""
        res = self._fitted()
        if res.num_subsets <= 1:
            return self
        values = _column(X, self.attribute_index)
        new_point = -np.finfo(float).max
        for v in values[~np.isnan(values)]:
            if _gr(v, new_point) and _sm_or_eq(v, res.split_point):
                new_point = float(v)
        self.result_ = SplitResult(res.attribute_index, new_point, res.num_subsets,
                                   res.rmi, res.distribution, res.n_candidates)
        return self

    def reset_distribution(self, X, y, sample_weight=None):
        """Recompute the branch distribution from ``X``.

        Records with a known value go to their branch; records with a
        missing value are spread over both branches.
        """
        res = self._fitted()
        values = _column(X, self.attribute_index)
        y = np.asarray(y)
        w = _weights(sample_weight, values.shape[0])
        dist = Distribution(2, res.distribution.n_classes)
        known = ~np.isnan(values)
        with np.errstate(invalid="ignore"):
            left = known & (values <= res.split_point)
        right = known & ~left
        np.add.at(dist.counts[0], y[left], w[left])
        np.add.at(dist.counts[1], y[right], w[right])
        dist.add_with_unknown(values, y, w)
        self.result_ = SplitResult(res.attribute_index, res.split_point, res.num_subsets,
                                   res.rmi, dist, res.n_candidates)
        return self

    def __repr__(self):
        if self.result_ is None:
            return f"RMINumericSplit(attribute_index={self.attribute_index})"
        r = self.result_
        return (f"RMINumericSplit(attribute_index={r.attribute_index}, "
                f"split_point={r.split_point:g}, rmi={r.rmi:.4f}, num_subsets={r.num_subsets})")
