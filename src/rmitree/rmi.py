# -*- coding: utf-8 -*-
"""
rmitree.rmi
===========

Rank Mutual Information of a binary numeric split.

A candidate threshold recodes the attribute to ``1`` (value ``<=`` threshold)
or ``2`` (value above it, or missing).  For every row ``i`` let ``B_i`` be its
greater-or-equal set on the recoded attribute, ``D_i`` its greater-or-equal
set on the class codes and ``I_i`` their intersection.  The score is the mean
over all ``n`` rows of::

    -ln( |B_i| * |D_i| / (|I_i| * n) )

Higher scores mean the split agrees better with the ordering of the classes.
Since every row is in both of its own sets, ``|I_i| >= 1`` and the ratio is
always defined.
"""

from __future__ import annotations
import numpy as np

from .rank import (count_greater_or_equal, count_joint_greater_or_equal,
                   greater_or_equal)

LOWER_CODE = 1
UPPER_CODE = 2


def mark(values, threshold: float) -> np.ndarray:
    """Return a fresh array of branch codes for ``threshold``.

    Missing values never satisfy ``<=`` and are coded as the upper branch.
    """
    values = np.asarray(values, dtype=float)
    with np.errstate(invalid="ignore"):
        below = values <= threshold
    return np.where(below, LOWER_CODE, UPPER_CODE)


def _check(values, y) -> tuple[np.ndarray, np.ndarray]:
    values = np.asarray(values, dtype=float)
    y = np.asarray(y)
    if values.ndim != 1 or y.ndim != 1:
        raise ValueError("values and y must be one-dimensional")
    if values.shape[0] != y.shape[0]:
        raise ValueError("values and y must have the same length")
    if values.shape[0] == 0:
        raise ValueError("cannot score a split on an empty set of records")
    return values, y


def rmi_score(threshold: float, values, y) -> float:
    """Mean Rank Mutual Information of the split ``values <= threshold``.

    Parameters
    ----------
    threshold : float
        Candidate split point.
    values : array-like of shape (n_samples,)
        Attribute values, ``NaN`` for missing.
    y : array-like of shape (n_samples,)
        Ordinal class codes.

    Returns
    -------
    float
        The RMI score; sample weights do not enter it.
    """
    values, y = _check(values, y)
    n = values.shape[0]
    codes = mark(values, threshold)
    size_b = count_greater_or_equal(codes).astype(float)
    size_d = count_greater_or_equal(y).astype(float)
    size_i = count_joint_greater_or_equal(codes, y).astype(float)
    terms = -np.log((size_b * size_d) / (size_i * n))
    return float(terms.sum() / n)


def rmi_score_naive(threshold: float, values, y) -> float:
    """Set-based formulation of :func:`rmi_score` (quadratic; small inputs only)."""
    values, y = _check(values, y)
    n = values.shape[0]
    codes = mark(values, threshold)
    rmi = 0.0
    for i in range(n):
        b = greater_or_equal(codes, i)
        d = greater_or_equal(y, i)
        inter = b & d
        rmi += -np.log((len(b) * len(d)) / (len(inter) * n))
    return float(rmi / n)
