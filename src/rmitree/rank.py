# -*- coding: utf-8 -*-
"""
rmitree.rank
============

Greater-or-equal ("dominance") queries over a single column.

For a row ``i`` the greater-or-equal set is every row whose value is at least
the value of row ``i``.  The relation is reflexive, so a row always belongs to
its own set.  :func:`greater_or_equal` materialises the set for one pivot;
the ``count_*`` functions return the set sizes for all rows at once from
sorted copies of the columns.
"""

from __future__ import annotations
import numpy as np


def _as_column(a, name: str) -> np.ndarray:
    col = np.asarray(a)
    if col.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {col.shape}")
    return col


def greater_or_equal(column, pivot: int) -> set[int]:
    """Indices of the rows whose value is ``>=`` the value at ``pivot``.

    Parameters
    ----------
    column : array-like of shape (n_samples,)
        Values of one attribute (or of the class codes).
    pivot : int
        Row whose value is the reference.

    Returns
    -------
    set[int]
        Row indices, always including ``pivot`` itself.
    """
    col = _as_column(column, "column")
    if not 0 <= pivot < col.shape[0]:
        raise ValueError(f"pivot {pivot} out of range for {col.shape[0]} rows")
    ref = col[pivot]
    ans = {int(j) for j in np.flatnonzero(col >= ref)}
    # reflexive even when the reference compares unequal to itself
    ans.add(int(pivot))
    return ans


def count_greater_or_equal(column) -> np.ndarray:
    """Size of every row's greater-or-equal set."""
    col = _as_column(column, "column")
    ordered = np.sort(col, kind="mergesort")
    return col.shape[0] - np.searchsorted(ordered, col, side="left")


def count_joint_greater_or_equal(codes, y) -> np.ndarray:
    """Size of the intersection of the two greater-or-equal sets of every row.

    For row ``i`` this counts the rows ``j`` with ``codes[j] >= codes[i]`` and
    ``y[j] >= y[i]``.  Rows are grouped by their code level; each group is
    answered with one ``searchsorted`` against the sorted labels of the rows
    at that level or above.
    """
    codes = _as_column(codes, "codes")
    y = _as_column(y, "y")
    if codes.shape[0] != y.shape[0]:
        raise ValueError("codes and y must have the same length")
    out = np.zeros(codes.shape[0], dtype=np.int64)
    for level in np.unique(codes):
        rows = codes == level
        pool = np.sort(y[codes >= level], kind="mergesort")
        out[rows] = pool.shape[0] - np.searchsorted(pool, y[rows], side="left")
    return out
