# -*- coding: utf-8 -*-
"""
rmitree.distribution
====================

Weighted class-count table used while scanning split candidates.

A :class:`Distribution` holds one row per branch ("bag") and one column per
class.  Entry ``(b, c)`` is the total weight of the records of class ``c``
that currently sit in branch ``b``.  Counts are only ever moved between bags
or added, so they never become negative.
"""

from __future__ import annotations
import numpy as np


# -----------------------------------------------------------------------------
# Tolerant comparisons (same SMALL as the C4.5 family of learners)
# -----------------------------------------------------------------------------
SMALL = 1e-6

def _gr(a: float, b: float) -> bool:
    return (a - b) > SMALL

def _gr_or_eq(a: float, b: float) -> bool:
    return (b - a) < SMALL

def _sm(a: float, b: float) -> bool:
    return (b - a) > SMALL

def _sm_or_eq(a: float, b: float) -> bool:
    return (a - b) < SMALL


# -----------------------------------------------------------------------------
# Distribution
# -----------------------------------------------------------------------------
class Distribution:
    """Per-bag, per-class weighted counts.

    Parameters
    ----------
    n_bags : int
        Number of branches.  The numeric split always uses two.
    n_classes : int
        Number of (ordinal) class codes.
    """

    def __init__(self, n_bags: int, n_classes: int):
        if n_bags < 1 or n_classes < 1:
            raise ValueError("Distribution needs at least one bag and one class")
        self.counts = np.zeros((int(n_bags), int(n_classes)), dtype=float)

    @property
    def n_bags(self) -> int:
        return self.counts.shape[0]

    @property
    def n_classes(self) -> int:
        return self.counts.shape[1]

    def add(self, bag: int, cls: int, weight: float = 1.0):
        self.counts[bag, cls] += weight

    def add_range(self, bag: int, y: np.ndarray, w: np.ndarray, start: int, end: int):
        """Add the records ``start:end`` to ``bag``."""
        np.add.at(self.counts[bag], y[start:end], w[start:end])

    def shift_range(self, src: int, dst: int, y: np.ndarray, w: np.ndarray,
                    start: int, end: int):
        """Move the records ``start:end`` from bag ``src`` to bag ``dst``."""
        moved = np.zeros(self.n_classes, dtype=float)
        np.add.at(moved, y[start:end], w[start:end])
        self.counts[src] -= moved
        self.counts[dst] += moved
        # cancellation on float weights can leave tiny negatives behind
        np.maximum(self.counts[src], 0.0, out=self.counts[src])

    def add_with_unknown(self, values: np.ndarray, y: np.ndarray, w: np.ndarray):
        """Spread records with a missing value over all bags.

        Each such record is split across the bags in proportion to the
        current bag totals.  Bags are left untouched if they are all empty.
        """
        miss = np.isnan(values)
        if not miss.any():
            return
        tot = self.total()
        if tot <= 0:
            return
        probs = self.counts.sum(axis=1) / tot
        per_class = np.zeros(self.n_classes, dtype=float)
        np.add.at(per_class, y[miss], w[miss])
        self.counts += np.outer(probs, per_class)

    def per_bag(self, bag: int) -> float:
        return float(self.counts[bag].sum())

    def per_class(self, cls: int) -> float:
        return float(self.counts[:, cls].sum())

    def total(self) -> float:
        return float(self.counts.sum())

    def prob(self, cls: int, bag: int | None = None) -> float:
        """Relative frequency of ``cls`` in ``bag`` (or over all bags)."""
        if bag is None:
            tot = self.total()
            return self.per_class(cls) / tot if tot > 0 else 0.0
        pb = self.per_bag(bag)
        return float(self.counts[bag, cls]) / pb if pb > 0 else 0.0

    def copy(self) -> "Distribution":
        other = Distribution(self.n_bags, self.n_classes)
        other.counts[:] = self.counts
        return other

    def __repr__(self):
        rows = ", ".join(
            "{" + ", ".join(f"{c}: {v:g}" for c, v in enumerate(row) if v > 0) + "}"
            for row in self.counts
        )
        return f"Distribution([{rows}])"
