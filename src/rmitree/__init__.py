# rmitree/__init__.py
"""
rmitree: Rank Mutual Information split selection for ordinal decision trees.

Exports:
    - RMISplitSelector
    - RMINumericSplit, SplitModel, SplitResult, find_rmi_split
    - Distribution
    - rmi_score, greater_or_equal
"""
from .distribution import Distribution
from .rank import greater_or_equal
from .rmi import rmi_score
from .split import RMINumericSplit, SplitModel, SplitResult, find_rmi_split
from .selector import RMISplitSelector

__all__ = [
    "RMISplitSelector",
    "RMINumericSplit",
    "SplitModel",
    "SplitResult",
    "find_rmi_split",
    "Distribution",
    "rmi_score",
    "greater_or_equal",
]
__version__ = "0.1.0"
