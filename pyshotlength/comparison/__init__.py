"""
Quantile comparison module.

Differences between quantile profiles computed on the same grid. Sign
convention: second operand minus first.

Public API:
    paired_difference(a, b)       - b[p] - a[p] for two films
    group_difference(xs, ys)      - y[p] - x[p] for every pair across groups
"""

from pyshotlength.comparison._common import DifferenceRecord
from pyshotlength.comparison.solution import DifferenceParams, DifferenceSolution
from pyshotlength.comparison.solvers import group_difference, paired_difference

__all__ = [
    "paired_difference",
    "group_difference",
    "DifferenceRecord",
    "DifferenceParams",
    "DifferenceSolution",
]
