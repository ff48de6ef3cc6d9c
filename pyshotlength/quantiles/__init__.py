"""
Quantile estimation module.

Harrell-Davis quantile estimates of shot-length samples, singly or as
profiles over a shared probability grid.

Public API:
    hdquantile(x, probs)    - Estimates at arbitrary probabilities in [0, 1]
    profile(x, grid)        - Estimates over a ProbabilityGrid
    profile_many(samples)   - Profiles of several labelled samples, one grid
"""

from pyshotlength.quantiles.design import SampleDesign
from pyshotlength.quantiles.grid import ProbabilityGrid
from pyshotlength.quantiles.solution import QuantileParams, QuantileSolution
from pyshotlength.quantiles.solvers import (
    hdquantile,
    profile,
    profile_many,
)

__all__ = [
    "hdquantile",
    "profile",
    "profile_many",
    "ProbabilityGrid",
    "SampleDesign",
    "QuantileParams",
    "QuantileSolution",
]
