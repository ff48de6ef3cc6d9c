"""
pyshotlength: quantile statistics of film shot-length distributions.

Harrell-Davis quantile estimation, quantile-based summaries and pairwise
quantile comparison of films and groups of films.

Submodules:
    quantiles: Harrell-Davis estimates and quantile profiles
    summary: Five-number summary, IQR, quantile skewness and kurtosis
    comparison: Paired and group-wise quantile differences
"""

__version__ = "0.1.0"

from pyshotlength import quantiles
from pyshotlength import summary
from pyshotlength import comparison
from pyshotlength.quantiles import ProbabilityGrid, hdquantile, profile, profile_many
from pyshotlength.summary import summarize, summarize_many
from pyshotlength.comparison import paired_difference, group_difference

__all__ = [
    "__version__",
    "quantiles",
    "summary",
    "comparison",
    "ProbabilityGrid",
    "hdquantile",
    "profile",
    "profile_many",
    "summarize",
    "summarize_many",
    "paired_difference",
    "group_difference",
]
