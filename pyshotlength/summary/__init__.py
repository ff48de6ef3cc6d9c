"""
Sample summary module.

Quantile-based descriptive summary of shot-length samples.

Public API:
    summarize(x)            - Count, mean, extremes, quartiles, IQR,
                              quantile skewness and kurtosis
    summarize_many(samples) - summarize() per labelled sample
    summary_table(results)  - Side-by-side text rendering
"""

from pyshotlength.summary.solution import SummaryParams, SummarySolution, summary_table
from pyshotlength.summary.solvers import SUMMARY_PROBS, summarize, summarize_many

__all__ = [
    "summarize",
    "summarize_many",
    "summary_table",
    "SUMMARY_PROBS",
    "SummaryParams",
    "SummarySolution",
]
