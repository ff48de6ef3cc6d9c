"""
Shared compute infrastructure for pyshotlength.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    betainc: Regularized incomplete beta function
    timing: Execution timing utilities
    tolerances: Tolerance tiers and convergence thresholds
"""

from pyshotlength.core.compute.betainc import betainc, betainc_tails
from pyshotlength.core.compute.timing import Timer, timed

__all__ = [
    # Special functions
    "betainc",
    "betainc_tails",
    # Timing
    "Timer",
    "timed",
]
