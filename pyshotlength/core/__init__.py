"""
Core infrastructure for pyshotlength.

Shared abstractions and utilities used by the quantiles, summary and
comparison submodules.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Incomplete beta, timing, tolerance tiers
"""

from pyshotlength.core.protocols import Backend
from pyshotlength.core.result import Result
from pyshotlength.core.exceptions import (
    PyShotLengthError,
    ValidationError,
    DimensionError,
    GridMismatchError,
    NumericalError,
    DegenerateDistributionError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyShotLengthError",
    "ValidationError",
    "DimensionError",
    "GridMismatchError",
    "NumericalError",
    "DegenerateDistributionError",
    "ConvergenceError",
]
