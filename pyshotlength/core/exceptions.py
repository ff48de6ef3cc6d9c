"""
Exception hierarchy for pyshotlength.

All exceptions inherit from PyShotLengthError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations

from typing import Any, Sequence


class PyShotLengthError(Exception):
    """Base exception for all pyshotlength errors."""
    pass


class ValidationError(PyShotLengthError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: empty samples,
    probabilities outside [0, 1], non-finite values without na_rm.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect.

    Raised when a sample is not one-dimensional.
    """
    pass


class GridMismatchError(ValidationError):
    """
    Two quantile profiles do not share an identical probability grid.

    Attributes:
        left: Probabilities of the first operand
        right: Probabilities of the second operand
    """

    def __init__(
        self,
        message: str,
        left: Sequence[float] | None = None,
        right: Sequence[float] | None = None,
    ):
        super().__init__(message)
        self.left = tuple(left) if left is not None else None
        self.right = tuple(right) if right is not None else None


class NumericalError(PyShotLengthError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateDistributionError(NumericalError):
    """
    Interquartile range is zero.

    Quantile skewness and kurtosis divide by Q(0.75) - Q(0.25), so they are
    undefined when the two quartile estimates coincide.

    Attributes:
        q25: Lower quartile estimate
        q75: Upper quartile estimate
        label: Sample label, if any
    """

    def __init__(
        self,
        message: str,
        q25: float | None = None,
        q75: float | None = None,
        label: Any = None,
    ):
        super().__init__(message)
        self.q25 = q25
        self.q75 = q75
        self.label = label


class ConvergenceError(PyShotLengthError):
    """
    Iterative algorithm failed to converge.

    Raised when the incomplete beta continued fraction does not meet its
    tolerance within the maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final relative change of the iterate
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
