"""
Input validation utilities for pyshotlength.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyshotlength.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like (lists, numpy arrays, pandas Series) and converts
    to numpy. Rejects inputs that result in object dtype (indicating mixed
    types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    if hasattr(array, 'to_numpy'):
        array = array.to_numpy()
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.dtype != np.float64:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_probabilities(
    probs: ArrayLike,
    name: str,
    *,
    closed: bool = True,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert probabilities to a 1D float64 array.

    Args:
        probs: Scalar or array-like of probabilities
        name: Parameter name for error messages
        closed: If True, accept the interval [0, 1]; otherwise only (0, 1)

    Returns:
        1D float64 array (a scalar becomes length 1)

    Raises:
        ValidationError: If any probability is non-finite or out of range
    """
    arr = np.atleast_1d(check_array(probs, name))
    check_1d(arr, name)
    check_min_samples(arr, 1, name)
    check_finite(arr, name)

    if closed:
        bad = (arr < 0.0) | (arr > 1.0)
        interval = "[0, 1]"
    else:
        bad = (arr <= 0.0) | (arr >= 1.0)
        interval = "(0, 1)"
    if np.any(bad):
        raise ValidationError(
            f"{name}: probabilities must lie in {interval}, got {arr[bad].tolist()}"
        )
    return arr


def check_strictly_increasing(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array values are strictly increasing.

    Args:
        array: 1D array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If any consecutive pair is not strictly increasing
    """
    steps = np.diff(array)
    if np.any(steps <= 0):
        pos = int(np.argmax(steps <= 0))
        raise ValidationError(
            f"{name}: values must be strictly increasing, "
            f"got {array[pos]} followed by {array[pos + 1]} at position {pos}"
        )


def check_positive_int(value: int, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Raises:
        ValidationError: If value is not a positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ValidationError(f"{name}: expected a positive integer, got {value!r}")
    return int(value)
