"""
Shared helpers for quantile comparison: operand extraction and grid checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.exceptions import GridMismatchError, ValidationError
from pyshotlength.core.validation import check_array, check_1d, check_finite
from pyshotlength.quantiles.solution import QuantileSolution


@dataclass(frozen=True)
class DifferenceRecord:
    """One difference at one probability for one (x, y) pair."""
    probability: float
    difference: float
    source_pair: tuple[str, str] | None = None


def profile_arrays(
    estimate: QuantileSolution | Mapping[float, float],
    name: str,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    (probabilities, values) of a QuantileSolution or a plain p -> value mapping.
    """
    if isinstance(estimate, QuantileSolution):
        return estimate.probabilities, estimate.quantiles
    if isinstance(estimate, Mapping):
        if len(estimate) == 0:
            raise ValidationError(f"{name}: empty quantile estimate")
        probs = check_array(list(estimate.keys()), name)
        values = check_array(list(estimate.values()), name)
        check_1d(values, name)
        check_finite(values, name)
        return probs, values
    raise ValidationError(
        f"{name}: expected a QuantileSolution or mapping of probability -> value, "
        f"got {type(estimate).__name__}"
    )


def check_same_grid(
    left: NDArray[np.floating[Any]],
    right: NDArray[np.floating[Any]],
    left_name: str,
    right_name: str,
) -> None:
    """
    Require identical probability grids: same length, values and order.

    Raises:
        GridMismatchError: If the grids differ in any way
    """
    if left.shape != right.shape or not np.array_equal(left, right):
        raise GridMismatchError(
            f"{left_name} and {right_name} use different probability grids "
            f"(lengths {len(left)} and {len(right)}): "
            f"{left.tolist()} vs {right.tolist()}",
            left=left.tolist(),
            right=right.tolist(),
        )


def as_group(
    group: Mapping[str, Any] | Sequence[Any],
    name: str,
) -> list[tuple[str, Any]]:
    """
    Normalize a group to (label, estimate) pairs.

    A mapping keeps its labels. For a sequence, each member's own label is
    used when it has one, otherwise its position.
    """
    if len(group) == 0:
        raise ValidationError(f"{name}: group must contain at least one estimate")
    if isinstance(group, QuantileSolution) or (
        isinstance(group, Mapping) and all(isinstance(k, float) for k in group)
    ):
        raise ValidationError(
            f"{name}: expected a collection of quantile estimates, got a single estimate"
        )
    if isinstance(group, Mapping):
        members = [(str(label), est) for label, est in group.items()]
    else:
        members = []
        for i, est in enumerate(group):
            label = getattr(est, 'label', None)
            members.append((str(label) if label is not None else f"{name}[{i}]", est))
    return members
