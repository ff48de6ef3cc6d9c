"""
Pairwise quantile differences.

paired_difference() compares two films; group_difference() forms every
(x, y) pair between two groups of films. The sign convention is always
"second operand minus first": a positive value means the second operand's
quantile is larger at that probability.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence
import numpy as np

from pyshotlength.core.result import Result
from pyshotlength.core.compute.timing import timed
from pyshotlength.quantiles.solution import QuantileSolution
from pyshotlength.comparison._common import as_group, check_same_grid, profile_arrays
from pyshotlength.comparison.solution import DifferenceParams, DifferenceSolution


Estimate = QuantileSolution | Mapping[float, float]


def _label_of(estimate: Any, default: str) -> str:
    label = getattr(estimate, 'label', None)
    return str(label) if label is not None else default


def paired_difference(
    a: Estimate,
    b: Estimate,
) -> DifferenceSolution:
    """
    diff(p) = b[p] - a[p] for each probability of the shared grid.

    Parameters
    ----------
    a, b : QuantileSolution or mapping of probability -> value
        Profiles on the same grid.

    Returns
    -------
    DifferenceSolution with a single pair (a_label, b_label).

    Raises
    ------
    GridMismatchError
        If the two grids differ in length, values or order.
    """
    with timed() as timer:
        a_probs, a_values = profile_arrays(a, "a")
        b_probs, b_values = profile_arrays(b, "b")
        check_same_grid(a_probs, b_probs, "a", "b")

        with timer.section('differences'):
            diffs = (b_values - a_values)[:, None]

    params = DifferenceParams(
        probabilities=a_probs.copy(),
        differences=diffs,
        pairs=((_label_of(a, "a"), _label_of(b, "b")),),
        mode="paired",
    )
    result = Result(
        params=params,
        info={'mode': 'paired', 'n_probs': len(a_probs), 'n_pairs': 1},
        timing=timer.result(),
        backend_name='cpu_difference',
    )
    return DifferenceSolution(_result=result)


def group_difference(
    x_group: Mapping[str, Estimate] | Sequence[Estimate],
    y_group: Mapping[str, Estimate] | Sequence[Estimate],
) -> DifferenceSolution:
    """
    All-pairs differences between two groups of profiles.

    For each probability p, every x in x_group and every y in y_group:
    diff(p, x, y) = y[p] - x[p]. Each probability gets |X| * |Y| values,
    with pairs ordered x-major: (x1, y1), (x1, y2), ..., (x2, y1), ...

    Parameters
    ----------
    x_group, y_group : mapping of label -> estimate, or sequence of estimates
        Profiles, all on the same grid.

    Returns
    -------
    DifferenceSolution with differences of shape (n_probs, |X| * |Y|).

    Raises
    ------
    GridMismatchError
        If any member's grid differs from the first member of x_group.
    ValidationError
        If either group is empty.
    """
    with timed() as timer:
        x_members = as_group(x_group, "x_group")
        y_members = as_group(y_group, "y_group")

        with timer.section('validation'):
            ref_label, ref_est = x_members[0]
            ref_probs, _ = profile_arrays(ref_est, f"x_group[{ref_label!r}]")

            def _stack(members, group_name):
                rows = []
                for label, est in members:
                    member_name = f"{group_name}[{label!r}]"
                    probs, values = profile_arrays(est, member_name)
                    check_same_grid(ref_probs, probs, f"x_group[{ref_label!r}]", member_name)
                    rows.append(values)
                return np.vstack(rows)

            X = _stack(x_members, "x_group")   # (|X|, n_probs)
            Y = _stack(y_members, "y_group")   # (|Y|, n_probs)

        with timer.section('differences'):
            # outer[i, k, j] = Y[k, j] - X[i, j]
            outer = Y[None, :, :] - X[:, None, :]
            diffs = outer.reshape(-1, X.shape[1]).T

    pairs = tuple(
        (x_label, y_label)
        for x_label, _ in x_members
        for y_label, _ in y_members
    )
    params = DifferenceParams(
        probabilities=ref_probs.copy(),
        differences=np.ascontiguousarray(diffs),
        pairs=pairs,
        mode="group",
    )
    result = Result(
        params=params,
        info={
            'mode': 'group',
            'n_probs': len(ref_probs),
            'n_x': len(x_members),
            'n_y': len(y_members),
            'n_pairs': len(pairs),
        },
        timing=timer.result(),
        backend_name='cpu_difference',
    )
    return DifferenceSolution(_result=result)
