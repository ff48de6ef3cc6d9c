"""
Solver dispatch for quantile estimation.

Provides hdquantile() for arbitrary probabilities, profile() for one sample
on a ProbabilityGrid, and profile_many() for several labelled samples on a
shared grid.
"""

from __future__ import annotations

import dataclasses
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Literal, Mapping
from numpy.typing import ArrayLike

from pyshotlength.core.exceptions import ValidationError
from pyshotlength.core.protocols import Backend
from pyshotlength.core.validation import check_positive_int, check_probabilities
from pyshotlength.quantiles.design import SampleDesign
from pyshotlength.quantiles.grid import ProbabilityGrid
from pyshotlength.quantiles.solution import QuantileParams, QuantileSolution
from pyshotlength.quantiles.backends.cpu import CPUHarrellDavisBackend


BackendChoice = Literal['auto', 'cpu']


def _ensure_design(
    data: ArrayLike | SampleDesign,
    *,
    label: str | None = None,
    na_rm: bool = False,
) -> SampleDesign:
    """
    Convert raw array to SampleDesign if needed.

    A design keeps its own label. A label passed alongside it only fills
    in a missing one; a different label raises ValidationError.
    """
    if isinstance(data, SampleDesign):
        if label is None or data.label == label:
            return data
        if data.label is None:
            return dataclasses.replace(data, _label=label)
        raise ValidationError(
            f"label {label!r} conflicts with the design label {data.label!r}"
        )
    return SampleDesign.from_array(data, label=label, na_rm=na_rm)


def _get_backend(backend: BackendChoice) -> Backend[SampleDesign, QuantileParams]:
    """Select backend based on preference."""
    if backend in ('auto', 'cpu'):
        return CPUHarrellDavisBackend()
    raise ValidationError(f"Unknown backend: {backend!r}")


def _ensure_grid(grid: ArrayLike | ProbabilityGrid | None) -> ProbabilityGrid:
    if grid is None:
        return ProbabilityGrid.default()
    return ProbabilityGrid.from_values(grid)


def hdquantile(
    x: ArrayLike | SampleDesign,
    probs: ArrayLike = (0.0, 0.25, 0.5, 0.75, 1.0),
    *,
    label: str | None = None,
    na_rm: bool = False,
    se: bool = False,
    return_weights: bool = False,
    backend: BackendChoice = 'auto',
) -> QuantileSolution:
    """
    Harrell-Davis quantile estimates.

    Parameters
    ----------
    x : array-like or SampleDesign
        Shot durations.
    probs : array-like
        Probabilities in [0, 1], any order. p = 0 gives the sample minimum
        and p = 1 the sample maximum.
    label : str, optional
        Film title carried through to the result.
    na_rm : bool
        Drop NaN before estimation. Default False (NaN raises).
    se : bool
        Also compute jackknife standard errors (n >= 3).
    return_weights : bool
        Also return the weight matrix for the interior probabilities.
    backend : str
        'auto' or 'cpu'.

    Returns
    -------
    QuantileSolution mapping each probability to its estimate.
    """
    design = _ensure_design(x, label=label, na_rm=na_rm)
    q_probs = check_probabilities(probs, "probs")
    be = _get_backend(backend)

    result = be.solve(design, probs=q_probs, se=se, return_weights=return_weights)

    return QuantileSolution(_result=result, _design=design)


def profile(
    x: ArrayLike | SampleDesign,
    grid: ArrayLike | ProbabilityGrid | None = None,
    *,
    label: str | None = None,
    na_rm: bool = False,
    se: bool = False,
    backend: BackendChoice = 'auto',
) -> QuantileSolution:
    """
    Quantile profile of one sample on a probability grid.

    Parameters
    ----------
    x : array-like or SampleDesign
        Shot durations.
    grid : array-like or ProbabilityGrid, optional
        Strictly increasing probabilities. Default 0.05 to 0.95 by 0.05.

    Returns
    -------
    QuantileSolution ordered as the grid.
    """
    q_grid = _ensure_grid(grid)
    return hdquantile(
        x, q_grid.values, label=label, na_rm=na_rm, se=se, backend=backend,
    )


def profile_many(
    samples: Mapping[str, ArrayLike | SampleDesign],
    grid: ArrayLike | ProbabilityGrid | None = None,
    *,
    na_rm: bool = False,
    se: bool = False,
    n_jobs: int = 1,
    backend: BackendChoice = 'auto',
) -> dict[str, QuantileSolution]:
    """
    Quantile profiles of several labelled samples on one shared grid.

    Parameters
    ----------
    samples : mapping of label -> array-like or SampleDesign
        Films (or groups) to profile.
    grid : array-like or ProbabilityGrid, optional
        Shared grid. Default 0.05 to 0.95 by 0.05.
    n_jobs : int
        Number of worker threads. 1 runs serially, -1 uses all cores.

    Returns
    -------
    dict label -> QuantileSolution, in the input order.
    """
    if len(samples) == 0:
        raise ValidationError("samples: need at least one labelled sample")
    if n_jobs == -1:
        n_jobs = os.cpu_count() or 1
    n_jobs = check_positive_int(n_jobs, "n_jobs")

    q_grid = _ensure_grid(grid)
    labels = list(samples.keys())

    def _one(label):
        return profile(
            samples[label], q_grid, label=str(label), na_rm=na_rm, se=se, backend=backend,
        )

    if n_jobs == 1 or len(labels) == 1:
        profiles = [_one(label) for label in labels]
    else:
        with ThreadPoolExecutor(max_workers=min(n_jobs, len(labels))) as pool:
            profiles = list(pool.map(_one, labels))

    return dict(zip(labels, profiles))
