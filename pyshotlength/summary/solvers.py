"""
Quantile-based sample summary.

summarize() derives count, mean, exact extremes, Harrell-Davis quartiles,
IQR, quantile skewness and quantile kurtosis from one sample.
"""

from __future__ import annotations

import warnings
from typing import Mapping
import numpy as np
from numpy.typing import ArrayLike

from pyshotlength.core.exceptions import DegenerateDistributionError, ValidationError
from pyshotlength.core.result import Result, _default_provenance
from pyshotlength.core.compute.timing import Timer
from pyshotlength.quantiles.design import SampleDesign
from pyshotlength.quantiles.solvers import BackendChoice, _ensure_design, hdquantile
from pyshotlength.summary.solution import SummaryParams, SummarySolution


# Octiles used by the quartiles, skewness and kurtosis
SUMMARY_PROBS = np.array([0.125, 0.25, 0.375, 0.5, 0.625, 0.75, 0.875])


def summarize(
    x: ArrayLike | SampleDesign,
    *,
    label: str | None = None,
    na_rm: bool = False,
    allow_degenerate: bool = False,
    backend: BackendChoice = 'auto',
) -> SummarySolution:
    """
    Quantile-based summary of one sample.

    skewness = (Q(.25) + Q(.75) - 2 Q(.5)) / IQR
    kurtosis = ((Q(.875) - Q(.625)) + (Q(.375) - Q(.125))) / IQR

    Parameters
    ----------
    x : array-like or SampleDesign
        Shot durations.
    label : str, optional
        Film title carried through to the result.
        A SampleDesign keeps its own label; a different one raises
        ValidationError.
    na_rm : bool
        Drop NaN before summarizing. Default False (NaN raises).
    allow_degenerate : bool
        If the IQR is zero, return skewness and kurtosis as None (with a
        RuntimeWarning, also recorded on the result) instead of raising.
    backend : str
        'auto' or 'cpu', passed to hdquantile.

    Returns
    -------
    SummarySolution

    Raises
    ------
    DegenerateDistributionError
        IQR is zero and allow_degenerate is False.
    ValidationError
        Invalid input, or a label that conflicts with the design label.
    """
    design = _ensure_design(x, label=label, na_rm=na_rm)

    timer = Timer()
    timer.start()
    warnings_list: list[str] = []
    if design.n_removed:
        warnings_list.append(
            f"Removed {design.n_removed} missing value(s) before estimation"
        )

    with timer.section('quantiles'):
        est = hdquantile(design, SUMMARY_PROBS, backend=backend)
    q = est.quantiles
    q125, q25, q375, q50, q625, q75, q875 = (float(v) for v in q)

    iqr = q75 - q25
    if iqr > 0.0:
        skewness = (q25 + q75 - 2.0 * q50) / iqr
        kurtosis = ((q875 - q625) + (q375 - q125)) / iqr
    elif allow_degenerate:
        skewness = None
        kurtosis = None
        message = (
            f"Interquartile range is zero (Q1 = Q3 = {q25}); "
            f"skewness and kurtosis are undefined"
        )
        warnings_list.append(message)
        warnings.warn(message, RuntimeWarning, stacklevel=2)
    else:
        name = f"sample {design.label!r}" if design.label is not None else "sample"
        raise DegenerateDistributionError(
            f"{name}: interquartile range is zero (Q1={q25}, Q3={q75}); "
            f"quantile skewness and kurtosis are undefined",
            q25=q25,
            q75=q75,
            label=design.label,
        )

    with timer.section('moments'):
        mean = float(np.mean(design.values))

    timer.stop()

    params = SummaryParams(
        count=design.n,
        mean=mean,
        min=float(design.sorted[0]),
        q25=q25,
        median=q50,
        q75=q75,
        max=float(design.sorted[-1]),
        iqr=iqr,
        skewness=skewness,
        kurtosis=kurtosis,
        probabilities=SUMMARY_PROBS.copy(),
        quantiles=q,
    )

    result = Result(
        params=params,
        info={
            'method': 'harrell_davis',
            'n': design.n,
            'n_removed': design.n_removed,
            'label': design.label,
        },
        timing=timer.result(),
        backend_name=est.backend_name,
        warnings=tuple(warnings_list),
        provenance={**_default_provenance(), 'algorithm': 'harrell_davis'},
    )
    return SummarySolution(_result=result, _design=design)


def summarize_many(
    samples: Mapping[str, ArrayLike | SampleDesign],
    *,
    na_rm: bool = False,
    allow_degenerate: bool = False,
) -> dict[str, SummarySolution]:
    """
    summarize() for each labelled sample, in the input order.
    """
    if len(samples) == 0:
        raise ValidationError("samples: need at least one labelled sample")
    return {
        label: summarize(
            data, label=str(label), na_rm=na_rm, allow_degenerate=allow_degenerate,
        )
        for label, data in samples.items()
    }
