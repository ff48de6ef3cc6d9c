"""
CPU reference backend for Harrell-Davis quantile estimation.

Validated against scipy's Beta CDF to rtol=1e-10.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.capabilities import (
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
)
from pyshotlength.core.exceptions import ValidationError
from pyshotlength.core.result import Result, _default_provenance
from pyshotlength.core.compute.timing import Timer
from pyshotlength.quantiles.design import SampleDesign
from pyshotlength.quantiles.solution import QuantileParams
from pyshotlength.quantiles._harrell_davis import (
    hd_quantile, hd_weight_matrix, hd_jackknife_se,
)


class CPUHarrellDavisBackend:
    """CPU reference backend for Harrell-Davis quantiles."""

    @property
    def name(self) -> str:
        return 'cpu_harrell_davis'

    def solve(
        self,
        design: SampleDesign,
        *,
        probs: NDArray[np.floating[Any]],
        se: bool = False,
        return_weights: bool = False,
    ) -> Result[QuantileParams]:
        """
        Compute Harrell-Davis estimates for one sample.

        Parameters
        ----------
        design : SampleDesign
        probs : NDArray
            Validated probabilities in [0, 1].
        se : bool
            Also compute jackknife standard errors (needs n >= 3).
        return_weights : bool
            Also return the (n, k_interior) weight matrix.
        """
        if not design.supports(CAPABILITY_MATERIALIZED):
            raise ValidationError(
                f"{self.name} needs the whole sample in memory"
            )
        if se and not design.supports(CAPABILITY_REPEATABLE):
            raise ValidationError(
                "Jackknife standard errors need a design that can be re-read"
            )
        if se and design.n < 3:
            raise ValidationError(
                f"Jackknife standard errors need at least 3 observations, got {design.n}"
            )

        timer = Timer()
        timer.start()

        x = design.sorted
        warnings_list: list[str] = []
        if design.n_removed:
            warnings_list.append(
                f"Removed {design.n_removed} missing value(s) before estimation"
            )

        with timer.section('quantiles'):
            quantiles = hd_quantile(x, probs)

        se_values = None
        if se:
            with timer.section('jackknife'):
                se_values = hd_jackknife_se(x, probs)

        weights = None
        weight_probs = None
        if return_weights:
            with timer.section('weights'):
                weight_probs = probs[(probs > 0.0) & (probs < 1.0)]
                weights = hd_weight_matrix(design.n, weight_probs)

        timer.stop()

        params = QuantileParams(
            probabilities=probs,
            quantiles=quantiles,
            se=se_values,
            weights=weights,
            weight_probabilities=weight_probs,
        )

        return Result(
            params=params,
            info={
                'method': 'harrell_davis',
                'n': design.n,
                'n_removed': design.n_removed,
                'label': design.label,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
            provenance={**_default_provenance(), 'algorithm': 'harrell_davis'},
        )
