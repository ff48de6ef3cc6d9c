"""
Quantile estimation solution types.

Contains the parameter payload and the user-facing solution wrapper, which
behaves as a read-only mapping from probability to estimate.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.result import Result
from pyshotlength.quantiles.grid import ProbabilityGrid

if TYPE_CHECKING:
    from pyshotlength.quantiles.design import SampleDesign


@dataclass(frozen=True)
class QuantileParams:
    """
    Parameter payload for Harrell-Davis estimates.

    quantiles[j] is the estimate at probabilities[j]. se and weights are
    populated only when requested.
    """
    probabilities: NDArray[np.floating[Any]]
    quantiles: NDArray[np.floating[Any]]

    # Jackknife standard errors, shape (k,)
    se: NDArray[np.floating[Any]] | None = None

    # Weights for interior probabilities, shape (n, k_interior)
    weights: NDArray[np.floating[Any]] | None = None
    weight_probabilities: NDArray[np.floating[Any]] | None = None


@dataclass(eq=False)
class QuantileSolution(Mapping):
    """
    User-facing quantile estimate for one sample.

    Wraps Result[QuantileParams]. Iterating yields probabilities in the
    order they were requested; indexing by a probability returns its
    estimate:

        >>> est = profile(durations)
        >>> est[0.5]
        4.83...
    """
    _result: Result[QuantileParams]
    _design: 'SampleDesign'

    # --- Mapping protocol ---

    def __getitem__(self, p: float) -> float:
        probs = self._result.params.probabilities
        try:
            hits = np.flatnonzero(np.isclose(probs, p, rtol=0.0, atol=1e-12))
        except TypeError:
            raise KeyError(p) from None
        if len(hits) == 0:
            raise KeyError(p)
        return float(self._result.params.quantiles[hits[0]])

    def __iter__(self) -> Iterator[float]:
        return (float(p) for p in self._result.params.probabilities)

    def __len__(self) -> int:
        return len(self._result.params.probabilities)

    # --- Estimates ---

    @property
    def probabilities(self) -> NDArray[np.floating[Any]]:
        """Probabilities in request order."""
        return self._result.params.probabilities

    @property
    def quantiles(self) -> NDArray[np.floating[Any]]:
        """Estimates aligned with probabilities."""
        return self._result.params.quantiles

    @property
    def grid(self) -> ProbabilityGrid:
        """The probabilities as a ProbabilityGrid (requires strictly increasing order)."""
        return ProbabilityGrid.from_values(self.probabilities)

    @property
    def se(self) -> NDArray[np.floating[Any]] | None:
        """Jackknife standard errors, if computed."""
        return self._result.params.se

    @property
    def weights(self) -> NDArray[np.floating[Any]] | None:
        """Harrell-Davis weight matrix (n, k_interior), if requested."""
        return self._result.params.weights

    @property
    def weight_probabilities(self) -> NDArray[np.floating[Any]] | None:
        """Interior probabilities labelling the columns of weights."""
        return self._result.params.weight_probabilities

    def as_dict(self) -> dict[float, float]:
        """Plain {probability: estimate} dict in grid order."""
        return {float(p): float(q) for p, q in zip(self.probabilities, self.quantiles)}

    # --- Metadata ---

    @property
    def label(self) -> str | None:
        return self._design.label

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def provenance(self) -> dict[str, Any]:
        return self._result.provenance

    def summary(self, digits: int = 3) -> str:
        """Two-column text table: probability, estimate (and se if present)."""
        title = f"Harrell-Davis quantiles: {self.label}" if self.label else "Harrell-Davis quantiles"
        lines = [title, f"n = {self.n}"]
        se = self.se
        header = f"{'p':>8}  {'quantile':>12}"
        if se is not None:
            header += f"  {'se':>10}"
        lines.append(header)
        for j, (p, q) in enumerate(zip(self.probabilities, self.quantiles)):
            row = f"{p:>8.4g}  {q:>12.{digits}f}"
            if se is not None:
                row += f"  {se[j]:>10.{digits}f}"
            lines.append(row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        label = f"{self.label!r}, " if self.label is not None else ""
        return f"QuantileSolution({label}n={self.n}, k={len(self)})"
