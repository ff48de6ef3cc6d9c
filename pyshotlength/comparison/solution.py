"""
Quantile difference solution types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.result import Result
from pyshotlength.comparison._common import DifferenceRecord


@dataclass(frozen=True)
class DifferenceParams:
    """
    Parameter payload for quantile differences.

    differences[j, k] is y[p_j] - x[p_j] for pairs[k] = (x_label, y_label).
    Paired mode has exactly one pair.
    """
    probabilities: NDArray[np.floating[Any]]   # shape (n_probs,)
    differences: NDArray[np.floating[Any]]     # shape (n_probs, n_pairs)
    pairs: tuple[tuple[str, str], ...]
    mode: str                                  # "paired" | "group"


@dataclass
class DifferenceSolution:
    """
    User-facing quantile differences.

    Wraps Result[DifferenceParams]. Values stay associated with their
    probability (row) and generating pair (column); no aggregation is done.
    """
    _result: Result[DifferenceParams]

    @property
    def probabilities(self) -> NDArray[np.floating[Any]]:
        return self._result.params.probabilities

    @property
    def differences(self) -> NDArray[np.floating[Any]]:
        """Array of shape (n_probs, n_pairs)."""
        return self._result.params.differences

    @property
    def pairs(self) -> tuple[tuple[str, str], ...]:
        """(x_label, y_label) for each column of differences."""
        return self._result.params.pairs

    @property
    def mode(self) -> str:
        return self._result.params.mode

    @property
    def n_pairs(self) -> int:
        return len(self._result.params.pairs)

    def records(self) -> Iterator[DifferenceRecord]:
        """One DifferenceRecord per (probability, pair), probability-major."""
        params = self._result.params
        for j, p in enumerate(params.probabilities):
            for k, pair in enumerate(params.pairs):
                yield DifferenceRecord(
                    probability=float(p),
                    difference=float(params.differences[j, k]),
                    source_pair=pair,
                )

    def by_probability(self) -> dict[float, NDArray[np.floating[Any]]]:
        """{probability: differences over all pairs} in grid order."""
        params = self._result.params
        return {
            float(p): params.differences[j].copy()
            for j, p in enumerate(params.probabilities)
        }

    def for_pair(self, x_label: str, y_label: str) -> NDArray[np.floating[Any]]:
        """Differences across the grid for one (x, y) pair."""
        try:
            k = self._result.params.pairs.index((x_label, y_label))
        except ValueError:
            raise KeyError((x_label, y_label)) from None
        return self._result.params.differences[:, k].copy()

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

    def summary(self, digits: int = 3) -> str:
        """Text rendering: one row per probability, one column per pair."""
        params = self._result.params
        headers = [f"{y} - {x}" for x, y in params.pairs]
        widths = [
            max(len(h), max(len(f"{v:.{digits}f}") for v in params.differences[:, k]))
            for k, h in enumerate(headers)
        ]
        lines = [f"Quantile differences ({params.mode})"]
        lines.append(f"{'p':>8}  " + "  ".join(h.rjust(w) for h, w in zip(headers, widths)))
        for j, p in enumerate(params.probabilities):
            lines.append(f"{p:>8.4g}  " + "  ".join(
                f"{params.differences[j, k]:.{digits}f}".rjust(w)
                for k, w in enumerate(widths)
            ))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"DifferenceSolution(mode={self.mode!r}, n_probs={len(self.probabilities)}, "
            f"n_pairs={self.n_pairs})"
        )
