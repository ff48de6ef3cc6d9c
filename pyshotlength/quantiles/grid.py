"""
ProbabilityGrid: ordered probabilities shared by profiles being compared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyshotlength.core.exceptions import ValidationError
from pyshotlength.core.validation import (
    check_probabilities,
    check_strictly_increasing,
)

DEFAULT_GRID_START = 0.05
DEFAULT_GRID_STOP = 0.95
DEFAULT_GRID_STEP = 0.05

# Grid points are rounded to this many decimals so that arange drift
# (0.15000000000000002) does not break equality between grids.
_GRID_DECIMALS = 12


@dataclass(frozen=True)
class ProbabilityGrid:
    """
    Strictly increasing probabilities in [0, 1].

    Two grids are interchangeable only if they have the same length, the same
    values and the same order; see equals().

    Construction:
        ProbabilityGrid.from_values([0.1, 0.5, 0.9])
        ProbabilityGrid.from_range(0.05, 0.95, 0.05)
        ProbabilityGrid.default()
    """
    _probs: tuple[float, ...]

    @classmethod
    def from_values(cls, probs: ArrayLike) -> ProbabilityGrid:
        if isinstance(probs, ProbabilityGrid):
            return probs
        arr = check_probabilities(probs, "grid")
        check_strictly_increasing(arr, "grid")
        return cls(_probs=tuple(float(p) for p in arr))

    @classmethod
    def from_range(
        cls,
        start: float = DEFAULT_GRID_START,
        stop: float = DEFAULT_GRID_STOP,
        step: float = DEFAULT_GRID_STEP,
    ) -> ProbabilityGrid:
        """
        Uniform grid from start to stop inclusive.

        Parameters
        ----------
        start, stop : float
            First and last probability. stop is included when it lies on
            the step lattice (within rounding).
        step : float
            Spacing, > 0.
        """
        if not step > 0.0:
            raise ValidationError(f"step: must be positive, got {step}")
        if stop < start:
            raise ValidationError(f"stop ({stop}) must not be less than start ({start})")
        n_steps = int(np.floor((stop - start) / step + 1e-9))
        probs = np.round(start + step * np.arange(n_steps + 1), _GRID_DECIMALS)
        return cls.from_values(probs)

    @classmethod
    def default(cls) -> ProbabilityGrid:
        """The 0.05, 0.10, ..., 0.95 grid (19 points)."""
        return cls.from_range()

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """Probabilities as a float64 array (a fresh copy)."""
        return np.array(self._probs, dtype=np.float64)

    def equals(self, other: ProbabilityGrid) -> bool:
        """Same length, same values, same order."""
        return self._probs == other._probs

    def __len__(self) -> int:
        return len(self._probs)

    def __iter__(self) -> Iterator[float]:
        return iter(self._probs)

    def __getitem__(self, index: int) -> float:
        return self._probs[index]

    def __repr__(self) -> str:
        if len(self._probs) <= 6:
            shown = ", ".join(f"{p:g}" for p in self._probs)
        else:
            shown = f"{self._probs[0]:g}, {self._probs[1]:g}, ..., {self._probs[-1]:g}"
        return f"ProbabilityGrid([{shown}], n={len(self._probs)})"
