"""
SampleDesign: data wrapper for one film's shot lengths.

Wraps a 1D sample and provides validation and missing-value handling
for the quantile pipeline. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyshotlength.core.capabilities import ALL_CAPABILITIES
from pyshotlength.core.validation import (
    check_array,
    check_1d,
    check_finite,
    check_min_samples,
)


@dataclass(frozen=True)
class SampleDesign:
    """
    Design for quantile estimation on one sample.

    Holds the cleaned sample in input order and a sorted copy, both
    read-only. Missing values (NaN) are rejected unless na_rm=True, in which
    case they are dropped and counted. Infinite values are always rejected.

    Construction:
        SampleDesign.from_array(durations, label='Sunrise (1927)')
        SampleDesign.from_array(series_with_gaps, na_rm=True)
    """
    _values: NDArray[np.floating[Any]]
    _sorted: NDArray[np.floating[Any]]
    _n_removed: int
    _label: str | None

    @classmethod
    def from_array(
        cls,
        data: ArrayLike,
        *,
        label: str | None = None,
        na_rm: bool = False,
    ) -> SampleDesign:
        """
        Build SampleDesign from array-like data.

        Parameters
        ----------
        data : array-like
            Shot durations in seconds. numpy array, list or pandas Series;
            a Series name is used as the label when none is given.
        label : str, optional
            Film title or group name.
        na_rm : bool
            Drop NaN entries before ranking. Default False (NaN raises).
        """
        if label is None and getattr(data, 'name', None) is not None:
            label = str(data.name)

        name = f"sample {label!r}" if label is not None else "sample"
        arr = np.array(check_array(data, name), dtype=np.float64, copy=True)
        check_1d(arr, name)

        n_removed = 0
        if na_rm:
            missing = np.isnan(arr)
            n_removed = int(np.sum(missing))
            arr = arr[~missing]

        check_min_samples(arr, 1, name)
        check_finite(arr, name)

        sorted_arr = np.sort(arr, kind='stable')
        arr.setflags(write=False)
        sorted_arr.setflags(write=False)
        return cls(_values=arr, _sorted=sorted_arr, _n_removed=n_removed, _label=label)

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """Cleaned sample in input order (read-only)."""
        return self._values

    @property
    def sorted(self) -> NDArray[np.floating[Any]]:
        """Cleaned sample sorted ascending (read-only)."""
        return self._sorted

    @property
    def n(self) -> int:
        """Number of observations after removing missing values."""
        return self._values.shape[0]

    @property
    def n_removed(self) -> int:
        """Number of missing values dropped under na_rm."""
        return self._n_removed

    @property
    def label(self) -> str | None:
        return self._label

    def supports(self, capability: str) -> bool:
        return capability in ALL_CAPABILITIES

    def __repr__(self) -> str:
        label = f"{self._label!r}, " if self._label is not None else ""
        removed = f", removed={self._n_removed}" if self._n_removed else ""
        return f"SampleDesign({label}n={self.n}{removed})"
