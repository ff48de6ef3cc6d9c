"""
Sample summary solution types.

SummaryParams is the per-film record (count, mean, extremes, quartiles,
IQR, quantile skewness and kurtosis); SummarySolution wraps it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyshotlength.core.result import Result

if TYPE_CHECKING:
    from pyshotlength.quantiles.design import SampleDesign


@dataclass(frozen=True)
class SummaryParams:
    """
    Parameter payload for a quantile-based sample summary.

    min and max are the exact sample extremes. q25, median and q75 are
    Harrell-Davis estimates. skewness and kurtosis are None when the
    interquartile range is zero and the caller allowed that case.
    """
    count: int
    mean: float
    min: float
    q25: float
    median: float
    q75: float
    max: float
    iqr: float
    skewness: float | None
    kurtosis: float | None

    # The seven estimates the record was derived from
    probabilities: NDArray[np.floating[Any]]
    quantiles: NDArray[np.floating[Any]]

    @property
    def is_degenerate(self) -> bool:
        return self.skewness is None

    def as_dict(self) -> dict[str, float | int | None]:
        """The ten summary fields as a plain dict."""
        return {
            'count': self.count,
            'mean': self.mean,
            'min': self.min,
            'q25': self.q25,
            'median': self.median,
            'q75': self.q75,
            'max': self.max,
            'iqr': self.iqr,
            'skewness': self.skewness,
            'kurtosis': self.kurtosis,
        }


_ROW_LABELS = (
    ('count', 'Shots'),
    ('mean', 'Mean'),
    ('min', 'Min.'),
    ('q25', '1st Qu.'),
    ('median', 'Median'),
    ('q75', '3rd Qu.'),
    ('max', 'Max.'),
    ('iqr', 'IQR'),
    ('skewness', 'Q-skew'),
    ('kurtosis', 'Q-kurt'),
)


@dataclass
class SummarySolution:
    """
    User-facing summary of one sample.

    Wraps Result[SummaryParams] and provides convenient accessors.
    """
    _result: Result[SummaryParams]
    _design: 'SampleDesign'

    @property
    def record(self) -> SummaryParams:
        return self._result.params

    @property
    def count(self) -> int:
        return self._result.params.count

    @property
    def mean(self) -> float:
        return self._result.params.mean

    @property
    def min(self) -> float:
        return self._result.params.min

    @property
    def q25(self) -> float:
        return self._result.params.q25

    @property
    def median(self) -> float:
        return self._result.params.median

    @property
    def q75(self) -> float:
        return self._result.params.q75

    @property
    def max(self) -> float:
        return self._result.params.max

    @property
    def iqr(self) -> float:
        """Q(0.75) - Q(0.25)."""
        return self._result.params.iqr

    @property
    def skewness(self) -> float | None:
        """Quantile skewness, None if undefined (zero IQR)."""
        return self._result.params.skewness

    @property
    def kurtosis(self) -> float | None:
        """Quantile kurtosis, None if undefined (zero IQR)."""
        return self._result.params.kurtosis

    @property
    def label(self) -> str | None:
        return self._design.label

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

    def as_dict(self) -> dict[str, float | int | None]:
        return self._result.params.as_dict()

    def summary(self, digits: int = 1) -> str:
        """Text table rounded to `digits` decimals (counts are not rounded)."""
        record = self.as_dict()
        width = max(len(name) for _, name in _ROW_LABELS)
        lines = [self.label or "Sample summary"]
        for key, name in _ROW_LABELS:
            value = record[key]
            if value is None:
                text = "undefined"
            elif key == 'count':
                text = str(value)
            else:
                text = f"{value:.{digits}f}"
            lines.append(f"{name.ljust(width)}  {text}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        label = f"{self.label!r}, " if self.label is not None else ""
        return f"SummarySolution({label}n={self.count}, median={self.median:.4g}, iqr={self.iqr:.4g})"


def summary_table(
    summaries: dict[str, SummarySolution],
    digits: int = 1,
) -> str:
    """Side-by-side text table of several summaries, one column per label."""
    labels = list(summaries.keys())
    cells: list[list[str]] = []
    for key, _ in _ROW_LABELS:
        row = []
        for label in labels:
            value = summaries[label].as_dict()[key]
            if value is None:
                row.append("undefined")
            elif key == 'count':
                row.append(str(value))
            else:
                row.append(f"{value:.{digits}f}")
        cells.append(row)

    label_width = max(len(name) for _, name in _ROW_LABELS)
    col_widths = [
        max(len(str(label)), max(len(cells[i][j]) for i in range(len(_ROW_LABELS))))
        for j, label in enumerate(labels)
    ]

    lines = [" " * (label_width + 2) + "  ".join(
        str(label).rjust(w) for label, w in zip(labels, col_widths)
    )]
    for (_, name), row in zip(_ROW_LABELS, cells):
        lines.append(name.ljust(label_width) + "  " + "  ".join(
            cell.rjust(w) for cell, w in zip(row, col_widths)
        ))
    return "\n".join(lines)
