"""
Generic result container for all pyshotlength computations.

The Result class provides a standardized envelope that all domain-specific
results use. This enables shared tooling for timing, reproducibility and
presentation while allowing each component to define its own parameter
structure.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (n, n_removed, method)
    - timing is optional (don't burden unit tests)
    - provenance records library versions for reproducibility
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np
import scipy

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version metadata attached to every result unless overridden."""
    from pyshotlength import __version__

    return {
        'pyshotlength_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for quantile computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (quantiles, summary record, differences)
        info: Structured metadata (n, n_removed, method)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions and algorithm identifiers

    Examples:
        >>> Result(
        ...     params=QuantileParams(...),
        ...     info={'n': 120, 'n_removed': 0},
        ...     timing={'total_seconds': 0.002},
        ...     backend_name='cpu_harrell_davis'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, Any] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
