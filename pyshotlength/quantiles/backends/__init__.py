"""Compute backends for quantile estimation."""

from pyshotlength.quantiles.backends.cpu import CPUHarrellDavisBackend

__all__ = ["CPUHarrellDavisBackend"]
