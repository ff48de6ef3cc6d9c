"""
Capability string constants for pyshotlength.

This module is the SINGLE SOURCE OF TRUTH for capability strings.
Import from here, never use raw strings.

Usage:
    from pyshotlength.core.capabilities import CAPABILITY_MATERIALIZED

    if design.supports(CAPABILITY_MATERIALIZED):
        x = design.sorted
"""

# Data can be returned as full numpy arrays in memory
CAPABILITY_MATERIALIZED = 'materialized'

# Data can be iterated multiple times (jackknife passes)
CAPABILITY_REPEATABLE = 'repeatable'

# All capabilities as a frozenset for validation
ALL_CAPABILITIES = frozenset({
    CAPABILITY_MATERIALIZED,
    CAPABILITY_REPEATABLE,
})

__all__ = [
    'CAPABILITY_MATERIALIZED',
    'CAPABILITY_REPEATABLE',
    'ALL_CAPABILITIES',
]
