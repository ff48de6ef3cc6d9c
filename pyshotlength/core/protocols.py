"""
Core protocols for pyshotlength.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Capability-driven: designs answer supports() for optional features
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a design and produces a parameter payload wrapped
    in a Result. Backends are stateless; all configuration is passed via the
    design or as keyword arguments to solve().

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_harrell_davis'
        """
        ...

    def solve(self, design: D, **kwargs: Any) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            ValidationError: If design is invalid for this backend
            ConvergenceError: If an iterative kernel fails to converge
        """
        ...
