"""
Core protocols for pylinreg.

Structural interfaces that backends satisfy. Protocol (structural typing)
rather than ABC, so a backend needs no common base class.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pylinreg.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)  # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a parameter payload
    wrapped in a Result. Backends are stateless: everything they need
    comes from the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}', e.g. 'cpu_cholesky', 'cpu_qr'.
        """
        ...

    def solve(self, design: D) -> Result[P]:
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If design is invalid for this backend
        """
        ...
