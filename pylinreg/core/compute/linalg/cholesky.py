"""
Cholesky factorisation for the normal equations.

Factorises a symmetric positive definite matrix A = L L' (LAPACK potrf via
SciPy) and reuses the factor for every solve against A, including the
columns of the identity when A⁻¹ itself is needed. No explicit inverse is
ever formed.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import cho_factor, cho_solve, LinAlgError

from pylinreg.core.exceptions import SingularMatrixError
from pylinreg.core.compute.tolerances import cholesky_pivot_tolerance


@dataclass(frozen=True)
class CholeskyResult:
    """
    Lower Cholesky factor of a p x p matrix.

    Attributes:
        factor: LAPACK-packed factor; only the lower triangle is meaningful
        rank: Number of pivots above the relative tolerance
        pivot_ratio: min(diag L) / max(diag L)
    """
    factor: NDArray[np.floating[Any]]
    rank: int
    pivot_ratio: float

    @property
    def L(self) -> NDArray[np.floating[Any]]:
        """The lower-triangular factor with the upper triangle zeroed."""
        return np.tril(self.factor)

    def solve(self, b: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Solve A x = b."""
        return cho_solve((self.factor, True), b, check_finite=False)

    def inverse(self) -> NDArray[np.floating[Any]]:
        """A⁻¹, obtained by solving against the identity."""
        p = self.factor.shape[0]
        return self.solve(np.eye(p))


def cholesky_cpu(
    A: NDArray[np.floating[Any]],
    *,
    n_observations: int,
    matrix_name: str = 'A',
) -> CholeskyResult:
    """
    Cholesky factorisation with a numerical-rank check.

    Args:
        A: Symmetric matrix (p x p), typically X'X
        n_observations: Rows of the matrix A was formed from; scales the
            tolerance the same way the QR rank check does
        matrix_name: Used in error messages

    Returns:
        CholeskyResult

    Raises:
        SingularMatrixError: If A is not positive definite or a pivot is
            negligible relative to the largest one
    """
    p = A.shape[0]
    try:
        factor, _ = cho_factor(A, lower=True, check_finite=False)
    except LinAlgError as e:
        raise SingularMatrixError(
            f"{matrix_name} is singular: Cholesky factorisation failed ({e}). "
            f"This indicates perfectly collinear columns.",
            matrix_name=matrix_name,
            expected_rank=p,
        ) from e

    diag_L = np.abs(np.diag(factor))
    max_pivot = float(diag_L.max()) if p > 0 else 0.0
    if max_pivot == 0.0:
        raise SingularMatrixError(
            f"{matrix_name} is zero",
            matrix_name=matrix_name,
            rank=0,
            expected_rank=p,
        )

    pivot_ratio = float(diag_L.min()) / max_pivot
    rank = int(np.sum(diag_L > cholesky_pivot_tolerance(n_observations, p) * max_pivot))

    if rank < p:
        raise SingularMatrixError(
            f"{matrix_name} is numerically singular: rank={rank}, expected={p} "
            f"(pivot ratio {pivot_ratio:.3g}). This indicates (near) collinear columns.",
            matrix_name=matrix_name,
            rank=rank,
            expected_rank=p,
        )

    return CholeskyResult(factor=factor, rank=rank, pivot_ratio=pivot_ratio)
