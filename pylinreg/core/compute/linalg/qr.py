"""
QR decomposition for least squares.

Alternative to the Cholesky path: works on X directly, so the rounding
error is not squared by forming X'X. The same (X'X)⁻¹ needed for standard
errors is recovered from R as R⁻¹ R⁻ᵀ.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pylinreg.core.exceptions import SingularMatrixError
from pylinreg.core.compute.tolerances import qr_rank_tolerance


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).

    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR, 'complete' for full QR

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode=mode)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = qr_rank_tolerance(*X.shape) * diag_R.max()
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank)


def qr_solve_cpu(
    qr_result: QRResult,
    y: NDArray[np.floating[Any]],
    *,
    matrix_name: str = 'X',
) -> NDArray[np.floating[Any]]:
    """
    Solve min_β ||y - Xβ||² given the QR decomposition of X.

    β = R⁻¹ Q'y by back substitution.

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    p = qr_result.R.shape[1]
    _check_full_rank(qr_result, p, matrix_name)

    Qty = qr_result.Q.T @ y
    return solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)


def qr_xtx_inverse(qr_result: QRResult, *, matrix_name: str = 'X') -> NDArray[np.floating[Any]]:
    """
    (X'X)⁻¹ from the R factor: X'X = R'R, so (X'X)⁻¹ = R⁻¹ R⁻ᵀ.

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    p = qr_result.R.shape[1]
    _check_full_rank(qr_result, p, matrix_name)

    R_inv = solve_triangular(qr_result.R[:p, :p], np.eye(p), lower=False)
    return R_inv @ R_inv.T


def _check_full_rank(qr_result: QRResult, p: int, matrix_name: str) -> None:
    if qr_result.rank < p:
        raise SingularMatrixError(
            f"{matrix_name} is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name=matrix_name,
            rank=qr_result.rank,
            expected_rank=p,
        )
