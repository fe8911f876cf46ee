"""
Linear algebra kernels for pylinreg.

All functions follow these conventions:
    - NumPy/SciPy (LAPACK under the hood)
    - Each factorisation returns a structured result dataclass
    - Singularity is raised immediately as SingularMatrixError

Submodules:
    cholesky: Cholesky factorisation of X'X (normal equations)
    qr: QR decomposition of X
"""

from pylinreg.core.compute.linalg.cholesky import CholeskyResult, cholesky_cpu
from pylinreg.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
    qr_xtx_inverse,
)

__all__ = [
    "CholeskyResult",
    "cholesky_cpu",
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    "qr_xtx_inverse",
]
