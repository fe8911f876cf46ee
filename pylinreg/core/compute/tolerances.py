"""
Tolerance tiers and numerical thresholds.

Defines precision expectations for the CPU solve paths and the cut-offs
the backends use to decide between "fit", "fit with a warning" and
"refuse to fit".

Used by the backends and by the test suite.
"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned problems: agreement to near machine precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Ill-conditioned problems (cond(X) > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Above this cond(X) the fit still runs but carries a warning.
# At cond(X) = 1e6, cond(X'X) = 1e12: about four significant digits
# of the normal-equations solution are left.
CONDITION_WARNING_THRESHOLD = 1e6

# Leading text of the warning recorded when the threshold is exceeded
ILL_CONDITIONED_WARNING = "Design matrix is ill-conditioned"


def cholesky_pivot_tolerance(n: int, p: int) -> float:
    """
    Smallest acceptable ratio min(diag L) / max(diag L) for a Cholesky
    factor of X'X.

    diag(L) tracks |diag(R)| of a QR of X, but forming X'X squares the
    rounding error, so the cut-off sits at the square root of the QR one.
    """
    return float(np.sqrt(max(n, p) * np.finfo(np.float64).eps))


def qr_rank_tolerance(n: int, p: int) -> float:
    """Relative cut-off on |diag(R)| used for numerical rank of X."""
    return max(n, p) * float(np.finfo(np.float64).eps)
