"""
CPU backends for linear regression.

Both solve the normal equations

    β̂ = (X'X)⁻¹ X'y

in closed form and hand the same (X'X)⁻¹ to the diagnostics:

    CPUCholeskyBackend: forms X'X and factorises it (default)
    CPUQRBackend:       factorises X itself; (X'X)⁻¹ = R⁻¹ R⁻ᵀ

Neither forms an explicit matrix inverse.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.result import Result
from pylinreg.core.exceptions import SingularMatrixError, SingularDesignMatrixError
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.tolerances import (
    CONDITION_WARNING_THRESHOLD,
    ILL_CONDITIONED_WARNING,
    qr_rank_tolerance,
)
from pylinreg.core.compute.linalg import cholesky_cpu, qr_cpu, qr_solve_cpu, qr_xtx_inverse
from pylinreg.regression.design import Design
from pylinreg.regression.solution import LinearParams
from pylinreg.regression._diagnostics import compute_diagnostics


class CPUCholeskyBackend:
    """
    Normal equations solved by Cholesky factorisation of X'X.

    Implements the Backend protocol for Design -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_cholesky'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Fit OLS and derive all coefficient diagnostics.

        Algorithm:
            0. Check rank(X) from its singular values
            1. Form X'X and X'y
            2. Factorise X'X = LL'
            3. Solve LL'β = X'y; (X'X)⁻¹ from LL' against the identity
            4. Residuals, degrees of freedom, diagnostics

        Raises:
            SingularDesignMatrixError: If X'X is singular or nearly so
            DegenerateDegreesOfFreedomError: If n == p
        """
        timer = Timer()
        timer.start()

        with timer.section('condition_check'):
            cond = _check_rank(design.X)

        with timer.section('normal_equations'):
            XtX = design.XtX()
            Xty = design.Xty()

        with timer.section('solve'):
            try:
                chol = cholesky_cpu(XtX, n_observations=design.n, matrix_name="X'X")
            except SingularMatrixError as e:
                raise _design_singular(e, cond) from e
            coefficients = chol.solve(Xty)
            xtx_inv = chol.inverse()

        params = _assemble(design, coefficients, xtx_inv, timer)
        timer.stop()

        info: dict[str, Any] = {
            'method': 'cholesky',
            'rank': chol.rank,
            'condition_number': cond,
            'pivot_ratio': chol.pivot_ratio,
        }
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=_condition_warnings(cond),
        )


class CPUQRBackend:
    """
    Least squares via QR decomposition of X.

    Same contract as CPUCholeskyBackend; more accurate when X is
    ill-conditioned since X'X is never formed.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Raises:
            SingularDesignMatrixError: If X is rank-deficient
            DegenerateDegreesOfFreedomError: If n == p
        """
        timer = Timer()
        timer.start()

        with timer.section('condition_check'):
            cond = _check_rank(design.X)

        with timer.section('qr_decomposition'):
            qr_result = qr_cpu(design.X, mode='reduced')

        with timer.section('solve'):
            try:
                coefficients = qr_solve_cpu(qr_result, design.y, matrix_name='X')
                xtx_inv = qr_xtx_inverse(qr_result, matrix_name='X')
            except SingularMatrixError as e:
                raise _design_singular(e, cond) from e

        params = _assemble(design, coefficients, xtx_inv, timer)
        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'condition_number': cond,
        }
        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=_condition_warnings(cond),
        )


def _assemble(
    design: Design,
    coefficients: NDArray[np.floating[Any]],
    xtx_inv: NDArray[np.floating[Any]],
    timer: Timer,
) -> LinearParams:
    """Fitted values, residuals and diagnostics from a solved system."""
    with timer.section('residuals'):
        fitted_values = design.X @ coefficients
        residuals = design.y - fitted_values
        df_residual = design.n - design.p
        rss = float(residuals @ residuals)

    with timer.section('diagnostics'):
        diag = compute_diagnostics(coefficients, residuals, df_residual, xtx_inv)

    return LinearParams(
        coefficients=coefficients,
        fitted_values=fitted_values,
        residuals=residuals,
        df_residual=df_residual,
        rss=rss,
        residual_variance=diag.residual_variance,
        coefficient_variances=diag.coefficient_variances,
        standard_errors=diag.standard_errors,
        t_values=diag.t_values,
        p_values=diag.p_values,
    )


def _check_rank(X: NDArray[np.floating[Any]]) -> float:
    """
    2-norm condition number of X, after checking X has full column rank.

    Numerical rank counts singular values above max(n, p)·eps·σ_max, the
    same cut-off the QR path applies to |diag R|.

    Raises:
        SingularDesignMatrixError: If rank(X) < p
    """
    n, p = X.shape
    s = np.linalg.svd(X, compute_uv=False)
    s_max = float(s[0])
    s_min = float(s[-1])
    cond = s_max / s_min if s_min > 0.0 else float('inf')

    rank = int(np.sum(s > qr_rank_tolerance(n, p) * s_max)) if s_max > 0.0 else 0
    if rank < p:
        raise SingularDesignMatrixError(
            f"X is rank-deficient: rank={rank}, expected={p} "
            f"(condition number {cond:.3g}). This indicates collinear columns.",
            matrix_name='X',
            condition_number=cond,
            rank=rank,
            expected_rank=p,
        )
    return cond


def _condition_warnings(cond: float) -> tuple[str, ...]:
    if cond > CONDITION_WARNING_THRESHOLD:
        return (
            f"{ILL_CONDITIONED_WARNING} (condition number {cond:.3g}); "
            f"coefficients may be inaccurate",
        )
    return ()


def _design_singular(e: SingularMatrixError, cond: float) -> SingularDesignMatrixError:
    return SingularDesignMatrixError(
        str(e),
        matrix_name=e.matrix_name,
        condition_number=cond,
        rank=e.rank,
        expected_rank=e.expected_rank,
    )
