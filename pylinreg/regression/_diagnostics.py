"""
Coefficient diagnostics for a fitted linear model.

Given what the fit produced (coefficients, residuals, residual degrees of
freedom and (X'X)⁻¹) derive:

    σ²      = e'e / df
    Var(β̂j) = σ² [(X'X)⁻¹]jj       diagonal only
    SE(β̂j)  = sqrt(Var(β̂j))
    tj      = β̂j / SE(β̂j)
    pj      = 2 P(T_df > |tj|)

Only the diagonal of σ² (X'X)⁻¹ is kept. Covariances between coefficients
are dropped here and are not available anywhere downstream.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pylinreg.core.exceptions import DegenerateDegreesOfFreedomError


@dataclass(frozen=True)
class CoefficientDiagnostics:
    """Residual variance and per-coefficient inference."""
    residual_variance: float
    coefficient_variances: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_values: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]


def compute_diagnostics(
    coefficients: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    df_residual: int,
    xtx_inv: NDArray[np.floating[Any]],
) -> CoefficientDiagnostics:
    """
    Run the full diagnostics chain.

    Raises:
        DegenerateDegreesOfFreedomError: If df_residual == 0
    """
    sigma_sq = residual_variance(residuals, df_residual, n_parameters=len(coefficients))
    variances = coefficient_variances(sigma_sq, xtx_inv)
    se = np.sqrt(variances)

    # 0/0 (exactly zero coefficient with a perfect fit) stays NaN
    with np.errstate(divide='ignore', invalid='ignore'):
        t = coefficients / se

    return CoefficientDiagnostics(
        residual_variance=sigma_sq,
        coefficient_variances=variances,
        standard_errors=se,
        t_values=t,
        p_values=two_sided_p_values(t, df_residual),
    )


def residual_variance(
    residuals: NDArray[np.floating[Any]],
    df_residual: int,
    *,
    n_parameters: int | None = None,
) -> float:
    """
    σ² = e'e / df.

    Raises:
        DegenerateDegreesOfFreedomError: If df_residual == 0 (n == p)
    """
    if df_residual <= 0:
        n = len(residuals)
        raise DegenerateDegreesOfFreedomError(
            f"Residual degrees of freedom is {df_residual} "
            f"({n} observations, {n_parameters} parameters); "
            f"residual variance is undefined",
            n_observations=n,
            n_parameters=n_parameters,
        )
    return float(residuals @ residuals) / df_residual


def coefficient_variances(
    sigma_sq: float,
    xtx_inv: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Diagonal of σ² (X'X)⁻¹."""
    # Tiny negative round-off on a near-zero diagonal would give NaN SEs
    return np.maximum(sigma_sq * np.diag(xtx_inv), 0.0)


def two_sided_p_values(
    t_values: NDArray[np.floating[Any]],
    df: int,
) -> NDArray[np.floating[Any]]:
    """
    2 P(T_df > |t|) for each t.

    Uses the survival function rather than 1 - cdf so that p-values for
    large |t| don't collapse to exactly 0 through cancellation.
    """
    p = 2.0 * sp_stats.t.sf(np.abs(t_values), df)
    return np.clip(p, 0.0, 1.0)
