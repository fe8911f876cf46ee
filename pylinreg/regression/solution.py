"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, TYPE_CHECKING
import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pylinreg.core.compute.tolerances import ILL_CONDITIONED_WARNING
from pylinreg.core.result import Result
from pylinreg.regression import _format
from pylinreg.regression.plots import PlotDescriptor, diagnostic_plots

if TYPE_CHECKING:
    from pylinreg.regression.design import Design


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends. Every array is made
    read-only on construction.
    """
    coefficients: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    df_residual: int
    rss: float
    residual_variance: float
    coefficient_variances: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_values: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                value.setflags(write=False)


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and the Design it was fitted on. Everything
    is computed before construction; nothing here is lazy or cached.
    """
    _result: Result[LinearParams]
    _design: 'Design'

    # === Model ===

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def df_residual(self) -> int:
        """Residual degrees of freedom, n - p."""
        return self._result.params.df_residual

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def residual_variance(self) -> float:
        """σ² = RSS / df."""
        return self._result.params.residual_variance

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.residual_variance))

    @property
    def coefficient_variances(self) -> NDArray[np.floating[Any]]:
        """Diagonal of σ² (X'X)⁻¹. Off-diagonal covariances are not kept."""
        return self._result.params.coefficient_variances

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        return self._result.params.standard_errors

    @property
    def t_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_values

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values against Student's t with df_residual degrees of freedom."""
        return self._result.params.p_values

    # === Labels ===

    @property
    def names(self) -> tuple[str, ...]:
        return self._design.names

    @property
    def formula(self) -> str:
        return self._design.formula

    @property
    def data_name(self) -> str:
        return self._design.data_name

    @property
    def n_observations(self) -> int:
        return self._design.n

    # === Metadata ===

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def condition_number(self) -> float | None:
        return self._result.condition_number

    @property
    def ill_conditioned(self) -> bool:
        """True if cond(X) exceeded the warning threshold during the fit."""
        return self._result.has_warning(ILL_CONDITIONED_WARNING)

    # === Accessors ===

    def coef(self) -> pd.Series:
        """Coefficients indexed by parameter name."""
        return pd.Series(self.coefficients, index=list(self.names), name='coefficients')

    def resid(self) -> NDArray[np.floating[Any]]:
        return self.residuals

    def pred(self) -> NDArray[np.floating[Any]]:
        return self.fitted_values

    # === Presentation ===

    def print_string(self) -> str:
        """Formula, dataset, parameter names and coefficients."""
        return _format.format_print(
            self.formula, self.data_name, self.names, self.coefficients
        )

    def summary(self) -> str:
        """Coefficient table with significance markers and residual standard error."""
        return _format.format_summary(
            self.formula,
            self.data_name,
            self.names,
            self.coefficients,
            self.standard_errors,
            self.t_values,
            self.p_values,
            self.residual_variance,
            self.df_residual,
        )

    def plot(self) -> tuple[PlotDescriptor, PlotDescriptor]:
        """Residuals vs Fitted, then Scale-Location."""
        return diagnostic_plots(
            self.fitted_values, self.residuals, self.residual_variance
        )

    def __str__(self) -> str:
        return self.print_string()

    def __repr__(self) -> str:
        return (
            f"LinearSolution(formula={self.formula!r}, data={self.data_name!r}, "
            f"n={self._design.n}, p={self._design.p}, df={self.df_residual})"
        )
