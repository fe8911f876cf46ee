"""
Ordinary least squares linear regression.

Public API:
    fit(formula, data) -> LinearSolution
    fit(X, y, names=..., formula=..., data_name=...) -> LinearSolution

The fit() function is the only entry point. It handles:
    - Input validation and design construction (formula or arrays)
    - Backend selection
    - Diagnostics (σ², standard errors, t-values, p-values)
    - Result wrapping

Example:
    >>> from pylinreg.regression import fit
    >>> result = fit('y ~ x', {'x': [1, 2, 3], 'y': [2, 4, 6]})
    >>> result.coef()
    >>> print(result.summary())
    >>> resid_plot, scale_plot = result.plot()
"""

from pylinreg.regression.design import Design
from pylinreg.regression.solution import LinearSolution, LinearParams
from pylinreg.regression.plots import PlotDescriptor, Overlay, PointAesthetics, render
from pylinreg.regression._format import significance_marker
from pylinreg.regression.solvers import fit

__all__ = [
    "fit",
    "Design",
    "LinearSolution",
    "LinearParams",
    "PlotDescriptor",
    "Overlay",
    "PointAesthetics",
    "render",
    "significance_marker",
]
