"""
pylinreg: ordinary least squares regression with R-style output.

Fits a linear model from a formula and a dataset by solving the normal
equations, and reports coefficients, standard errors, t-values and
p-values in the layout of R's linreg class.

Submodules:
    regression: fit(), Design, LinearSolution, diagnostic plots
    core: DataSource, Result, exceptions, linear algebra kernels
"""

__version__ = "0.1.0"

from pylinreg.core.datasource import DataSource
from pylinreg import regression
from pylinreg.regression import fit

__all__ = [
    "__version__",
    "DataSource",
    "regression",
    "fit",
]
