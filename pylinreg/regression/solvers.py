"""
Solver dispatch for regression.

This module provides the fit() function (public API) and backend selection.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal
import warnings

from numpy.typing import ArrayLike

from pylinreg.core.protocols import Backend
from pylinreg.regression.design import Design
from pylinreg.regression.solution import LinearSolution, LinearParams
from pylinreg.regression.backends.cpu import CPUCholeskyBackend, CPUQRBackend


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_cholesky', 'cpu_qr']


def fit(
    formula_or_X: str | Design | ArrayLike,
    data_or_y: object = None,
    *,
    names: Sequence[str] | None = None,
    formula: str | None = None,
    data_name: str | None = None,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model by ordinary least squares.

    Solves the normal equations (X'X) β = X'y in closed form and derives
    residual variance, standard errors, t-values and p-values.

    Three ways to call it:

        fit('mpg ~ wt + hp', df, data_name='mtcars')   # formula + dataset
        fit(X, y, names=[...], formula=..., data_name=...)  # prebuilt arrays
        fit(design)                                     # prebuilt Design

    Args:
        formula_or_X: Formula string, design matrix (n x p), or Design
        data_or_y: Dataset for a formula (DataFrame, DataSource or mapping
            of columns), or the response vector for a design matrix
        names: Parameter names, one per column of X (arrays only)
        formula: Formula text shown in output (arrays only)
        data_name: Dataset label shown in output
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_cholesky': Cholesky of X'X
            - 'cpu_qr': QR decomposition of X

    Returns:
        LinearSolution with coefficients, diagnostics, print/summary text
        and diagnostic plots

    Raises:
        ValidationError: If inputs are invalid
        DimensionMismatchError: If there are fewer observations than parameters
        MissingResponseColumnError: If the formula's response isn't in the data
        MalformedDatasetError: If the dataset can't produce a design matrix
        SingularDesignMatrixError: If X'X is singular or nearly so
        DegenerateDegreesOfFreedomError: If n == p

    Example:
        >>> import pandas as pd
        >>> from pylinreg.regression import fit
        >>>
        >>> df = pd.DataFrame({'x': [1, 2, 3, 4], 'y': [2.1, 3.9, 6.2, 7.8]})
        >>> result = fit('y ~ x', df, data_name='df')
        >>> print(result.summary())
    """
    backend_impl = _get_backend(backend)

    if isinstance(formula_or_X, Design):
        if data_or_y is not None or names is not None or formula is not None:
            raise ValueError("fit(design) takes no y, names or formula")
        design = formula_or_X
    elif isinstance(formula_or_X, str):
        if data_or_y is None:
            raise ValueError("data required when fitting a formula")
        if names is not None or formula is not None:
            raise ValueError("names and formula come from the formula itself")
        design = Design.from_formula(formula_or_X, data_or_y, data_name=data_name)
    else:
        if data_or_y is None:
            raise ValueError("y required when X is an array")
        design = Design.from_arrays(
            formula_or_X, data_or_y,
            names=names, formula=formula, data_name=data_name,
        )

    result = backend_impl.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return LinearSolution(_result=result, _design=design)


def _get_backend(choice: BackendChoice) -> Backend[Design, LinearParams]:
    """
    Instantiate the requested backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_cholesky'):
        return CPUCholeskyBackend()

    elif choice == 'cpu_qr':
        return CPUQRBackend()

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
