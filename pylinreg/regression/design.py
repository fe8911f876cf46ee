"""
Regression Design.

Design holds exactly what the fit engine consumes: the design matrix X,
the response y, one name per column of X, the formula text and the label
of the dataset it came from. Where those came from (a formula over a
DataFrame, a DataSource, raw arrays) is settled here, once.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.datasource import DataSource
from pylinreg.core.exceptions import DimensionError
from pylinreg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
    check_names,
)
from pylinreg.regression._formula import build_design, INTERCEPT_NAMES

if TYPE_CHECKING:
    import pandas as pd

DEFAULT_DATA_NAME = 'data'


@dataclass(frozen=True)
class Design:
    """
    Regression design matrix specification.

    Immutable after construction; X and y are private read-only copies.

    Construction:
        Design.from_formula('mpg ~ wt + hp', df, data_name='mtcars')
        Design.from_datasource(ds, x=['wt', 'hp'], y='mpg')
        Design.from_arrays(X, y, names=['(Intercept)', 'x'])
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...]
    _formula: str
    _data_name: str
    _source: DataSource | None = None

    @classmethod
    def from_formula(
        cls,
        formula: str,
        data: 'DataSource | pd.DataFrame | Mapping[str, ArrayLike]',
        *,
        data_name: str | None = None,
    ) -> Design:
        """
        Build Design from a formula such as ``'y ~ x1 + x2'``.

        An intercept column named ``Intercept`` is included unless the
        formula removes it (``- 1`` or ``0 +``). Rows with missing values
        in any referenced column are dropped.

        Raises:
            ValidationError: If the formula has no response
            MissingResponseColumnError: If the response is not a column of data
            MalformedDatasetError: If the design matrix cannot be built
        """
        X, y, names = build_design(formula, data)
        if data_name is None:
            data_name = data.name if isinstance(data, DataSource) else None
        source = data if isinstance(data, DataSource) else None
        return cls._build(
            X, y,
            names=names,
            formula=formula.strip(),
            data_name=data_name or DEFAULT_DATA_NAME,
            source=source,
        )

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str],
        y: str,
        intercept: bool = True,
    ) -> Design:
        """
        Build Design from named columns of a DataSource.

        Args:
            source: The DataSource
            x: Predictor column(s)
            y: Response column
            intercept: Prepend a column of ones named ``Intercept``
        """
        x_cols = [x] if isinstance(x, str) else list(x)
        y_arr = source[y]
        columns = [source[col] for col in x_cols]
        names = list(x_cols)
        if intercept:
            columns.insert(0, np.ones(source.n_observations))
            names.insert(0, 'Intercept')

        X_arr = np.column_stack(columns) if columns else np.empty((len(y_arr), 0))
        formula = f"{y} ~ {' + '.join(x_cols) if x_cols else '1'}"
        if not intercept:
            formula += " - 1"

        return cls._build(
            X_arr, y_arr,
            names=names,
            formula=formula,
            data_name=source.name or DEFAULT_DATA_NAME,
            source=source,
        )

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        *,
        names: Sequence[str] | None = None,
        formula: str | None = None,
        data_name: str | None = None,
    ) -> Design:
        """
        Build Design directly from a design matrix and response.

        X is used as given: no intercept column is added. Without names the
        columns are called x0, x1, ...; without a formula one is described
        from the names.
        """
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)

        if names is None:
            names = [f"x{j}" for j in range(X_arr.shape[1] if X_arr.ndim == 2 else 0)]
        if formula is None:
            formula = _describe_formula(names)

        return cls._build(
            X_arr, y_arr,
            names=names,
            formula=formula,
            data_name=data_name or DEFAULT_DATA_NAME,
            source=None,
        )

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        *,
        names: Sequence[str],
        formula: str,
        data_name: str,
        source: DataSource | None,
    ) -> Design:
        """Internal builder with validation."""
        X = np.array(X, dtype=np.float64)
        y = np.array(y, dtype=np.float64)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))
        check_min_samples(X, 'X')

        n, p = X.shape
        if p == 0:
            raise DimensionError("X: design matrix has no columns")
        names = check_names(names, p, 'names')

        X.setflags(write=False)
        y.setflags(write=False)
        return cls(
            _X=X, _y=y, _n=n, _p=p,
            _names=names, _formula=formula, _data_name=data_name,
            _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of parameters (columns of X)."""
        return self._p

    @property
    def names(self) -> tuple[str, ...]:
        """Parameter names, one per column of X."""
        return self._names

    @property
    def formula(self) -> str:
        return self._formula

    @property
    def data_name(self) -> str:
        return self._data_name

    @property
    def source(self) -> DataSource | None:
        """Original DataSource, if available."""
        return self._source

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X."""
        return self._X.T @ self._X

    def Xty(self) -> NDArray[np.floating[Any]]:
        """Compute X'y."""
        return self._X.T @ self._y


def _describe_formula(names: Sequence[str]) -> str:
    """Formula text for a matrix given as-is: intercept only if a column says so."""
    names = [names] if isinstance(names, str) else list(names)
    terms = [n for n in names if n not in INTERCEPT_NAMES]
    if not terms:
        return "y ~ 1" if names else "y ~ 0"
    rhs = " + ".join(terms)
    if len(terms) == len(names):
        rhs = "0 + " + rhs
    return f"y ~ {rhs}"
