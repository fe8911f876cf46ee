"""
Formula to design matrix, via patsy.

Turns ``'y ~ x1 + x2'`` and a dataset into (X, y, column names). This is
the only place formula syntax is interpreted; everything downstream works
on the numeric arrays.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
import numpy as np
import pandas as pd
from numpy.typing import NDArray
from patsy import EvalEnvironment, ModelDesc, PatsyError, dmatrices

from pylinreg.core.datasource import DataSource
from pylinreg.core.exceptions import (
    ValidationError,
    MissingResponseColumnError,
    MalformedDatasetError,
)

# Column names that mark an intercept column
INTERCEPT_NAMES = frozenset({'Intercept', '(Intercept)', 'const'})

# Names visible to formula terms besides the data columns, e.g. np.log(x)
_FORMULA_NAMESPACE = {'np': np}


def build_design(
    formula: str,
    data: DataSource | pd.DataFrame | Mapping[str, Any],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], list[str]]:
    """
    Evaluate a formula against a dataset.

    Args:
        formula: Two-sided formula, e.g. ``'mpg ~ wt + hp'``
        data: DataSource, pandas DataFrame, or mapping of column name to values

    Returns:
        (X, y, names): design matrix, response vector, column names of X

    Raises:
        ValidationError: If the formula is not a string or has no response
        MissingResponseColumnError: If the response column is not in data
        MalformedDatasetError: If patsy cannot build the matrices
    """
    if not isinstance(formula, str):
        raise ValidationError(
            f"formula: expected a string like 'y ~ x', got {type(formula).__name__}"
        )

    frame, available = _as_frame(data)

    try:
        desc = ModelDesc.from_formula(formula)
    except PatsyError as e:
        raise MalformedDatasetError(f"cannot parse formula {formula!r}: {e}") from e

    if not desc.lhs_termlist:
        raise ValidationError(
            f"formula {formula!r} has no response; expected 'response ~ predictors'"
        )

    response = _response_name(desc)
    if response.isidentifier() and response not in available:
        raise MissingResponseColumnError(
            f"response column '{response}' not found in data. "
            f"Available: {sorted(available)}",
            column=response,
            available=available,
        )

    try:
        y_df, X_df = dmatrices(
            formula,
            frame,
            eval_env=EvalEnvironment([_FORMULA_NAMESPACE]),
            return_type='dataframe',
        )
    except PatsyError as e:
        raise MalformedDatasetError(
            f"cannot build design matrix for {formula!r}: {e}"
        ) from e

    if y_df.shape[1] != 1:
        raise MalformedDatasetError(
            f"formula {formula!r} yields {y_df.shape[1]} response columns, expected 1"
        )

    X = X_df.to_numpy(dtype=np.float64)
    y = y_df.iloc[:, 0].to_numpy(dtype=np.float64)
    return X, y, [str(c) for c in X_df.columns]


def _as_frame(data: Any) -> tuple[Any, frozenset[str]]:
    """Something patsy can index by column name, plus the column names."""
    if isinstance(data, DataSource):
        return data.to_dict(), data.keys()
    if isinstance(data, pd.DataFrame):
        return data, frozenset(str(c) for c in data.columns)
    if isinstance(data, Mapping):
        ds = DataSource.from_arrays(**{str(k): v for k, v in data.items()})
        return ds.to_dict(), ds.keys()
    raise MalformedDatasetError(
        f"data: expected DataSource, DataFrame or mapping of columns, "
        f"got {type(data).__name__}"
    )


def _response_name(desc: ModelDesc) -> str:
    """Source text of the (first) left-hand-side factor."""
    term = desc.lhs_termlist[0]
    if not term.factors:
        return ''
    return term.factors[0].name()
