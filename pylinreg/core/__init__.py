"""
Core infrastructure for pylinreg.

Shared abstractions used by the regression module.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Tabular dataset (named numeric columns)
    compute: Timing, tolerances, linear algebra kernels
"""

from pylinreg.core.result import Result
from pylinreg.core.protocols import Backend
from pylinreg.core.datasource import DataSource
from pylinreg.core.exceptions import (
    PyLinregError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    MissingResponseColumnError,
    MalformedDatasetError,
    NumericalError,
    SingularMatrixError,
    SingularDesignMatrixError,
    DegenerateDegreesOfFreedomError,
)

__all__ = [
    # Protocols and result
    "Backend",
    "Result",
    # Data
    "DataSource",
    # Exceptions
    "PyLinregError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "MissingResponseColumnError",
    "MalformedDatasetError",
    "NumericalError",
    "SingularMatrixError",
    "SingularDesignMatrixError",
    "DegenerateDegreesOfFreedomError",
]
