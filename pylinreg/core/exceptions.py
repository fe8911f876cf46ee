"""
Exception hierarchy for pylinreg.

All exceptions inherit from PyLinregError to allow catching any
library-specific error. Each failure condition of model construction has
its own class so callers can tell them apart without parsing messages.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from collections.abc import Iterable


class PyLinregError(Exception):
    """Base exception for all pylinreg errors."""
    pass


class ValidationError(PyLinregError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DimensionMismatchError(DimensionError):
    """
    Fewer observations than parameters.

    Raised before any matrix solve is attempted when the design matrix
    has n < p, which would make the degrees of freedom negative.

    Attributes:
        n_observations: Number of rows in the design matrix
        n_parameters: Number of columns in the design matrix
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_parameters: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_parameters = n_parameters


class MissingResponseColumnError(ValidationError):
    """
    The response variable named by the formula is not in the dataset.

    Attributes:
        column: The response column that was looked up
        available: Column names the dataset does provide
    """

    def __init__(
        self,
        message: str,
        column: str | None = None,
        available: Iterable[str] | None = None,
    ):
        super().__init__(message)
        self.column = column
        self.available = tuple(sorted(available)) if available is not None else None


class MalformedDatasetError(ValidationError):
    """
    The dataset cannot be turned into a design matrix.

    Raised for unequal column lengths, non-numeric columns, unknown
    predictor names and similar problems found while building X and y.
    """
    pass


class NumericalError(PyLinregError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the number of parameters)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class SingularDesignMatrixError(SingularMatrixError):
    """
    X'X of a regression design is not invertible.

    Typical causes are perfectly collinear predictors or a predictor
    without variation next to an intercept column.
    """
    pass


class DegenerateDegreesOfFreedomError(NumericalError):
    """
    Residual degrees of freedom are zero.

    With n == p the model interpolates the data exactly and the residual
    variance (RSS / df) is undefined. Raised instead of returning NaN.

    Attributes:
        n_observations: Number of observations
        n_parameters: Number of parameters
    """

    def __init__(
        self,
        message: str,
        n_observations: int | None = None,
        n_parameters: int | None = None,
    ):
        super().__init__(message)
        self.n_observations = n_observations
        self.n_parameters = n_parameters
