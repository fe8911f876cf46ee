"""
Tests for Design construction.

Covers the three construction routes (formula, DataSource columns, raw
arrays), the patsy formula layer and the failures each route reports.
"""

import numpy as np
import pandas as pd
import pytest

from pylinreg import DataSource
from pylinreg.core.exceptions import (
    DimensionError,
    DimensionMismatchError,
    MalformedDatasetError,
    MissingResponseColumnError,
    ValidationError,
)
from pylinreg.regression import Design
from pylinreg.regression._formula import build_design


# ═══════════════════════════════════════════════════════════════════════
# Formula
# ═══════════════════════════════════════════════════════════════════════


class TestFromFormula:

    def test_intercept_added(self, line_data):
        design = Design.from_formula('y ~ x', line_data)
        assert design.names == ('Intercept', 'x')
        np.testing.assert_array_equal(design.X[:, 0], 1.0)
        np.testing.assert_array_equal(design.y, [2.0, 4.0, 6.0])

    @pytest.mark.parametrize("formula", ['y ~ x - 1', 'y ~ 0 + x'])
    def test_intercept_removed(self, line_data, formula):
        design = Design.from_formula(formula, line_data)
        assert design.names == ('x',)
        assert design.X.shape == (3, 1)

    def test_formula_text_kept(self, line_data):
        assert Design.from_formula('  y ~ x ', line_data).formula == 'y ~ x'

    def test_transform_with_numpy(self, line_data):
        design = Design.from_formula('y ~ np.log(x)', line_data)
        assert design.names == ('Intercept', 'np.log(x)')
        np.testing.assert_allclose(design.X[:, 1], np.log([1.0, 2.0, 3.0]))

    def test_dataframe_input(self):
        df = pd.DataFrame({'mpg': [21.0, 22.8, 18.7, 18.1], 'wt': [2.6, 2.3, 3.4, 3.5]})
        design = Design.from_formula('mpg ~ wt', df, data_name='mtcars')
        assert design.data_name == 'mtcars'
        assert design.n == 4
        assert design.source is None

    def test_datasource_input_keeps_source(self, line_data):
        ds = DataSource.from_arrays(name='pts', **line_data)
        design = Design.from_formula('y ~ x', ds)
        assert design.data_name == 'pts'
        assert design.source is ds

    def test_default_data_name(self, line_data):
        assert Design.from_formula('y ~ x', line_data).data_name == 'data'

    def test_missing_response(self, line_data):
        with pytest.raises(MissingResponseColumnError) as exc_info:
            Design.from_formula('z ~ x', line_data)
        assert exc_info.value.column == 'z'
        assert exc_info.value.available == ('x', 'y')

    def test_missing_response_dataframe(self):
        df = pd.DataFrame({'a': [1.0, 2.0, 3.0]})
        with pytest.raises(MissingResponseColumnError):
            Design.from_formula('b ~ a', df)

    def test_unknown_predictor(self, line_data):
        with pytest.raises(MalformedDatasetError, match="cannot build design matrix"):
            Design.from_formula('y ~ w', line_data)

    def test_no_response(self, line_data):
        with pytest.raises(ValidationError, match="has no response"):
            Design.from_formula('~ x', line_data)

    def test_unparseable(self, line_data):
        with pytest.raises(MalformedDatasetError, match="cannot parse formula"):
            Design.from_formula('y ~ ~ (x', line_data)

    def test_formula_not_string(self, line_data):
        with pytest.raises(ValidationError, match="expected a string"):
            build_design(42, line_data)

    def test_unequal_column_lengths(self):
        with pytest.raises(MalformedDatasetError, match="unequal lengths"):
            Design.from_formula('y ~ x', {'x': [1.0, 2.0, 3.0], 'y': [1.0, 2.0]})

    def test_unsupported_data_type(self):
        with pytest.raises(MalformedDatasetError, match="got list"):
            Design.from_formula('y ~ x', [[1.0, 2.0]])

    def test_fewer_rows_than_columns(self):
        data = {'y': [1.0, 2.0], 'a': [1.0, 3.0], 'b': [2.0, 5.0]}
        with pytest.raises(DimensionMismatchError):
            Design.from_formula('y ~ a + b', data)


# ═══════════════════════════════════════════════════════════════════════
# DataSource columns
# ═══════════════════════════════════════════════════════════════════════


class TestFromDataSource:

    def test_with_intercept(self, line_data):
        ds = DataSource.from_arrays(name='pts', **line_data)
        design = Design.from_datasource(ds, x='x', y='y')
        assert design.names == ('Intercept', 'x')
        assert design.formula == 'y ~ x'
        assert design.data_name == 'pts'

    def test_without_intercept(self, line_data):
        ds = DataSource.from_arrays(**line_data)
        design = Design.from_datasource(ds, x=['x'], y='y', intercept=False)
        assert design.names == ('x',)
        assert design.formula == 'y ~ x - 1'

    def test_missing_column_is_key_error(self, line_data):
        ds = DataSource.from_arrays(**line_data)
        with pytest.raises(KeyError):
            Design.from_datasource(ds, x='w', y='y')


# ═══════════════════════════════════════════════════════════════════════
# Arrays
# ═══════════════════════════════════════════════════════════════════════


class TestFromArrays:

    def test_default_names_and_formula(self):
        design = Design.from_arrays([[1.0, 2.0], [3.0, 4.0], [5.0, 7.0]], [1.0, 2.0, 3.0])
        assert design.names == ('x0', 'x1')
        assert design.formula == 'y ~ 0 + x0 + x1'
        assert design.data_name == 'data'

    def test_intercept_name_in_formula(self):
        X = np.column_stack([np.ones(3), [1.0, 2.0, 4.0]])
        design = Design.from_arrays(X, [1.0, 2.0, 3.0], names=['(Intercept)', 'dose'])
        assert design.formula == 'y ~ dose'

    def test_intercept_only_formula(self):
        design = Design.from_arrays(np.ones(3), [1.0, 2.0, 3.0], names=['Intercept'])
        assert design.formula == 'y ~ 1'
        assert design.p == 1

    def test_explicit_formula(self):
        design = Design.from_arrays(
            np.ones((3, 1)), [1.0, 2.0, 3.0], names=['c'], formula='resp ~ c', data_name='d'
        )
        assert design.formula == 'resp ~ c'
        assert design.data_name == 'd'

    def test_1d_x_reshaped(self):
        assert Design.from_arrays([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]).X.shape == (3, 1)

    def test_column_y_flattened(self):
        design = Design.from_arrays(np.ones((3, 1)), [[1.0], [2.0], [3.0]])
        assert design.y.shape == (3,)

    def test_arrays_copied_and_read_only(self):
        X = np.ones((3, 1))
        y = np.array([1.0, 2.0, 3.0])
        design = Design.from_arrays(X, y)
        X[0, 0] = 99.0
        assert design.X[0, 0] == 1.0
        with pytest.raises(ValueError):
            design.y[0] = 0.0

    def test_normal_equation_parts(self, simple_regression_data):
        X, y, _ = simple_regression_data
        design = Design.from_arrays(X, y)
        np.testing.assert_allclose(design.XtX(), X.T @ X)
        np.testing.assert_allclose(design.Xty(), X.T @ y)

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            Design.from_arrays(np.ones((3, 1)), [1.0, 2.0])

    def test_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            Design.from_arrays(np.ones((3, 1)), [1.0, np.nan, 3.0])

    def test_wrong_name_count(self):
        with pytest.raises(DimensionError, match="expected 2 names"):
            Design.from_arrays(np.ones((3, 2)), [1.0, 2.0, 3.0], names=['a'])

    def test_no_columns(self):
        with pytest.raises(DimensionError, match="no columns"):
            Design.from_arrays(np.empty((3, 0)), [1.0, 2.0, 3.0])

    def test_fewer_rows_than_columns(self):
        with pytest.raises(DimensionMismatchError):
            Design.from_arrays(np.ones((2, 3)), [1.0, 2.0])
