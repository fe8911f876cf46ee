"""
Tests for diagnostic plot descriptors and matplotlib rendering.
"""

import numpy as np
import pytest

from pylinreg.regression import Overlay, PlotDescriptor, PointAesthetics, render
from pylinreg.regression.plots import (
    diagnostic_plots,
    residuals_vs_fitted,
    scale_location,
    summarize_by_x,
)


class TestSummarizeByX:

    def test_median_per_distinct_x(self):
        overlay = summarize_by_x(
            np.array([2.0, 1.0, 1.0, 1.0, 2.0]),
            np.array([5.0, 1.0, 3.0, 10.0, 7.0]),
            'median',
        )
        np.testing.assert_array_equal(overlay.x, [1.0, 2.0])
        np.testing.assert_array_equal(overlay.y, [3.0, 6.0])
        assert overlay.stat == 'median'

    def test_mean_per_distinct_x(self):
        overlay = summarize_by_x(
            np.array([1.0, 1.0, 3.0]), np.array([1.0, 2.0, 4.0]), 'mean'
        )
        np.testing.assert_array_equal(overlay.x, [1.0, 3.0])
        np.testing.assert_array_equal(overlay.y, [1.5, 4.0])

    def test_unknown_stat(self):
        with pytest.raises(ValueError, match="Unknown summary statistic"):
            summarize_by_x(np.zeros(2), np.zeros(2), 'mode')


class TestDescriptors:

    def test_order_and_titles(self):
        first, second = diagnostic_plots(
            np.array([1.0, 2.0, 3.0]), np.array([0.5, -1.0, 0.5]), 1.0
        )
        assert first.title == "Residuals vs Fitted"
        assert second.title == "Sqrt Standardized residuals vs Fitted"

    def test_residuals_vs_fitted(self):
        fitted = np.array([1.0, 2.0, 3.0])
        resid = np.array([0.5, -1.0, 0.5])
        plot = residuals_vs_fitted(fitted, resid)
        np.testing.assert_array_equal(plot.x, fitted)
        np.testing.assert_array_equal(plot.y, resid)
        assert plot.overlay.stat == 'median'
        assert plot.x_label == 'Fitted values'

    def test_scale_location_values(self):
        resid = np.array([2.0, -8.0, 0.0])
        plot = scale_location(np.array([1.0, 2.0, 3.0]), resid, 4.0)
        np.testing.assert_allclose(plot.y, np.sqrt(np.abs(resid) / 2.0))
        assert plot.overlay.stat == 'mean'

    def test_scale_location_perfect_fit(self):
        plot = scale_location(np.array([1.0, 2.0]), np.zeros(2), 0.0)
        assert np.all(np.isnan(plot.y))

    def test_overlay_style(self):
        plot = residuals_vs_fitted(np.array([1.0, 2.0]), np.array([0.1, -0.1]))
        assert plot.overlay.geom == 'line'
        assert plot.overlay.color == 'red'

    def test_point_aesthetics(self):
        plot = residuals_vs_fitted(np.array([1.0, 2.0]), np.array([0.1, -0.1]))
        assert plot.points == PointAesthetics(shape='open_circle', size=3.0)

    def test_descriptor_has_no_drawing(self):
        overlay = Overlay(stat='mean', x=np.zeros(1), y=np.zeros(1))
        descriptor = PlotDescriptor(
            x=np.zeros(1), y=np.zeros(1), x_label='a', y_label='b',
            overlay=overlay, title='t',
        )
        assert descriptor.points.shape == 'open_circle'


class TestRender:

    def test_draws_on_axes(self):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        plot = residuals_vs_fitted(np.array([1.0, 2.0, 2.0]), np.array([0.1, -0.2, 0.1]))
        ax = render(plot)
        assert ax.get_title() == "Residuals vs Fitted"
        assert ax.get_xlabel() == "Fitted values"
        assert len(ax.lines) == 1
        plt.close(ax.figure)

    def test_uses_given_axes(self):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots()
        plot = scale_location(np.array([1.0, 2.0]), np.array([0.5, -0.5]), 1.0)
        assert render(plot, ax=ax) is ax
        plt.close(fig)
