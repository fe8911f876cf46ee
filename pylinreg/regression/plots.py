"""
Diagnostic plots for linear models.

Two plots, described as data:

    1. Residuals vs Fitted, with a line through the median residual at
       each distinct fitted value.
    2. Scale-Location: sqrt(|e| / σ) against fitted values, with a line
       through the mean at each distinct fitted value.

A PlotDescriptor carries points, aesthetics, overlay and title and has no
drawing logic. render() draws one with matplotlib, which is an optional
dependency (``pip install pylinreg[plot]``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TYPE_CHECKING
import numpy as np
import pandas as pd
from numpy.typing import NDArray

if TYPE_CHECKING:
    from matplotlib.axes import Axes

RESIDUALS_VS_FITTED_TITLE = "Residuals vs Fitted"
SCALE_LOCATION_TITLE = "Sqrt Standardized residuals vs Fitted"


@dataclass(frozen=True)
class PointAesthetics:
    """How the scatter points are drawn: open circles of size 3."""
    shape: str = 'open_circle'
    size: float = 3.0


@dataclass(frozen=True)
class Overlay:
    """
    A summary line over the scatter.

    `x` holds the distinct x values in increasing order and `y` the
    summary statistic of the points sharing each x.
    """
    stat: Literal['median', 'mean']
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    geom: str = 'line'
    color: str = 'red'


@dataclass(frozen=True)
class PlotDescriptor:
    """Everything needed to draw one diagnostic plot."""
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    x_label: str
    y_label: str
    overlay: Overlay
    title: str
    points: PointAesthetics = field(default_factory=PointAesthetics)


def summarize_by_x(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    stat: Literal['median', 'mean'],
) -> Overlay:
    """Aggregate y over each distinct x."""
    if stat not in ('median', 'mean'):
        raise ValueError(f"Unknown summary statistic: {stat!r}")
    grouped = pd.Series(np.asarray(y, dtype=np.float64)).groupby(
        np.asarray(x, dtype=np.float64), sort=True
    ).agg(stat)
    return Overlay(
        stat=stat,
        x=grouped.index.to_numpy(dtype=np.float64),
        y=grouped.to_numpy(dtype=np.float64),
    )


def residuals_vs_fitted(
    fitted_values: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
) -> PlotDescriptor:
    fitted = np.asarray(fitted_values, dtype=np.float64)
    resid = np.asarray(residuals, dtype=np.float64)
    return PlotDescriptor(
        x=fitted,
        y=resid,
        x_label='Fitted values',
        y_label='Residuals',
        overlay=summarize_by_x(fitted, resid, 'median'),
        title=RESIDUALS_VS_FITTED_TITLE,
    )


def scale_location(
    fitted_values: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    residual_variance: float,
) -> PlotDescriptor:
    fitted = np.asarray(fitted_values, dtype=np.float64)
    # A perfect fit has σ = 0; the points are then undefined (NaN)
    with np.errstate(divide='ignore', invalid='ignore'):
        standardized = np.abs(np.asarray(residuals, dtype=np.float64)) / np.sqrt(residual_variance)
    y = np.sqrt(standardized)
    return PlotDescriptor(
        x=fitted,
        y=y,
        x_label='Fitted values',
        y_label='sqrt(|Standardized residuals|)',
        overlay=summarize_by_x(fitted, y, 'mean'),
        title=SCALE_LOCATION_TITLE,
    )


def diagnostic_plots(
    fitted_values: NDArray[np.floating[Any]],
    residuals: NDArray[np.floating[Any]],
    residual_variance: float,
) -> tuple[PlotDescriptor, PlotDescriptor]:
    """Residuals vs Fitted first, Scale-Location second."""
    return (
        residuals_vs_fitted(fitted_values, residuals),
        scale_location(fitted_values, residuals, residual_variance),
    )


def render(descriptor: PlotDescriptor, ax: 'Axes | None' = None) -> 'Axes':
    """
    Draw a PlotDescriptor with matplotlib.

    Args:
        descriptor: What to draw
        ax: Axes to draw on; a new figure is created if None

    Returns:
        The Axes drawn on

    Raises:
        ImportError: If matplotlib is not installed
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "render() requires matplotlib. Install with: pip install pylinreg[plot]"
        ) from e

    if ax is None:
        _, ax = plt.subplots()

    ax.scatter(
        descriptor.x,
        descriptor.y,
        s=descriptor.points.size ** 2 * 4,
        facecolors='none' if descriptor.points.shape == 'open_circle' else 'black',
        edgecolors='black',
    )
    overlay = descriptor.overlay
    ax.plot(overlay.x, overlay.y, color=overlay.color, label=overlay.stat)
    ax.set_xlabel(descriptor.x_label)
    ax.set_ylabel(descriptor.y_label)
    ax.set_title(descriptor.title)
    return ax
