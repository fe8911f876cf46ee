"""
Text output for fitted models.

Pure string builders: nothing here prints. The layout follows R's linreg
print/summary methods, one coefficient per line with space-separated
fields.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
import numpy as np
from numpy.typing import NDArray


def significance_marker(p_value: float) -> str:
    """
    Stars for a p-value.

    The thresholds are tested loosest first and each later hit overwrites
    the earlier one, so the marker reflects the strictest level reached:
    p < 0.10 -> '*', p < 0.05 -> '**', p < 0.01 -> '***'.
    """
    marker = ""
    if p_value < 0.1:
        marker = "*"
    if p_value < 0.05:
        marker = "**"
    if p_value < 0.01:
        marker = "***"
    return marker


def signif(x: float, digits: int) -> float:
    """Round to `digits` significant figures, like R's signif()."""
    x = float(x)
    if x == 0.0 or not np.isfinite(x):
        return x
    return float(f"{x:.{digits - 1}e}")


def format_number(x: float, digits: int = 15) -> str:
    """Shortest text for x with at most `digits` significant figures."""
    x = float(x)
    if np.isnan(x):
        return "NaN"
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.{digits}g}"


def format_header(formula: str, data_name: str) -> str:
    return f"linreg(formula = {formula}, data = {data_name})"


def format_print(
    formula: str,
    data_name: str,
    names: Sequence[str],
    coefficients: NDArray[np.floating[Any]],
) -> str:
    """
    Header, then the parameter names on one line and the coefficients
    (7 significant figures) on the next.
    """
    lines = [
        format_header(formula, data_name),
        "",
        " ".join(names),
        " ".join(format_number(c, 7) for c in coefficients),
    ]
    return "\n".join(lines)


def format_summary(
    formula: str,
    data_name: str,
    names: Sequence[str],
    coefficients: NDArray[np.floating[Any]],
    standard_errors: NDArray[np.floating[Any]],
    t_values: NDArray[np.floating[Any]],
    p_values: NDArray[np.floating[Any]],
    residual_variance: float,
    df_residual: int,
) -> str:
    """
    Header, one row per coefficient, then the residual standard error.

    Row fields: name, estimate (3 s.f.), std. error (3 s.f.),
    t value (4 s.f.), p-value (3 s.f.), significance marker.
    """
    lines = [format_header(formula, data_name), ""]

    for name, coef, se, t, p in zip(names, coefficients, standard_errors, t_values, p_values):
        fields = [
            name,
            format_number(signif(coef, 3)),
            format_number(signif(se, 3)),
            format_number(signif(t, 4)),
            format_number(signif(p, 3)),
            significance_marker(p),
        ]
        lines.append(" ".join(fields).rstrip())

    lines.append("")
    lines.append(
        f"Residual standard error: {format_number(np.sqrt(residual_variance))} "
        f"on {df_residual} degrees of freedom!"
    )
    return "\n".join(lines)
