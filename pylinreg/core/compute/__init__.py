"""
Shared compute infrastructure for pylinreg.

IMPORTANT: This is NOT where regression backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers and singularity thresholds
    linalg: Linear algebra kernels (Cholesky, QR)
"""

from pylinreg.core.compute.timing import Timer

__all__ = [
    "Timer",
]
