"""
Regression backends.

Available backends:
    CPUCholeskyBackend: normal equations via Cholesky of X'X (default)
    CPUQRBackend: least squares via QR decomposition of X
"""

from pylinreg.regression.backends.cpu import CPUCholeskyBackend, CPUQRBackend

__all__ = [
    "CPUCholeskyBackend",
    "CPUQRBackend",
]
