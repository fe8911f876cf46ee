"""
Backend output envelope.

Every regression backend hands back a Result: the fitted payload plus how
it was obtained. The payload type is generic so the envelope doesn't
depend on the regression package; in practice P is LinearParams.

    params        the numbers (coefficients, residuals, diagnostics)
    info          method, numerical rank, condition number of X
    timing        seconds per solve stage, from Timer
    backend_name  'cpu_cholesky' or 'cpu_qr'
    warnings      non-fatal numerical problems, e.g. ill-conditioning
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable output of one backend solve.

    Examples:
        >>> Result(
        ...     params=LinearParams(...),
        ...     info={'method': 'cholesky', 'rank': 2, 'condition_number': 14.2},
        ...     timing={'total_seconds': 0.001, 'solve': 0.0002},
        ...     backend_name='cpu_cholesky',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def condition_number(self) -> float | None:
        """2-norm condition number of X, if the backend recorded it."""
        return self.info.get('condition_number')

    def has_warning(self, substring: str) -> bool:
        """True if some warning message contains `substring`."""
        return any(substring in w for w in self.warnings)
