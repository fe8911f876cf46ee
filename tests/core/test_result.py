"""
Tests for the Result[P] envelope.

Validates:
    - Generic payloads
    - Frozen immutability
    - Default warnings and has_warning()
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pylinreg.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(value=42.0),
        info={"method": "cholesky"},
        timing={"total_seconds": 0.01},
        backend_name="cpu_cholesky",
    )
    defaults.update(kwargs)
    return Result(**defaults)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _result()
        assert result.params.value == 42.0
        assert result.info["method"] == "cholesky"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_cholesky"

    def test_timing_optional(self):
        assert _result(timing=None).timing is None

    def test_warnings_default_empty(self):
        assert _result().warnings == ()


class TestResultImmutability:

    def test_cannot_replace_params(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=0.0)

    def test_cannot_replace_warnings(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("changed",)


class TestHasWarning:

    def test_substring_match(self):
        result = _result(warnings=("Design matrix is ill-conditioned (condition number 1e+07)",))
        assert result.has_warning("ill-conditioned")
        assert not result.has_warning("singular")

    def test_no_warnings(self):
        assert not _result().has_warning("anything")


class TestConditionNumber:

    def test_read_from_info(self):
        assert _result(info={"condition_number": 12.5}).condition_number == 12.5

    def test_absent(self):
        assert _result().condition_number is None
