"""Tests for the SteamLang exception hierarchy.

Covers:
- Base exception functionality
- Validation, calculation and configuration branches
- Rich error context
- Exception serialization
- Exception utilities
"""

import json
from datetime import datetime

import pytest

from steamlang.exceptions import (
    CalculationException,
    ConfigurationError,
    ConvergenceError,
    RangeViolationError,
    SaturationDomainError,
    SteamLangException,
    ValidationError,
    format_exception_chain,
)


# ==============================================================================
# Base Exception Tests
# ==============================================================================

class TestSteamLangException:
    """Tests for base SteamLangException."""

    def test_create_basic_exception(self):
        """Can create basic exception with message."""
        exc = SteamLangException("Something went wrong")

        assert exc.message == "Something went wrong"
        assert exc.error_code == "SL_STEAM_LANG_EXCEPTION"
        assert exc.context == {}
        assert isinstance(exc.timestamp, datetime)

    def test_create_exception_with_context(self):
        """Can create exception with explicit code and context."""
        exc = SteamLangException(
            message="Test error",
            error_code="SL_TEST_001",
            context={"key": "value", "count": 42},
        )

        assert exc.error_code == "SL_TEST_001"
        assert exc.context == {"key": "value", "count": 42}

    def test_exception_str_representation(self):
        exc = SteamLangException("Test error", error_code="SL_TEST_001")
        assert str(exc) == "[SL_TEST_001] - Test error"

    def test_exception_repr(self):
        exc = SteamLangException("Test error", error_code="SL_TEST_001")
        assert repr(exc) == "SteamLangException(message='Test error', error_code='SL_TEST_001')"

    def test_to_dict(self):
        exc = SteamLangException("Test error", context={"a": 1})
        data = exc.to_dict()

        assert data["error_type"] == "SteamLangException"
        assert data["error_code"] == exc.error_code
        assert data["message"] == "Test error"
        assert data["context"] == {"a": 1}
        assert data["timestamp"] == exc.timestamp.isoformat()

    def test_to_json(self):
        exc = SteamLangException("Test error", context={"range": (1.0, 2.0)})
        data = json.loads(exc.to_json())

        assert data["message"] == "Test error"
        assert data["context"]["range"] == [1.0, 2.0]

    def test_can_be_raised_and_caught(self):
        with pytest.raises(SteamLangException):
            raise SteamLangException("boom")


# ==============================================================================
# Validation Exception Tests
# ==============================================================================

class TestValidationErrors:
    """Tests for the validation branch."""

    def test_validation_error_code(self):
        exc = ValidationError("bad input")
        assert exc.error_code == "SL_INPUT_VALIDATION_ERROR"

    def test_invalid_fields_in_context(self):
        exc = ValidationError(
            "bad input",
            invalid_fields={"pressure_pa": "must be positive"},
        )
        assert exc.context["invalid_fields"] == {"pressure_pa": "must be positive"}

    def test_range_violation(self):
        exc = RangeViolationError(
            message="Pressure must be positive",
            parameter="pressure_mpa",
            value=-1.0,
        )

        assert isinstance(exc, ValidationError)
        assert exc.error_code == "SL_INPUT_RANGE_VIOLATION_ERROR"
        assert exc.context == {"parameter": "pressure_mpa", "value": -1.0}

    def test_range_violation_keeps_extra_context(self):
        exc = RangeViolationError("bad", parameter="t", value=0.0, context={"unit": "K"})
        assert exc.context == {"unit": "K", "parameter": "t", "value": 0.0}


# ==============================================================================
# Calculation Exception Tests
# ==============================================================================

class TestCalculationErrors:
    """Tests for the calculation branch."""

    def test_saturation_domain_error(self):
        exc = SaturationDomainError(
            message="Input outside valid temperature range for saturation curve",
            temperature_k=700.0,
            valid_range=(273.15, 647.096),
        )

        assert isinstance(exc, CalculationException)
        assert exc.error_code == "SL_CALC_SATURATION_DOMAIN_ERROR"
        assert exc.context["temperature_k"] == 700.0
        assert exc.context["valid_range"] == [273.15, 647.096]
        assert "pressure_pa" not in exc.context

    def test_convergence_error(self):
        exc = ConvergenceError(
            "did not converge",
            iterations=10,
            residual=0.5,
            last_estimate=400.0,
        )

        assert isinstance(exc, CalculationException)
        assert exc.error_code == "SL_CALC_CONVERGENCE_ERROR"
        assert exc.context == {"iterations": 10, "residual": 0.5, "last_estimate": 400.0}

    def test_branches_are_distinct(self):
        assert not issubclass(SaturationDomainError, ValidationError)
        assert not issubclass(RangeViolationError, CalculationException)


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_error_code(self):
        exc = ConfigurationError("bad settings", context={"path": "x.yaml"})
        assert exc.error_code == "SL_CONFIG_CONFIGURATION_ERROR"
        assert isinstance(exc, SteamLangException)


# ==============================================================================
# Utility Tests
# ==============================================================================

class TestFormatExceptionChain:
    """Tests for format_exception_chain."""

    def test_single_exception(self):
        exc = ConvergenceError("did not converge", iterations=3)
        text = format_exception_chain(exc)

        assert "[SL_CALC_CONVERGENCE_ERROR] - did not converge" in text
        assert "'iterations': 3" in text

    def test_chained_exception(self):
        try:
            try:
                raise ValueError("low level")
            except ValueError as e:
                raise ConfigurationError("wrapped") from e
        except ConfigurationError as exc:
            text = format_exception_chain(exc)

        lines = text.splitlines()
        assert lines[0] == "[SL_CONFIG_CONFIGURATION_ERROR] - wrapped"
        assert lines[-1] == "ValueError: low level"
