"""Tests for IAPWS-IF97 Region 1 (compressed liquid).

Reference values: IAPWS R7-97(2012), Table 5.
"""

import math

import pytest

from steamlang.calculators.inversion import InversionResult
from steamlang.calculators.region1 import Region1Calculator
from steamlang.calculators.region_calculator import RegionCalculator
from steamlang.config import SolverSettings
from steamlang.exceptions import ConvergenceError, RangeViolationError


class TestReferenceValues:
    """Verification points published with the formulation."""

    @pytest.mark.parametrize("pressure_mpa,temperature_k,expected", [
        (3.0, 300.0, 0.115331273e3),
        (80.0, 300.0, 0.184142828e3),
        (3.0, 500.0, 0.975542239e3),
    ])
    def test_enthalpy(self, pressure_mpa, temperature_k, expected):
        h = Region1Calculator.calculate_specific_enthalpy(pressure_mpa, temperature_k)
        assert h == pytest.approx(expected, rel=1e-7)

    @pytest.mark.parametrize("pressure_mpa,temperature_k,expected", [
        (3.0, 300.0, 0.392294792),
        (80.0, 300.0, 0.368563852),
        (3.0, 500.0, 0.258041912e1),
    ])
    def test_entropy(self, pressure_mpa, temperature_k, expected):
        s = Region1Calculator.calculate_specific_entropy(pressure_mpa, temperature_k)
        assert s == pytest.approx(expected, rel=1e-7)

    @pytest.mark.parametrize("pressure_mpa,temperature_k,expected", [
        (3.0, 300.0, 0.100215168e-2),
        (80.0, 300.0, 0.971180894e-3),
        (3.0, 500.0, 0.120241800e-2),
    ])
    def test_specific_volume(self, pressure_mpa, temperature_k, expected):
        v = Region1Calculator.calculate_specific_volume(pressure_mpa, temperature_k)
        assert v == pytest.approx(expected, rel=1e-7)

    @pytest.mark.parametrize("pressure_mpa,temperature_k,expected", [
        (3.0, 300.0, 0.417301218e1),
        (80.0, 300.0, 0.401008987e1),
        (3.0, 500.0, 0.465580682e1),
    ])
    def test_specific_heat_cp(self, pressure_mpa, temperature_k, expected):
        cp = Region1Calculator.calculate_specific_heat_cp(pressure_mpa, temperature_k)
        assert cp == pytest.approx(expected, rel=1e-7)

    def test_density_is_reciprocal_volume(self):
        rho = Region1Calculator.calculate_density(3.0, 300.0)
        v = Region1Calculator.calculate_specific_volume(3.0, 300.0)
        assert rho == pytest.approx(1.0 / v)
        assert rho == pytest.approx(997.85, abs=0.01)


class TestInversion:
    """Temperature recovered from enthalpy, entropy and density."""

    def test_enthalpy_round_trip(self):
        h = Region1Calculator.calculate_specific_enthalpy(3.0, 400.0)
        assert Region1Calculator.invert_temperature_from_enthalpy(3.0, h) == pytest.approx(400.0, abs=1e-3)

    def test_entropy_round_trip(self):
        s = Region1Calculator.calculate_specific_entropy(3.0, 400.0)
        assert Region1Calculator.invert_temperature_from_entropy(3.0, s) == pytest.approx(400.0, abs=1e-3)

    def test_density_round_trip(self):
        rho = Region1Calculator.calculate_density(3.0, 320.0)
        assert Region1Calculator.invert_temperature_from_density(3.0, rho) == pytest.approx(320.0, abs=1e-2)

    def test_full_output(self):
        h = Region1Calculator.calculate_specific_enthalpy(3.0, 400.0)
        result = Region1Calculator.invert_temperature_from_enthalpy(3.0, h, full_output=True)

        assert isinstance(result, InversionResult)
        assert result.converged is True
        assert abs(result.residual) < 1e-6
        assert result.iterations <= 10


class TestInversionBounds:
    """Unreachable targets keep the iterate inside the region and report the residual."""

    def test_unreachable_density(self):
        result = Region1Calculator.invert_temperature_from_density(3.0, 2000.0, full_output=True)

        assert isinstance(result, InversionResult)
        assert result.converged is False
        assert Region1Calculator.INVERSION_MIN_K <= result.value <= Region1Calculator.INVERSION_MAX_K
        assert result.residual == pytest.approx(
            Region1Calculator.calculate_density(3.0, result.value) - 2000.0
        )

    def test_unreachable_enthalpy(self):
        result = Region1Calculator.invert_temperature_from_enthalpy(3.0, 5000.0, full_output=True)

        assert result.converged is False
        assert Region1Calculator.INVERSION_MIN_K <= result.value <= Region1Calculator.INVERSION_MAX_K
        assert math.isfinite(result.residual)

    def test_strict_mode_raises_convergence_error(self):
        settings = SolverSettings(raise_on_nonconvergence=True)

        with pytest.raises(ConvergenceError) as exc_info:
            Region1Calculator.invert_temperature_from_density(3.0, 2000.0, settings=settings)

        last_estimate = exc_info.value.context["last_estimate"]
        assert Region1Calculator.INVERSION_MIN_K <= last_estimate <= Region1Calculator.INVERSION_MAX_K


class TestInputGuard:
    """Fail-fast range checks."""

    def test_is_region_calculator(self):
        assert issubclass(Region1Calculator, RegionCalculator)

    @pytest.mark.parametrize("pressure_mpa,temperature_k", [
        (0.0, 300.0),
        (-1.0, 300.0),
        (3.0, 0.0),
        (3.0, -10.0),
        (math.nan, 300.0),
        (3.0, math.inf),
    ])
    def test_rejects_invalid_state(self, pressure_mpa, temperature_k):
        with pytest.raises(RangeViolationError):
            Region1Calculator.calculate_specific_enthalpy(pressure_mpa, temperature_k)

    def test_error_names_parameter(self):
        with pytest.raises(RangeViolationError) as exc_info:
            Region1Calculator.calculate_specific_volume(-1.0, 300.0)
        assert exc_info.value.context["parameter"] == "pressure_mpa"
