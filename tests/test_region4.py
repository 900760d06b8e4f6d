"""Tests for IAPWS-IF97 Region 4 (saturation curve).

Reference values: IAPWS R7-97(2012), Tables 35 and 36.
"""

import numpy as np
import pytest

from steamlang.calculators.inversion import InversionResult
from steamlang.calculators.region4 import Region4Calculator, saturation_pressure_mpa
from steamlang.exceptions import SaturationDomainError


class TestSaturationPressure:
    """Backward equation p_sat(T)."""

    @pytest.mark.parametrize("temperature_k,expected_mpa", [
        (300.0, 0.353658941e-2),
        (500.0, 0.263889776e1),
        (600.0, 0.123443146e2),
    ])
    def test_reference_values(self, temperature_k, expected_mpa):
        assert saturation_pressure_mpa(temperature_k) == pytest.approx(expected_mpa, rel=1e-7)

    def test_celsius_to_pascal_boundary(self):
        assert Region4Calculator.saturation_pressure(300.0 - 273.15) == pytest.approx(3536.58941, rel=1e-7)

    def test_normal_boiling_point(self):
        assert Region4Calculator.saturation_pressure(100.0) == pytest.approx(101418.0, abs=1.0)

    def test_strictly_increasing(self):
        temperatures = np.linspace(0.0, 373.9, 400)
        pressures = np.array([Region4Calculator.saturation_pressure(t) for t in temperatures])
        assert np.all(np.diff(pressures) > 0)

    def test_critical_point(self):
        assert saturation_pressure_mpa(647.096) == pytest.approx(22.064, rel=1e-4)

    @pytest.mark.parametrize("temperature_c", [-0.01, -50.0, 373.95, 500.0])
    def test_outside_band_raises(self, temperature_c):
        with pytest.raises(SaturationDomainError) as exc_info:
            Region4Calculator.saturation_pressure(temperature_c)
        assert exc_info.value.context["valid_range"] == [273.15, 647.096]

    def test_bounds(self):
        t_min, t_max = Region4Calculator.saturation_temperature_bounds()
        assert t_min == pytest.approx(0.0)
        assert t_max == pytest.approx(373.946)

        p_min, p_max = Region4Calculator.saturation_pressure_bounds()
        assert p_min == pytest.approx(611.2, abs=0.1)
        assert p_max == pytest.approx(22.064e6, rel=1e-4)


class TestSaturationTemperature:
    """Newton-Raphson inversion T_sat(p)."""

    def test_atmospheric(self):
        assert Region4Calculator.invert_saturation_temperature(101325.0) == pytest.approx(99.974, abs=1e-3)

    def test_reference_near_seed(self):
        result = Region4Calculator.invert_saturation_temperature(0.1e6, full_output=True)

        assert isinstance(result, InversionResult)
        assert result.value == pytest.approx(372.755919 - 273.15, abs=1e-5)
        assert result.converged is True

    @pytest.mark.parametrize("pressure_pa,expected_k", [
        (1.0e6, 453.035632),
        (10.0e6, 584.149488),
    ])
    def test_reference_far_from_seed(self, pressure_pa, expected_k, wide_settings):
        result = Region4Calculator.invert_saturation_temperature(
            pressure_pa, full_output=True, settings=wide_settings
        )
        assert result.value == pytest.approx(expected_k - 273.15, abs=1e-5)
        assert result.converged is True

    def test_near_triple_point_reports_converged(self):
        result = Region4Calculator.invert_saturation_temperature(611.3, full_output=True)

        assert result.converged is True
        assert abs(result.residual) < 1e-6

    def test_round_trip(self):
        pressure_pa = Region4Calculator.saturation_pressure(120.0)
        assert Region4Calculator.invert_saturation_temperature(pressure_pa) == pytest.approx(120.0, abs=1e-3)

    @pytest.mark.parametrize("pressure_pa", [100.0, 25.0e6])
    def test_pressure_outside_curve_raises(self, pressure_pa):
        with pytest.raises(SaturationDomainError) as exc_info:
            Region4Calculator.invert_saturation_temperature(pressure_pa)
        assert exc_info.value.context["pressure_pa"] == pressure_pa


class TestSaturatedEnthalpy:
    """Empirical fit versus IAPWS delegation."""

    def test_empirical_liquid(self):
        assert Region4Calculator.calculate_saturated_liquid_enthalpy(0.0) == pytest.approx(419.0)
        assert Region4Calculator.calculate_saturated_liquid_enthalpy(200.0) == pytest.approx(1255.0)

    def test_empirical_vapor(self):
        assert Region4Calculator.calculate_saturated_vapor_enthalpy(0.0) == pytest.approx(2919.0)
        assert Region4Calculator.calculate_saturated_vapor_enthalpy(200.0) == pytest.approx(-245.0)

    def test_iapws_at_boiling_point(self):
        assert Region4Calculator.calculate_saturated_liquid_enthalpy_iapws(100.0) == pytest.approx(419.1, abs=0.5)
        assert Region4Calculator.calculate_saturated_vapor_enthalpy_iapws(100.0) == pytest.approx(2675.6, abs=0.5)

    @pytest.mark.parametrize("temperature_c,expected_margin", [
        (0.0, 419.0),
        (200.0, 403.0),
    ])
    def test_liquid_margin(self, temperature_c, expected_margin):
        margin = (
            Region4Calculator.calculate_saturated_liquid_enthalpy(temperature_c)
            - Region4Calculator.calculate_saturated_liquid_enthalpy_iapws(temperature_c)
        )
        assert margin == pytest.approx(expected_margin, abs=1.5)

    @pytest.mark.parametrize("temperature_c,expected_margin", [
        (0.0, 418.0),
        (200.0, -3037.0),
    ])
    def test_vapor_margin(self, temperature_c, expected_margin):
        margin = (
            Region4Calculator.calculate_saturated_vapor_enthalpy(temperature_c)
            - Region4Calculator.calculate_saturated_vapor_enthalpy_iapws(temperature_c)
        )
        assert margin == pytest.approx(expected_margin, abs=2.0)

    def test_iapws_outside_band_raises(self):
        with pytest.raises(SaturationDomainError):
            Region4Calculator.calculate_saturated_vapor_enthalpy_iapws(400.0)


class TestSaturatedEnthalpyInversion:
    """Saturation temperature from saturated liquid/vapor enthalpy."""

    def test_liquid_round_trip(self):
        target = Region4Calculator.calculate_saturated_liquid_enthalpy_iapws(150.0)
        recovered = Region4Calculator.invert_temperature_from_saturated_liquid_enthalpy(target)
        assert recovered == pytest.approx(150.0, abs=1e-3)

    def test_vapor_round_trip(self):
        target = Region4Calculator.calculate_saturated_vapor_enthalpy_iapws(120.0)
        result = Region4Calculator.invert_temperature_from_saturated_vapor_enthalpy(
            target, full_output=True
        )
        assert result.value == pytest.approx(120.0, abs=1e-3)
        assert abs(result.residual) < 1e-6
