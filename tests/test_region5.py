"""Tests for IAPWS-IF97 Region 5 (high-temperature vapor).

Reference values: IAPWS R7-97(2012), Table 42.
"""

import pytest

from steamlang.calculators.region5 import Region5Calculator

REFERENCE_POINTS = [
    # (p [MPa], T [K], v, h, s, cp)
    (0.5, 1500.0, 0.138455090e1, 0.521976855e4, 0.965408875e1, 0.261609445e1),
    (30.0, 1500.0, 0.230761299e-1, 0.516723514e4, 0.772970133e1, 0.272724317e1),
    (30.0, 2000.0, 0.311385219e-1, 0.657122604e4, 0.853640523e1, 0.288569882e1),
]


class TestReferenceValues:
    """Verification points published with the formulation."""

    @pytest.mark.parametrize("p,t,v,h,s,cp", REFERENCE_POINTS)
    def test_specific_volume(self, p, t, v, h, s, cp):
        assert Region5Calculator.calculate_specific_volume(p, t) == pytest.approx(v, rel=1e-7)

    @pytest.mark.parametrize("p,t,v,h,s,cp", REFERENCE_POINTS)
    def test_enthalpy(self, p, t, v, h, s, cp):
        assert Region5Calculator.calculate_specific_enthalpy(p, t) == pytest.approx(h, rel=1e-7)

    @pytest.mark.parametrize("p,t,v,h,s,cp", REFERENCE_POINTS)
    def test_entropy(self, p, t, v, h, s, cp):
        assert Region5Calculator.calculate_specific_entropy(p, t) == pytest.approx(s, rel=1e-7)

    @pytest.mark.parametrize("p,t,v,h,s,cp", REFERENCE_POINTS)
    def test_specific_heat_cp(self, p, t, v, h, s, cp):
        assert Region5Calculator.calculate_specific_heat_cp(p, t) == pytest.approx(cp, rel=1e-7)

    def test_density(self):
        assert Region5Calculator.calculate_density(0.5, 1500.0) == pytest.approx(
            1.0 / 0.138455090e1, rel=1e-7
        )


class TestInversion:
    """Temperature recovered from enthalpy, entropy and density."""

    @pytest.mark.parametrize("method,getter", [
        ("invert_temperature_from_enthalpy", "calculate_specific_enthalpy"),
        ("invert_temperature_from_entropy", "calculate_specific_entropy"),
        ("invert_temperature_from_density", "calculate_density"),
    ])
    def test_round_trip(self, method, getter):
        target = getattr(Region5Calculator, getter)(10.0, 1600.0)
        recovered = getattr(Region5Calculator, method)(10.0, target)
        assert recovered == pytest.approx(1600.0, abs=1e-3)

    def test_unreachable_enthalpy_pinned_at_upper_bound(self):
        result = Region5Calculator.invert_temperature_from_enthalpy(10.0, 50000.0, full_output=True)

        assert result.value == Region5Calculator.INVERSION_MAX_K
        assert result.converged is False
        assert result.residual < 0.0
