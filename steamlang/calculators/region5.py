"""
IAPWS-IF97 Region 5: High-temperature steam.

Valid range:
    1073.15 K < T <= 2273.15 K,  0 < p <= 50 MPa

Basic equation (dimensionless Gibbs free energy, ideal + residual part):

    gamma_o = ln(pi) + sum( n0_i * tau^J0_i )      (6 terms)
    gamma_r = sum( n_i * pi^I_i * tau^J_i )        (6 terms)

    pi = p / 1 MPa,  tau = 1000 K / T

Property relations are the same as for Region 2.

Reference:
    IAPWS R7-97(2012), Tables 37 and 38.
"""

import math
from functools import partial
from typing import Optional, Union

from steamlang.calculators import polynomial
from steamlang.calculators.inversion import InversionResult, invert_property
from steamlang.calculators.polynomial import CoefficientTable
from steamlang.calculators.region_calculator import (
    SPECIFIC_GAS_CONSTANT,
    RegionCalculator,
    validate_state,
)
from steamlang.config import SolverSettings

REGION5_IDEAL_TABLE = CoefficientTable.from_rows([
    (0,  0, -0.13179983674201e+02),
    (0,  1,  0.68540841634434e+01),
    (0, -3, -0.24805148933466e-01),
    (0, -2,  0.36901534980333e+00),
    (0, -1, -0.31161318213925e+01),
    (0,  2, -0.32961626538917e+00),
])

REGION5_RESIDUAL_TABLE = CoefficientTable.from_rows([
    (1, 1,  0.15736404855259e-02),
    (1, 2,  0.90153761673944e-03),
    (1, 3, -0.50270077677648e-02),
    (2, 3,  0.22440037409485e-05),
    (2, 9, -0.41163275453471e-05),
    (3, 7,  0.37919454822955e-07),
])


class Region5Calculator(RegionCalculator):
    """Property calculator for high-temperature steam."""

    REFERENCE_PRESSURE_MPA = 1.0
    REFERENCE_TEMPERATURE_K = 1000.0
    INVERSION_SEED_K = 1500.0
    # Inversion iterate is clamped to the region temperature range
    INVERSION_MIN_K = 1073.15
    INVERSION_MAX_K = 2273.15

    @classmethod
    def _reduced(cls, pressure_mpa: float, temperature_k: float):
        validate_state(pressure_mpa, temperature_k)
        return (
            pressure_mpa / cls.REFERENCE_PRESSURE_MPA,
            cls.REFERENCE_TEMPERATURE_K / temperature_k,
        )

    @staticmethod
    def _gamma_tau(pi: float, tau: float) -> float:
        return (
            polynomial.derivative_b(REGION5_IDEAL_TABLE, pi, tau)
            + polynomial.derivative_b(REGION5_RESIDUAL_TABLE, pi, tau)
        )

    @classmethod
    def calculate_specific_enthalpy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific enthalpy [kJ/kg]."""
        pi, tau = cls._reduced(pressure_mpa, temperature_k)
        return SPECIFIC_GAS_CONSTANT * temperature_k * tau * cls._gamma_tau(pi, tau)

    @classmethod
    def calculate_specific_entropy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific entropy [kJ/kg-K]."""
        pi, tau = cls._reduced(pressure_mpa, temperature_k)
        gamma = (
            math.log(pi)
            + polynomial.evaluate(REGION5_IDEAL_TABLE, pi, tau)
            + polynomial.evaluate(REGION5_RESIDUAL_TABLE, pi, tau)
        )
        return SPECIFIC_GAS_CONSTANT * (tau * cls._gamma_tau(pi, tau) - gamma)

    @classmethod
    def calculate_specific_volume(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific volume [m3/kg]."""
        pi, tau = cls._reduced(pressure_mpa, temperature_k)
        gamma_pi = 1.0 / pi + polynomial.derivative_a(REGION5_RESIDUAL_TABLE, pi, tau)
        return SPECIFIC_GAS_CONSTANT * temperature_k / (pressure_mpa * 1000.0) * pi * gamma_pi

    @classmethod
    def calculate_density(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Density [kg/m3]."""
        return 1.0 / cls.calculate_specific_volume(pressure_mpa, temperature_k)

    @classmethod
    def calculate_specific_heat_cp(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Isobaric specific heat capacity [kJ/kg-K]."""
        pi, tau = cls._reduced(pressure_mpa, temperature_k)
        gamma_tautau = (
            polynomial.second_derivative_bb(REGION5_IDEAL_TABLE, pi, tau)
            + polynomial.second_derivative_bb(REGION5_RESIDUAL_TABLE, pi, tau)
        )
        return -SPECIFIC_GAS_CONSTANT * tau * tau * gamma_tautau

    @classmethod
    def invert_temperature_from_enthalpy(
        cls,
        pressure_mpa: float,
        target_enthalpy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which h(p, T) equals the target [kJ/kg]."""
        return invert_property(
            partial(cls.calculate_specific_enthalpy, pressure_mpa),
            target_enthalpy,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )

    @classmethod
    def invert_temperature_from_entropy(
        cls,
        pressure_mpa: float,
        target_entropy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which s(p, T) equals the target [kJ/kg-K]."""
        return invert_property(
            partial(cls.calculate_specific_entropy, pressure_mpa),
            target_entropy,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )

    @classmethod
    def invert_temperature_from_density(
        cls,
        pressure_mpa: float,
        target_density: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which rho(p, T) equals the target [kg/m3]."""
        return invert_property(
            partial(cls.calculate_density, pressure_mpa),
            target_density,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )
