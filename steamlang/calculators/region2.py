"""
IAPWS-IF97 Region 2: Superheated steam.

Valid range:
    273.15 K <= T <= 623.15 K,   0 < p <= p_sat(T)
    623.15 K <  T <= 863.15 K,   0 < p <= p_B23(T)
    863.15 K <  T <= 1073.15 K,  0 < p <= 100 MPa

Basic equation (dimensionless Gibbs free energy, ideal + residual part):

    gamma   = gamma_o + gamma_r
    gamma_o = ln(pi) + sum( n0_i * tau^J0_i )                     (9 terms)
    gamma_r = sum( n_i * pi^I_i * (tau - 0.5)^J_i )               (43 terms)

    pi = p / 1 MPa,  tau = 540 K / T

Properties:
    v  = R * T * pi * (gamma_o_pi + gamma_r_pi) / p
    h  = R * T * tau * (gamma_o_tau + gamma_r_tau)
    s  = R * (tau * (gamma_o_tau + gamma_r_tau) - (gamma_o + gamma_r))
    cp = -R * tau^2 * (gamma_o_tautau + gamma_r_tautau)

Reference:
    IAPWS R7-97(2012), Tables 10 and 11.
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

# Ideal-gas part (Table 10). I is zero for every term.
REGION2_IDEAL_TABLE = CoefficientTable.from_rows([
    (0,  0, -0.96927686500217e+01),
    (0,  1,  0.10086655968018e+02),
    (0, -5, -0.56087911283020e-02),
    (0, -4,  0.71452738081455e-01),
    (0, -3, -0.40710498223928e+00),
    (0, -2,  0.14240819171444e+01),
    (0, -1, -0.43839511319450e+01),
    (0,  2, -0.28408632460772e+00),
    (0,  3,  0.21268463753307e-01),
])

# Residual part (Table 11)
REGION2_RESIDUAL_TABLE = CoefficientTable.from_rows([
    (1,   0, -0.17731742473213e-02),
    (1,   1, -0.17834862292358e-01),
    (1,   2, -0.45996013696365e-01),
    (1,   3, -0.57581259083432e-01),
    (1,   6, -0.50325278727930e-01),
    (2,   1, -0.33032641670203e-04),
    (2,   2, -0.18948987516315e-03),
    (2,   4, -0.39392777243355e-02),
    (2,   7, -0.43797295650573e-01),
    (2,  36, -0.26674547914087e-04),
    (3,   0,  0.20481737692309e-07),
    (3,   1,  0.43870667284435e-06),
    (3,   3, -0.32277677238570e-04),
    (3,   6, -0.15033924542148e-02),
    (3,  35, -0.40668253562649e-01),
    (4,   1, -0.78847309559367e-09),
    (4,   2,  0.12790717852285e-07),
    (4,   3,  0.48225372718507e-06),
    (5,   7,  0.22922076337661e-05),
    (6,   3, -0.16714766451061e-10),
    (6,  16, -0.21171472321355e-02),
    (6,  35, -0.23895741934104e+02),
    (7,   0, -0.59059564324270e-17),
    (7,  11, -0.12621808899101e-05),
    (7,  25, -0.38946842435739e-01),
    (8,   8,  0.11256211360459e-10),
    (8,  36, -0.82311340897998e+01),
    (9,  13,  0.19809712802088e-07),
    (10,  4,  0.10406965210174e-18),
    (10, 10, -0.10234747095929e-12),
    (10, 14, -0.10018179379511e-08),
    (16, 29, -0.80882908646985e-10),
    (16, 50,  0.10693031879409e+00),
    (18, 57, -0.33662250574171e+00),
    (20, 20,  0.89185845355421e-24),
    (20, 35,  0.30629316876232e-12),
    (20, 48, -0.42002467698208e-05),
    (21, 21, -0.59056029685639e-25),
    (22, 53,  0.37826947613457e-05),
    (23, 39, -0.12768608934681e-14),
    (24, 26,  0.73087610595061e-28),
    (24, 40,  0.55414715350778e-16),
    (24, 58, -0.94369707241210e-06),
])


class Region2Calculator(RegionCalculator):
    """Property calculator for superheated steam."""

    REFERENCE_PRESSURE_MPA = 1.0
    REFERENCE_TEMPERATURE_K = 540.0
    TAU_OFFSET = 0.5
    INVERSION_SEED_K = 600.0
    # Inversion iterate is clamped to the region temperature range
    INVERSION_MIN_K = 273.15
    INVERSION_MAX_K = 1073.15

    @classmethod
    def _reduced(cls, pressure_mpa: float, temperature_k: float):
        validate_state(pressure_mpa, temperature_k)
        pi = pressure_mpa / cls.REFERENCE_PRESSURE_MPA
        tau = cls.REFERENCE_TEMPERATURE_K / temperature_k
        return pi, tau

    @classmethod
    def _gamma_tau(cls, pi: float, tau: float) -> float:
        return (
            polynomial.derivative_b(REGION2_IDEAL_TABLE, pi, tau)
            + polynomial.derivative_b(REGION2_RESIDUAL_TABLE, pi, tau - cls.TAU_OFFSET)
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
            + polynomial.evaluate(REGION2_IDEAL_TABLE, pi, tau)
            + polynomial.evaluate(REGION2_RESIDUAL_TABLE, pi, tau - cls.TAU_OFFSET)
        )
        return SPECIFIC_GAS_CONSTANT * (tau * cls._gamma_tau(pi, tau) - gamma)

    @classmethod
    def calculate_specific_volume(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Specific volume [m3/kg]."""
        pi, tau = cls._reduced(pressure_mpa, temperature_k)
        # Ideal part contributes gamma_o_pi = 1 / pi
        gamma_pi = 1.0 / pi + polynomial.derivative_a(
            REGION2_RESIDUAL_TABLE, pi, tau - cls.TAU_OFFSET
        )
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
            polynomial.second_derivative_bb(REGION2_IDEAL_TABLE, pi, tau)
            + polynomial.second_derivative_bb(REGION2_RESIDUAL_TABLE, pi, tau - cls.TAU_OFFSET)
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
