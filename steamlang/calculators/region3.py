"""
Region 3: Dense and near-critical water/steam (APPROXIMATE).

This is NOT the IAPWS-IF97 Region 3 formulation. The official Region 3
basic equation is a Helmholtz function of density and temperature, and
evaluating it from (p, T) requires the segmented backward equations of the
IAPWS supplementary release. This module keeps a simple placeholder with the
same interface:

    rho = rho_c * (1 + 0.2 * p_r - 0.5 * t_r)
          p_r = (p - p_c) / p_c,  t_r = (T - T_c) / T_c
    v   = 1 / rho
    h   = 4.18 * (T - 273.15)
    s   = h / T
    cp  = 6.0

Results are suitable only for coarse engineering estimates. Callers can
check ``Region3Calculator.IAPWS_COMPLIANT`` before relying on them.
"""

from functools import partial
from typing import Optional, Union

from steamlang.calculators.inversion import InversionResult, invert_property
from steamlang.calculators.region_calculator import RegionCalculator, validate_state
from steamlang.config import SolverSettings


class Region3Calculator(RegionCalculator):
    """Approximate property calculator for the dense/near-critical region."""

    IAPWS_COMPLIANT = False
    FORMULATION = "approximate"

    CRITICAL_DENSITY_KG_M3 = 322.0
    CRITICAL_TEMPERATURE_K = 647.096
    CRITICAL_PRESSURE_MPA = 22.064

    NOMINAL_CP_KJ_KGK = 4.18  # Used for enthalpy only
    PLACEHOLDER_CP_KJ_KGK = 6.0
    INVERSION_SEED_K = 650.0
    # Inversion iterate is clamped to the region temperature range
    INVERSION_MIN_K = 623.15
    INVERSION_MAX_K = 863.15

    @classmethod
    def calculate_density(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Approximate density [kg/m3] from a linear fit about the critical point."""
        validate_state(pressure_mpa, temperature_k)
        t_r = (temperature_k - cls.CRITICAL_TEMPERATURE_K) / cls.CRITICAL_TEMPERATURE_K
        p_r = (pressure_mpa - cls.CRITICAL_PRESSURE_MPA) / cls.CRITICAL_PRESSURE_MPA
        return cls.CRITICAL_DENSITY_KG_M3 * (1.0 + 0.2 * p_r - 0.5 * t_r)

    @classmethod
    def calculate_specific_volume(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Approximate specific volume [m3/kg]."""
        return 1.0 / cls.calculate_density(pressure_mpa, temperature_k)

    @classmethod
    def calculate_specific_enthalpy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Approximate specific enthalpy [kJ/kg] as cp * (T - 273.15)."""
        validate_state(pressure_mpa, temperature_k)
        return cls.NOMINAL_CP_KJ_KGK * (temperature_k - 273.15)

    @classmethod
    def calculate_specific_entropy(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Approximate specific entropy [kJ/kg-K] as h / T."""
        return cls.calculate_specific_enthalpy(pressure_mpa, temperature_k) / temperature_k

    @classmethod
    def calculate_specific_heat_cp(cls, pressure_mpa: float, temperature_k: float) -> float:
        """Placeholder isobaric heat capacity [kJ/kg-K]."""
        validate_state(pressure_mpa, temperature_k)
        return cls.PLACEHOLDER_CP_KJ_KGK

    @classmethod
    def invert_temperature_from_density(
        cls,
        pressure_mpa: float,
        target_density: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which the approximate density equals the target."""
        return invert_property(
            partial(cls.calculate_density, pressure_mpa),
            target_density,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )

    @classmethod
    def invert_temperature_from_enthalpy(
        cls,
        pressure_mpa: float,
        target_enthalpy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Temperature [K] at which the approximate enthalpy equals the target."""
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
        """Temperature [K] at which the approximate entropy equals the target."""
        return invert_property(
            partial(cls.calculate_specific_entropy, pressure_mpa),
            target_entropy,
            cls.INVERSION_SEED_K,
            full_output=full_output,
            settings=settings,
            lower=cls.INVERSION_MIN_K,
            upper=cls.INVERSION_MAX_K,
        )
