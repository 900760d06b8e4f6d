"""
IAPWS-IF97 Region 4: Saturation curve (liquid-vapor boundary).

This module provides:
- Saturation pressure from temperature (IF97 backward equation, Eq. 30)
- Saturation temperature from pressure (Newton-Raphson inversion)
- Saturated liquid/vapor enthalpy, two fidelities:
    * empirical linear fit (fast, approximate)
    * IAPWS delegation into Region 1 (liquid) / Region 2 (vapor)
- Saturation temperature from saturated liquid/vapor enthalpy

Units at this boundary: temperature in Celsius, pressure in Pascals.
Internally the formulation runs in Kelvin and MPa.

Valid band: 273.15 K <= T <= 647.096 K (triple point to critical point).
Outside the band the backward equation is not defined and
SaturationDomainError is raised.

Reference:
    IAPWS R7-97(2012), Section 8.1, Table 34.
"""

import math
from typing import Optional, Tuple, Union

from steamlang.calculators.inversion import InversionResult, newton_raphson
from steamlang.calculators.region1 import Region1Calculator
from steamlang.calculators.region2 import Region2Calculator
from steamlang.calculators.region_calculator import RegionCalculator
from steamlang.config import SolverSettings
from steamlang.exceptions import SaturationDomainError
from steamlang.units import (
    celsius_to_kelvin,
    kelvin_to_celsius,
    megapascal_to_pascal,
)

# Saturation-line coefficients n1..n10 (Table 34 of IAPWS-IF97)
SATURATION_COEFFICIENTS = (
    0.11670521452767e+04,
    -0.72421316703206e+06,
    -0.17073846940092e+02,
    0.12020824702470e+05,
    -0.32325550322333e+07,
    0.14915108613530e+02,
    -0.48232657361591e+04,
    0.40511340542057e+06,
    -0.23855557567849e+00,
    0.65017534844798e+03,
)

SATURATION_TEMPERATURE_MIN_K = 273.15
SATURATION_TEMPERATURE_MAX_K = 647.096


def saturation_pressure_mpa(temperature_k: float) -> float:
    """
    Saturation pressure [MPa] at temperature [K].

    Raises:
        SaturationDomainError: Outside the triple-point to critical-point band
            or if the backward equation degenerates
    """
    if not (SATURATION_TEMPERATURE_MIN_K <= temperature_k <= SATURATION_TEMPERATURE_MAX_K):
        raise SaturationDomainError(
            f"Input outside valid temperature range for saturation curve: {temperature_k} K",
            temperature_k=temperature_k,
            valid_range=(SATURATION_TEMPERATURE_MIN_K, SATURATION_TEMPERATURE_MAX_K),
        )

    n = SATURATION_COEFFICIENTS
    theta = temperature_k + n[8] / (temperature_k - n[9])
    a = theta * theta + n[0] * theta + n[1]
    b = n[2] * theta * theta + n[3] * theta + n[4]
    c = n[5] * theta * theta + n[6] * theta + n[7]

    radicand = b * b - 4.0 * a * c
    if radicand < 0:
        raise SaturationDomainError(
            "Saturation backward equation has a negative radicand",
            temperature_k=temperature_k,
            valid_range=(SATURATION_TEMPERATURE_MIN_K, SATURATION_TEMPERATURE_MAX_K),
            context={"radicand": radicand},
        )

    return (2.0 * c / (-b + math.sqrt(radicand))) ** 4


class Region4Calculator(RegionCalculator):
    """
    Saturation-curve calculator.

    Example:
        >>> Region4Calculator.saturation_pressure(100.0)
        101417.97...
        >>> Region4Calculator.invert_saturation_temperature(101325.0)
        99.97...
    """

    INVERSION_SEED_K = 373.15

    # Empirical saturated-enthalpy fit [kJ/kg], temperature in Celsius
    LIQUID_ENTHALPY_OFFSET = 419.0
    LIQUID_ENTHALPY_SLOPE = 4.18
    LATENT_HEAT_OFFSET = 2500.0
    LATENT_HEAT_SLOPE = 20.0

    @staticmethod
    def saturation_temperature_bounds() -> Tuple[float, float]:
        """Valid saturation temperature band [C]."""
        return (
            kelvin_to_celsius(SATURATION_TEMPERATURE_MIN_K),
            kelvin_to_celsius(SATURATION_TEMPERATURE_MAX_K),
        )

    @staticmethod
    def saturation_pressure_bounds() -> Tuple[float, float]:
        """Saturation pressures [Pa] at the ends of the valid band."""
        return (
            megapascal_to_pascal(saturation_pressure_mpa(SATURATION_TEMPERATURE_MIN_K)),
            megapascal_to_pascal(saturation_pressure_mpa(SATURATION_TEMPERATURE_MAX_K)),
        )

    @staticmethod
    def saturation_pressure(temperature_c: float) -> float:
        """Saturation pressure [Pa] for a temperature [C]."""
        return megapascal_to_pascal(saturation_pressure_mpa(celsius_to_kelvin(temperature_c)))

    @classmethod
    def invert_saturation_temperature(
        cls,
        pressure_pa: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """
        Saturation temperature [C] for a vapor pressure [Pa].

        Newton-Raphson seeded at 100 C, iterate clamped to the valid band.

        Raises:
            SaturationDomainError: If the pressure lies outside the saturation curve
        """
        p_min, p_max = cls.saturation_pressure_bounds()
        if not (p_min <= pressure_pa <= p_max):
            raise SaturationDomainError(
                f"Pressure {pressure_pa} Pa is outside the saturation curve",
                pressure_pa=pressure_pa,
                valid_range=(p_min, p_max),
            )

        result = newton_raphson(
            lambda t: megapascal_to_pascal(saturation_pressure_mpa(t)),
            pressure_pa,
            cls.INVERSION_SEED_K,
            settings=settings,
            lower=SATURATION_TEMPERATURE_MIN_K,
            upper=SATURATION_TEMPERATURE_MAX_K,
        )
        return cls._to_celsius(result, full_output)

    @classmethod
    def calculate_saturated_liquid_enthalpy(cls, temperature_c: float) -> float:
        """
        Approximate saturated liquid enthalpy [kJ/kg] from a linear fit.

        Fast engineering approximation; differs from the IAPWS value by
        roughly 400-420 kJ/kg across 0-200 C.
        """
        return cls.LIQUID_ENTHALPY_OFFSET + cls.LIQUID_ENTHALPY_SLOPE * temperature_c

    @classmethod
    def calculate_saturated_vapor_enthalpy(cls, temperature_c: float) -> float:
        """
        Approximate saturated vapor enthalpy [kJ/kg]: liquid fit plus a
        linearly falling latent heat.
        """
        latent_heat = cls.LATENT_HEAT_OFFSET - cls.LATENT_HEAT_SLOPE * temperature_c
        return cls.calculate_saturated_liquid_enthalpy(temperature_c) + latent_heat

    @staticmethod
    def _saturated_liquid_enthalpy_k(temperature_k: float) -> float:
        return Region1Calculator.calculate_specific_enthalpy(
            saturation_pressure_mpa(temperature_k), temperature_k
        )

    @staticmethod
    def _saturated_vapor_enthalpy_k(temperature_k: float) -> float:
        return Region2Calculator.calculate_specific_enthalpy(
            saturation_pressure_mpa(temperature_k), temperature_k
        )

    @classmethod
    def calculate_saturated_liquid_enthalpy_iapws(cls, temperature_c: float) -> float:
        """Saturated liquid enthalpy [kJ/kg] from IAPWS-IF97 Region 1 at p_sat."""
        return cls._saturated_liquid_enthalpy_k(celsius_to_kelvin(temperature_c))

    @classmethod
    def calculate_saturated_vapor_enthalpy_iapws(cls, temperature_c: float) -> float:
        """Saturated vapor enthalpy [kJ/kg] from IAPWS-IF97 Region 2 at p_sat."""
        return cls._saturated_vapor_enthalpy_k(celsius_to_kelvin(temperature_c))

    @classmethod
    def invert_temperature_from_saturated_liquid_enthalpy(
        cls,
        target_enthalpy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Saturation temperature [C] whose IAPWS liquid enthalpy matches the target."""
        result = newton_raphson(
            cls._saturated_liquid_enthalpy_k,
            target_enthalpy,
            cls.INVERSION_SEED_K,
            settings=settings,
            lower=SATURATION_TEMPERATURE_MIN_K,
            upper=SATURATION_TEMPERATURE_MAX_K,
        )
        return cls._to_celsius(result, full_output)

    @classmethod
    def invert_temperature_from_saturated_vapor_enthalpy(
        cls,
        target_enthalpy: float,
        full_output: bool = False,
        settings: Optional[SolverSettings] = None,
    ) -> Union[float, InversionResult]:
        """Saturation temperature [C] whose IAPWS vapor enthalpy matches the target."""
        result = newton_raphson(
            cls._saturated_vapor_enthalpy_k,
            target_enthalpy,
            cls.INVERSION_SEED_K,
            settings=settings,
            lower=SATURATION_TEMPERATURE_MIN_K,
            upper=SATURATION_TEMPERATURE_MAX_K,
        )
        return cls._to_celsius(result, full_output)

    @staticmethod
    def _to_celsius(
        result: InversionResult, full_output: bool
    ) -> Union[float, InversionResult]:
        value_c = kelvin_to_celsius(result.value)
        if not full_output:
            return value_c
        return InversionResult(
            value=value_c,
            residual=result.residual,
            iterations=result.iterations,
            converged=result.converged,
        )
