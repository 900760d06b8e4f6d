"""
Region calculator capability tag and shared input guard.
"""

import math

from steamlang.exceptions import RangeViolationError

# Specific gas constant of water used throughout IAPWS-IF97 [kJ/kg-K]
SPECIFIC_GAS_CONSTANT = 0.461526


class RegionCalculator:
    """
    Marker base for IAPWS-IF97 region property calculators.

    Carries no state and no behavior; subclasses expose their properties as
    static or class methods taking pressure in MPa and temperature in K.
    """


def validate_state(pressure_mpa: float, temperature_k: float) -> None:
    """
    Fail fast on inputs no region formulation can accept.

    Raises:
        RangeViolationError: If either value is non-finite or not positive
    """
    if not math.isfinite(pressure_mpa) or pressure_mpa <= 0:
        raise RangeViolationError(
            f"Pressure must be a positive finite value, got {pressure_mpa} MPa",
            parameter="pressure_mpa",
            value=pressure_mpa,
        )
    if not math.isfinite(temperature_k) or temperature_k <= 0:
        raise RangeViolationError(
            f"Temperature must be above absolute zero, got {temperature_k} K",
            parameter="temperature_k",
            value=temperature_k,
        )
