"""
Unit boundary helpers.

Public entry points take temperature in Celsius and pressure in Pascals;
the region formulations work in Kelvin and Megapascals. Every conversion
between the two systems goes through these functions.
"""

ZERO_CELSIUS_K = 273.15
PA_PER_MPA = 1.0e6


def celsius_to_kelvin(temperature_c: float) -> float:
    """Convert temperature from Celsius to Kelvin."""
    return temperature_c + ZERO_CELSIUS_K


def kelvin_to_celsius(temperature_k: float) -> float:
    """Convert temperature from Kelvin to Celsius."""
    return temperature_k - ZERO_CELSIUS_K


def pascal_to_megapascal(pressure_pa: float) -> float:
    """Convert pressure from Pa to MPa."""
    return pressure_pa / PA_PER_MPA


def megapascal_to_pascal(pressure_mpa: float) -> float:
    """Convert pressure from MPa to Pa."""
    return pressure_mpa * PA_PER_MPA
