"""
IAPWS-IF97 region classification.

This module provides:
- Region enumeration (Regions 1-5 plus an UNDEFINED sentinel)
- classify_region(): decides which formulation governs a (T, P) state point
- get_region_calculator(): maps a single-phase region to its calculator

Public inputs use Celsius and Pascals; the boundaries are evaluated in
Kelvin and MPa.

Decision order (first match wins):
    1. 1073.15 K < T <= 2273.15 K and P <= 50 MPa       -> REGION5
    2. |P - p_sat(T)| < saturation band (100 Pa)        -> REGION4
    3. T <= 623.15 K and P <= 100 MPa                   -> REGION1 if P > p_sat else REGION2
    4. 623.15 K < T <= 863.15 K and 16.5292 < P <= 100  -> REGION3
    5. otherwise                                        -> UNDEFINED
"""

import logging
import math
from enum import Enum
from typing import Optional, Type

from steamlang.calculators.region1 import Region1Calculator
from steamlang.calculators.region2 import Region2Calculator
from steamlang.calculators.region3 import Region3Calculator
from steamlang.calculators.region4 import (
    SATURATION_TEMPERATURE_MAX_K,
    SATURATION_TEMPERATURE_MIN_K,
    saturation_pressure_mpa,
)
from steamlang.calculators.region5 import Region5Calculator
from steamlang.calculators.region_calculator import RegionCalculator
from steamlang.config import SolverSettings, get_settings
from steamlang.exceptions import RangeViolationError
from steamlang.units import (
    ZERO_CELSIUS_K,
    celsius_to_kelvin,
    megapascal_to_pascal,
    pascal_to_megapascal,
)

logger = logging.getLogger(__name__)

# Region boundaries
REGION5_MIN_TEMPERATURE_K = 1073.15
REGION5_MAX_TEMPERATURE_K = 2273.15
REGION5_MAX_PRESSURE_MPA = 50.0
REGION1_MAX_TEMPERATURE_K = 623.15
MAX_PRESSURE_MPA = 100.0
REGION3_MAX_TEMPERATURE_K = 863.15
REGION3_MIN_PRESSURE_MPA = 16.5292  # p_sat at 623.15 K


class Region(str, Enum):
    """Formulation region of a state point."""
    REGION1 = "region1"
    REGION2 = "region2"
    REGION3 = "region3"
    REGION4 = "region4"
    REGION5 = "region5"
    UNDEFINED = "undefined"


_CALCULATORS = {
    Region.REGION1: Region1Calculator,
    Region.REGION2: Region2Calculator,
    Region.REGION3: Region3Calculator,
    Region.REGION5: Region5Calculator,
}


def _validate_inputs(temperature_c: float, pressure_pa: float) -> None:
    if not math.isfinite(temperature_c) or temperature_c <= -ZERO_CELSIUS_K:
        raise RangeViolationError(
            "Temperature must be finite and above absolute zero",
            parameter="temperature_c",
            value=temperature_c,
        )
    if not math.isfinite(pressure_pa) or pressure_pa <= 0:
        raise RangeViolationError(
            "Pressure must be finite and positive",
            parameter="pressure_pa",
            value=pressure_pa,
        )


def classify_region(
    temperature_c: float,
    pressure_pa: float,
    settings: Optional[SolverSettings] = None,
) -> Region:
    """
    Classify a state point into its IAPWS-IF97 region.

    Args:
        temperature_c: Temperature [C]
        pressure_pa: Pressure [Pa]
        settings: Solver settings supplying the saturation band

    Returns:
        Region, or Region.UNDEFINED outside every formulation

    Raises:
        RangeViolationError: For non-finite, sub-absolute-zero or non-positive inputs
    """
    _validate_inputs(temperature_c, pressure_pa)
    settings = settings or get_settings()

    temperature_k = celsius_to_kelvin(temperature_c)
    pressure_mpa = pascal_to_megapascal(pressure_pa)

    if (REGION5_MIN_TEMPERATURE_K < temperature_k <= REGION5_MAX_TEMPERATURE_K
            and pressure_mpa <= REGION5_MAX_PRESSURE_MPA):
        return Region.REGION5

    if not (SATURATION_TEMPERATURE_MIN_K <= temperature_k <= SATURATION_TEMPERATURE_MAX_K):
        if temperature_k < SATURATION_TEMPERATURE_MIN_K:
            logger.debug(f"No saturation pressure below {SATURATION_TEMPERATURE_MIN_K} K")
            return Region.UNDEFINED
        saturation_pa = None
    else:
        saturation_pa = megapascal_to_pascal(saturation_pressure_mpa(temperature_k))
        if abs(pressure_pa - saturation_pa) < settings.saturation_band_pa:
            return Region.REGION4

    if temperature_k <= REGION1_MAX_TEMPERATURE_K and pressure_mpa <= MAX_PRESSURE_MPA:
        # saturation_pa is always set here: 273.15 <= T <= 623.15
        return Region.REGION1 if pressure_pa > saturation_pa else Region.REGION2

    if (REGION1_MAX_TEMPERATURE_K < temperature_k <= REGION3_MAX_TEMPERATURE_K
            and REGION3_MIN_PRESSURE_MPA < pressure_mpa <= MAX_PRESSURE_MPA):
        return Region.REGION3

    return Region.UNDEFINED


def get_region_calculator(region: Region) -> Type[RegionCalculator]:
    """
    Calculator class for a single-phase region.

    Raises:
        ValueError: For REGION4 and UNDEFINED, which have no (P, T) property set
    """
    try:
        return _CALCULATORS[region]
    except KeyError:
        raise ValueError(f"No single-phase calculator for {region.value}") from None
