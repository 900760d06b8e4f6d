"""
SteamLang: IAPWS-IF97 Water/Steam Property Engine
=================================================

Thermodynamic properties of pure water and steam (enthalpy, entropy,
specific volume, density, isobaric heat capacity) from pressure and
temperature, for engineering calculation tools.

Region calculators take pressure in MPa and temperature in K. The
classifier, the saturation functions and the state-point calculator take
temperature in Celsius and pressure in Pascals.
"""

__version__ = "1.0.0"

from steamlang.exceptions import (
    CalculationException,
    ConfigurationError,
    ConvergenceError,
    RangeViolationError,
    SaturationDomainError,
    SteamLangException,
    ValidationError,
)
from steamlang.config import SolverSettings, get_settings, load_settings
from steamlang.regions import Region, classify_region, get_region_calculator
from steamlang.calculators import (
    InversionResult,
    Region1Calculator,
    Region2Calculator,
    Region3Calculator,
    Region4Calculator,
    Region5Calculator,
)
from steamlang.calculators.steam_property_calculator import (
    SteamPropertyCalculator,
    SteamStateInput,
    SteamStateOutput,
)
from steamlang.calculators.batch_calculator import BatchPropertyCalculator, BatchResult

__all__ = [
    "__version__",
    # Errors
    "SteamLangException",
    "ValidationError",
    "RangeViolationError",
    "CalculationException",
    "SaturationDomainError",
    "ConvergenceError",
    "ConfigurationError",
    # Configuration
    "SolverSettings",
    "get_settings",
    "load_settings",
    # Classification
    "Region",
    "classify_region",
    "get_region_calculator",
    # Calculators
    "InversionResult",
    "Region1Calculator",
    "Region2Calculator",
    "Region3Calculator",
    "Region4Calculator",
    "Region5Calculator",
    "SteamPropertyCalculator",
    "SteamStateInput",
    "SteamStateOutput",
    "BatchPropertyCalculator",
    "BatchResult",
]
