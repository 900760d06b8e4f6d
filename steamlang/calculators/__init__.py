"""
SteamLang - IAPWS-IF97 Region Calculators

Deterministic property evaluations for pure water and steam.

Available Calculators:
- Region1Calculator: Compressed liquid (34-term Gibbs free energy)
- Region2Calculator: Superheated vapor (ideal + 43-term residual part)
- Region3Calculator: Dense/near-critical fluid (approximate placeholder)
- Region4Calculator: Saturation curve, saturated enthalpies and inversions
- Region5Calculator: High-temperature vapor (ideal + 6-term residual part)

The audited state-point calculator and the batch calculator live in
``steam_property_calculator`` and ``batch_calculator``; import them from
there (or from the top-level ``steamlang`` package).
"""

from .inversion import InversionResult, invert_property, newton_raphson
from .polynomial import CoefficientTable
from .provenance import (
    CalculationProvenance,
    CalculationStep,
    CalculationType,
    ProvenanceTracker,
    generate_calculation_hash,
    verify_calculation_reproducibility,
)
from .region_calculator import SPECIFIC_GAS_CONSTANT, RegionCalculator, validate_state
from .region1 import Region1Calculator
from .region2 import Region2Calculator
from .region3 import Region3Calculator
from .region4 import Region4Calculator, saturation_pressure_mpa
from .region5 import Region5Calculator

__all__ = [
    # Numerical helpers
    "CoefficientTable",
    "InversionResult",
    "invert_property",
    "newton_raphson",

    # Provenance tracking
    "CalculationProvenance",
    "CalculationStep",
    "CalculationType",
    "ProvenanceTracker",
    "generate_calculation_hash",
    "verify_calculation_reproducibility",

    # Region calculators
    "SPECIFIC_GAS_CONSTANT",
    "RegionCalculator",
    "validate_state",
    "Region1Calculator",
    "Region2Calculator",
    "Region3Calculator",
    "Region4Calculator",
    "Region5Calculator",
    "saturation_pressure_mpa",
]
