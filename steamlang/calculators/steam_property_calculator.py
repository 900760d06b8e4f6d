"""
SteamLang: Steam Property Calculator

One-call evaluation of a water/steam state point with provenance.

This module provides:
- Region classification of the (T, P) state point
- Single-phase properties (enthalpy, entropy, volume, density, cp) for
  Regions 1, 2, 3 and 5
- Saturation pressure and IAPWS saturated enthalpies for Region 4
- SHA-256 provenance record of every formulation call

Inputs follow the public unit convention (Celsius, Pascals); outputs carry
their unit in the field name.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from steamlang.calculators.provenance import (
    CalculationProvenance,
    CalculationType,
    ProvenanceTracker,
)
from steamlang.calculators.region3 import Region3Calculator
from steamlang.calculators.region4 import Region4Calculator
from steamlang.config import SolverSettings
from steamlang.exceptions import ValidationError
from steamlang.regions import Region, classify_region, get_region_calculator
from steamlang.units import celsius_to_kelvin, pascal_to_megapascal

logger = logging.getLogger(__name__)

FORMULATION_VERSION = "IAPWS-IF97 (R7-97, 2012)"

# (output field, calculator method, unit, formula)
SINGLE_PHASE_PROPERTIES = (
    ("specific_enthalpy_kj_kg", "calculate_specific_enthalpy", "kJ/kg",
     "h = R * T * tau * gamma_tau"),
    ("specific_entropy_kj_kgk", "calculate_specific_entropy", "kJ/(kg*K)",
     "s = R * (tau * gamma_tau - gamma)"),
    ("specific_volume_m3_kg", "calculate_specific_volume", "m3/kg",
     "v = R * T * pi * gamma_pi / p"),
    ("density_kg_m3", "calculate_density", "kg/m3",
     "rho = 1 / v"),
    ("specific_heat_cp_kj_kgk", "calculate_specific_heat_cp", "kJ/(kg*K)",
     "cp = -R * tau^2 * gamma_tautau"),
)


@dataclass(frozen=True)
class SteamStateInput:
    """
    State point to evaluate.

    Attributes:
        temperature_c: Temperature [C]
        pressure_pa: Pressure [Pa]
    """
    temperature_c: float
    pressure_pa: float


@dataclass(frozen=True)
class SteamStateOutput:
    """
    Evaluated state point.

    Single-phase fields are None for Region 4; saturation fields are None
    for every other region.
    """
    region: Region
    temperature_k: float
    pressure_mpa: float
    specific_enthalpy_kj_kg: Optional[float] = None
    specific_entropy_kj_kgk: Optional[float] = None
    specific_volume_m3_kg: Optional[float] = None
    density_kg_m3: Optional[float] = None
    specific_heat_cp_kj_kgk: Optional[float] = None
    saturation_pressure_pa: Optional[float] = None
    saturated_liquid_enthalpy_kj_kg: Optional[float] = None
    saturated_vapor_enthalpy_kj_kg: Optional[float] = None
    approximate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping with the region as its string value."""
        data = asdict(self)
        data["region"] = self.region.value
        return data


class SteamPropertyCalculator:
    """
    Audited steam property calculator.

    Example:
        >>> calculator = SteamPropertyCalculator()
        >>> output, provenance = calculator.calculate(
        ...     SteamStateInput(temperature_c=26.85, pressure_pa=3.0e6)
        ... )
        >>> output.region
        <Region.REGION1: 'region1'>
        >>> round(output.specific_enthalpy_kj_kg, 3)
        115.331
    """

    VERSION = "1.0.0"
    NAME = "SteamPropertyCalculator"

    def __init__(self, settings: Optional[SolverSettings] = None):
        self.settings = settings

    def calculate(
        self,
        inputs: SteamStateInput
    ) -> Tuple[SteamStateOutput, CalculationProvenance]:
        """
        Evaluate every available property at a state point.

        Args:
            inputs: SteamStateInput in Celsius and Pascals

        Returns:
            Tuple of (SteamStateOutput, CalculationProvenance)

        Raises:
            RangeViolationError: If an input is non-finite or non-physical
            ValidationError: If the state point lies outside every region
        """
        # Tracker is local so one calculator can serve many threads
        tracker = ProvenanceTracker()
        input_dict = {
            "temperature_c": inputs.temperature_c,
            "pressure_pa": inputs.pressure_pa,
        }

        region = classify_region(inputs.temperature_c, inputs.pressure_pa, self.settings)
        if region is Region.UNDEFINED:
            raise ValidationError(
                "State point lies outside every IAPWS-IF97 region",
                context=input_dict,
            )

        temperature_k = celsius_to_kelvin(inputs.temperature_c)
        pressure_mpa = pascal_to_megapascal(inputs.pressure_pa)

        tracker.start_calculation(
            calculation_type=(
                CalculationType.SATURATION_PROPERTIES
                if region is Region.REGION4
                else CalculationType.SINGLE_PHASE_PROPERTIES
            ),
            formula_id=f"iapws_if97_{region.value}",
            formula_version=FORMULATION_VERSION,
            inputs=input_dict,
            metadata={"calculator": self.NAME, "calculator_version": self.VERSION},
        )
        tracker.add_step(
            operation="classify",
            description="Classify state point into an IAPWS-IF97 region",
            inputs=input_dict,
            output_name="region",
            output_value=region.value,
        )

        try:
            if region is Region.REGION4:
                fields, units = self._saturation_properties(tracker, inputs.temperature_c)
            else:
                fields, units = self._single_phase_properties(
                    tracker, region, pressure_mpa, temperature_k
                )
        except Exception:
            tracker.abort_calculation()
            raise

        output = SteamStateOutput(
            region=region,
            temperature_k=temperature_k,
            pressure_mpa=pressure_mpa,
            approximate=region is Region.REGION3,
            **fields,
        )

        provenance = tracker.complete_calculation(
            outputs={name: (value, units[name]) for name, value in fields.items()}
        )
        return output, provenance

    def _single_phase_properties(
        self,
        tracker: ProvenanceTracker,
        region: Region,
        pressure_mpa: float,
        temperature_k: float,
    ) -> Tuple[Dict[str, float], Dict[str, str]]:
        calculator = get_region_calculator(region)
        if calculator is Region3Calculator:
            logger.warning(
                f"Region 3 state point (p={pressure_mpa} MPa, T={temperature_k} K) "
                f"evaluated with the {Region3Calculator.FORMULATION} formulation"
            )

        state = {"pressure_mpa": pressure_mpa, "temperature_k": temperature_k}
        fields = {}
        units = {}
        for field_name, method_name, unit, formula in SINGLE_PHASE_PROPERTIES:
            value = getattr(calculator, method_name)(pressure_mpa, temperature_k)
            tracker.add_step(
                operation=f"{region.value}.{method_name}",
                description=f"Evaluate {field_name}",
                inputs=state,
                output_name=field_name,
                output_value=value,
                formula=formula,
            )
            fields[field_name] = value
            units[field_name] = unit
        return fields, units

    def _saturation_properties(
        self,
        tracker: ProvenanceTracker,
        temperature_c: float,
    ) -> Tuple[Dict[str, float], Dict[str, str]]:
        state = {"temperature_c": temperature_c}

        saturation_pa = Region4Calculator.saturation_pressure(temperature_c)
        tracker.add_step(
            operation="region4.saturation_pressure",
            description="Saturation pressure from the backward equation",
            inputs=state,
            output_name="saturation_pressure_pa",
            output_value=saturation_pa,
            formula="p = (2C / (-B + sqrt(B^2 - 4AC)))^4",
        )

        liquid = Region4Calculator.calculate_saturated_liquid_enthalpy_iapws(temperature_c)
        tracker.add_step(
            operation="region4.saturated_liquid_enthalpy_iapws",
            description="Region 1 enthalpy at the saturation pressure",
            inputs=state,
            output_name="saturated_liquid_enthalpy_kj_kg",
            output_value=liquid,
        )

        vapor = Region4Calculator.calculate_saturated_vapor_enthalpy_iapws(temperature_c)
        tracker.add_step(
            operation="region4.saturated_vapor_enthalpy_iapws",
            description="Region 2 enthalpy at the saturation pressure",
            inputs=state,
            output_name="saturated_vapor_enthalpy_kj_kg",
            output_value=vapor,
        )

        fields = {
            "saturation_pressure_pa": saturation_pa,
            "saturated_liquid_enthalpy_kj_kg": liquid,
            "saturated_vapor_enthalpy_kj_kg": vapor,
        }
        units = {
            "saturation_pressure_pa": "Pa",
            "saturated_liquid_enthalpy_kj_kg": "kJ/kg",
            "saturated_vapor_enthalpy_kj_kg": "kJ/kg",
        }
        return fields, units
