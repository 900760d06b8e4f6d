"""
SteamLang: Provenance Tracking Module

Calculation provenance for steam property evaluations, with SHA-256 hashes
so that any recorded state point can be re-evaluated and compared
bit-for-bit.

This module provides:
- SHA-256 hash generation over inputs, steps and outputs
- Step-by-step record of each formulation call
- Multi-output records (one state point yields several properties)
- Reproducibility verification between two records

Each ProvenanceTracker holds the state of one calculation at a time; give
every thread its own tracker.
"""

from __future__ import annotations

import hashlib
import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class CalculationType(Enum):
    """Categories of recorded calculations."""
    SINGLE_PHASE_PROPERTIES = "single_phase_properties"
    SATURATION_PROPERTIES = "saturation_properties"


@dataclass
class CalculationStep:
    """
    One recorded step of a calculation.

    Attributes:
        step_number: Sequential step identifier
        operation: Operation performed (e.g. "classify", "region1.enthalpy")
        description: Human-readable description of the step
        inputs: Input values used
        output_name: Name of the output variable
        output_value: Calculated result
        formula: Formula used, as text
    """
    step_number: int
    operation: str
    description: str
    inputs: Dict[str, Any]
    output_name: str
    output_value: Any
    formula: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert step to dictionary for hashing."""
        return {
            "step_number": self.step_number,
            "operation": self.operation,
            "description": self.description,
            "inputs": {k: str(v) for k, v in self.inputs.items()},
            "output_name": self.output_name,
            "output_value": str(self.output_value),
            "formula": self.formula,
        }


@dataclass
class CalculationProvenance:
    """
    Complete provenance record for one calculation.

    Attributes:
        calculation_id: Unique identifier for this calculation
        calculation_type: Category of calculation
        formula_id: Identifier of the formulation used
        formula_version: Version of the formulation
        timestamp_utc: UTC timestamp of calculation
        inputs: All input parameters
        steps: List of calculation steps
        outputs: Output name -> (value, unit)
        precision: Decimal places applied to float outputs
        provenance_hash: SHA-256 hash of the record
        calculation_time_ms: Time taken for calculation
        metadata: Additional metadata
    """
    calculation_id: str
    calculation_type: CalculationType
    formula_id: str
    formula_version: str
    timestamp_utc: str
    inputs: Dict[str, Any]
    steps: List[CalculationStep]
    outputs: Dict[str, Tuple[Any, str]]
    precision: int = 9
    provenance_hash: str = ""
    calculation_time_ms: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.provenance_hash:
            self.provenance_hash = self._calculate_hash()

    def _calculate_hash(self) -> str:
        """
        SHA-256 over inputs, steps, outputs and formulation identity.

        Timestamps and timings are excluded so identical evaluations hash
        identically.
        """
        hash_data = {
            "calculation_type": self.calculation_type.value,
            "formula_id": self.formula_id,
            "formula_version": self.formula_version,
            "inputs": {k: str(v) for k, v in self.inputs.items()},
            "steps": [step.to_dict() for step in self.steps],
            "outputs": {k: [str(v), unit] for k, (v, unit) in self.outputs.items()},
            "precision": self.precision,
        }

        hash_string = json.dumps(hash_data, sort_keys=True, separators=(',', ':'))
        return hashlib.sha256(hash_string.encode('utf-8')).hexdigest()

    def verify_integrity(self) -> bool:
        """
        Recalculate the hash and compare with the stored one.

        Returns:
            bool: True if hash matches, False if the record was altered
        """
        return self._calculate_hash() == self.provenance_hash

    def to_audit_record(self) -> Dict[str, Any]:
        """Serializable audit record of this calculation."""
        return {
            "calculation_id": self.calculation_id,
            "calculation_type": self.calculation_type.value,
            "formula_id": self.formula_id,
            "formula_version": self.formula_version,
            "timestamp_utc": self.timestamp_utc,
            "inputs": self.inputs,
            "calculation_steps": [step.to_dict() for step in self.steps],
            "outputs": {
                name: {
                    "value": None if value is None else float(value),
                    "unit": unit,
                }
                for name, (value, unit) in self.outputs.items()
            },
            "precision": self.precision,
            "provenance_hash": self.provenance_hash,
            "calculation_time_ms": self.calculation_time_ms,
            "integrity_verified": self.verify_integrity(),
            "metadata": self.metadata,
        }


class ProvenanceTracker:
    """
    Records the steps of one calculation and seals them into a
    CalculationProvenance.

    Example:
        >>> tracker = ProvenanceTracker()
        >>> tracker.start_calculation(
        ...     calculation_type=CalculationType.SINGLE_PHASE_PROPERTIES,
        ...     formula_id="iapws_if97_region1",
        ...     formula_version="IF97-2012",
        ...     inputs={"pressure_mpa": 3.0, "temperature_k": 300.0},
        ... )
        >>> tracker.add_step(
        ...     operation="region1.enthalpy",
        ...     description="Specific enthalpy from gamma_tau",
        ...     inputs={"pressure_mpa": 3.0, "temperature_k": 300.0},
        ...     output_name="h",
        ...     output_value=115.331273,
        ...     formula="h = R * T * tau * gamma_tau",
        ... )
        >>> provenance = tracker.complete_calculation(
        ...     outputs={"specific_enthalpy": (115.331273, "kJ/kg")}
        ... )
    """

    def __init__(self):
        self._reset()

    def start_calculation(
        self,
        calculation_type: CalculationType,
        formula_id: str,
        formula_version: str,
        inputs: Dict[str, Any],
        calculation_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Start tracking a new calculation.

        Args:
            calculation_type: Category of calculation
            formula_id: Identifier of the formulation
            formula_version: Version of the formulation
            inputs: All input parameters for the calculation
            calculation_id: Optional custom ID (derived from inputs if not provided)
            metadata: Optional additional metadata

        Returns:
            str: The calculation ID

        Raises:
            RuntimeError: If a calculation is already in progress
        """
        if self._active:
            raise RuntimeError(
                "Calculation already in progress. Complete or abort current calculation first."
            )

        self._active = True
        self._start_time = time.perf_counter()
        self._timestamp_utc = datetime.now(timezone.utc).isoformat()

        if calculation_id is None:
            id_string = f"{formula_id}_{self._timestamp_utc}_{json.dumps(inputs, sort_keys=True, default=str)}"
            self._calculation_id = hashlib.sha256(id_string.encode()).hexdigest()[:16]
        else:
            self._calculation_id = calculation_id

        self._calculation_type = calculation_type
        self._formula_id = formula_id
        self._formula_version = formula_version
        self._inputs = inputs.copy()
        self._steps = []
        self._step_counter = 0
        self._metadata = metadata or {}

        return self._calculation_id

    def add_step(
        self,
        operation: str,
        description: str,
        inputs: Dict[str, Any],
        output_name: str,
        output_value: Any,
        formula: str = ""
    ) -> CalculationStep:
        """
        Add a calculation step to the record.

        Raises:
            RuntimeError: If no calculation is in progress
        """
        if not self._active:
            raise RuntimeError("No calculation in progress. Call start_calculation first.")

        self._step_counter += 1

        step = CalculationStep(
            step_number=self._step_counter,
            operation=operation,
            description=description,
            inputs=inputs,
            output_name=output_name,
            output_value=output_value,
            formula=formula,
        )

        self._steps.append(step)
        return step

    def complete_calculation(
        self,
        outputs: Dict[str, Tuple[Any, str]],
        precision: int = 9
    ) -> CalculationProvenance:
        """
        Seal the calculation into a provenance record.

        Args:
            outputs: Output name -> (value, unit); None values are kept as-is
            precision: Decimal places applied to float outputs

        Returns:
            CalculationProvenance: Complete record with hash

        Raises:
            RuntimeError: If no calculation is in progress
        """
        if not self._active:
            raise RuntimeError("No calculation in progress. Call start_calculation first.")

        calculation_time_ms = (time.perf_counter() - self._start_time) * 1000

        quantize_str = '0.' + '0' * precision
        rounded = {}
        for name, (value, unit) in outputs.items():
            if isinstance(value, float):
                value = Decimal(str(value)).quantize(
                    Decimal(quantize_str), rounding=ROUND_HALF_UP
                )
            rounded[name] = (value, unit)

        provenance = CalculationProvenance(
            calculation_id=self._calculation_id,
            calculation_type=self._calculation_type,
            formula_id=self._formula_id,
            formula_version=self._formula_version,
            timestamp_utc=self._timestamp_utc,
            inputs=self._inputs,
            steps=self._steps,
            outputs=rounded,
            precision=precision,
            calculation_time_ms=calculation_time_ms,
            metadata=self._metadata,
        )

        self._reset()

        return provenance

    def abort_calculation(self) -> None:
        """Abort the current calculation without generating provenance."""
        self._reset()

    @property
    def active(self) -> bool:
        return self._active

    def _reset(self) -> None:
        self._calculation_id: Optional[str] = None
        self._calculation_type: Optional[CalculationType] = None
        self._formula_id: Optional[str] = None
        self._formula_version: Optional[str] = None
        self._start_time: Optional[float] = None
        self._timestamp_utc: Optional[str] = None
        self._inputs: Dict[str, Any] = {}
        self._steps: List[CalculationStep] = []
        self._step_counter: int = 0
        self._metadata: Dict[str, Any] = {}
        self._active: bool = False


def generate_calculation_hash(
    formula_id: str,
    inputs: Dict[str, Any],
    output_value: Union[float, Decimal],
    output_unit: str
) -> str:
    """
    SHA-256 hash for a single-valued calculation, without a tracker.

    Args:
        formula_id: Identifier of the formulation used
        inputs: Input parameters
        output_value: Calculated result
        output_unit: Unit of measurement

    Returns:
        str: 64-character hexadecimal SHA-256 hash
    """
    hash_data = {
        "formula_id": formula_id,
        "inputs": {k: str(v) for k, v in sorted(inputs.items())},
        "output_value": str(output_value),
        "output_unit": output_unit,
    }

    hash_string = json.dumps(hash_data, sort_keys=True, separators=(',', ':'))
    return hashlib.sha256(hash_string.encode('utf-8')).hexdigest()


def verify_calculation_reproducibility(
    provenance1: CalculationProvenance,
    provenance2: CalculationProvenance
) -> bool:
    """True if both records are intact and describe the identical calculation."""
    return (
        provenance1.provenance_hash == provenance2.provenance_hash and
        provenance1.verify_integrity() and
        provenance2.verify_integrity()
    )
