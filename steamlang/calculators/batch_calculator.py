"""
Batch Calculator

Parallel evaluation of many independent state points.

Features:
- Parallel processing (thread pool; every formulation call is pure)
- Progress tracking
- Error isolation (one failure doesn't stop batch)
- Input order preserved in the results
- Property grids as NumPy arrays
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from steamlang.calculators.provenance import CalculationProvenance
from steamlang.calculators.steam_property_calculator import (
    SINGLE_PHASE_PROPERTIES,
    SteamPropertyCalculator,
    SteamStateInput,
    SteamStateOutput,
)
from steamlang.config import SolverSettings
from steamlang.regions import Region

logger = logging.getLogger(__name__)

GRID_PROPERTIES = tuple(name for name, _, _, _ in SINGLE_PHASE_PROPERTIES)


@dataclass
class StateResult:
    """
    Outcome of one state point in a batch.

    Attributes:
        inputs: The evaluated state point
        output: Properties, or None on failure
        provenance: Provenance record, or None on failure
        error: Failure message, or None on success
        duration_ms: Evaluation time
    """
    inputs: SteamStateInput
    output: Optional[SteamStateOutput] = None
    provenance: Optional[CalculationProvenance] = None
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """
    Result of batch calculation.

    Attributes:
        results: One StateResult per input, in input order
        successful_count: Number of successful evaluations
        failed_count: Number of failed evaluations
        approximate_count: Successful evaluations using the approximate Region 3
        region_counts: Region value -> number of successful evaluations
        batch_duration_seconds: Total batch processing time
        average_duration_ms: Average time per evaluation
    """
    results: List[StateResult]
    successful_count: int = 0
    failed_count: int = 0
    approximate_count: int = 0
    region_counts: Dict[str, int] = field(default_factory=dict)
    batch_duration_seconds: float = 0
    average_duration_ms: float = 0
    batch_start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Calculate summary statistics"""
        succeeded = [r for r in self.results if r.succeeded]
        self.successful_count = len(succeeded)
        self.failed_count = len(self.results) - self.successful_count
        self.approximate_count = len([r for r in succeeded if r.output.approximate])

        counts: Dict[str, int] = {}
        for r in succeeded:
            counts[r.output.region.value] = counts.get(r.output.region.value, 0) + 1
        self.region_counts = counts

        if self.results:
            self.average_duration_ms = (
                sum(r.duration_ms for r in self.results) / len(self.results)
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'total_calculations': len(self.results),
            'successful_count': self.successful_count,
            'failed_count': self.failed_count,
            'approximate_count': self.approximate_count,
            'region_counts': dict(self.region_counts),
            'batch_duration_seconds': self.batch_duration_seconds,
            'average_duration_ms': self.average_duration_ms,
            'calculations_per_second': len(self.results) / self.batch_duration_seconds if self.batch_duration_seconds > 0 else 0,
            'batch_start_time': self.batch_start_time.isoformat(),
        }

    def get_failed(self) -> List[StateResult]:
        """Get all failed evaluations"""
        return [r for r in self.results if not r.succeeded]

    def get_errors(self) -> List[str]:
        """Get all error messages"""
        return [r.error for r in self.results if r.error is not None]


class BatchPropertyCalculator:
    """
    Batch steam property calculator.

    Example:
        >>> batch = BatchPropertyCalculator(max_workers=4)
        >>> result = batch.calculate_batch([
        ...     SteamStateInput(temperature_c=25.0, pressure_pa=1.0e6),
        ...     SteamStateInput(temperature_c=300.0, pressure_pa=1.0e6),
        ... ])
        >>> result.successful_count
        2
    """

    def __init__(
        self,
        calculator: Optional[SteamPropertyCalculator] = None,
        max_workers: Optional[int] = None,
        settings: Optional[SolverSettings] = None,
    ):
        """
        Initialize batch calculator.

        Args:
            calculator: State-point calculator (created from ``settings`` if None)
            max_workers: Max parallel workers (executor default if None)
            settings: Solver settings for a newly created calculator
        """
        self.calculator = calculator or SteamPropertyCalculator(settings)
        self.max_workers = max_workers

    def calculate_batch(
        self,
        inputs: Sequence[SteamStateInput],
        progress_callback: Optional[Callable[[int, int], None]] = None,
        continue_on_error: bool = True,
    ) -> BatchResult:
        """
        Evaluate a batch of state points.

        Args:
            inputs: State points to evaluate
            progress_callback: Optional callback function(completed, total)
            continue_on_error: Record failures instead of raising the first one

        Returns:
            BatchResult with one entry per input, in input order
        """
        start_time = datetime.now(timezone.utc)
        start = time.perf_counter()
        results: List[Optional[StateResult]] = [None] * len(inputs)
        completed = 0

        logger.info(f"Starting batch calculation: {len(inputs)} state points")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self._safe_calculate, state, continue_on_error): index
                for index, state in enumerate(inputs)
            }

            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()
                completed += 1

                if progress_callback:
                    progress_callback(completed, len(inputs))

        duration_seconds = time.perf_counter() - start

        batch_result = BatchResult(
            results=results,
            batch_duration_seconds=duration_seconds,
            batch_start_time=start_time,
        )

        logger.info(
            f"Batch calculation completed: {batch_result.successful_count} succeeded, "
            f"{batch_result.failed_count} failed in {duration_seconds:.2f}s"
        )
        return batch_result

    def _safe_calculate(
        self,
        state: SteamStateInput,
        continue_on_error: bool
    ) -> StateResult:
        """
        Evaluate one state point, turning failures into a failed result.

        Raises:
            Exception: The original failure, if ``continue_on_error`` is False
        """
        start = time.perf_counter()
        try:
            output, provenance = self.calculator.calculate(state)
        except Exception as e:
            logger.error(
                f"Calculation failed for T={state.temperature_c} C, "
                f"P={state.pressure_pa} Pa: {str(e)}"
            )

            if not continue_on_error:
                raise

            return StateResult(
                inputs=state,
                error=f"Calculation failed: {str(e)}",
                duration_ms=(time.perf_counter() - start) * 1000,
            )

        return StateResult(
            inputs=state,
            output=output,
            provenance=provenance,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def evaluate_grid(
        self,
        temperatures_c: Sequence[float],
        pressures_pa: Sequence[float],
        property_name: str,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> np.ndarray:
        """
        Evaluate one single-phase property over a temperature x pressure grid.

        Args:
            temperatures_c: Temperatures [C] (rows)
            pressures_pa: Pressures [Pa] (columns)
            property_name: One of GRID_PROPERTIES, e.g. "specific_enthalpy_kj_kg"
            progress_callback: Optional callback function(completed, total)

        Returns:
            Array of shape (len(temperatures_c), len(pressures_pa)); NaN where the
            point is undefined, on the saturation curve, or failed

        Raises:
            ValueError: If property_name is not a single-phase property
        """
        if property_name not in GRID_PROPERTIES:
            raise ValueError(
                f"Unknown grid property '{property_name}'. "
                f"Expected one of: {', '.join(GRID_PROPERTIES)}"
            )

        temperatures = np.asarray(temperatures_c, dtype=float)
        pressures = np.asarray(pressures_pa, dtype=float)
        states = [
            SteamStateInput(temperature_c=float(t), pressure_pa=float(p))
            for t in temperatures
            for p in pressures
        ]

        batch = self.calculate_batch(states, progress_callback=progress_callback)

        values = np.full(len(states), np.nan)
        for index, result in enumerate(batch.results):
            if result.succeeded and result.output.region is not Region.REGION4:
                values[index] = getattr(result.output, property_name)

        return values.reshape(len(temperatures), len(pressures))
