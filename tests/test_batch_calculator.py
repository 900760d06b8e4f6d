"""Tests for batch and grid evaluation."""

import numpy as np
import pytest

from steamlang.calculators.batch_calculator import (
    GRID_PROPERTIES,
    BatchPropertyCalculator,
    BatchResult,
)
from steamlang.calculators.region4 import Region4Calculator
from steamlang.calculators.steam_property_calculator import SteamStateInput
from steamlang.exceptions import ValidationError


@pytest.fixture
def batch(calculator):
    return BatchPropertyCalculator(calculator=calculator, max_workers=4)


@pytest.fixture
def mixed_states():
    return [
        SteamStateInput(temperature_c=25.0, pressure_pa=1.0e6),
        SteamStateInput(temperature_c=200.0, pressure_pa=1.0e5),
        SteamStateInput(temperature_c=400.0, pressure_pa=50.0e6),
        SteamStateInput(temperature_c=1500.0, pressure_pa=1.0e6),
        SteamStateInput(
            temperature_c=100.0,
            pressure_pa=Region4Calculator.saturation_pressure(100.0),
        ),
        SteamStateInput(temperature_c=25.0, pressure_pa=200.0e6),
    ]


class TestCalculateBatch:
    """Tests for calculate_batch."""

    def test_order_preserved(self, batch):
        temperatures = [10.0 * i for i in range(1, 21)]
        states = [SteamStateInput(temperature_c=t, pressure_pa=5.0e6) for t in temperatures]

        result = batch.calculate_batch(states)

        assert [r.inputs.temperature_c for r in result.results] == temperatures
        assert result.successful_count == 20
        assert result.failed_count == 0

    def test_matches_single_evaluation(self, batch, calculator):
        state = SteamStateInput(temperature_c=150.0, pressure_pa=5.0e6)

        result = batch.calculate_batch([state])
        output, provenance = calculator.calculate(state)

        assert result.results[0].output == output
        assert result.results[0].provenance.provenance_hash == provenance.provenance_hash

    def test_error_isolation(self, batch, mixed_states):
        result = batch.calculate_batch(mixed_states)

        assert isinstance(result, BatchResult)
        assert result.successful_count == 5
        assert result.failed_count == 1
        assert result.approximate_count == 1
        assert result.region_counts == {
            "region1": 1,
            "region2": 1,
            "region3": 1,
            "region4": 1,
            "region5": 1,
        }

        failed = result.get_failed()
        assert len(failed) == 1
        assert failed[0].inputs.pressure_pa == 200.0e6
        assert failed[0].output is None
        assert result.get_errors()[0].startswith("Calculation failed:")

    def test_stop_on_error(self, batch, mixed_states):
        with pytest.raises(ValidationError):
            batch.calculate_batch(mixed_states, continue_on_error=False)

    def test_progress_callback(self, batch, mixed_states):
        calls = []

        batch.calculate_batch(mixed_states, progress_callback=lambda done, total: calls.append((done, total)))

        assert calls == [(i, len(mixed_states)) for i in range(1, len(mixed_states) + 1)]

    def test_empty_batch(self, batch):
        result = batch.calculate_batch([])

        assert result.results == []
        assert result.successful_count == 0
        assert result.average_duration_ms == 0

    def test_to_dict(self, batch, mixed_states):
        data = batch.calculate_batch(mixed_states).to_dict()

        assert data["total_calculations"] == 6
        assert data["failed_count"] == 1
        assert data["region_counts"]["region3"] == 1
        assert "batch_start_time" in data

    def test_default_calculator(self):
        result = BatchPropertyCalculator().calculate_batch(
            [SteamStateInput(temperature_c=25.0, pressure_pa=1.0e6)]
        )
        assert result.successful_count == 1


class TestEvaluateGrid:
    """Tests for evaluate_grid."""

    def test_shape_and_values(self, batch, calculator):
        temperatures = [25.0, 100.0, 200.0]
        pressures = [1.0e5, 1.0e6]

        grid = batch.evaluate_grid(temperatures, pressures, "specific_enthalpy_kj_kg")

        assert grid.shape == (3, 2)
        for i, t in enumerate(temperatures):
            for j, p in enumerate(pressures):
                output, _ = calculator.calculate(SteamStateInput(temperature_c=t, pressure_pa=p))
                assert grid[i, j] == pytest.approx(output.specific_enthalpy_kj_kg)

    def test_nan_for_saturation_and_undefined(self, batch):
        saturation_pa = Region4Calculator.saturation_pressure(100.0)

        grid = batch.evaluate_grid([100.0], [saturation_pa, 200.0e6, 1.0e6], "density_kg_m3")

        assert np.isnan(grid[0, 0])
        assert np.isnan(grid[0, 1])
        assert grid[0, 2] > 900.0

    def test_accepts_numpy_inputs(self, batch):
        grid = batch.evaluate_grid(
            np.linspace(20.0, 80.0, 4), np.array([1.0e6, 5.0e6]), "specific_volume_m3_kg"
        )
        assert grid.shape == (4, 2)
        assert not np.isnan(grid).any()

    def test_unknown_property(self, batch):
        with pytest.raises(ValueError, match="Unknown grid property"):
            batch.evaluate_grid([25.0], [1.0e6], "saturation_pressure_pa")

    def test_grid_properties(self):
        assert GRID_PROPERTIES == (
            "specific_enthalpy_kj_kg",
            "specific_entropy_kj_kgk",
            "specific_volume_m3_kg",
            "density_kg_m3",
            "specific_heat_cp_kj_kgk",
        )
