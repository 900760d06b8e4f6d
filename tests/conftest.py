# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import pytest

from steamlang.calculators.steam_property_calculator import SteamPropertyCalculator
from steamlang.config import ENV_OVERRIDES, CONFIG_PATH_ENV_VAR, SolverSettings, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from STEAMLANG_* variables and cached settings."""
    for env_var in list(ENV_OVERRIDES) + [CONFIG_PATH_ENV_VAR]:
        monkeypatch.delenv(env_var, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Default solver settings."""
    return SolverSettings()


@pytest.fixture
def wide_settings():
    """Settings with room for inversions seeded far from the root."""
    return SolverSettings(max_iterations=50)


@pytest.fixture
def calculator(settings):
    """State-point calculator with default settings."""
    return SteamPropertyCalculator(settings)
