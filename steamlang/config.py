# -*- coding: utf-8 -*-
"""
SteamLang Solver Configuration.

This module provides the Pydantic configuration model for the numerical
helpers shared by every region calculator: the Newton-Raphson iteration cap,
finite-difference step, convergence tolerance and the tolerance band used
around the saturation curve by the region classifier.

Settings are resolved in three layers, later layers winning:
    1. Model defaults (match the historical fixed 10-iteration behavior)
    2. Optional YAML file (top-level mapping, or a ``solver:`` section)
    3. ``STEAMLANG_*`` environment variables

Example:
    >>> from steamlang.config import load_settings
    >>> settings = load_settings("steamlang.yaml")
    >>> settings.max_iterations
    10
"""

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from steamlang.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "STEAMLANG_CONFIG"

# Environment variable -> settings field
ENV_OVERRIDES = {
    "STEAMLANG_MAX_ITERATIONS": "max_iterations",
    "STEAMLANG_DERIVATIVE_STEP": "derivative_step",
    "STEAMLANG_TOLERANCE": "tolerance",
    "STEAMLANG_RESIDUAL_TOLERANCE": "residual_tolerance",
    "STEAMLANG_SATURATION_BAND_PA": "saturation_band_pa",
    "STEAMLANG_RAISE_ON_NONCONVERGENCE": "raise_on_nonconvergence",
}


# ============================================================================
# SOLVER SETTINGS
# ============================================================================


class SolverSettings(BaseModel):
    """
    Numerical settings for inversion and region classification.

    The defaults reproduce the fixed-iteration Newton-Raphson used by the
    property functions (10 iterations, 0.01 K finite-difference step) with an
    additional early exit once the temperature update is below ``tolerance``.

    An inversion counts as converged when either the last update is within
    ``tolerance`` or the final residual is within ``residual_tolerance``
    relative to the target (absolute for targets smaller than 1).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_iterations: int = Field(
        default=10, ge=1, description="Newton-Raphson iteration cap"
    )
    derivative_step: float = Field(
        default=0.01, gt=0, allow_inf_nan=False,
        description="Finite-difference step in K",
    )
    tolerance: float = Field(
        default=1e-9, ge=0, allow_inf_nan=False,
        description="Early-exit threshold on |dT| in K",
    )
    residual_tolerance: float = Field(
        default=1e-7, ge=0, allow_inf_nan=False,
        description="Relative residual accepted as converged",
    )
    saturation_band_pa: float = Field(
        default=100.0,
        gt=0,
        allow_inf_nan=False,
        description="Half-width of the Region 4 band around p_sat in Pa",
    )
    raise_on_nonconvergence: bool = Field(
        default=False,
        description="Raise ConvergenceError instead of returning a non-converged estimate",
    )


# ============================================================================
# LOADING
# ============================================================================


def _read_settings_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML settings file into a plain mapping."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(
            f"Settings file not found: {config_path}",
            context={"path": str(config_path)},
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Settings file is not valid YAML: {config_path}",
            context={"path": str(config_path), "cause": str(e)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Settings file must contain a mapping",
            context={"path": str(config_path), "type": type(data).__name__},
        )

    section = data.get("solver", data)
    if not isinstance(section, dict):
        raise ConfigurationError(
            "'solver' section must be a mapping",
            context={"path": str(config_path)},
        )
    return dict(section)


def _read_env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Collect STEAMLANG_* overrides from the environment."""
    overrides = {}
    for env_var, field_name in ENV_OVERRIDES.items():
        if env_var in environ:
            overrides[field_name] = environ[env_var]
            logger.debug(f"Settings override from {env_var}: {environ[env_var]}")
    return overrides


def load_settings(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SolverSettings:
    """
    Build solver settings from defaults, an optional YAML file and the environment.

    Args:
        path: Optional YAML settings file
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated SolverSettings

    Raises:
        ConfigurationError: If the file cannot be read or a value fails validation
    """
    environ = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_read_settings_file(path))
    data.update(_read_env_overrides(environ))

    try:
        return SolverSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid solver settings",
            context={"values": {k: str(v) for k, v in data.items()}, "errors": e.errors()},
        ) from e


# ============================================================================
# PROCESS DEFAULT
# ============================================================================

_settings_lock = threading.Lock()
_settings: Optional[SolverSettings] = None


def get_settings() -> SolverSettings:
    """
    Return the process-wide default settings, loading them on first use.

    The settings file named by ``STEAMLANG_CONFIG`` is read if set.
    """
    global _settings
    with _settings_lock:
        if _settings is None:
            _settings = load_settings(os.environ.get(CONFIG_PATH_ENV_VAR))
            logger.debug(f"Loaded solver settings: {_settings.model_dump()}")
        return _settings


def set_settings(settings: SolverSettings) -> None:
    """Replace the process-wide default settings."""
    global _settings
    with _settings_lock:
        _settings = settings


def reset_settings() -> None:
    """Drop the cached default so the next ``get_settings`` reloads it."""
    global _settings
    with _settings_lock:
        _settings = None
