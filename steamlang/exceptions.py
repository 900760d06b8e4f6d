"""SteamLang Custom Exception Hierarchy.

This module provides the exception hierarchy for the SteamLang property
engine with rich error context for debugging, monitoring, and user feedback.

Exception Hierarchy:
    SteamLangException (base)
    ├── ValidationError
    │   └── RangeViolationError
    ├── CalculationException
    │   ├── SaturationDomainError
    │   └── ConvergenceError
    └── ConfigurationError

All exceptions include rich context:
- error_code: Unique error identifier
- context: Dictionary with error-specific details
- timestamp: When the error occurred

Example:
    >>> from steamlang.exceptions import RangeViolationError
    >>> raise RangeViolationError(
    ...     message="Pressure must be positive",
    ...     parameter="pressure_mpa",
    ...     value=-1.0,
    ... )
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class SteamLangException(Exception):
    """Base exception for all SteamLang errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "SL_CALC_CONVERGENCE_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "SL"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code from the class name.

        Returns:
            Error code like "SL_CALC_SATURATION_DOMAIN_ERROR"
        """
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        """String representation with error code and message."""
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Validation Exceptions
# ==============================================================================

class ValidationError(SteamLangException):
    """Input validation failed.

    Raised when a state point or request does not meet validation requirements.
    """

    ERROR_PREFIX = "SL_INPUT"

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            context: Error context
            invalid_fields: Dictionary of field_name -> reason
        """
        if invalid_fields:
            context = context or {}
            context["invalid_fields"] = invalid_fields
        super().__init__(message, context=context)


class RangeViolationError(ValidationError):
    """A physical input is outside the range any formulation accepts.

    Raised for non-finite values, absolute temperatures at or below zero,
    and non-positive pressures.

    Example:
        >>> raise RangeViolationError(
        ...     message="Temperature must be above absolute zero",
        ...     parameter="temperature_k",
        ...     value=-5.0,
        ... )
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        value: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if parameter:
            context["parameter"] = parameter
        if value is not None:
            context["value"] = value
        super().__init__(message, context=context)


# ==============================================================================
# Calculation Exceptions
# ==============================================================================

class CalculationException(SteamLangException):
    """Base exception for numerical failures inside a formulation."""

    ERROR_PREFIX = "SL_CALC"


class SaturationDomainError(CalculationException):
    """Saturation-curve evaluation requested outside its valid band.

    Raised instead of returning NaN when the backward equation would take the
    square root of a negative number, or when the temperature lies outside
    the triple-point to critical-point band.

    Example:
        >>> raise SaturationDomainError(
        ...     message="Input outside valid temperature range for saturation curve",
        ...     temperature_k=700.0,
        ...     valid_range=(273.15, 647.096),
        ... )
    """

    def __init__(
        self,
        message: str,
        temperature_k: Optional[float] = None,
        pressure_pa: Optional[float] = None,
        valid_range: Optional[tuple] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if temperature_k is not None:
            context["temperature_k"] = temperature_k
        if pressure_pa is not None:
            context["pressure_pa"] = pressure_pa
        if valid_range is not None:
            context["valid_range"] = list(valid_range)
        super().__init__(message, context=context)


class ConvergenceError(CalculationException):
    """Newton-Raphson inversion could not produce a usable estimate.

    Raised when the finite-difference derivative vanishes, or when strict
    mode is enabled and the iteration cap is reached without convergence.
    """

    def __init__(
        self,
        message: str,
        iterations: Optional[int] = None,
        residual: Optional[float] = None,
        last_estimate: Optional[float] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if iterations is not None:
            context["iterations"] = iterations
        if residual is not None:
            context["residual"] = residual
        if last_estimate is not None:
            context["last_estimate"] = last_estimate
        super().__init__(message, context=context)


# ==============================================================================
# Configuration Exceptions
# ==============================================================================

class ConfigurationError(SteamLangException):
    """Solver configuration is invalid.

    Raised when a settings file or environment override cannot be parsed or
    fails validation.
    """

    ERROR_PREFIX = "SL_CONFIG"


# ==============================================================================
# Utilities
# ==============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format exception chain for logging/display.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with full exception chain
    """
    lines = []
    current = exc

    while current is not None:
        if isinstance(current, SteamLangException):
            lines.append(str(current))
            lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")

        current = getattr(current, "__cause__", None)

    return "\n".join(lines)
