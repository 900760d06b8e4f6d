"""
Scalar inversion routine.

Recovers an independent variable (temperature) from a known property value
with a finite-difference Newton-Raphson iteration. One unknown, a fixed
seed and optional bounds that the iterate is clamped to.

The default settings cap the iteration at 10 steps with a 0.01 K
difference step. The loop exits early once the update falls below
``settings.tolerance``. A result also counts as converged when the final
residual is within ``settings.residual_tolerance`` of the target, relative
to its magnitude. The residual is always reported.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

from steamlang.config import SolverSettings, get_settings
from steamlang.exceptions import ConvergenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InversionResult:
    """
    Outcome of a Newton-Raphson inversion.

    Attributes:
        value: Final estimate of the independent variable
        residual: f(value) - target at the final estimate
        iterations: Number of Newton updates performed
        converged: True if the last update was below ``tolerance`` or the
            residual was within ``residual_tolerance``
    """
    value: float
    residual: float
    iterations: int
    converged: bool


def _clamp(x: float, lower: Optional[float], upper: Optional[float]) -> float:
    if lower is not None and x < lower:
        return lower
    if upper is not None and x > upper:
        return upper
    return x


def newton_raphson(
    function: Callable[[float], float],
    target: float,
    initial_guess: float,
    settings: Optional[SolverSettings] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> InversionResult:
    """
    Solve function(x) = target for x.

    Args:
        function: Property as a function of the unknown
        target: Property value to match
        initial_guess: Seed for the iteration
        settings: Solver settings (process default if None)
        lower: Optional lower bound the iterate is clamped to
        upper: Optional upper bound the iterate is clamped to; the
            derivative switches to a backward difference near it

    Returns:
        InversionResult with the estimate and its residual

    Raises:
        ConvergenceError: If the derivative vanishes, or if the cap is hit
            and ``settings.raise_on_nonconvergence`` is set
    """
    settings = settings or get_settings()
    step = settings.derivative_step

    x = _clamp(initial_guess, lower, upper)
    converged = False
    iterations = 0

    while iterations < settings.max_iterations:
        iterations += 1
        value = function(x)

        if upper is not None and x + step > upper:
            derivative = (value - function(x - step)) / step
        else:
            derivative = (function(x + step) - value) / step

        if derivative == 0.0 or not math.isfinite(derivative):
            raise ConvergenceError(
                "Finite-difference derivative vanished during inversion",
                iterations=iterations,
                residual=value - target,
                last_estimate=x,
                context={"target": target, "derivative": derivative},
            )

        unclamped = x - (value - target) / derivative
        x_next = _clamp(unclamped, lower, upper)
        update = abs(x_next - x)
        x = x_next

        if x_next != unclamped:
            # Pinned at a bound; further steps cannot move it
            if update == 0.0:
                break
            continue

        if update <= settings.tolerance:
            converged = True
            break

    residual = function(x) - target

    if not converged and abs(residual) <= settings.residual_tolerance * max(abs(target), 1.0):
        converged = True

    if not converged:
        logger.debug(
            f"Inversion stopped after {iterations} iterations without converging: "
            f"estimate={x}, residual={residual}"
        )
        if settings.raise_on_nonconvergence:
            raise ConvergenceError(
                f"Inversion did not converge in {iterations} iterations",
                iterations=iterations,
                residual=residual,
                last_estimate=x,
                context={"target": target},
            )

    return InversionResult(
        value=x,
        residual=residual,
        iterations=iterations,
        converged=converged,
    )


def invert_property(
    function: Callable[[float], float],
    target: float,
    initial_guess: float,
    full_output: bool = False,
    settings: Optional[SolverSettings] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> Union[float, InversionResult]:
    """
    Run ``newton_raphson`` and return the bare estimate unless ``full_output``.
    """
    result = newton_raphson(
        function,
        target,
        initial_guess,
        settings=settings,
        lower=lower,
        upper=upper,
    )
    return result if full_output else result.value
