"""
Critical depth: the depth at which the Froude number equals one.

Rectangular and triangular sections have closed forms. Trapezoidal and
circular sections are solved with a bracketed Brent iteration limited to
MAX_ITERATIONS; when the cap is hit the best estimate is returned with
``converged=False`` and a NonConvergenceWarning is issued.
"""
import logging
import warnings
from dataclasses import dataclass

from scipy.optimize import brentq

from .channel import ChannelParams
from .cross_section import CircularSection, RectangularSection, TrapezoidalSection, TriangularSection
from .errors import NonConvergenceWarning
from .settings import CIRCULAR_FULL_RATIO, DEPTH_SOLVER_TOLERANCE, MAX_ITERATIONS, MIN_DEPTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepthSolution:
    """Outcome of a characteristic-depth solve."""
    depth: float
    iterations: int
    converged: bool


def rectangular_critical_depth(Q: float, b: float, g: float) -> float:
    """yc = (q^2 / g)^(1/3), q = Q/b"""
    q = Q / b
    return (q**2 / g)**(1.0 / 3.0)

def triangular_critical_depth(Q: float, m: float, g: float) -> float:
    """yc = (2 Q^2 / (g m^2))^(1/5)"""
    return (2.0 * Q**2 / (g * m**2))**(1.0 / 5.0)

def solve_critical_depth(params: ChannelParams, max_iterations: int = MAX_ITERATIONS) -> DepthSolution:
    """
    Find the depth at which Fr(y) = 1 for the discharge in ``params``.

    Parameters
    ----------
    params : ChannelParams
        Reach description; only the section, discharge and units are used.
    max_iterations : int
        Iteration cap for the non closed-form shapes.

    Returns
    -------
    DepthSolution

    """
    section = params.section
    Q, g = params.discharge, params.g

    if isinstance(section, RectangularSection):
        return DepthSolution(rectangular_critical_depth(Q, section.bottom_width, g), 0, True)

    if isinstance(section, TriangularSection):
        return DepthSolution(triangular_critical_depth(Q, section.side_slope, g), 0, True)

    def f(y):
        return params.froude_number(y) - 1.0

    if isinstance(section, CircularSection):
        y_hi = section.diameter * CIRCULAR_FULL_RATIO
        if f(y_hi) > 0.0:
            logger.warning("Discharge %.4g stays supercritical up to the crown of a %.4g pipe.", Q, section.diameter)
            warnings.warn("Critical depth lies above the pipe crown; returning the near-full depth.",
                          NonConvergenceWarning, stacklevel=2)
            return DepthSolution(y_hi, 0, False)

    elif isinstance(section, TrapezoidalSection):
        # Rectangular-equivalent estimate bounds the trapezoid from above
        if section.bottom_width > 0.0:
            y_hi = 2.0 * rectangular_critical_depth(Q, section.bottom_width, g)
        else:
            y_hi = 2.0 * triangular_critical_depth(Q, section.side_slope, g)

        while f(y_hi) > 0.0:
            y_hi *= 2.0

    else:
        raise TypeError(f"No critical depth solver for {type(section).__name__}.")

    return _bracketed_solve(f, MIN_DEPTH, y_hi, max_iterations,
                            residual=lambda y: abs(f(y)),
                            name='critical depth')

def critical_depth(params: ChannelParams, max_iterations: int = MAX_ITERATIONS) -> float:
    return solve_critical_depth(params, max_iterations=max_iterations).depth

def critical_velocity(params: ChannelParams, yc: float = None) -> float:
    if yc is None:
        yc = critical_depth(params)
    return params.velocity(yc)

def minimum_specific_energy(params: ChannelParams, yc: float = None) -> float:
    """Specific energy at critical depth; the least energy that passes Q."""
    if yc is None:
        yc = critical_depth(params)
    return params.specific_energy(yc)

def is_flow_critical(params: ChannelParams, y: float) -> bool:
    """True when Fr(y) is within 5 % of one."""
    return abs(params.froude_number(y) - 1.0) < 0.05

def _bracketed_solve(f, y_lo: float, y_hi: float, max_iterations: int, residual, name: str) -> DepthSolution:
    y, r = brentq(f, y_lo, y_hi, xtol=1e-12, maxiter=max_iterations, full_output=True, disp=False)
    y = float(y)

    converged = bool(r.converged) and residual(y) < DEPTH_SOLVER_TOLERANCE
    if not converged:
        logger.warning("%s did not converge in %d iterations (best estimate %.6g).",
                       name.capitalize(), r.iterations, y)
        warnings.warn(f"{name.capitalize()} did not converge; returning best estimate.",
                      NonConvergenceWarning, stacklevel=3)

    return DepthSolution(y, int(r.iterations), converged)
