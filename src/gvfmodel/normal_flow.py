import logging
import warnings
from enum import Enum

from .channel import ChannelParams
from .critical_flow import DepthSolution, _bracketed_solve, critical_depth
from .cross_section import CircularSection
from .errors import NonConvergenceWarning
from .settings import CIRCULAR_PEAK_FLOW_RATIO, MAX_ITERATIONS, MIN_DEPTH

logger = logging.getLogger(__name__)


class ChannelClass(str, Enum):
    """Slope classification of a reach for a given discharge."""
    MILD = 'mild'
    STEEP = 'steep'
    CRITICAL = 'critical'

    def __str__(self) -> str:
        return self.value


def solve_normal_depth(params: ChannelParams, max_iterations: int = MAX_ITERATIONS,
                       seed: float = None) -> DepthSolution:
    """
    Find the depth at which Manning's equation carries the discharge.

    The bracket is seeded at the critical depth: the root lies below it
    on a steep reach and above it on a mild one.

    Parameters
    ----------
    params : ChannelParams
        Reach description.
    max_iterations : int
        Iteration cap of the root finder.
    seed : float, optional
        Starting depth. Defaults to the critical depth.

    Returns
    -------
    DepthSolution
        For a circular section whose capacity (at 0.938 d) is below the
        discharge, the peak-capacity depth with ``converged=False``.

    """
    section = params.section
    Q = params.discharge

    def f(y):
        return params.manning_discharge(y) - Q

    if isinstance(section, CircularSection):
        y_cap = section.diameter * CIRCULAR_PEAK_FLOW_RATIO
        if f(y_cap) < 0.0:
            logger.warning("Discharge %.4g exceeds the open-channel capacity of a %.4g pipe.", Q, section.diameter)
            warnings.warn("Normal depth exceeds the pipe capacity; returning the peak-capacity depth.",
                          NonConvergenceWarning, stacklevel=2)
            return DepthSolution(y_cap, 0, False)
    else:
        y_cap = None

    if seed is None:
        seed = critical_depth(params, max_iterations=max_iterations)
    seed = section.clamp_depth(seed, MIN_DEPTH)
    if y_cap is not None:
        seed = min(seed, y_cap)

    def grow(y):
        y = 2.0 * y
        return y if y_cap is None else min(y, y_cap)

    if f(seed) >= 0.0:
        y_lo, y_hi = MIN_DEPTH, seed
    else:
        y_lo, y_hi = seed, grow(seed)
        while f(y_hi) < 0.0:
            y_lo, y_hi = y_hi, grow(y_hi)

    return _bracketed_solve(f, y_lo, y_hi, max_iterations,
                            residual=lambda y: abs(f(y)) / Q,
                            name='normal depth')

def normal_depth(params: ChannelParams, max_iterations: int = MAX_ITERATIONS) -> float:
    return solve_normal_depth(params, max_iterations=max_iterations).depth

def normal_velocity(params: ChannelParams, yn: float = None) -> float:
    if yn is None:
        yn = normal_depth(params)
    return params.velocity(yn)

def normal_froude_number(params: ChannelParams, yn: float = None) -> float:
    if yn is None:
        yn = normal_depth(params)
    return params.froude_number(yn)

def is_flow_uniform(params: ChannelParams, y: float, yn: float = None) -> bool:
    """True when y is within 2 % of the normal depth."""
    if yn is None:
        yn = normal_depth(params)
    return abs(y - yn) / yn < 0.02

def classify_channel(yn: float, yc: float, tolerance: float = 0.0) -> ChannelClass:
    """
    Mild when yn > yc, steep when yn < yc, critical otherwise.

    With a positive ``tolerance`` depths within tolerance * yc of each
    other are reported as critical.
    """
    if abs(yn - yc) <= tolerance * yc:
        return ChannelClass.CRITICAL
    elif yn > yc:
        return ChannelClass.MILD
    else:
        return ChannelClass.STEEP
