from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError

############                Physical Constants                  ############

GRAVITY = {'metric': 9.81, 'imperial': 32.2}
MANNING_K = {'metric': 1.0, 'imperial': 1.49}
SPECIFIC_WEIGHT = {'metric': 9810.0, 'imperial': 62.4}

############                Solver Parameters                   ############

NUM_STEPS = 100
MAX_ITERATIONS = 50

DEPTH_SOLVER_TOLERANCE = 1e-4

TRIAL_DEPTH_NUDGE = 0.01
DEPTH_ADJUSTMENT = 0.001
ENERGY_TOLERANCE = 1e-3

# Below this |dE/dy| the step refinement uses the fixed depth adjustment
MIN_ENERGY_SLOPE = 0.01

# Relative offset from yc that keeps a depth on its branch of the energy curve
CRITICAL_MARGIN = 1e-6

MIN_DEPTH = 1e-6
CIRCULAR_FULL_RATIO = 0.999
CIRCULAR_PEAK_FLOW_RATIO = 0.938

# Froude band around 1 reported as "critical"
REGIME_BAND = 0.05


class UnitSystem(Enum):
    METRIC = 'metric'
    IMPERIAL = 'imperial'

    @property
    def gravity(self) -> float:
        return GRAVITY[self.value]

    @property
    def manning_k(self) -> float:
        return MANNING_K[self.value]

    @property
    def specific_weight(self) -> float:
        return SPECIFIC_WEIGHT[self.value]


@dataclass(frozen=True)
class ProfileOptions:
    """
    Explicit choices for the marching engine.

    Parameters
    ----------
    num_steps : int
        Number of reach subdivisions; the step size is length / num_steps.
    max_iterations : int
        Cap on every inner iteration (root solvers and step refinement).
    critical_slope_control : str
        'downstream' starts a critical-slope reach at x = L with the
        critical depth and marches upstream. 'upstream' starts at x = 0
        with the normal depth and marches downstream.
    dual_boundary_march : str
        When both boundary depths are given: 'downstream' always starts
        from the downstream depth; 'natural' picks the end that controls
        the channel class.
    critical_tolerance : float
        Relative band |yn - yc| / yc within which the reach is classified
        as critical. 0 means exact comparison.

    """
    num_steps: int = NUM_STEPS
    max_iterations: int = MAX_ITERATIONS
    critical_slope_control: str = 'downstream'
    dual_boundary_march: str = 'downstream'
    critical_tolerance: float = 0.0

    def __post_init__(self):
        if self.critical_slope_control not in ['downstream', 'upstream']:
            raise ConfigurationError("Invalid critical slope control.")

        if self.dual_boundary_march not in ['downstream', 'natural']:
            raise ConfigurationError("Invalid dual boundary march.")

        if int(self.num_steps) != self.num_steps or self.num_steps < 1:
            raise ConfigurationError("num_steps must be a positive integer.")

        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ConfigurationError("max_iterations must be a positive integer.")

        if self.critical_tolerance < 0:
            raise ConfigurationError("critical_tolerance must be non-negative.")


DEFAULT_OPTIONS = ProfileOptions()
