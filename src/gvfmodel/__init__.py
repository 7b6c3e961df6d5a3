from .boundary import ControlSection, select_control_section
from .calculation import CalculationOutcome, build_params, run_calculation
from .channel import ChannelParams
from .critical_flow import (DepthSolution, critical_depth, critical_velocity, is_flow_critical,
                            minimum_specific_energy, solve_critical_depth)
from .cross_section import (CircularSection, CrossSection, RectangularSection, TrapezoidalSection,
                            TriangularSection, make_section)
from .errors import ConfigurationError, GeometricDomainError, GVFError, InvalidInputError, NonConvergenceWarning
from .hydraulic_jump import (HydraulicJump, JumpType, calculate_hydraulic_jump, classify_jump,
                             detect_hydraulic_jump, energy_loss, jump_length, sequent_depth)
from .normal_flow import (ChannelClass, classify_channel, is_flow_uniform, normal_depth, normal_froude_number,
                          normal_velocity, solve_normal_depth)
from .profile import FlowState, ProfileCurveType, ProfileDiagnostics, WaterSurfaceProfile, classify_curve_type
from .settings import DEFAULT_OPTIONS, ProfileOptions, UnitSystem
from .solver import StandardStepSolver, compute_profile
