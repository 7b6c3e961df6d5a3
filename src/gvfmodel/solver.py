import logging
import warnings

import numpy as np

from .boundary import select_control_section
from .channel import ChannelParams
from .critical_flow import minimum_specific_energy, solve_critical_depth
from .errors import NonConvergenceWarning
from .hydraulic_jump import calculate_hydraulic_jump, detect_hydraulic_jump
from .normal_flow import classify_channel, solve_normal_depth
from .profile import FlowState, ProfileDiagnostics, WaterSurfaceProfile, classify_curve_type
from .settings import (CRITICAL_MARGIN, DEFAULT_OPTIONS, DEPTH_ADJUSTMENT, ENERGY_TOLERANCE, MIN_DEPTH,
                       MIN_ENERGY_SLOPE, TRIAL_DEPTH_NUDGE, ProfileOptions)

logger = logging.getLogger(__name__)


class StandardStepSolver:
    """
    Computes a steady gradually-varied-flow profile with the standard-step
    method.

    The reach is divided into ``options.num_steps`` equal steps. Starting
    from the control section, each new depth is found by balancing the
    specific energy between adjacent stations:

        downstream march: E2 = E1 + (S0 - Sf_avg) * dx
        upstream march:   E2 = E1 - (S0 - Sf_avg) * dx

    Each balance is iterated at most ``options.max_iterations`` times and
    its best estimate is kept when the cap is reached, so the profile is an
    approximation whose quality is reported in ``diagnostics``.

    Attributes
    ----------
    params : ChannelParams
        The reach being computed.
    options : ProfileOptions
        Step count, iteration cap and control choices.
    spatial_step : float
        Distance between stations.

    """

    def __init__(self, params: ChannelParams, options: ProfileOptions = DEFAULT_OPTIONS):
        self.params = params
        self.options = options
        self.spatial_step = params.length / options.num_steps

        self.critical_depth = None
        self.normal_depth = None
        self.min_energy = None
        self.control = None

        self.capped_steps = 0
        self.is_choking = False
        self.jump = None
        self.solved = False

    def run(self) -> WaterSurfaceProfile:
        """
        Computes the profile.

        Returns
        -------
        WaterSurfaceProfile
            Flow states ordered by ascending station.

        """
        params, options = self.params, self.options

        critical = solve_critical_depth(params, max_iterations=options.max_iterations)
        normal = solve_normal_depth(params, max_iterations=options.max_iterations, seed=critical.depth)
        self.critical_depth, self.normal_depth = critical.depth, normal.depth

        channel_class = classify_channel(self.normal_depth, self.critical_depth, tolerance=options.critical_tolerance)
        self.min_energy = minimum_specific_energy(params, yc=self.critical_depth)

        logger.debug("yc = %.4f, yn = %.4f, %s slope.", self.critical_depth, self.normal_depth, channel_class)

        self.control = select_control_section(params, self.critical_depth, self.normal_depth, channel_class, options)

        states = sorted(self.march(), key=lambda s: s.station)

        if self.jump is None:
            self.jump = detect_hydraulic_jump(params, states)

        if self.is_choking:
            logger.warning("Choking: the energy balance fell below the minimum specific energy (%.4f).",
                           self.min_energy)

        if self.capped_steps > 0:
            logger.warning("%d of %d steps reached the iteration cap.", self.capped_steps, options.num_steps)
            warnings.warn(f"{self.capped_steps} profile steps did not meet the energy balance; "
                          "their depths are best estimates.", NonConvergenceWarning, stacklevel=2)

        curve_type = classify_curve_type(channel_class, states[0].depth, self.normal_depth, self.critical_depth)

        profile = WaterSurfaceProfile(states=tuple(states),
                                      curve_type=curve_type,
                                      channel_class=channel_class,
                                      critical_depth=self.critical_depth,
                                      normal_depth=self.normal_depth,
                                      is_choking=self.is_choking,
                                      hydraulic_jump=self.jump,
                                      direction=self.control.direction,
                                      diagnostics=ProfileDiagnostics(critical_depth_converged=critical.converged,
                                                                     normal_depth_converged=normal.converged,
                                                                     capped_steps=self.capped_steps))
        self.solved = True

        logger.info("%s profile on a %s slope: %d stations, marched %s.",
                    curve_type, channel_class, len(states), self.control.direction)
        return profile

    def march(self) -> list:
        """
        Steps from the control section to the opposite end of the reach.

        Returns
        -------
        list of FlowState
            In marching order.

        """
        control = self.control
        sign = control.sign

        y = control.depth
        x = control.station
        states = [self.flow_state(x, y)]

        for i in range(1, self.options.num_steps + 1):
            x_new = self.station_at(i)
            y_new, E_expected, converged = self.balance_energy(y, self.trial_depth(y))

            if not converged:
                self.capped_steps += 1

            choked = E_expected < self.min_energy
            if choked and not self.is_choking:
                logger.debug("Energy balance below the minimum at x = %.4g.", x_new)
                self.is_choking = True

            # Supercritical flow that turns subcritical, or cannot carry the
            # energy demanded downstream, jumps to its sequent depth
            if self.is_supercritical(y) and (not self.is_supercritical(y_new) or (choked and sign > 0)):
                jump = calculate_hydraulic_jump(self.params, y, x)
            else:
                jump = None

            if jump is not None:
                if self.jump is None:
                    logger.warning("Hydraulic jump at x = %.4g: %.4f -> %.4f (%s).",
                                   x, jump.upstream_depth, jump.downstream_depth, jump.jump_type)
                    self.jump = jump
                y_new = jump.downstream_depth

            states.append(self.flow_state(x_new, y_new))
            x, y = x_new, y_new

        return states

    def station_at(self, i: int) -> float:
        """Station of the i-th step from the control section."""
        fraction = i / self.options.num_steps
        if self.control.sign > 0:
            return self.control.station + (self.params.length - self.control.station) * fraction
        return self.control.station * (1.0 - fraction)

    def is_supercritical(self, y: float) -> bool:
        """
        Regime of depth y. A depth at yc takes the regime the march
        direction is controlled by: subcritical upstream, supercritical
        downstream.
        """
        if np.isclose(y, self.critical_depth, rtol=1e-9, atol=0.0):
            return self.control.direction == 'downstream'
        return y < self.critical_depth

    def trial_depth(self, y: float) -> float:
        """First guess for the next depth: y nudged up in subcritical flow, down in supercritical flow."""
        if self.is_supercritical(y):
            y_trial = y - TRIAL_DEPTH_NUDGE
        else:
            y_trial = y + TRIAL_DEPTH_NUDGE
        return self.params.section.clamp_depth(y_trial, MIN_DEPTH)

    def balance_energy(self, y: float, y_trial: float) -> tuple:
        """
        Iterates the depth at the next station until its specific energy
        matches the energy carried over from depth y.

        The iteration stays on the branch of the specific-energy curve
        (sub- or supercritical) that the trial depth lies on.

        Parameters
        ----------
        y : float
            Depth at the current station.
        y_trial : float
            First guess for the next station.

        Returns
        -------
        tuple
            (depth, expected specific energy, converged)

        """
        params = self.params
        section = params.section
        sign = self.control.sign
        dx = self.spatial_step
        yc = self.critical_depth

        E1 = params.specific_energy(y)
        Sf1 = params.friction_slope(y)

        subcritical = not self.is_supercritical(y_trial)
        # dE/dy = 1 - Fr^2: positive above yc, negative below
        branch = 1.0 if subcritical else -1.0
        y_floor, y_ceiling = yc * (1.0 + CRITICAL_MARGIN), yc * (1.0 - CRITICAL_MARGIN)

        y_new = y_trial
        for _ in range(self.options.max_iterations):
            Sf_avg = 0.5 * (Sf1 + params.friction_slope(y_new))
            E_expected = E1 + sign * (params.bed_slope - Sf_avg) * dx

            residual = params.specific_energy(y_new) - E_expected
            if abs(residual) < ENERGY_TOLERANCE * abs(E_expected):
                return y_new, E_expected, True

            dE_dy = 1.0 - params.froude_number(y_new)**2
            if abs(dE_dy) > MIN_ENERGY_SLOPE:
                y_next = y_new - residual / dE_dy
            else:
                y_next = y_new - branch * np.sign(residual) * DEPTH_ADJUSTMENT

            if subcritical and y_next <= y_floor:
                y_next = max(0.5 * (y_new + yc), y_floor)
            elif not subcritical and y_next >= y_ceiling:
                y_next = min(0.5 * (y_new + yc), y_ceiling)

            y_new = section.clamp_depth(y_next, MIN_DEPTH)

        return y_new, E_expected, False

    def flow_state(self, x: float, y: float) -> FlowState:
        params = self.params
        A, P, R, T = params.section.properties(y)

        return FlowState(station=float(x),
                         depth=float(y),
                         velocity=params.velocity(y),
                         froude_number=params.froude_number(y),
                         specific_energy=float(params.specific_energy(y)),
                         critical_depth=self.critical_depth,
                         normal_depth=self.normal_depth,
                         top_width=float(T),
                         area=float(A),
                         hydraulic_radius=float(R),
                         friction_slope=params.friction_slope(y))


def compute_profile(params: ChannelParams, options: ProfileOptions = DEFAULT_OPTIONS) -> WaterSurfaceProfile:
    """
    Water-surface profile of ``params``.

    Raises
    ------
    ConfigurationError, InvalidInputError, GeometricDomainError
        Propagated from input validation.

    """
    return StandardStepSolver(params, options).run()
