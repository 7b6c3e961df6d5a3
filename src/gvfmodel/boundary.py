import logging
from dataclasses import dataclass

from .channel import ChannelParams
from .normal_flow import ChannelClass
from .settings import DEFAULT_OPTIONS, ProfileOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControlSection:
    """
    Station and depth the march starts from.

    Parameters
    ----------
    station : float
        0 (upstream end) or the reach length (downstream end).
    depth : float
        Depth imposed at the station.
    direction : str
        'upstream' or 'downstream', the sense of the march.
    condition : str
        Where the depth comes from: 'downstream_depth', 'upstream_depth',
        'critical_depth' or 'normal_depth'.

    """
    station: float
    depth: float
    direction: str
    condition: str

    def __post_init__(self):
        if self.direction not in ['upstream', 'downstream']:
            raise ValueError("Invalid march direction.")

        if self.condition not in ['downstream_depth', 'upstream_depth', 'critical_depth', 'normal_depth']:
            raise ValueError("Invalid control condition.")

    @property
    def sign(self) -> int:
        """+1 when marching in the direction of increasing station, -1 otherwise."""
        return 1 if self.direction == 'downstream' else -1


def select_control_section(params: ChannelParams, critical_depth: float, normal_depth: float,
                           channel_class: ChannelClass, options: ProfileOptions = DEFAULT_OPTIONS) -> ControlSection:
    """
    Choose the boundary the profile is computed from.

    Priority: both boundary depths, downstream depth only, upstream depth
    only, then the channel class. Mild reaches are controlled by critical
    depth at the downstream end, steep reaches by normal depth at the
    upstream end. Critical reaches and the two-depth case follow
    ``options``.
    """
    L = params.length

    if params.has_custom_boundaries:
        if options.dual_boundary_march == 'natural' and channel_class == ChannelClass.STEEP:
            control = ControlSection(0.0, params.upstream_depth, 'downstream', 'upstream_depth')
        else:
            control = ControlSection(L, params.downstream_depth, 'upstream', 'downstream_depth')

    elif params.downstream_depth is not None:
        control = ControlSection(L, params.downstream_depth, 'upstream', 'downstream_depth')

    elif params.upstream_depth is not None:
        control = ControlSection(0.0, params.upstream_depth, 'downstream', 'upstream_depth')

    elif channel_class == ChannelClass.MILD:
        control = ControlSection(L, critical_depth, 'upstream', 'critical_depth')

    elif channel_class == ChannelClass.STEEP:
        control = ControlSection(0.0, normal_depth, 'downstream', 'normal_depth')

    elif options.critical_slope_control == 'upstream':
        control = ControlSection(0.0, normal_depth, 'downstream', 'normal_depth')

    else:
        control = ControlSection(L, critical_depth, 'upstream', 'critical_depth')

    logger.debug("Control section: %s = %.4f at x = %.4g, marching %s.",
                 control.condition, control.depth, control.station, control.direction)
    return control
