"""
Hydraulic jump between a supercritical depth y1 and its sequent depth y2.

The sequent depth uses the momentum solution for a rectangular channel,
y2 = y1/2 * (sqrt(1 + 8 Fr1^2) - 1). For the other shapes the same
expression is applied as an approximation, with Fr1 computed from the
section's hydraulic depth.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .channel import ChannelParams


class JumpType(str, Enum):
    """Jump classification by upstream Froude number."""
    UNDULAR = 'undular'
    WEAK = 'weak'
    OSCILLATING = 'oscillating'
    STEADY = 'steady'
    STRONG = 'strong'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HydraulicJump:
    station: float
    upstream_depth: float
    downstream_depth: float
    energy_loss: float
    froude_number1: float
    jump_type: JumpType
    length: float
    sequent_depth_ratio: float
    efficiency: float
    specific_force1: float
    specific_force2: float


def sequent_depth(y1: float, Fr1: float) -> float:
    return y1 / 2.0 * (np.sqrt(1.0 + 8.0 * Fr1**2) - 1.0)

def energy_loss(y1: float, y2: float) -> float:
    """Head lost in the jump: (y2 - y1)^3 / (4 y1 y2)"""
    return (y2 - y1)**3 / (4.0 * y1 * y2)

def classify_jump(Fr1: float) -> JumpType:
    """
    Returns the jump type for an upstream Froude number, or None when the
    approaching flow is not supercritical.
    """
    if Fr1 <= 1.0:
        return None
    elif Fr1 < 1.7:
        return JumpType.UNDULAR
    elif Fr1 <= 2.5:
        return JumpType.WEAK
    elif Fr1 <= 4.5:
        return JumpType.OSCILLATING
    elif Fr1 <= 9.0:
        return JumpType.STEADY
    else:
        return JumpType.STRONG

def jump_length(y2: float, Fr1: float) -> float:
    """Empirical roller length as a multiple of the sequent depth."""
    if Fr1 < 1.7:
        return 5.0 * y2
    elif Fr1 < 4.5:
        return 6.0 * y2
    else:
        return 7.0 * y2

def calculate_hydraulic_jump(params: ChannelParams, y1: float, station: float, Fr1: float = None) -> HydraulicJump:
    """
    Jump properties for an approaching depth y1 at ``station``.

    Args:
        params (ChannelParams): Reach description.
        y1 (float): Supercritical depth upstream of the jump.
        station (float): Location assigned to the jump.
        Fr1 (float, optional): Upstream Froude number. Computed from y1 when omitted.

    Returns:
        HydraulicJump | None: None when y1 is not supercritical.
    """
    if Fr1 is None:
        Fr1 = params.froude_number(y1)
    if Fr1 <= 1.0:
        return None

    y2 = float(sequent_depth(y1, Fr1))
    section = params.section
    if y2 >= section.max_depth:
        y2 = section.clamp_depth(y2, y1)

    dE = energy_loss(y1, y2)
    E1 = params.specific_energy(y1)

    return HydraulicJump(station=float(station),
                         upstream_depth=float(y1),
                         downstream_depth=y2,
                         energy_loss=float(dE),
                         froude_number1=float(Fr1),
                         jump_type=classify_jump(Fr1),
                         length=jump_length(y2, Fr1),
                         sequent_depth_ratio=y2 / y1,
                         efficiency=1.0 - dE / E1 if E1 > 0.0 else 0.0,
                         specific_force1=params.specific_force(y1),
                         specific_force2=params.specific_force(y2))

def detect_hydraulic_jump(params: ChannelParams, states) -> HydraulicJump:
    """
    Scan flow states for the first supercritical-to-subcritical transition
    in the flow direction (increasing station).

    The jump is placed where Fr = 1 by linear interpolation between the
    bracketing stations; y1 is the depth at the upstream station.
    """
    ordered = sorted(states, key=lambda s: s.station)

    for s1, s2 in zip(ordered[:-1], ordered[1:]):
        if s1.froude_number > 1.0 and s2.froude_number < 1.0:
            t = (1.0 - s1.froude_number) / (s2.froude_number - s1.froude_number)
            station = s1.station + t * (s2.station - s1.station)
            return calculate_hydraulic_jump(params, s1.depth, station, Fr1=s1.froude_number)

    return None
