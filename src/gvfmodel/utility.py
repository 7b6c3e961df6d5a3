from dataclasses import dataclass

import numpy as np
import pandas as pd

from .hydraulics import flow_regime
from .profile import ProfileCurveType, WaterSurfaceProfile

@dataclass(frozen=True)
class ProfileStatistics:
    min_depth: float
    max_depth: float
    mean_depth: float
    min_velocity: float
    max_velocity: float
    mean_velocity: float
    min_froude_number: float
    max_froude_number: float
    mean_froude_number: float
    min_specific_energy: float
    max_specific_energy: float
    mean_specific_energy: float
    predominant_regime: str


@dataclass(frozen=True)
class RegimeTransition:
    station: float
    from_regime: str
    to_regime: str


def _column(profile: WaterSurfaceProfile, name: str) -> np.ndarray:
    return np.array([getattr(s, name) for s in profile.states], dtype=np.float64)

def profile_statistics(profile: WaterSurfaceProfile) -> ProfileStatistics:
    """
    Summary of a profile. The predominant regime is the most frequent one
    over the stations; ties go to the first in the order subcritical,
    critical, supercritical.
    """
    y = _column(profile, 'depth')
    V = _column(profile, 'velocity')
    Fr = _column(profile, 'froude_number')
    E = _column(profile, 'specific_energy')

    regimes = [flow_regime(fr) for fr in Fr]
    predominant = max(['subcritical', 'critical', 'supercritical'], key=regimes.count)

    return ProfileStatistics(min_depth=float(y.min()), max_depth=float(y.max()), mean_depth=float(y.mean()),
                             min_velocity=float(V.min()), max_velocity=float(V.max()), mean_velocity=float(V.mean()),
                             min_froude_number=float(Fr.min()), max_froude_number=float(Fr.max()),
                             mean_froude_number=float(Fr.mean()),
                             min_specific_energy=float(E.min()), max_specific_energy=float(E.max()),
                             mean_specific_energy=float(E.mean()),
                             predominant_regime=predominant)

def regime_transitions(profile: WaterSurfaceProfile) -> list:
    """
    Stations where the flow regime changes between adjacent states.

    The station is placed by linear interpolation of Fr = 1 when the Froude
    number passes through 1, and at the midpoint otherwise.

    Returns:
        list[RegimeTransition]: In order of increasing station.
    """
    transitions = []
    states = profile.states

    for s1, s2 in zip(states[:-1], states[1:]):
        r1, r2 = s1.regime, s2.regime
        if r1 == r2:
            continue

        Fr1, Fr2 = s1.froude_number, s2.froude_number
        if (Fr1 - 1.0) * (Fr2 - 1.0) < 0.0:
            t = (1.0 - Fr1) / (Fr2 - Fr1)
        else:
            t = 0.5
        transitions.append(RegimeTransition(station=s1.station + t * (s2.station - s1.station),
                                            from_regime=r1, to_regime=r2))

    return transitions

def interpolate_profile(profile: WaterSurfaceProfile, stations) -> pd.DataFrame:
    """
    Linear interpolation of every numeric column at the given stations.

    Stations outside the reach take the value at the nearest end.
    """
    df = profile.to_dataframe().drop(columns='regime')
    x = np.asarray(stations, dtype=np.float64)

    out = pd.DataFrame({c: np.interp(x, df.index.to_numpy(), df[c].to_numpy()) for c in df.columns}, index=x)
    out.index.name = df.index.name
    out['regime'] = [flow_regime(fr) for fr in out['froude_number']]
    return out

def resample_profile(profile: WaterSurfaceProfile, n_points: int) -> pd.DataFrame:
    """Profile at ``n_points`` equally spaced stations from 0 to the reach length."""
    if n_points < 2:
        raise ValueError("At least two points are required.")

    x = profile.stations
    return interpolate_profile(profile, np.linspace(x[0], x[-1], n_points))

def depth_crossings(profile: WaterSurfaceProfile, depth: float) -> list:
    """
    Stations where the water surface crosses ``depth``, found by linear
    interpolation between adjacent states. A station whose depth equals
    ``depth`` exactly is reported once.
    """
    x = profile.stations
    d = profile.depths - depth

    crossings = []
    for i in range(len(x) - 1):
        if d[i] == 0.0:
            crossings.append(float(x[i]))
        elif d[i] * d[i + 1] < 0.0:
            t = d[i] / (d[i] - d[i + 1])
            crossings.append(float(x[i] + t * (x[i + 1] - x[i])))

    if len(x) > 0 and d[-1] == 0.0:
        crossings.append(float(x[-1]))

    return crossings

def critical_depth_crossings(profile: WaterSurfaceProfile) -> list:
    return depth_crossings(profile, profile.critical_depth)

def normal_depth_crossings(profile: WaterSurfaceProfile) -> list:
    return depth_crossings(profile, profile.normal_depth)


CURVE_DESCRIPTIONS = {
    ProfileCurveType.M1: ("M1 - Backwater Curve (Mild Slope)", "Depth above normal depth, approaching it upstream"),
    ProfileCurveType.M2: ("M2 - Drawdown Curve (Mild Slope)", "Depth falls toward critical depth downstream"),
    ProfileCurveType.M3: ("M3 - Supercritical Flow (Mild Slope)", "Depth increases in the downstream direction"),
    ProfileCurveType.S1: ("S1 - Backwater Curve (Steep Slope)", "Subcritical depth above critical depth"),
    ProfileCurveType.S2: ("S2 - Drawdown Curve (Steep Slope)", "Depth falls from critical toward normal depth"),
    ProfileCurveType.S3: ("S3 - Supercritical Flow (Steep Slope)", "Depth increases toward normal depth"),
    ProfileCurveType.C1: ("C1 - Backwater Curve (Critical Slope)", "Depth above the coincident normal and critical depth"),
    ProfileCurveType.C2: ("C2 - Uniform Critical Flow", "Depth stays at the coincident normal and critical depth"),
    ProfileCurveType.C3: ("C3 - Supercritical Flow (Critical Slope)", "Depth below the coincident normal and critical depth"),
}


@dataclass(frozen=True)
class ProfileDescription:
    classification: str
    description: str
    details: str


def describe_profile(profile: WaterSurfaceProfile, uniform_tolerance: float = 1e-2) -> ProfileDescription:
    """
    Profile-level label for reporting.

    A profile with a hydraulic jump is labelled "Hydraulic Jump", one with a
    single regime change "Transition Profile" and one with several
    "Complex Profile". Otherwise the curve type is used; a profile held at
    normal depth within ``uniform_tolerance`` is "Uniform Flow". The
    details end with the depth, velocity and Froude ranges.
    """
    stats = profile_statistics(profile)
    # Entering or leaving the band around Fr = 1 is not a change of regime
    regimes = [s.regime for s in profile.states if s.regime != 'critical']
    changes = [(r1, r2) for r1, r2 in zip(regimes[:-1], regimes[1:]) if r1 != r2]

    if profile.has_jump:
        jump = profile.hydraulic_jump
        classification = "Hydraulic Jump"
        description = f"Profile with a {jump.jump_type} hydraulic jump"
        details = (f"Supercritical to subcritical at station {jump.station:.2f}: "
                   f"{jump.upstream_depth:.3f} -> {jump.downstream_depth:.3f}")
    elif len(changes) == 1:
        classification = "Transition Profile"
        description = "Profile with a flow regime transition"
        details = f"{changes[0][0]} to {changes[0][1]} at station {critical_depth_crossings(profile)[0]:.2f}"
    elif changes:
        classification = "Complex Profile"
        description = "Profile with multiple regime transitions"
        details = f"{len(changes)} transitions detected"
    elif profile.curve_type in CURVE_DESCRIPTIONS:
        classification = str(profile.curve_type)
        description, details = CURVE_DESCRIPTIONS[profile.curve_type]
    elif np.allclose(profile.depths, profile.normal_depth, rtol=uniform_tolerance, atol=0.0):
        classification = "Uniform Flow"
        description = "Uniform flow at normal depth"
        details = f"Depth held at {profile.normal_depth:.3f}"
    else:
        classification = "Mixed Profile"
        description = "Mixed flow profile"
        details = f"Mostly {stats.predominant_regime} flow"

    details += (f"\nDepth: {stats.min_depth:.3f} - {stats.max_depth:.3f}"
                f"\nVelocity: {stats.min_velocity:.3f} - {stats.max_velocity:.3f}"
                f"\nFroude: {stats.min_froude_number:.3f} - {stats.max_froude_number:.3f}")

    return ProfileDescription(classification=classification, description=description, details=details)
