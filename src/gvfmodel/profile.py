"""
Result types of a profile computation.

A WaterSurfaceProfile is built once by the solver and never modified; the
flow states are held in a tuple ordered by ascending station.
"""
from dataclasses import dataclass, fields
from enum import Enum

import numpy as np
import pandas as pd

from .hydraulic_jump import HydraulicJump
from .hydraulics import flow_regime
from .normal_flow import ChannelClass


class ProfileCurveType(str, Enum):
    M1 = 'M1'
    M2 = 'M2'
    M3 = 'M3'
    S1 = 'S1'
    S2 = 'S2'
    S3 = 'S3'
    C1 = 'C1'
    C2 = 'C2'
    C3 = 'C3'
    UNKNOWN = 'Unknown'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FlowState:
    """Hydraulic state at one station."""
    station: float
    depth: float
    velocity: float
    froude_number: float
    specific_energy: float
    critical_depth: float
    normal_depth: float
    top_width: float
    area: float
    hydraulic_radius: float
    friction_slope: float

    @property
    def regime(self) -> str:
        return flow_regime(self.froude_number)


@dataclass(frozen=True)
class ProfileDiagnostics:
    """
    Convergence record of one computation.

    ``capped_steps`` counts marching steps whose energy balance was not
    met within the iteration cap; their depth is a best estimate.
    """
    critical_depth_converged: bool = True
    normal_depth_converged: bool = True
    capped_steps: int = 0

    @property
    def converged(self) -> bool:
        return self.critical_depth_converged and self.normal_depth_converged and self.capped_steps == 0


@dataclass(frozen=True)
class WaterSurfaceProfile:
    states: tuple
    curve_type: ProfileCurveType
    channel_class: ChannelClass
    critical_depth: float
    normal_depth: float
    is_choking: bool
    hydraulic_jump: HydraulicJump = None
    direction: str = 'upstream'
    diagnostics: ProfileDiagnostics = ProfileDiagnostics()

    def __len__(self) -> int:
        return len(self.states)

    @property
    def has_jump(self) -> bool:
        return self.hydraulic_jump is not None

    @property
    def stations(self) -> np.ndarray:
        return np.array([s.station for s in self.states], dtype=np.float64)

    @property
    def depths(self) -> np.ndarray:
        return np.array([s.depth for s in self.states], dtype=np.float64)

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per station, indexed by station.

        Columns are the FlowState fields plus the flow regime.
        """
        columns = [f.name for f in fields(FlowState)]
        df = pd.DataFrame([[getattr(s, c) for c in columns] for s in self.states], columns=columns)
        df['regime'] = [s.regime for s in self.states]
        df = df.set_index('station')
        df.index.name = 'Station'
        return df


def classify_curve_type(channel_class: ChannelClass, depth: float, normal_depth: float,
                        critical_depth: float) -> ProfileCurveType:
    """
    Gradually-varied-flow curve from the position of ``depth`` relative to
    the normal and critical depths.

    Args:
        channel_class (ChannelClass): Slope class of the reach.
        depth (float): Representative depth of the profile.
        normal_depth (float): yn.
        critical_depth (float): yc.

    Returns:
        ProfileCurveType: Unknown when the depth coincides with a zone
        boundary the class does not name (e.g. uniform flow at yn).
    """
    y, yn, yc = depth, normal_depth, critical_depth

    if channel_class == ChannelClass.MILD:
        if y > yn:
            return ProfileCurveType.M1
        elif yc < y < yn:
            return ProfileCurveType.M2
        elif y < yc:
            return ProfileCurveType.M3

    elif channel_class == ChannelClass.STEEP:
        if y > yc:
            return ProfileCurveType.S1
        elif yn < y < yc:
            return ProfileCurveType.S2
        elif y < yn:
            return ProfileCurveType.S3

    elif channel_class == ChannelClass.CRITICAL:
        if np.isclose(y, yc):
            return ProfileCurveType.C2
        elif y > yc:
            return ProfileCurveType.C1
        else:
            return ProfileCurveType.C3

    return ProfileCurveType.UNKNOWN
