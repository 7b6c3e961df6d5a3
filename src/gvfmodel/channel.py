from dataclasses import dataclass

from .cross_section import CrossSection
from .errors import ConfigurationError, InvalidInputError, to_finite_float
from .settings import UnitSystem
from . import hydraulics

@dataclass(frozen=True)
class ChannelParams:
    """
    Immutable description of one prismatic reach and its flow.

    Parameters
    ----------
    section : CrossSection
        Cross-section geometry, constant along the reach.
    roughness : float
        Manning's roughness coefficient n.
    bed_slope : float
        Longitudinal bed slope S0 (positive, falling downstream).
    discharge : float
        Steady discharge Q.
    length : float
        Reach length L. Stations run from 0 (upstream) to L (downstream).
    units : UnitSystem
        Selects g and the Manning coefficient.
    upstream_depth, downstream_depth : float, optional
        Boundary depths at x = 0 and x = L. Either, both or neither may be
        given.

    """
    section: CrossSection
    roughness: float
    bed_slope: float
    discharge: float
    length: float
    units: UnitSystem = UnitSystem.METRIC
    upstream_depth: float = None
    downstream_depth: float = None

    def __post_init__(self):
        if not isinstance(self.section, CrossSection):
            raise ConfigurationError("section must be a CrossSection.")

        if not isinstance(self.units, UnitSystem):
            try:
                object.__setattr__(self, 'units', UnitSystem(self.units))
            except ValueError:
                raise ConfigurationError(f"Unsupported unit system: {self.units}") from None

        for name in ['roughness', 'bed_slope', 'discharge', 'length']:
            value = getattr(self, name)
            if value is None:
                raise InvalidInputError(f"{name} must be greater than 0 (got None).")
            value = to_finite_float(value, name)
            if value <= 0:
                raise InvalidInputError(f"{name} must be greater than 0 (got {value}).")
            object.__setattr__(self, name, value)

        for name in ['upstream_depth', 'downstream_depth']:
            value = getattr(self, name)
            if value is None:
                continue
            value = to_finite_float(value, name)
            if value <= 0:
                raise InvalidInputError(f"{name} must be greater than 0 (got {value}).")
            self.section.check_depth(value)
            object.__setattr__(self, name, value)

    @property
    def g(self) -> float:
        return self.units.gravity

    @property
    def k(self) -> float:
        return self.units.manning_k

    @property
    def has_custom_boundaries(self) -> bool:
        """True when both boundary depths are supplied."""
        return self.upstream_depth is not None and self.downstream_depth is not None

    def velocity(self, y: float) -> float:
        return hydraulics.velocity(Q=self.discharge, A=self.section.area(y))

    def froude_number(self, y: float) -> float:
        A, P, R, T = self.section.properties(y)
        return float(hydraulics.froude_num(T=T, A=A, Q=self.discharge, g=self.g))

    def specific_energy(self, y: float) -> float:
        return hydraulics.specific_energy(y=y, V=self.velocity(y), g=self.g)

    def friction_slope(self, y: float) -> float:
        A, P, R, T = self.section.properties(y)
        return float(hydraulics.Sf(Q=self.discharge, A=A, n=self.roughness, R=R, k=self.k))

    def specific_force(self, y: float) -> float:
        return hydraulics.specific_force(A=self.section.area(y),
                                         centroid_depth=self.section.centroid_depth(y),
                                         Q=self.discharge,
                                         g=self.g)

    def manning_discharge(self, y: float) -> float:
        """Discharge carried at depth y under uniform flow."""
        A, P, R, T = self.section.properties(y)
        if A <= 0.0:
            return 0.0
        return hydraulics.normal_flow(bed_slope=self.bed_slope, area=A, roughness=self.roughness,
                                      hydraulic_radius=R, k=self.k)

    def shear_stress(self, y: float) -> float:
        return hydraulics.shear_stress(R=self.section.hydraulic_radius(y),
                                       Sf=self.friction_slope(y),
                                       gamma=self.units.specific_weight)
