import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .errors import ConfigurationError, GeometricDomainError, InvalidInputError, to_finite_float

class CrossSection(ABC):
    """
    Abstract base class for prismatic channel cross-sections.

    Every geometric quantity is a function of the flow depth y measured
    from the channel invert. Subclasses implement properties() and
    centroid_depth(); the remaining accessors are derived from them.

    Depths below zero, or at/above the crown of a closed section, raise
    GeometricDomainError instead of returning NaN.
    """

    ## ------------------------------------------------------------------
    ## Abstract Methods (Must be implemented by subclasses)
    ## ------------------------------------------------------------------

    @property
    @abstractmethod
    def shape(self) -> str:
        """Name of the section shape."""
        pass

    @abstractmethod
    def properties(self, y: float) -> tuple:
        """
        Return (A, P, R, T) for a scalar depth y.
        (Area, Wetted Perimeter, Hydraulic Radius, Top Width)
        """
        pass

    @abstractmethod
    def centroid_depth(self, y: float) -> float:
        """Depth of the flow-area centroid below the free surface."""
        pass

    ## ------------------------------------------------------------------
    ## Concrete Methods (Shared functionality)
    ## ------------------------------------------------------------------

    @property
    def max_depth(self) -> float:
        """Largest admissible depth (exclusive). Unbounded for open sections."""
        return np.inf

    def check_depth(self, y: float) -> float:
        y = float(y)
        if not np.isfinite(y) or y < 0.0:
            raise GeometricDomainError(f"Depth must be a non-negative number, got {y}.")
        if y >= self.max_depth:
            raise GeometricDomainError(
                f"Depth {y} is outside the {self.shape} section (limit {self.max_depth})."
            )
        return y

    def clamp_depth(self, y: float, y_min: float) -> float:
        """Pull a trial depth back inside (y_min, max_depth)."""
        y = max(float(y), y_min)
        if np.isfinite(self.max_depth):
            y = min(y, self.max_depth * (1.0 - 1e-9))
        return y

    def area(self, y: float) -> float:
        """Return wetted area (A)."""
        return self.properties(y)[0]

    def wetted_perimeter(self, y: float) -> float:
        """Return wetted perimeter (P)."""
        return self.properties(y)[1]

    def hydraulic_radius(self, y: float) -> float:
        """Return hydraulic radius (R)."""
        return self.properties(y)[2]

    def top_width(self, y: float) -> float:
        """Return top width (T)."""
        return self.properties(y)[3]

    def hydraulic_depth(self, y: float) -> float:
        """Return hydraulic depth (D = A/T)."""
        A, P, R, T = self.properties(y)
        return A / T if T > 0.0 else 0.0

    @staticmethod
    def _require(value, name: str, shape: str, strictly_positive: bool = True) -> float:
        if value is None:
            raise ConfigurationError(f"{name} is required for a {shape} channel.")
        value = to_finite_float(value, name)
        if strictly_positive and not value > 0.0:
            raise InvalidInputError(f"{name} must be greater than 0 (got {value}).")
        if not strictly_positive and not value >= 0.0:
            raise InvalidInputError(f"{name} must not be negative (got {value}).")
        return value


## ------------------------------------------------------------------
## Prismatic Shapes
## ------------------------------------------------------------------

@dataclass(frozen=True)
class RectangularSection(CrossSection):
    """Rectangle of bottom width b."""
    bottom_width: float = None

    def __post_init__(self):
        object.__setattr__(self, 'bottom_width', self._require(self.bottom_width, 'bottom_width', 'rectangular'))

    @property
    def shape(self) -> str:
        return 'rectangular'

    def properties(self, y: float) -> tuple:
        y = self.check_depth(y)
        b = self.bottom_width

        A = b * y
        P = b + 2.0 * y
        T = b
        R = A / P if P > 0.0 else 0.0
        return (A, P, R, T)

    def centroid_depth(self, y: float) -> float:
        return self.check_depth(y) / 2.0


@dataclass(frozen=True)
class TrapezoidalSection(CrossSection):
    """
    Trapezoid with bottom width b and side slope m (horizontal:vertical).

    b = 0 is admitted and reduces to a triangle.
    """
    bottom_width: float = None
    side_slope: float = None

    def __post_init__(self):
        object.__setattr__(self, 'bottom_width',
                           self._require(self.bottom_width, 'bottom_width', 'trapezoidal', strictly_positive=False))
        object.__setattr__(self, 'side_slope', self._require(self.side_slope, 'side_slope', 'trapezoidal'))

    @property
    def shape(self) -> str:
        return 'trapezoidal'

    def properties(self, y: float) -> tuple:
        y = self.check_depth(y)
        b, m = self.bottom_width, self.side_slope

        T = b + 2.0 * m * y
        A = (b + m * y) * y
        P = b + 2.0 * y * np.sqrt(1.0 + m**2)
        R = A / P if P > 0.0 else 0.0
        return (A, P, R, T)

    def centroid_depth(self, y: float) -> float:
        y = self.check_depth(y)
        b = self.bottom_width
        T = b + 2.0 * self.side_slope * y
        if b + T <= 0.0:
            return 0.0
        return y * (2.0 * b + T) / (3.0 * (b + T))


@dataclass(frozen=True)
class TriangularSection(CrossSection):
    """V-shaped section with side slope m (horizontal:vertical)."""
    side_slope: float = None

    def __post_init__(self):
        object.__setattr__(self, 'side_slope', self._require(self.side_slope, 'side_slope', 'triangular'))

    @property
    def shape(self) -> str:
        return 'triangular'

    @property
    def bottom_width(self) -> float:
        return 0.0

    def properties(self, y: float) -> tuple:
        y = self.check_depth(y)
        m = self.side_slope

        A = m * y**2
        P = 2.0 * y * np.sqrt(1.0 + m**2)
        T = 2.0 * m * y
        R = A / P if P > 0.0 else 0.0
        return (A, P, R, T)

    def centroid_depth(self, y: float) -> float:
        return self.check_depth(y) / 3.0


@dataclass(frozen=True)
class CircularSection(CrossSection):
    """
    Partly full circular conduit of diameter d.

    Defined for 0 <= y < d; the crown itself is outside the domain
    because the free surface (and the top width) vanishes there.
    """
    diameter: float = None

    def __post_init__(self):
        object.__setattr__(self, 'diameter', self._require(self.diameter, 'diameter', 'circular'))

    @property
    def shape(self) -> str:
        return 'circular'

    @property
    def max_depth(self) -> float:
        return self.diameter

    def central_angle(self, y: float) -> float:
        """Angle subtended at the centre by the free surface."""
        y = self.check_depth(y)
        return 2.0 * np.arccos(1.0 - 2.0 * y / self.diameter)

    def properties(self, y: float) -> tuple:
        theta = self.central_angle(y)
        d = self.diameter

        A = d**2 / 8.0 * (theta - np.sin(theta))
        P = d * theta / 2.0
        T = d * np.sin(theta / 2.0)
        R = A / P if P > 0.0 else 0.0
        return (float(A), float(P), float(R), float(T))

    def centroid_depth(self, y: float) -> float:
        theta = self.central_angle(y)
        if theta <= 0.0:
            return 0.0

        r = self.diameter / 2.0
        # Distance from the centre down to the segment centroid
        c = 4.0 * r * np.sin(theta / 2.0)**3 / (3.0 * (theta - np.sin(theta)))
        return float(c - r + y)


def make_section(shape: str, bottom_width: float = None, side_slope: float = None,
                 diameter: float = None) -> CrossSection:
    """
    Build a cross-section from a shape name and its parameters.

    Parameters that the shape does not use are ignored, so a flat record
    of form fields can be passed straight through.

    Raises
    ------
    ConfigurationError
        Unknown shape, or a parameter the shape requires is missing.
    InvalidInputError
        A supplied parameter is not positive.

    """
    if shape == 'rectangular':
        return RectangularSection(bottom_width=bottom_width)
    elif shape == 'trapezoidal':
        return TrapezoidalSection(bottom_width=bottom_width, side_slope=side_slope)
    elif shape == 'triangular':
        return TriangularSection(side_slope=side_slope)
    elif shape == 'circular':
        return CircularSection(diameter=diameter)
    else:
        raise ConfigurationError(f"Unsupported channel type: {shape}")
