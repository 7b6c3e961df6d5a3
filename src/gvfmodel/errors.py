import numpy as np


class GVFError(Exception):
    """Base class for errors raised by the profile engine."""


class ConfigurationError(GVFError, ValueError):
    """A required parameter is missing or an option is not recognised."""


class InvalidInputError(GVFError, ValueError):
    """A physical input is out of range (e.g. non-positive discharge)."""


class GeometricDomainError(GVFError, ValueError):
    """A depth lies outside the valid domain of a cross-section."""


class NonConvergenceWarning(UserWarning):
    """An iterative loop exhausted its iteration cap.

    The result is still returned as a best estimate.
    """


def to_finite_float(value, name: str) -> float:
    """Convert an input field to a finite float, or raise InvalidInputError."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a number (got {value!r}).") from None

    if not np.isfinite(number):
        raise InvalidInputError(f"{name} must be finite (got {number}).")
    return number
