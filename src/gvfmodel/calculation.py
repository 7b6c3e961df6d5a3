import logging
from collections.abc import Mapping
from dataclasses import dataclass

from .channel import ChannelParams
from .cross_section import make_section
from .errors import ConfigurationError, GeometricDomainError, GVFError, InvalidInputError
from .profile import WaterSurfaceProfile
from .settings import DEFAULT_OPTIONS, ProfileOptions
from .solver import compute_profile

logger = logging.getLogger(__name__)

ERROR_KINDS = {
    ConfigurationError: 'configuration',
    InvalidInputError: 'invalid_input',
    GeometricDomainError: 'geometric_domain',
}


@dataclass(frozen=True)
class CalculationOutcome:
    """
    Result of one calculation request.

    ``ok`` is True with a profile, or False with ``error_kind`` and
    ``message`` describing why no profile was produced.
    """
    ok: bool
    profile: WaterSurfaceProfile = None
    error_kind: str = None
    message: str = None


def build_params(record: dict) -> ChannelParams:
    """
    ChannelParams from a flat record of form fields.

    Expected keys: shape, roughness, bed_slope, discharge, length and the
    shape parameters (bottom_width, side_slope, diameter). units,
    upstream_depth and downstream_depth are optional.
    """
    if not isinstance(record, Mapping):
        raise ConfigurationError(f"Expected a ChannelParams or a mapping of fields, got {type(record).__name__}.")

    missing = [k for k in ['shape', 'roughness', 'bed_slope', 'discharge', 'length'] if record.get(k) is None]
    if missing:
        raise ConfigurationError(f"Missing parameters: {', '.join(missing)}.")

    section = make_section(record['shape'],
                           bottom_width=record.get('bottom_width'),
                           side_slope=record.get('side_slope'),
                           diameter=record.get('diameter'))

    return ChannelParams(section=section,
                         roughness=record['roughness'],
                         bed_slope=record['bed_slope'],
                         discharge=record['discharge'],
                         length=record['length'],
                         units=record.get('units', 'metric'),
                         upstream_depth=record.get('upstream_depth'),
                         downstream_depth=record.get('downstream_depth'))

def run_calculation(params, options: ProfileOptions = DEFAULT_OPTIONS) -> CalculationOutcome:
    """
    Computes a profile without letting engine errors escape.

    Args:
        params (ChannelParams | dict): Reach description, or a record accepted by build_params.
        options (ProfileOptions, optional): Engine options.

    Returns:
        CalculationOutcome
    """
    try:
        if not isinstance(params, ChannelParams):
            params = build_params(params)
        profile = compute_profile(params, options)
    except GVFError as e:
        kind = ERROR_KINDS.get(type(e), 'error')
        logger.error("Calculation failed (%s): %s", kind, e)
        return CalculationOutcome(ok=False, error_kind=kind, message=str(e))

    return CalculationOutcome(ok=True, profile=profile)
