import numpy as np
import pytest

from gvfmodel import (ChannelParams, CircularSection, ConfigurationError, GeometricDomainError, InvalidInputError,
                      RectangularSection, TrapezoidalSection, TriangularSection, make_section)

SECTIONS = [
    RectangularSection(bottom_width=10.0),
    TrapezoidalSection(bottom_width=5.0, side_slope=2.0),
    TrapezoidalSection(bottom_width=0.0, side_slope=1.0),
    TriangularSection(side_slope=1.5),
    CircularSection(diameter=2.0),
]


def _depths(section, upper=0.95):
    y_max = section.max_depth if np.isfinite(section.max_depth) else 5.0
    return np.linspace(0.01, upper * y_max, 50)


@pytest.mark.parametrize('section', SECTIONS, ids=lambda s: s.shape)
def test_area_and_perimeter_strictly_increasing(section):
    props = np.array([section.properties(y) for y in _depths(section)])
    assert np.all(np.diff(props[:, 0]) > 0.0)
    assert np.all(np.diff(props[:, 1]) > 0.0)


@pytest.mark.parametrize('section', SECTIONS, ids=lambda s: s.shape)
def test_hydraulic_radius_increasing(section):
    # The circular radius peaks near 0.81 d
    depths = _depths(section, upper=0.75)
    R = np.array([section.hydraulic_radius(y) for y in depths])
    assert np.all(np.diff(R) > 0.0)


@pytest.mark.parametrize('section', SECTIONS[1:], ids=lambda s: s.shape)
def test_top_width_increasing(section):
    # The circular top width is widest at mid-depth
    depths = _depths(section, upper=0.5)
    T = np.array([section.top_width(y) for y in depths])
    assert np.all(np.diff(T) > 0.0)


def test_rectangular_top_width_constant():
    section = RectangularSection(bottom_width=4.0)
    assert section.top_width(0.5) == section.top_width(3.0) == 4.0


@pytest.mark.parametrize('section', SECTIONS, ids=lambda s: s.shape)
def test_dry_section(section):
    assert section.area(0.0) == 0.0
    assert section.hydraulic_radius(0.0) == 0.0
    assert section.hydraulic_depth(0.0) == 0.0


def test_shape_formulas():
    assert RectangularSection(bottom_width=10.0).properties(2.0) == pytest.approx((20.0, 14.0, 20.0 / 14.0, 10.0))

    A, P, R, T = TrapezoidalSection(bottom_width=5.0, side_slope=2.0).properties(1.0)
    assert A == pytest.approx(7.0)
    assert P == pytest.approx(5.0 + 2.0 * np.sqrt(5.0))
    assert T == pytest.approx(9.0)

    A, P, R, T = TriangularSection(side_slope=1.5).properties(2.0)
    assert A == pytest.approx(6.0)
    assert T == pytest.approx(6.0)


def test_circular_half_full():
    d = 2.0
    section = CircularSection(diameter=d)
    A, P, R, T = section.properties(d / 2.0)

    assert section.central_angle(d / 2.0) == pytest.approx(np.pi)
    assert A == pytest.approx(np.pi * d**2 / 8.0)
    assert P == pytest.approx(np.pi * d / 2.0)
    assert T == pytest.approx(d)
    assert R == pytest.approx(d / 4.0)


@pytest.mark.parametrize('y', [2.0, 2.5])
def test_circular_depth_at_or_above_crown_rejected(y):
    section = CircularSection(diameter=2.0)
    with pytest.raises(GeometricDomainError):
        section.area(y)


@pytest.mark.parametrize('y', [-0.1, np.nan, np.inf])
def test_invalid_depth_rejected(y):
    with pytest.raises(GeometricDomainError):
        RectangularSection(bottom_width=3.0).properties(y)


def test_boundary_depth_above_crown_rejected():
    with pytest.raises(GeometricDomainError):
        ChannelParams(section=CircularSection(diameter=1.0), roughness=0.013, bed_slope=0.001,
                      discharge=0.5, length=100.0, downstream_depth=1.0)


def test_clamp_depth():
    section = CircularSection(diameter=1.0)
    assert section.clamp_depth(1.5, 1e-6) < 1.0
    assert section.clamp_depth(-1.0, 1e-6) == 1e-6
    assert RectangularSection(bottom_width=1.0).clamp_depth(50.0, 1e-6) == 50.0


@pytest.mark.parametrize('section', SECTIONS, ids=lambda s: s.shape)
def test_centroid_depth_bounds(section):
    for y in _depths(section):
        assert 0.0 < section.centroid_depth(y) < y


def test_centroid_depth_known_values():
    assert RectangularSection(bottom_width=2.0).centroid_depth(3.0) == pytest.approx(1.5)
    assert TriangularSection(side_slope=1.0).centroid_depth(3.0) == pytest.approx(1.0)
    # Half-full circle: centroid 4r/(3 pi) below the diameter
    assert CircularSection(diameter=2.0).centroid_depth(1.0) == pytest.approx(4.0 / (3.0 * np.pi))


def test_trapezoid_with_zero_bottom_matches_triangle():
    trapezoid = TrapezoidalSection(bottom_width=0.0, side_slope=1.5)
    triangle = TriangularSection(side_slope=1.5)
    assert trapezoid.properties(1.3) == pytest.approx(triangle.properties(1.3))


def test_make_section():
    assert make_section('rectangular', bottom_width=3.0) == RectangularSection(bottom_width=3.0)
    assert make_section('circular', diameter=1.2, side_slope=9.0).diameter == 1.2
    assert make_section('triangular', side_slope=2.0).bottom_width == 0.0


@pytest.mark.parametrize('kwargs', [
    dict(shape='hexagonal', bottom_width=1.0),
    dict(shape='trapezoidal', bottom_width=2.0),
    dict(shape='circular'),
    dict(shape='rectangular', side_slope=1.0),
])
def test_missing_or_unknown_shape_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        make_section(**kwargs)


@pytest.mark.parametrize('factory', [
    lambda: RectangularSection(bottom_width=0.0),
    lambda: TrapezoidalSection(bottom_width=-1.0, side_slope=1.0),
    lambda: TrapezoidalSection(bottom_width=1.0, side_slope=0.0),
    lambda: TriangularSection(side_slope=-2.0),
    lambda: CircularSection(diameter=0.0),
])
def test_non_positive_shape_parameters(factory):
    with pytest.raises(InvalidInputError):
        factory()


@pytest.mark.parametrize('factory', [
    lambda: RectangularSection(bottom_width=np.inf),
    lambda: TrapezoidalSection(bottom_width=2.0, side_slope=np.nan),
    lambda: CircularSection(diameter='wide'),
])
def test_non_finite_shape_parameters(factory):
    with pytest.raises(InvalidInputError):
        factory()


def test_numeric_string_shape_parameters():
    assert RectangularSection(bottom_width='10') == RectangularSection(bottom_width=10.0)
