import pytest

from gvfmodel import ChannelParams, CircularSection, RectangularSection, TrapezoidalSection, TriangularSection

@pytest.fixture
def rectangular():
    return RectangularSection(bottom_width=10.0)

@pytest.fixture
def mild_params(rectangular):
    # yc = 1.366 m, yn = 3.08 m
    return ChannelParams(section=rectangular, roughness=0.03, bed_slope=0.001, discharge=50.0, length=1000.0)

@pytest.fixture
def steep_params(rectangular):
    # yc = 1.366 m, yn = 1.13 m
    return ChannelParams(section=rectangular, roughness=0.03, bed_slope=0.02, discharge=50.0, length=500.0)

@pytest.fixture
def trapezoidal_params():
    return ChannelParams(section=TrapezoidalSection(bottom_width=5.0, side_slope=2.0),
                         roughness=0.025, bed_slope=0.0005, discharge=30.0, length=800.0)

@pytest.fixture
def triangular_params():
    return ChannelParams(section=TriangularSection(side_slope=1.5),
                         roughness=0.015, bed_slope=0.002, discharge=5.0, length=300.0)

@pytest.fixture
def circular_params():
    return ChannelParams(section=CircularSection(diameter=2.0),
                         roughness=0.013, bed_slope=0.001, discharge=2.0, length=200.0)

@pytest.fixture
def all_params(mild_params, steep_params, trapezoidal_params, triangular_params, circular_params):
    return [mild_params, steep_params, trapezoidal_params, triangular_params, circular_params]
