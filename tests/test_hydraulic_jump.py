import numpy as np
import pytest

from gvfmodel import (ChannelParams, FlowState, JumpType, RectangularSection, TrapezoidalSection,
                      calculate_hydraulic_jump, classify_jump, detect_hydraulic_jump, energy_loss, jump_length,
                      sequent_depth)

Y1, FR1 = 0.3, 3.0


@pytest.fixture
def jump_params():
    # Discharge giving Fr = 3 at y = 0.3 in a 10 m wide rectangle
    Q = FR1 * np.sqrt(9.81 * Y1) * Y1 * 10.0
    return ChannelParams(section=RectangularSection(bottom_width=10.0), roughness=0.015, bed_slope=0.001,
                         discharge=Q, length=100.0)


def test_sequent_depth():
    y2 = sequent_depth(Y1, FR1)
    assert y2 == pytest.approx(0.15 * (np.sqrt(73.0) - 1.0))
    assert y2 == pytest.approx(1.1316, abs=1e-4)


def test_energy_loss():
    y2 = sequent_depth(Y1, FR1)
    assert energy_loss(Y1, y2) == pytest.approx((y2 - Y1)**3 / (4.0 * Y1 * y2))
    assert energy_loss(1.0, 1.0) == 0.0


@pytest.mark.parametrize('Fr, expected', [
    (0.8, None),
    (1.0, None),
    (1.5, JumpType.UNDULAR),
    (2.0, JumpType.WEAK),
    (2.5, JumpType.WEAK),
    (3.0, JumpType.OSCILLATING),
    (4.5, JumpType.OSCILLATING),
    (6.0, JumpType.STEADY),
    (9.0, JumpType.STEADY),
    (12.0, JumpType.STRONG),
])
def test_classify_jump(Fr, expected):
    assert classify_jump(Fr) == expected


def test_jump_length():
    assert jump_length(2.0, 1.5) == pytest.approx(10.0)
    assert jump_length(2.0, 3.0) == pytest.approx(12.0)
    assert jump_length(2.0, 6.0) == pytest.approx(14.0)


def test_calculate_hydraulic_jump(jump_params):
    jump = calculate_hydraulic_jump(jump_params, Y1, station=40.0)

    assert jump.station == 40.0
    assert jump.froude_number1 == pytest.approx(FR1)
    assert jump.upstream_depth == Y1
    assert jump.downstream_depth == pytest.approx(1.1316, abs=1e-4)
    assert jump.jump_type == JumpType.OSCILLATING
    assert str(jump.jump_type) == 'oscillating'
    assert jump.energy_loss == pytest.approx(energy_loss(Y1, jump.downstream_depth))
    assert jump.sequent_depth_ratio == pytest.approx(jump.downstream_depth / Y1)
    assert 0.0 < jump.efficiency < 1.0
    assert jump.specific_force1 == pytest.approx(jump.specific_force2)

    E1 = jump_params.specific_energy(Y1)
    E2 = jump_params.specific_energy(jump.downstream_depth)
    assert E1 - E2 == pytest.approx(jump.energy_loss)


def test_no_jump_from_subcritical_depth(jump_params):
    assert calculate_hydraulic_jump(jump_params, 2.0, station=0.0) is None


def test_non_rectangular_jump_uses_rectangular_formula():
    params = ChannelParams(section=TrapezoidalSection(bottom_width=4.0, side_slope=1.0), roughness=0.015,
                           bed_slope=0.001, discharge=20.0, length=100.0)
    y1 = 0.4
    Fr1 = params.froude_number(y1)
    jump = calculate_hydraulic_jump(params, y1, station=0.0)

    assert Fr1 > 1.0
    assert jump.downstream_depth == pytest.approx(sequent_depth(y1, Fr1))


def _state(params, station, depth):
    A, P, R, T = params.section.properties(depth)
    return FlowState(station=station, depth=depth, velocity=params.velocity(depth),
                     froude_number=params.froude_number(depth), specific_energy=params.specific_energy(depth),
                     critical_depth=0.0, normal_depth=0.0, top_width=T, area=A, hydraulic_radius=R,
                     friction_slope=params.friction_slope(depth))


def test_detect_hydraulic_jump(jump_params):
    depths = [0.3, 0.32, 0.34, 1.1, 1.12]
    states = [_state(jump_params, 10.0 * i, y) for i, y in enumerate(depths)]

    jump = detect_hydraulic_jump(jump_params, reversed(states))

    Fr_a, Fr_b = states[2].froude_number, states[3].froude_number
    assert jump.upstream_depth == 0.34
    assert 20.0 < jump.station < 30.0
    assert jump.station == pytest.approx(20.0 + 10.0 * (1.0 - Fr_a) / (Fr_b - Fr_a))


def test_detect_hydraulic_jump_none(jump_params):
    states = [_state(jump_params, 10.0 * i, y) for i, y in enumerate([1.2, 1.1, 1.0])]
    assert detect_hydraulic_jump(jump_params, states) is None

    # Subcritical to supercritical in the flow direction is not a jump
    states = [_state(jump_params, 10.0 * i, y) for i, y in enumerate([1.2, 0.6, 0.3])]
    assert detect_hydraulic_jump(jump_params, states) is None
