import numpy as np
import pytest

from gvfmodel import ChannelParams, ProfileCurveType, compute_profile
from gvfmodel.utility import (critical_depth_crossings, depth_crossings, describe_profile, interpolate_profile,
                              normal_depth_crossings, profile_statistics, regime_transitions, resample_profile)


@pytest.fixture
def m2_profile(mild_params):
    return compute_profile(mild_params)


@pytest.fixture
def jump_profile(mild_params):
    params = ChannelParams(section=mild_params.section, roughness=0.03, bed_slope=0.001, discharge=50.0,
                           length=1000.0, upstream_depth=0.5)
    return compute_profile(params)


def test_profile_statistics(m2_profile):
    stats = profile_statistics(m2_profile)

    assert stats.min_depth == pytest.approx(m2_profile.critical_depth)
    assert stats.min_depth <= stats.mean_depth <= stats.max_depth
    assert stats.max_depth == m2_profile.depths.max()
    assert stats.min_velocity <= stats.mean_velocity <= stats.max_velocity
    assert stats.max_froude_number == pytest.approx(1.0, abs=1e-6)
    assert stats.min_specific_energy == pytest.approx(1.5 * m2_profile.critical_depth)
    assert stats.predominant_regime == 'subcritical'


def test_regime_transitions(jump_profile):
    transitions = regime_transitions(jump_profile)

    assert transitions
    assert transitions[0].from_regime == 'supercritical'
    assert all(t1.station <= t2.station for t1, t2 in zip(transitions[:-1], transitions[1:]))
    assert 0.0 < transitions[0].station < 1000.0


def test_no_regime_transition_in_uniform_flow(steep_params):
    assert regime_transitions(compute_profile(steep_params)) == []


def test_interpolate_profile(m2_profile):
    x = m2_profile.stations
    midpoints = 0.5 * (x[:-1] + x[1:])
    df = interpolate_profile(m2_profile, midpoints)

    assert len(df) == len(midpoints)
    assert df['depth'].to_numpy() == pytest.approx(0.5 * (m2_profile.depths[:-1] + m2_profile.depths[1:]))
    assert 'regime' in df.columns


def test_interpolate_profile_at_stations_is_exact(m2_profile):
    df = interpolate_profile(m2_profile, m2_profile.stations)
    assert df['depth'].to_numpy() == pytest.approx(m2_profile.depths)


def test_interpolate_outside_reach_holds_end_values(m2_profile):
    df = interpolate_profile(m2_profile, [-50.0, 2000.0])
    assert df['depth'].iloc[0] == m2_profile.depths[0]
    assert df['depth'].iloc[-1] == m2_profile.depths[-1]


def test_resample_profile(m2_profile):
    df = resample_profile(m2_profile, 11)

    assert len(df) == 11
    assert df.index.to_numpy() == pytest.approx(np.linspace(0.0, 1000.0, 11))
    assert df['depth'].iloc[-1] == pytest.approx(m2_profile.critical_depth)

    with pytest.raises(ValueError):
        resample_profile(m2_profile, 1)


def test_depth_crossings(m2_profile):
    target = 0.5 * (m2_profile.depths[10] + m2_profile.depths[11])
    crossings = depth_crossings(m2_profile, target)

    assert len(crossings) == 1
    assert m2_profile.stations[10] < crossings[0] < m2_profile.stations[11]
    assert depth_crossings(m2_profile, 100.0) == []


def test_critical_and_normal_depth_crossings(m2_profile, jump_profile):
    # The M2 curve stays between yc and yn
    assert normal_depth_crossings(m2_profile) == []
    assert critical_depth_crossings(jump_profile)


def test_describe_gradually_varied_profile(m2_profile):
    description = describe_profile(m2_profile)

    assert m2_profile.curve_type == ProfileCurveType.M2
    assert description.classification == 'M2'
    assert description.description.startswith('M2 - Drawdown')
    assert 'Froude:' in description.details


def test_describe_jump_profile(jump_profile):
    description = describe_profile(jump_profile)

    assert description.classification == 'Hydraulic Jump'
    assert f'{jump_profile.hydraulic_jump.station:.2f}' in description.details
    assert description.details.splitlines()[1].startswith('Depth:')


def test_describe_uniform_profile(steep_params):
    description = describe_profile(compute_profile(steep_params))

    assert description.classification == 'Uniform Flow'
    assert 'Depth:' in description.details
