import logging

from gvfmodel import ChannelParams, ProfileOptions, RectangularSection, TrapezoidalSection, run_calculation
from gvfmodel.utility import describe_profile, profile_statistics, resample_profile

logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')

# Mild slope with no boundary depth: M2 drawdown to critical depth at the outfall
mild = ChannelParams(section=RectangularSection(bottom_width=10),
                     roughness=0.03,
                     bed_slope=0.001,
                     discharge=50,
                     length=1000)

# Supercritical inflow onto a mild trapezoidal reach: M3 curve ending in a jump
inflow = ChannelParams(section=TrapezoidalSection(bottom_width=4, side_slope=1.5),
                       roughness=0.015,
                       bed_slope=0.0008,
                       discharge=20,
                       length=400,
                       upstream_depth=0.35)

for name, params in [('mild', mild), ('inflow', inflow)]:
    outcome = run_calculation(params, ProfileOptions(num_steps=200))

    if not outcome.ok:
        print(f'{name}: {outcome.error_kind} - {outcome.message}')
        continue

    profile = outcome.profile
    print(f'\n{name}: {profile.curve_type} on a {profile.channel_class} slope, '
          f'yc = {profile.critical_depth:.3f} m, yn = {profile.normal_depth:.3f} m')

    if profile.has_jump:
        jump = profile.hydraulic_jump
        print(f'Hydraulic jump ({jump.jump_type}) at x = {jump.station:.1f} m: '
              f'{jump.upstream_depth:.3f} -> {jump.downstream_depth:.3f} m, loss = {jump.energy_loss:.3f} m')

    print(describe_profile(profile).description)
    stats = profile_statistics(profile)
    print(f'Depth {stats.min_depth:.3f} - {stats.max_depth:.3f} m, mostly {stats.predominant_regime}')
    print(resample_profile(profile, 11)[['depth', 'velocity', 'froude_number', 'specific_energy', 'regime']])
