import math

import pytest

from py_servecalc.conditions import ServeInput, ServeSide, TargetZone
from py_servecalc.constants import (cBaselineToNet, cLateralOffsetT, cLateralOffsetWide, cMaxStepIn,
                                    cMinimumHeight, cMinimumSpeed, cNetHeight, cServiceDepth,
                                    cServiceLineSafety)
from py_servecalc.engine import (DEFAULT_SERVE_ENGINE_CONFIG, ServeEngine, ServeEngineConfig,
                                 create_serve_engine_config)
from py_servecalc.solution import ServeStatus
from py_servecalc.unit import Angular, Distance, Velocity

from tests.conftest import HEIGHT_5_5


class TestEngineConfig:

    def test_defaults(self):
        config = create_serve_engine_config()
        assert config == DEFAULT_SERVE_ENGINE_CONFIG
        assert config is not DEFAULT_SERVE_ENGINE_CONFIG
        assert config.cBisectIterations == 90
        assert config.cMaxBracketExpansions == 40
        assert config.cStrictBracketing is False

    def test_dict_overrides(self):
        config = create_serve_engine_config({'cPreferredDepthT': 5.0, 'cBisectIterations': 60})
        assert config.cPreferredDepthT == 5.0
        assert config.cBisectIterations == 60
        assert config.cPreferredDepthWide == DEFAULT_SERVE_ENGINE_CONFIG.cPreferredDepthWide

    def test_dataclass_is_copied(self):
        source = ServeEngineConfig(cGravityConstant=9.8)
        config = create_serve_engine_config(source)
        assert config == source
        assert config is not source

    def test_unknown_key(self):
        with pytest.raises(TypeError):
            create_serve_engine_config({'cNoSuchSetting': 1})  # type: ignore[typeddict-unknown-key]

    def test_engine_config_property(self):
        engine = ServeEngine({'cMarginEpsilon': 1e-3})
        assert engine.config.cMarginEpsilon == 1e-3


class TestEndToEnd:

    def test_50mph_wide(self, engine, serve_50_wide):
        solution = engine.solve(serve_50_wide)
        assert 3 <= (solution.elevation >> Angular.Degree) <= 12
        assert solution.clearance_m >= 0.2 - 1e-6
        assert solution.depth_past_net_m == pytest.approx(5.8, abs=1e-3)
        assert solution.status is ServeStatus.UNCONSTRAINED
        assert not solution.clamped_to_service_line
        assert solution.margin_satisfied

    def test_50mph_wide_values(self, engine, serve_50_wide):
        solution = engine.solve(serve_50_wide)
        assert (solution.elevation >> Angular.Degree) == pytest.approx(4.21, abs=0.05)
        assert solution.clearance_m == pytest.approx(0.295, abs=0.005)
        assert (solution.azimuth >> Angular.Degree) == pytest.approx(
            math.degrees(math.atan2(cLateralOffsetWide, solution.landing_distance_m)))
        assert solution.azimuth_rad > 0

    def test_120mph_t_is_flatter(self, engine, serve_50_wide, serve_120_t):
        fast = engine.solve(serve_120_t)
        slow = engine.solve(serve_50_wide)
        assert fast.elevation_rad < slow.elevation_rad
        assert fast.depth_past_net_m <= cServiceDepth - cServiceLineSafety + 1e-6

    def test_120mph_t_clamped_into_net(self, engine, serve_120_t):
        solution = engine.solve(serve_120_t)
        assert solution.clamped_to_service_line
        assert (solution.elevation >> Angular.Degree) == pytest.approx(-3.6, abs=0.1)
        assert solution.clearance_m < 0
        assert not solution.margin_satisfied

    def test_infeasible_margin(self, engine):
        serve = ServeInput(speed=Velocity.MPH(20), height=HEIGHT_5_5, target=TargetZone.WIDE,
                           clearance=Distance.Meter(1.0))
        solution = engine.solve(serve)
        assert solution.clamped_to_service_line
        assert not solution.margin_satisfied
        assert not solution.candidates.margin_reachable
        assert solution.elevation_rad == solution.candidates.service_max_angle
        assert solution.advisory is not None

    def test_infeasible_margin_without_strict_never_raises(self):
        engine = ServeEngine()
        for mph in (0, 5, 20, 60, 150):
            for clearance in (0, 0.5, 3.0):
                serve = ServeInput(speed=Velocity.MPH(mph), height=HEIGHT_5_5,
                                   clearance=Distance.Meter(clearance))
                solution = engine.solve(serve)
                assert math.isfinite(solution.elevation_rad)
                assert math.isfinite(solution.azimuth_rad)


class TestReconciler:

    def test_clamp_idempotence(self, engine, serve_50_wide):
        solution = engine.solve(serve_50_wide)
        candidates = solution.candidates
        assert candidates.preferred_angle <= candidates.service_max_angle
        assert solution.elevation_rad == candidates.preferred_angle

    def test_preferred_is_max_of_candidates(self, engine, serve_50_wide):
        candidates = engine.solve(serve_50_wide).candidates
        assert candidates.preferred_angle == max(candidates.depth_angle, candidates.margin_angle)

    def test_large_margin_takes_precedence_over_depth(self, engine):
        serve = ServeInput(speed=Velocity.MPH(50), height=HEIGHT_5_5, clearance=Distance.Centimeter(45))
        solution = engine.solve(serve)
        assert solution.candidates.margin_angle > solution.candidates.depth_angle

    @pytest.mark.parametrize("mph", [30, 50, 80, 100, 130])
    @pytest.mark.parametrize("target", list(TargetZone))
    def test_never_lands_past_service_line(self, engine, mph, target):
        serve = ServeInput(speed=Velocity.MPH(mph), height=HEIGHT_5_5, target=target)
        solution = engine.solve(serve)
        assert solution.depth_past_net_m <= cServiceDepth - cServiceLineSafety + 1e-6

    def test_margin_flag_matches_clearance(self, engine, serve_120_t):
        solution = engine.solve(serve_120_t)
        assert solution.margin_satisfied == (solution.clearance_m >= solution.props.margin_m - 1e-6)

    def test_clearance_definition(self, engine, serve_50_wide):
        solution = engine.solve(serve_50_wide)
        height = engine.height_at(solution.props, solution.elevation_rad, solution.props.x_net_m)
        assert solution.clearance_m == pytest.approx(height - cNetHeight)


class TestAzimuth:

    def test_t_offset(self, engine, serve_120_t):
        solution = engine.solve(serve_120_t)
        assert solution.lateral_offset_m == cLateralOffsetT
        assert solution.azimuth_rad == pytest.approx(math.atan2(cLateralOffsetT, solution.aim_distance_m))

    def test_aim_distance_capped_at_service_line(self, engine):
        config_engine = ServeEngine({'cPreferredDepthWide': 6.35})
        serve = ServeInput(speed=Velocity.MPH(50), height=HEIGHT_5_5)
        solution = config_engine.solve(serve)
        limit = solution.props.x_net_m + cServiceDepth - cServiceLineSafety
        assert solution.aim_distance_m <= limit + 1e-9

    def test_ad_side_mirrors_azimuth(self, engine):
        deuce = engine.solve(ServeInput(speed=50, height=HEIGHT_5_5, side=ServeSide.DEUCE))
        ad = engine.solve(ServeInput(speed=50, height=HEIGHT_5_5, side='ad'))
        assert ad.azimuth_rad == pytest.approx(-deuce.azimuth_rad)
        assert ad.elevation_rad == deuce.elevation_rad


class TestInputSanitizing:

    def test_speed_and_height_floors(self, engine):
        props = engine._init_serve(ServeInput(speed=0, height=0))
        assert props.speed_mps == cMinimumSpeed
        assert props.height_m == cMinimumHeight

    def test_negative_clearance_floored(self, engine):
        props = engine._init_serve(ServeInput(speed=50, height=HEIGHT_5_5, clearance=-10))
        assert props.margin_m == 0.0

    @pytest.mark.parametrize("step_in, expected", [(-1.0, 0.0), (0.5, 0.5), (5.0, cMaxStepIn), (20.0, cMaxStepIn)])
    def test_step_in_clamped(self, engine, step_in, expected, caplog):
        props = engine._init_serve(ServeInput(speed=50, height=HEIGHT_5_5, step_in=Distance.Meter(step_in)))
        assert props.step_in_m == pytest.approx(expected)
        assert props.x_net_m == pytest.approx(cBaselineToNet - expected)
        assert props.x_net_m > 0
        if step_in != expected:
            assert "clamped" in caplog.text
