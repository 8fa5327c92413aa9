"""Tests for the per-viewer flood display state machine."""

import numpy as np
import pytest

from worldwater.config import Config
from worldwater.flood import FloodDecision, FloodPhase, FloodSession
from worldwater.utils import InvalidInput


@pytest.fixture
def session():
    return FloodSession()


@pytest.fixture
def fading_session():
    return FloodSession(clear_policy="after_fade")


class TestInitialState:
    def test_starts_idle(self, session):
        assert session.phase == FloodPhase.idle
        assert session.current is None
        assert not session.has_previous_snapshot()
        assert session.alpha == 0.0

    def test_missing_geoid_falls_back_to_ellipsoid(self, session):
        assert not session.uses_geoid
        assert session.geoid.undulation(0.3, 0.7) == 0.0

    def test_uses_supplied_geoid(self, small_geoid):
        assert FloodSession(small_geoid).uses_geoid

    def test_unknown_clear_policy(self):
        with pytest.raises(InvalidInput):
            FloodSession(clear_policy="eventually")

    def test_reads_config(self):
        cfg = Config(target_alpha=0.8, clear_policy="after_fade", flood_metric="median")
        s = FloodSession(config=cfg)
        assert s.flood_alpha == 0.8
        assert s.clear_policy == "after_fade"
        assert s.flood_metric == "median"


class TestFloodingAndSteady:
    def test_set_level_starts_fade_in(self, session):
        session.set_flood_level(1.0)
        assert session.phase == FloodPhase.flooding
        assert session.surface_attached
        assert session.alpha == 0.0
        assert session.target_alpha == 0.55

    def test_tick_eases_toward_target(self, session):
        session.set_flood_level(1.0)
        assert session.tick() == pytest.approx(0.55 * 0.08)
        assert session.tick() == pytest.approx(0.55 * 0.08 + (0.55 - 0.55 * 0.08) * 0.08)

    def test_settles_exactly_on_target(self, session):
        session.set_flood_level(1.0)
        assert session.settle() == 0.55
        assert session.phase == FloodPhase.steady
        assert not session.animating

    def test_tick_when_idle_is_noop(self, session):
        assert session.tick() == 0.0
        assert session.phase == FloodPhase.idle

    def test_settle_respects_frame_cap(self, session):
        session.set_flood_level(1.0)
        session.settle(max_frames=3)
        assert session.animating
        assert 0.0 < session.alpha < 0.55


class TestElapsedTick:
    def test_one_frame_of_elapsed_matches_frame_tick(self):
        a = FloodSession()
        b = FloodSession()
        a.set_flood_level(1.0)
        b.set_flood_level(1.0)
        assert a.tick(elapsed=a.frame_interval) == pytest.approx(b.tick())

    def test_elapsed_compounds_frames(self):
        a = FloodSession()
        b = FloodSession()
        a.set_flood_level(1.0)
        b.set_flood_level(1.0)
        a.tick(elapsed=3 * a.frame_interval)
        for _ in range(3):
            b.tick()
        assert a.alpha == pytest.approx(b.alpha)

    def test_zero_elapsed_holds(self, session):
        session.set_flood_level(1.0)
        assert session.tick(elapsed=0.0) == 0.0
        assert session.animating

    def test_negative_elapsed_rejected(self, session):
        session.set_flood_level(1.0)
        with pytest.raises(InvalidInput):
            session.tick(elapsed=-0.1)


class TestSnapshots:
    def test_new_level_demotes_current(self, session):
        session.set_flood_level(1.0)
        session.settle()
        session.set_flood_level(2.0)
        assert session.previous.sea_level_rise == 1.0
        assert session.current.sea_level_rise == 2.0
        assert session.phase == FloodPhase.flooding
        assert session.alpha == 0.0

    def test_history_is_one_slot(self, session):
        for level in (1.0, 2.0, 3.0):
            session.set_flood_level(level)
        assert session.previous.sea_level_rise == 2.0

    def test_without_recording_only_level_changes(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        session.set_flood_level(1.5, record_snapshot=False)
        assert session.sea_level_rise == 1.5
        assert session.current.sea_level_rise == 2.0
        assert session.previous.sea_level_rise == 1.0

    def test_apply_result_uses_metric(self, session, result_2c):
        level = session.apply_result(result_2c)
        assert level == result_2c.stats.p95
        assert session.current.source_result is result_2c

        median = session.apply_result(result_2c, metric="median", record_snapshot=False)
        assert median == result_2c.stats.median
        assert session.sea_level_rise == median
        assert not session.has_previous_snapshot()

    def test_level_after_clear_keeps_cleared_as_previous(self, session):
        session.set_flood_level(2.0)
        session.settle()
        session.clear_flood()
        session.set_flood_level(1.5)
        assert session.previous.sea_level_rise == 2.0
        assert session.current.sea_level_rise == 1.5
        assert session.show_comparison() is True
        assert session.comparison_delta().delta == pytest.approx(-0.5)

    def test_non_positive_level_clears(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(0.0)
        assert session.phase == FloodPhase.idle
        assert session.current is None


class TestClearFlood:
    def test_immediate_detach(self, session):
        session.set_flood_level(1.0)
        session.settle()
        session.clear_flood()
        assert session.phase == FloodPhase.idle
        assert session.current is None
        assert session.previous.sea_level_rise == 1.0
        assert session.alpha == 0.0
        assert session.sea_level_rise == 0.0

    def test_after_fade_keeps_surface_until_faded(self, fading_session):
        fading_session.set_flood_level(1.0)
        fading_session.settle()
        fading_session.clear_flood()
        assert fading_session.phase == FloodPhase.clearing
        assert fading_session.surface_attached
        assert fading_session.tick() < 0.55

        fading_session.settle()
        assert fading_session.phase == FloodPhase.idle
        assert not fading_session.surface_attached
        assert fading_session.alpha == 0.0

    def test_after_fade_with_nothing_visible_detaches(self, fading_session):
        fading_session.set_flood_level(1.0)
        fading_session.clear_flood()
        assert fading_session.phase == FloodPhase.idle

    def test_clear_hides_comparison(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        session.show_comparison()
        session.clear_flood()
        assert not session.comparison_active


class TestComparison:
    def test_requires_two_snapshots(self, session):
        session.set_flood_level(1.0)
        assert session.show_comparison() is False
        assert not session.comparison_active

    def test_toggle(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        assert session.show_comparison() is True
        assert session.comparison_active
        session.hide_comparison()
        assert not session.comparison_active

    def test_independent_of_fade(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        assert session.animating
        session.show_comparison()
        assert session.animating
        assert session.phase == FloodPhase.flooding

    def test_new_level_hides_comparison(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        session.show_comparison()
        session.set_flood_level(3.0)
        assert not session.comparison_active

    def test_delta(self, session, result_2c):
        assert session.comparison_delta() is None
        session.set_flood_level(0.5)
        session.apply_result(result_2c)
        delta = session.comparison_delta()
        assert delta.previous_slr == 0.5
        assert delta.delta == pytest.approx(result_2c.stats.p95 - 0.5)
        assert delta.current_temperature == 2.0
        assert delta.previous_temperature == 0.0


class TestEvaluate:
    def test_idle_is_dry(self, session):
        assert session.evaluate(-100.0, 0.5, 0.5) == FloodDecision.dry()

    def test_steady_flood(self, session):
        session.set_flood_level(1.0)
        session.settle()
        d = session.evaluate(-10.0, 0.5, 0.5)
        assert d.is_flooded
        assert d.flood_opacity == pytest.approx(0.55)

    def test_fading_in_opacity(self, session):
        session.set_flood_level(1.0)
        session.tick()
        assert session.evaluate(-10.0, 0.5, 0.5).flood_opacity == pytest.approx(0.044)

    def test_comparison_band(self, session):
        session.set_flood_level(1.0)
        session.set_flood_level(2.0)
        session.settle()
        assert not session.evaluate(1.5, 0.5, 0.5).is_comparison_band
        session.show_comparison()
        d = session.evaluate(1.5, 0.5, 0.5)
        assert d.is_comparison_band
        assert d.opacity == session.comparison_opacity

    def test_open_water_dry(self, session):
        session.set_flood_level(1.0)
        session.settle()
        assert session.evaluate(-10.0, 0.5, 0.5, is_water=True) == FloodDecision.dry()

    def test_geoid_correction(self, small_geoid):
        s = FloodSession(small_geoid)
        s.set_flood_level(1.0)
        s.settle()
        # Bottom-left undulation is 20 m, top-left is 0 m
        assert s.evaluate(10.0, 0.0, 0.0).is_flooded
        assert not s.evaluate(10.0, 0.0, 1.0).is_flooded

    def test_tile(self, session):
        heights = np.array([[-5.0, 5.0], [-5.0, 5.0]])
        assert not session.evaluate_tile(heights, 0.5, 0.5).is_flooded.any()

        session.set_flood_level(1.0)
        session.settle()
        tile = session.evaluate_tile(heights, 0.5, 0.5, water_mask=np.array([[1, 0], [0, 0]]))
        assert tile.is_flooded.tolist() == [[False, False], [True, False]]
