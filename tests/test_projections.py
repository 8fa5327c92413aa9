"""Tests for SSP scenario temperature projection and projection runs."""

import pytest

from worldwater.scenario import (
    PROJECTION_YEARS,
    Scenario,
    get_projected_temperature,
    get_scenario_by_id,
    get_scenario_presets,
)
from worldwater.scenario.projections import interpolate_temperature
from worldwater.scenario.runner import simulate_projection, simulate_temperature
from worldwater.simulation import run_simulation, seed_for_projection, seed_for_temperature
from worldwater.utils import UnknownScenario


class TestPresets:
    def test_three_presets_in_order(self):
        assert [s.id for s in get_scenario_presets()] == ["ssp126", "ssp245", "ssp585"]

    def test_every_preset_has_projection_years(self):
        for scenario in get_scenario_presets():
            assert scenario.anchor_years == list(PROJECTION_YEARS)

    def test_lookup(self):
        assert get_scenario_by_id("ssp585").label == "SSP5-8.5"
        assert get_scenario_by_id("nope") is None


class TestProjectedTemperature:
    def test_anchor_hit_is_exact(self):
        assert get_projected_temperature("ssp245", 2050) == 2.2

    def test_interpolates_between_anchors(self):
        t = get_projected_temperature("ssp245", 2040)
        assert 1.6 < t < 2.2
        assert t == pytest.approx(1.9)

    def test_clamps_after_last_anchor(self):
        assert get_projected_temperature("ssp245", 2200) == 2.9

    def test_clamps_before_first_anchor(self):
        assert get_projected_temperature("ssp585", 2000) == 1.8

    def test_unknown_scenario(self):
        with pytest.raises(UnknownScenario) as exc_info:
            get_projected_temperature("unknown", 2050)
        assert exc_info.value.scenario_id == "unknown"

    def test_unknown_scenario_is_lookup_error(self):
        with pytest.raises(LookupError):
            get_projected_temperature("ssp999", 2050)

    def test_higher_emissions_warmer(self):
        for year in (2040, 2075, 2100):
            temps = [get_projected_temperature(s, year) for s in ("ssp126", "ssp245", "ssp585")]
            assert temps == sorted(temps)


class TestAnchorOrdering:
    def test_unsorted_anchor_table(self):
        scenario = Scenario(
            id="custom", label="Custom",
            temperatures_by_year={2100: 3.0, 2000: 1.0, 2050: 2.0},
        )
        assert scenario.anchor_years == [2000, 2050, 2100]
        assert interpolate_temperature(scenario, 2025) == pytest.approx(1.5)
        assert interpolate_temperature(scenario, 2075) == pytest.approx(2.5)
        assert interpolate_temperature(scenario, 1900) == 1.0

    def test_single_anchor_is_constant(self):
        scenario = Scenario(id="flat", label="Flat", temperatures_by_year={2050: 1.2})
        assert interpolate_temperature(scenario, 1990) == 1.2
        assert interpolate_temperature(scenario, 2300) == 1.2

    def test_empty_anchor_table_rejected(self):
        with pytest.raises(ValueError):
            Scenario(id="empty", label="Empty", temperatures_by_year={})


class TestRunner:
    def test_manual_mode_uses_temperature_seed(self):
        result = simulate_temperature(2.0, iterations=200)
        expected = run_simulation(2.0, 200, seed=seed_for_temperature(2.0))
        assert result.seed == seed_for_temperature(2.0)
        assert result.sorted_totals == expected.sorted_totals

    def test_projection_run(self):
        run = simulate_projection("ssp585", 2100, iterations=200)
        assert run.temperature_increase == 4.4
        assert run.seed == seed_for_projection("ssp585", 2100)
        assert run.result.temperature_increase == 4.4
        assert run.result.iterations == 200

    def test_projection_reproducible(self):
        a = simulate_projection("ssp126", 2050, iterations=100)
        b = simulate_projection("ssp126", 2050, iterations=100)
        assert a.result.stats == b.result.stats

    def test_defaults_come_from_config(self, config):
        run = simulate_projection("ssp245", 2030)
        assert run.result.iterations == config.iterations

    def test_projection_unknown_scenario(self):
        with pytest.raises(UnknownScenario):
            simulate_projection("ssp000", 2050)
