"""Flood display state for one viewer.

A FloodSession owns everything that changes over time in the flood
overlay: the current and previous snapshots, the animated opacity, whether
the comparison overlay is shown and whether a flood surface is attached at
all. Compositing itself stays a pure function (see ``compositor``); the
session only feeds it the right levels and opacity.

History is one slot deep: recording a new snapshot moves ``current`` into
``previous`` and drops whatever ``previous`` held. Clearing also demotes
``current``, so a level recorded after a clear compares against the
cleared one.

Opacity eases toward its target by a fixed fraction per animation frame.
``tick`` advances the easing; the caller's render loop decides when to call
it, and stopping the loop simply stops the fade.
"""

from __future__ import annotations

import logging

import numpy as np

from worldwater.config import Config, get_config
from worldwater.flood.compositor import composite, composite_tile
from worldwater.flood.constants import ALPHA_SNAP_THRESHOLD
from worldwater.flood.geoid import ZeroGeoid
from worldwater.flood.models import (
    ComparisonDelta,
    FloodDecision,
    FloodPhase,
    FloodSnapshot,
    FloodTile,
)
from worldwater.simulation.models import SimulationResult
from worldwater.utils import InvalidInput

logger = logging.getLogger(__name__)

_CLEAR_POLICIES = ("immediate", "after_fade")


class FloodSession:
    """Snapshot history, fade animation and comparison overlay for a viewer."""

    def __init__(
        self,
        geoid=None,
        *,
        config: Config | None = None,
        clear_policy: str | None = None,
    ) -> None:
        cfg = config or get_config()

        if geoid is None:
            logger.warning("Geoid grid not available, using ellipsoid-only flood surface")
            geoid = ZeroGeoid()
        self.geoid = geoid

        self.clear_policy = clear_policy or cfg.clear_policy
        if self.clear_policy not in _CLEAR_POLICIES:
            raise InvalidInput(
                f"Unknown clear policy: {self.clear_policy}. Expected one of {list(_CLEAR_POLICIES)}"
            )

        self.flood_metric = cfg.flood_metric
        self.edge_softness = cfg.edge_softness
        self.flood_alpha = cfg.target_alpha
        self.alpha_rate = cfg.alpha_rate
        self.frame_interval = cfg.frame_interval
        self.comparison_opacity = cfg.comparison_opacity

        self.current: FloodSnapshot | None = None
        self.previous: FloodSnapshot | None = None
        self.sea_level_rise = 0.0
        self.alpha = 0.0
        self.target_alpha = 0.0
        self.animating = False
        self.comparison_active = False
        self.surface_attached = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def uses_geoid(self) -> bool:
        return not isinstance(self.geoid, ZeroGeoid)

    @property
    def phase(self) -> FloodPhase:
        if not self.surface_attached:
            return FloodPhase.idle
        if self.target_alpha == 0.0:
            return FloodPhase.clearing
        if self.animating:
            return FloodPhase.flooding
        return FloodPhase.steady

    def has_previous_snapshot(self) -> bool:
        return self.previous is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def set_flood_level(
        self,
        sea_level_rise: float,
        result: SimulationResult | None = None,
        record_snapshot: bool = True,
    ) -> None:
        """Show a flood at ``sea_level_rise`` meters and start the fade-in.

        With ``record_snapshot`` the old current snapshot, if any, becomes
        previous.
        Without it (e.g. switching the displayed statistic) history is left
        alone and only the rendered level changes. A non-positive level
        clears the flood.
        """
        if record_snapshot:
            if self.current is not None:
                self.previous = self.current
            self.current = FloodSnapshot(sea_level_rise=sea_level_rise, source_result=result)
            logger.debug(
                "Flood snapshot recorded: %.3fm (previous=%s)",
                sea_level_rise,
                None if self.previous is None else f"{self.previous.sea_level_rise:.3f}m",
            )

        if sea_level_rise <= 0:
            self.clear_flood()
            return

        self.sea_level_rise = sea_level_rise
        self.comparison_active = False
        self.surface_attached = True
        self.alpha = 0.0
        self.target_alpha = self.flood_alpha
        self.animating = True

    def apply_result(
        self,
        result: SimulationResult,
        metric: str | None = None,
        record_snapshot: bool = True,
    ) -> float:
        """Set the flood level from a simulation result's chosen statistic."""
        level = result.flood_level(metric or self.flood_metric)
        self.set_flood_level(level, result, record_snapshot)
        return level

    def clear_flood(self) -> None:
        """Remove the flood, demoting the current snapshot into previous."""
        self.previous = self.current
        self.current = None
        self.comparison_active = False
        self.target_alpha = 0.0

        if self.clear_policy == "after_fade" and self.surface_attached and self.alpha > 0.0:
            self.animating = True
            return

        self._detach()

    def _detach(self) -> None:
        self.alpha = 0.0
        self.target_alpha = 0.0
        self.animating = False
        self.surface_attached = False
        self.sea_level_rise = 0.0

    def tick(self, elapsed: float | None = None) -> float:
        """Advance the fade by one frame, or by ``elapsed`` seconds of frames.

        Returns the updated opacity. Once within the snap threshold the
        opacity lands exactly on its target; a settled target of zero
        detaches the surface.
        """
        if not self.animating:
            return self.alpha

        if elapsed is None:
            step = self.alpha_rate
        else:
            if elapsed < 0:
                raise InvalidInput(f"Elapsed time must be non-negative, got {elapsed}")
            frames = elapsed / self.frame_interval
            step = 1.0 - (1.0 - self.alpha_rate) ** frames

        diff = self.target_alpha - self.alpha
        if abs(diff) > ALPHA_SNAP_THRESHOLD:
            self.alpha += diff * step
        else:
            self.alpha = self.target_alpha
            self.animating = False
            if self.target_alpha == 0.0:
                self._detach()
        return self.alpha

    def settle(self, max_frames: int = 1000) -> float:
        """Run frames until the fade stops (or ``max_frames`` elapse)."""
        for _ in range(max_frames):
            if not self.animating:
                break
            self.tick()
        return self.alpha

    # ------------------------------------------------------------------
    # Comparison overlay
    # ------------------------------------------------------------------

    def show_comparison(self) -> bool:
        """Highlight the band between current and previous flood surfaces.

        Returns False (and changes nothing) unless both snapshots exist and
        a flood surface is attached.
        """
        if self.previous is None or self.current is None or not self.surface_attached:
            return False
        self.comparison_active = True
        return True

    def hide_comparison(self) -> None:
        self.comparison_active = False

    def comparison_delta(self) -> ComparisonDelta | None:
        if self.current is None or self.previous is None:
            return None

        def _temperature(snapshot: FloodSnapshot) -> float:
            if snapshot.source_result is None:
                return 0.0
            return snapshot.source_result.temperature_increase

        return ComparisonDelta(
            current_slr=self.current.sea_level_rise,
            previous_slr=self.previous.sea_level_rise,
            delta=self.current.sea_level_rise - self.previous.sea_level_rise,
            current_temperature=_temperature(self.current),
            previous_temperature=_temperature(self.previous),
        )

    def _comparison_level(self) -> float | None:
        if self.comparison_active and self.previous is not None:
            return self.previous.sea_level_rise
        return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def evaluate(self, terrain_height: float, u: float, v: float, is_water: bool = False) -> FloodDecision:
        """Flood decision for one fragment at texture coordinate (u, v)."""
        if not self.surface_attached:
            return FloodDecision.dry()
        return composite(
            terrain_height,
            self.geoid.undulation(u, v),
            self.sea_level_rise,
            self.alpha,
            comparison_sea_level_rise=self._comparison_level(),
            is_water=is_water,
            edge_softness=self.edge_softness,
            comparison_opacity=self.comparison_opacity,
        )

    def evaluate_tile(self, terrain_heights, u, v, water_mask=None) -> FloodTile:
        """Flood decisions for a block of fragments."""
        heights = np.asarray(terrain_heights, dtype=np.float64)
        if not self.surface_attached:
            zeros = np.zeros(heights.shape)
            no = np.zeros(heights.shape, dtype=bool)
            return FloodTile(zeros, no, zeros, no, zeros)
        return composite_tile(
            heights,
            self.geoid.undulation(u, v),
            self.sea_level_rise,
            self.alpha,
            comparison_sea_level_rise=self._comparison_level(),
            water_mask=water_mask,
            edge_softness=self.edge_softness,
            comparison_opacity=self.comparison_opacity,
        )
