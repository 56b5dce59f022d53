"""Toolpath emitter -- artboards and paths to an ordered instruction list.

Per artboard::

    ; Artboard: <name>
    <region_before boilerplate>
    per path:
        G0 F<lift> X.. Y.. ; Move to start of path
        G0 Z<draw> ; Lower pen
        G1 F<draw> X.. Y..          (feed on the first drawing move only)
        G1 X.. Y..
        ...
        G0 Z<lift> ; Lift pen
        <blank>
    <region_after boilerplate>
    ; End of artboard: <name>

Feed rate is modal machine state.  Every rapid re-states the lift feed,
so the first drawing move of every path has to re-state the draw feed;
later drawing moves of the same path omit it.

Pen state and the active feed are emitter-local and reset at the start
of each ``emit`` call.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from artboard_plotter.configs.loader import MachineConfig
from artboard_plotter.document.model import Path, Region
from artboard_plotter.gcode.boilerplate import render_block
from artboard_plotter.gcode.instructions import (
    Blank,
    Comment,
    GCodeError,
    Instruction,
    Linear,
    Rapid,
)
from artboard_plotter.gcode.mapper import map_points
from artboard_plotter.geometry.flatten import flatten_path
from artboard_plotter.geometry.primitives import Point2D
from artboard_plotter.utils.logging_config import pop_context, push_context

logger = logging.getLogger(__name__)


@dataclass
class EmitStats:
    """Counters for one ``emit`` call."""

    regions: int = 0
    paths_emitted: int = 0
    paths_skipped: int = 0
    points_emitted: int = 0
    points_out_of_bounds: int = 0


class ToolpathEmitter:
    """Turn artboard-grouped paths into toolpath instructions.

    Parameters
    ----------
    config : MachineConfig
        Validated machine configuration.
    """

    def __init__(self, config: MachineConfig) -> None:
        self._cfg = config
        self._pen_down: bool = False
        self._active_feed: float | None = None
        self.stats = EmitStats()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def emit(
        self,
        regions: Sequence[Region],
        groups: Sequence[Sequence[Path]],
    ) -> list[Instruction]:
        """Emit instructions for every region, in enumeration order.

        Parameters
        ----------
        regions : Sequence[Region]
            Artboards in output order.  Each gets a bracketed block even
            when it has no paths.
        groups : Sequence[Sequence[Path]]
            Paths assigned to each artboard, at the artboard's position in
            *regions* (as returned by ``group_by_region``).

        Returns
        -------
        list[Instruction]
            The program body (global boilerplate not included).

        Raises
        ------
        GCodeError
            If *groups* and *regions* differ in length.
        """
        if len(groups) != len(regions):
            raise GCodeError(
                f"Got {len(groups)} path group(s) for {len(regions)} region(s)"
            )

        self._reset_state()
        out: list[Instruction] = []

        for index, (region, paths) in enumerate(zip(regions, groups)):
            push_context(artboard=region.name)
            try:
                self._emit_region(index, region, paths, out)
            finally:
                pop_context(keys=["artboard"])

        s = self.stats
        logger.info(
            "Emitted %d path(s) in %d artboard(s): %d point(s), %d empty path(s) skipped",
            s.paths_emitted,
            s.regions,
            s.points_emitted,
            s.paths_skipped,
        )
        return out

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _reset_state(self) -> None:
        self._pen_down = False
        self._active_feed = None
        self.stats = EmitStats()

    def _emit_region(
        self,
        index: int,
        region: Region,
        paths: Sequence[Path],
        out: list[Instruction],
    ) -> None:
        block_vars = {"region_name": region.name, "region_index": index}

        out.append(Comment(f"Artboard: {region.name}"))
        out.extend(render_block(self._cfg.gcode.region_before, self._cfg, **block_vars))

        for path in paths:
            self._emit_path(path, region, out)

        out.extend(render_block(self._cfg.gcode.region_after, self._cfg, **block_vars))
        out.append(Comment(f"End of artboard: {region.name}"))

        self.stats.regions += 1
        logger.debug("Artboard '%s': %d path(s)", region.name, len(paths))

    def _emit_path(self, path: Path, region: Region, out: list[Instruction]) -> None:
        if path.is_empty:
            self.stats.paths_skipped += 1
            logger.debug("Skipping empty path '%s'", path.name)
            return

        source_points = flatten_path(
            path, self._cfg.max_error, self._cfg.max_subdivision_depth
        )
        points = map_points(source_points, region, self._cfg)
        self._check_bounds(path, points)

        first, rest = points[0], points[1:]
        self._rapid_to(first, out)
        self._pen_lower(out)
        for point in rest:
            self._draw_to(point, out)
        self._pen_lift(out)
        out.append(Blank())

        self.stats.paths_emitted += 1
        self.stats.points_emitted += len(points)

    # ------------------------------------------------------------------
    # Individual moves
    # ------------------------------------------------------------------

    def _rapid_to(self, point: Point2D, out: list[Instruction]) -> None:
        if self._pen_down:
            self._pen_lift(out)
        feed = self._cfg.feeds.lift_mm_min
        out.append(
            Rapid(x=point.x, y=point.y, feed=feed, comment="Move to start of path")
        )
        self._active_feed = feed

    def _pen_lower(self, out: list[Instruction]) -> None:
        out.append(Rapid(z=self._cfg.z_states.draw_mm, comment="Lower pen"))
        self._pen_down = True

    def _pen_lift(self, out: list[Instruction]) -> None:
        out.append(Rapid(z=self._cfg.z_states.lift_mm, comment="Lift pen"))
        self._pen_down = False

    def _draw_to(self, point: Point2D, out: list[Instruction]) -> None:
        draw_feed = self._cfg.feeds.draw_mm_min
        feed = None if self._active_feed == draw_feed else draw_feed
        out.append(Linear(x=point.x, y=point.y, feed=feed))
        self._active_feed = draw_feed

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _check_bounds(self, path: Path, points: list[Point2D]) -> None:
        """Warn about machine positions outside the work area."""
        wa = self._cfg.work_area
        if wa is None:
            return
        outside = sum(
            1 for p in points if not (0.0 <= p.x <= wa.x and 0.0 <= p.y <= wa.y)
        )
        if outside:
            self.stats.points_out_of_bounds += outside
            logger.warning(
                "Path '%s': %d of %d point(s) outside work area [0, %.1f] x [0, %.1f]",
                path.name,
                outside,
                len(points),
                wa.x,
                wa.y,
            )
