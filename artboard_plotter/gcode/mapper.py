"""Document -> machine coordinate transform.

Each artboard is plotted on its own sheet with the artboard's top-left
corner at the pen origin::

    x_mm = (x - region.left) * unit_scale + pen_offset_x
    y_mm = (y - region.top)  * unit_scale + pen_offset_y

Document Y grows upwards and ``top`` is the artboard's largest Y, so
``y - top`` is zero on the top edge and negative inside the artboard.
There is no separate document-height term: the origin is re-anchored per
artboard, which keeps artboards of different sizes independent.
"""

from __future__ import annotations

from collections.abc import Iterable

from artboard_plotter.configs.loader import MachineConfig
from artboard_plotter.document.model import Region
from artboard_plotter.geometry.primitives import Point2D


def map_to_machine(
    point: Point2D,
    region: Region,
    config: MachineConfig,
) -> Point2D:
    """Map a document point into machine millimetres for *region*.

    Parameters
    ----------
    point : Point2D
        Document-space point.
    region : Region
        Artboard the point is plotted in.
    config : MachineConfig
        Supplies ``unit_scale`` and the pen offset.

    Returns
    -------
    Point2D
        Absolute machine position in mm.
    """
    scale = config.unit_scale
    return Point2D(
        (point.x - region.left) * scale + config.pen.offset_x_mm,
        (point.y - region.top) * scale + config.pen.offset_y_mm,
    )


def map_points(
    points: Iterable[Point2D],
    region: Region,
    config: MachineConfig,
) -> list[Point2D]:
    """``map_to_machine`` over a polyline."""
    return [map_to_machine(p, region, config) for p in points]
