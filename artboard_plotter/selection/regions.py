"""Artboard assignment.

Every path is assigned to exactly one artboard from a single reference
point.  A path whose geometry spans several artboards is still drawn
whole in the artboard selected for its reference point; there is no
clipping at artboard edges.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from artboard_plotter.document.model import Path, Region
from artboard_plotter.geometry.primitives import Point2D

logger = logging.getLogger(__name__)


def select_region(
    point: Point2D,
    regions: Sequence[Region],
    fallback: Region,
) -> Region:
    """Return the first region containing *point*, else *fallback*.

    Parameters
    ----------
    point : Point2D
        Source-space point.
    regions : Sequence[Region]
        Candidate regions in enumeration order.
    fallback : Region
        Region returned when no rectangle contains the point (the
        document's active artboard).

    Returns
    -------
    Region
        Never ``None``.
    """
    for region in regions:
        if region.contains(point):
            return region
    return fallback


def _index_of(region: Region, regions: Sequence[Region]) -> int:
    """Position of *region* in *regions*, compared by identity.

    Two artboards may share a name and rectangle; they are still distinct
    sheets.
    """
    for i, candidate in enumerate(regions):
        if candidate is region:
            return i
    raise ValueError(f"Fallback region '{region.name}' is not one of the regions")


def group_by_region(
    paths: Iterable[Path],
    regions: Sequence[Region],
    fallback: Region,
) -> list[list[Path]]:
    """Partition *paths* by artboard, preserving path order.

    Parameters
    ----------
    paths : Iterable[Path]
        Paths in drawing order.
    regions : Sequence[Region]
        Artboards in enumeration order.
    fallback : Region
        One of *regions* (the same object), used for paths outside every
        rectangle and for paths without a reference position.

    Returns
    -------
    list[list[Path]]
        One list per entry of *regions*, at the same position, possibly
        empty.  Every path appears in exactly one list.

    Raises
    ------
    ValueError
        If *fallback* is not an element of *regions*.
    """
    fallback_index = _index_of(fallback, regions)
    groups: list[list[Path]] = [[] for _ in regions]

    for path in paths:
        point = path.reference_position
        if point is None:
            groups[fallback_index].append(path)
            continue

        index = next(
            (i for i, region in enumerate(regions) if region.contains(point)),
            None,
        )
        if index is None:
            logger.debug(
                "Path '%s' at (%.3f, %.3f) is outside every artboard; "
                "using '%s'",
                path.name,
                point.x,
                point.y,
                fallback.name,
            )
            index = fallback_index
        groups[index].append(path)

    return groups
