"""Adaptive flattening of cubic Bézier paths into polylines.

Each segment is split at t=0.5 with de Casteljau's construction.  The
deviation measure is the distance between the curve midpoint and the
chord midpoint; a segment whose deviation is within ``max_error`` is
replaced by its chord and only its end point is emitted.

Subdivision runs on an explicit stack rather than by recursion.  The right
half is pushed before the left half so that points come out in path order.
Segments that reach ``max_depth`` are emitted as chords regardless of their
deviation, which bounds the work for pathological control polygons.

All coordinates are in source (document) units.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artboard_plotter.geometry.primitives import Point2D, distance, midpoint

if TYPE_CHECKING:
    from artboard_plotter.document.model import Path

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16
"""Subdivision depth cap (2**16 segments per Bézier at most)."""


def flatten_cubic(
    p0: Point2D,
    p1: Point2D,
    p2: Point2D,
    p3: Point2D,
    max_error: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Point2D]:
    """Flatten one cubic Bézier segment.

    Parameters
    ----------
    p0, p1, p2, p3 : Point2D
        Start point, outgoing handle, incoming handle, end point.
    max_error : float
        Maximum midpoint deviation in source units.  Must be > 0.
    max_depth : int
        Maximum number of halvings along any branch.

    Returns
    -------
    list[Point2D]
        Polyline vertices **after** ``p0``, ending with ``p3``.

    Raises
    ------
    ValueError
        If ``max_error`` is not positive or ``max_depth`` is negative.
    """
    if not max_error > 0:
        raise ValueError(f"max_error must be > 0, got {max_error}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    points: list[Point2D] = []
    capped = 0
    stack = [(p0, p1, p2, p3, 0)]

    while stack:
        a, b, c, d, depth = stack.pop()

        ab = midpoint(a, b)
        bc = midpoint(b, c)
        cd = midpoint(c, d)
        abc = midpoint(ab, bc)
        bcd = midpoint(bc, cd)
        bez_mid = midpoint(abc, bcd)

        error = distance(bez_mid, midpoint(a, d))
        if error <= max_error:
            points.append(d)
        elif depth >= max_depth:
            capped += 1
            points.append(d)
        else:
            stack.append((bez_mid, bcd, cd, d, depth + 1))
            stack.append((a, ab, abc, bez_mid, depth + 1))

    if capped:
        logger.debug(
            "Depth cap %d reached on %d sub-segment(s); emitted as chords",
            max_depth,
            capped,
        )
    return points


def flatten_path(
    path: Path,
    max_error: float,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Point2D]:
    """Flatten a whole path (open or closed) into one polyline.

    The first vertex is the first anchor.  Each consecutive anchor pair
    ``(A, B)`` contributes the flattening of
    ``(A.anchor, A.right_handle, B.left_handle, B.anchor)``.  A closed path
    gets one extra segment from the last anchor back to the first, so its
    polyline starts and ends on the same point.

    Parameters
    ----------
    path : Path
        Source path.
    max_error : float
        Maximum deviation in source units.
    max_depth : int
        Subdivision depth cap per segment.

    Returns
    -------
    list[Point2D]
        Source-space vertices; empty for a path without anchors.
    """
    anchors = list(path.points)
    if not anchors:
        return []
    if path.closed:
        anchors.append(anchors[0])

    points = [anchors[0].anchor]
    for a, b in zip(anchors, anchors[1:]):
        points.extend(
            flatten_cubic(
                a.anchor, a.right_handle, b.left_handle, b.anchor,
                max_error, max_depth,
            )
        )
    return points
