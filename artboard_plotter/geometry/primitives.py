"""Geometric primitives shared by the flattener, selector and mapper.

A ``Point2D`` carries no unit: the same type holds document points
(source units, +Y up) and machine millimetres.  Callers track which space
a given instance lives in.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point2D:
    """Immutable 2-D point.

    Parameters
    ----------
    x, y : float
        Coordinates.
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    @classmethod
    def of(cls, xy: tuple[float, float] | list[float]) -> Point2D:
        """Build from an ``(x, y)`` pair."""
        if len(xy) != 2:
            raise ValueError(f"Point requires 2 coordinates, got {len(xy)}")
        return cls(float(xy[0]), float(xy[1]))


def midpoint(a: Point2D, b: Point2D) -> Point2D:
    """Point halfway between *a* and *b*."""
    return Point2D((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def distance(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between *a* and *b*."""
    return math.hypot(a.x - b.x, a.y - b.y)
