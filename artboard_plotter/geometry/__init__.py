"""
Geometry module.

Point primitives and error-bounded Bézier flattening.  All coordinates
here are in source (document) units.
"""

from artboard_plotter.geometry.flatten import (
    DEFAULT_MAX_DEPTH,
    flatten_cubic,
    flatten_path,
)
from artboard_plotter.geometry.primitives import Point2D, distance, midpoint

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Point2D",
    "distance",
    "flatten_cubic",
    "flatten_path",
    "midpoint",
]
