"""
Selection module.

Chooses which paths are drawn (marking filter) and which artboard each
one is drawn in (region selector).
"""

from artboard_plotter.selection.filters import filter_paths, matches_marking
from artboard_plotter.selection.regions import group_by_region, select_region

__all__ = [
    "filter_paths",
    "group_by_region",
    "matches_marking",
    "select_region",
]
