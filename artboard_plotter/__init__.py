"""
Artboard Plotter.

Exports vector paths laid out on one or more artboards as G-code for a
pen plotter.  Bézier segments are flattened to line segments within a
millimetre tolerance, each artboard is mapped to its own sheet, and the
toolpath is bracketed by configurable boilerplate.

Subpackages:
    geometry: Point primitives and Bézier flattening
    document: Input model, document.v1 schema and loader
    selection: Marking filter and artboard assignment
    configs: Machine configuration loading and validation
    gcode: Coordinate mapping, toolpath emission, program output
    utils: YAML / atomic file helpers, logging setup
"""

__version__ = "0.3.0"

__all__ = ["geometry", "document", "selection", "configs", "gcode", "utils"]
