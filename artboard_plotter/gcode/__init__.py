"""
G-code generation module.

Maps flattened document geometry into machine coordinates and emits the
ordered instruction stream with pen lift/lower and feed-rate handling.
"""

from artboard_plotter.gcode.emitter import EmitStats, ToolpathEmitter
from artboard_plotter.gcode.instructions import (
    Blank,
    Comment,
    GCodeError,
    Instruction,
    Linear,
    Move,
    Rapid,
    RawLine,
    format_instruction,
)
from artboard_plotter.gcode.mapper import map_to_machine
from artboard_plotter.gcode.program import (
    OutputWriteError,
    render_program,
    write_program,
)

__all__ = [
    "Blank",
    "Comment",
    "EmitStats",
    "GCodeError",
    "Instruction",
    "Linear",
    "Move",
    "OutputWriteError",
    "Rapid",
    "RawLine",
    "ToolpathEmitter",
    "format_instruction",
    "map_to_machine",
    "render_program",
    "write_program",
]
