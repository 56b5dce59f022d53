"""Static G-code blocks from the machine config.

Lines are ``string.Template`` strings.  Substitution is ``safe``: unknown
``$names`` and lines without placeholders come through unchanged.

Available names::

    lift_feed  draw_feed                     (mm/min)
    lift_z     draw_z     high_z             (mm)
    pen_x      pen_y                         (mm)
    park_x     park_y     park_z             (mm)
    region_name  region_index                (region blocks only)
"""

from __future__ import annotations

from collections.abc import Iterable
from string import Template

from artboard_plotter.configs.loader import MachineConfig
from artboard_plotter.gcode.instructions import RawLine, format_number


def template_values(config: MachineConfig) -> dict[str, str]:
    """Placeholder values for *config*, already formatted."""
    p = config.precision
    return {
        "lift_feed": format_number(config.feeds.lift_mm_min, 1),
        "draw_feed": format_number(config.feeds.draw_mm_min, 1),
        "lift_z": format_number(config.z_states.lift_mm, p),
        "draw_z": format_number(config.z_states.draw_mm, p),
        "high_z": format_number(config.z_states.high_mm, p),
        "pen_x": format_number(config.pen.offset_x_mm, p),
        "pen_y": format_number(config.pen.offset_y_mm, p),
        "park_x": format_number(config.park.x_mm, p),
        "park_y": format_number(config.park.y_mm, p),
        "park_z": format_number(config.park.z_mm, p),
    }


def render_block(
    lines: Iterable[str],
    config: MachineConfig,
    **extra: object,
) -> list[RawLine]:
    """Substitute placeholders into a boilerplate block.

    Parameters
    ----------
    lines : Iterable[str]
        Template lines from ``config.gcode``.
    config : MachineConfig
        Source of the standard placeholder values.
    **extra
        Additional placeholders (``region_name``, ``region_index``).

    Returns
    -------
    list[RawLine]
        One verbatim instruction per line.
    """
    values = template_values(config)
    values.update({k: str(v) for k, v in extra.items()})
    return [RawLine(Template(line).safe_substitute(values)) for line in lines]
