"""Program assembly and atomic file output.

The emitted instruction list is the program body.  The complete file is::

    <gcode.before>
    <body>
    <gcode.after>

joined with ``\\n`` and terminated by a newline.  Files are written with
``utils.fs.atomic_write_text`` so a failed export never leaves a partial
program at the target path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from artboard_plotter.configs.loader import MachineConfig
from artboard_plotter.gcode.boilerplate import render_block
from artboard_plotter.gcode.instructions import Instruction, format_instructions
from artboard_plotter.utils.fs import OutputWriteError, atomic_write_text

logger = logging.getLogger(__name__)

__all__ = ["OutputWriteError", "render_program", "write_program"]


def render_program(
    instructions: Iterable[Instruction],
    config: MachineConfig,
) -> str:
    """Wrap the program body with the global boilerplate and format it.

    Parameters
    ----------
    instructions : Iterable[Instruction]
        Program body from ``ToolpathEmitter.emit``.
    config : MachineConfig
        Supplies the boilerplate blocks and numeric precision.

    Returns
    -------
    str
        Complete G-code text ending with a newline.
    """
    body = [
        *render_block(config.gcode.before, config),
        *instructions,
        *render_block(config.gcode.after, config),
    ]
    lines = format_instructions(body, config.precision)
    return "\n".join(lines) + "\n"


def write_program(text: str, path: str | Path) -> Path:
    """Write G-code text to *path* atomically.

    Raises
    ------
    OutputWriteError
        If the file could not be written.  Nothing is left at *path*
        unless a previous file already existed there.
    """
    path = Path(path)
    atomic_write_text(path, text)
    logger.info("Wrote %d line(s) to %s", text.count("\n"), path)
    return path
