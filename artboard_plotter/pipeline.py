"""Document -> toolpath pipeline.

    document --filter_paths--> paths --group_by_region--> per-artboard paths
             --ToolpathEmitter--> instructions --render_program--> G-code text

Geometry-stage conditions (empty paths, paths outside every artboard,
degenerate curves) are handled locally and never abort a run.  Only a
missing document and a failed write surface as errors.
"""

from __future__ import annotations

import logging
from pathlib import Path

from artboard_plotter.configs.loader import MachineConfig
from artboard_plotter.document.loader import NoInputDocumentError
from artboard_plotter.document.model import DocumentSource
from artboard_plotter.gcode.emitter import ToolpathEmitter
from artboard_plotter.gcode.instructions import Instruction
from artboard_plotter.gcode.program import render_program, write_program
from artboard_plotter.selection.filters import filter_paths
from artboard_plotter.selection.regions import group_by_region

logger = logging.getLogger(__name__)


def convert_document(
    document: DocumentSource | None,
    config: MachineConfig,
) -> list[Instruction]:
    """Convert a document snapshot into the program body.

    Parameters
    ----------
    document : DocumentSource | None
        Paths and artboards to plot.
    config : MachineConfig
        Machine settings, including the optional marking filter.

    Returns
    -------
    list[Instruction]
        Instructions for every artboard in document order.

    Raises
    ------
    NoInputDocumentError
        If *document* is ``None``.
    """
    if document is None:
        raise NoInputDocumentError("No document open")

    regions = list(document.regions)
    paths = filter_paths(document.paths, config.marking_filter)
    groups = group_by_region(paths, regions, document.active_region)

    return ToolpathEmitter(config).emit(regions, groups)


def export_document(
    document: DocumentSource | None,
    config: MachineConfig,
    output_path: str | Path,
) -> Path:
    """Convert *document* and write the complete program to *output_path*.

    Raises
    ------
    NoInputDocumentError
        If *document* is ``None``; nothing is written.
    OutputWriteError
        If the file could not be written.
    """
    instructions = convert_document(document, config)
    program = render_program(instructions, config)
    return write_program(program, output_path)
