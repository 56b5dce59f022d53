#!/usr/bin/env python3
"""
Export G-code Script.

Convert a document file (document.v1 YAML) into a pen-plotter G-code
program, one sheet per artboard.

Usage:
    python -m artboard_plotter.scripts.export_gcode poster.yaml
    python -m artboard_plotter.scripts.export_gcode poster.yaml -o out/poster.gcode
    python -m artboard_plotter.scripts.export_gcode poster.yaml --filter plotter
    python -m artboard_plotter.scripts.export_gcode poster.yaml --dry-run

Exit codes:
    0: G-code exported (or printed with --dry-run)
    1: No document, invalid document/config, or write failure
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from artboard_plotter.configs.loader import ConfigError, load_config
from artboard_plotter.document.loader import (
    DocumentError,
    NoInputDocumentError,
    load_document,
)
from artboard_plotter.gcode.program import OutputWriteError, render_program, write_program
from artboard_plotter.pipeline import convert_document
from artboard_plotter.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export document paths as pen-plotter G-code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "document",
        type=str,
        help="Document file (document.v1 YAML)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="G-code output path (default: document path with .gcode suffix)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Machine configuration file path",
    )

    # Filter overrides
    marking = parser.add_mutually_exclusive_group()
    marking.add_argument(
        "--filter",
        "-f",
        type=str,
        help="Only plot paths whose marking contains this text (case-insensitive)",
    )
    marking.add_argument(
        "--no-filter",
        action="store_true",
        help="Plot all paths, ignoring the configured marking filter",
    )

    parser.add_argument(
        "--max-error-mm",
        type=float,
        help="Curve flattening tolerance override (mm)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print G-code to stdout instead of writing a file",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write the log file as JSON lines",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        json=args.json_logs,
        context={"app": "export"},
    )

    try:
        config = load_config(args.config)
        if args.no_filter:
            config = config.with_marking_filter(None)
        elif args.filter is not None:
            config = config.with_marking_filter(args.filter)
        if args.max_error_mm is not None:
            config = config.with_max_error_mm(args.max_error_mm)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Error loading config: %s", e)
        return 1

    try:
        document = load_document(args.document)
    except NoInputDocumentError as e:
        logger.error("No document to export: %s", e)
        return 1
    except DocumentError as e:
        logger.error("Invalid document: %s", e)
        return 1

    instructions = convert_document(document, config)
    program = render_program(instructions, config)

    if args.dry_run:
        sys.stdout.write(program)
        return 0

    output = Path(args.output) if args.output else Path(args.document).with_suffix(".gcode")
    try:
        write_program(program, output)
    except OutputWriteError as e:
        logger.error("G-code export failed: %s", e)
        return 1

    logger.info("G-code exported to %s", output.resolve())
    return 0


if __name__ == "__main__":
    sys.exit(main())
