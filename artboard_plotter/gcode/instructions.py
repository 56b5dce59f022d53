"""Toolpath instructions -- one immutable record per output line.

Instructions are machine-space: coordinates are absolute millimetres and
feed rates are mm/min, ready to print.  Every line of the program is one
of:

    ``Rapid``    G0 move (pen lifted or lifting/lowering)
    ``Linear``   G1 move (drawing)
    ``Comment``  ``; text``
    ``RawLine``  boilerplate copied verbatim
    ``Blank``    empty separator line

Formatting
----------
Axis values use a fixed number of fractional digits (3 by default) so
that output is byte-for-byte deterministic.  Feed rates use one.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar


class GCodeError(Exception):
    """Raised when an instruction cannot be built or formatted."""

    pass


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Instruction(ABC):
    """Base class for all output lines."""

    pass


# ---------------------------------------------------------------------------
# Motion
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Move(Instruction):
    """Motion command with optional F/X/Y/Z fields.

    Parameters
    ----------
    x, y, z : float | None
        Target axis positions in machine mm.  ``None`` leaves the axis
        out of the line.  At least one axis is required.
    feed : float | None
        Feed rate in mm/min.  ``None`` keeps the machine's active feed.
    comment : str
        Trailing comment, without the ``;``.
    """

    code: ClassVar[str] = ""

    x: float | None = None
    y: float | None = None
    z: float | None = None
    feed: float | None = None
    comment: str = ""

    def __post_init__(self) -> None:
        if self.x is None and self.y is None and self.z is None:
            raise GCodeError(f"{type(self).__name__} requires at least one axis")
        if self.feed is not None and self.feed <= 0:
            raise GCodeError(f"feed must be > 0, got {self.feed}")


@dataclass(frozen=True, slots=True)
class Rapid(Move):
    """Non-drawing repositioning move (``G0``)."""

    code: ClassVar[str] = "G0"


@dataclass(frozen=True, slots=True)
class Linear(Move):
    """Drawing move (``G1``)."""

    code: ClassVar[str] = "G1"


# ---------------------------------------------------------------------------
# Text lines
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Comment(Instruction):
    """Comment line (``; text``)."""

    text: str


@dataclass(frozen=True, slots=True)
class RawLine(Instruction):
    """Boilerplate line emitted exactly as given."""

    text: str


@dataclass(frozen=True, slots=True)
class Blank(Instruction):
    """Empty separator line."""

    pass


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_number(value: float, precision: int = 3) -> str:
    """Fixed-point number; never prints a negative zero."""
    text = f"{value:.{precision}f}"
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def format_feed(feed_mm_min: float) -> str:
    """G-code ``F`` field for a feed rate in mm/min."""
    return f"F{feed_mm_min:.1f}"


def format_instruction(instr: Instruction, precision: int = 3) -> str:
    """Render one instruction as a G-code line (no newline).

    Raises
    ------
    GCodeError
        For an unknown instruction type.
    """
    if isinstance(instr, Move):
        parts = [instr.code]
        if instr.feed is not None:
            parts.append(format_feed(instr.feed))
        for axis, value in (("X", instr.x), ("Y", instr.y), ("Z", instr.z)):
            if value is not None:
                parts.append(f"{axis}{format_number(value, precision)}")
        line = " ".join(parts)
        if instr.comment:
            line = f"{line} ; {instr.comment}"
        return line
    if isinstance(instr, Comment):
        return f"; {instr.text}"
    if isinstance(instr, RawLine):
        return instr.text
    if isinstance(instr, Blank):
        return ""
    raise GCodeError(f"Unsupported instruction: {type(instr).__name__}")


def format_instructions(
    instructions: Iterable[Instruction],
    precision: int = 3,
) -> list[str]:
    """Render a sequence of instructions, one line each."""
    return [format_instruction(i, precision) for i in instructions]
