"""Document model -- the read-only input vocabulary of the exporter.

Paths and artboards are immutable, slotted dataclasses read once from a
document source at the start of a run.  Coordinates are in **source
units** (points for an Illustrator-style document) with +Y pointing up:
an artboard's ``top`` is its larger Y value.

Handles are absolute coordinates, not deltas from the anchor.  A corner
point with no curvature has both handles equal to its anchor.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from artboard_plotter.geometry.primitives import Point2D


# ---------------------------------------------------------------------------
# Geometry records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AnchorPoint:
    """Path vertex with its two Bézier handles.

    Parameters
    ----------
    anchor : Point2D
        Vertex position.
    left_handle : Point2D
        Incoming control point.
    right_handle : Point2D
        Outgoing control point.
    """

    anchor: Point2D
    left_handle: Point2D
    right_handle: Point2D

    @classmethod
    def corner(cls, x: float, y: float) -> AnchorPoint:
        """Anchor with both handles retracted onto the vertex."""
        p = Point2D(float(x), float(y))
        return cls(anchor=p, left_handle=p, right_handle=p)


@dataclass(frozen=True, slots=True)
class Path:
    """Ordered anchor sequence, optionally closed into a loop.

    Parameters
    ----------
    points : tuple[AnchorPoint, ...]
        Anchors in drawing order.  May be empty; empty paths are skipped
        downstream, never rejected.
    closed : bool
        Draw an extra segment from the last anchor back to the first.
    marking_attribute : object | None
        Tag used by the marking filter (a swatch or layer name, say).
        Only string values can match a filter.
    reference_position : Point2D | None
        Point used for artboard assignment.  Defaults to the first anchor.
    name : str
        Human-readable label for log messages.
    """

    points: tuple[AnchorPoint, ...] = ()
    closed: bool = False
    marking_attribute: object | None = None
    reference_position: Point2D | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.reference_position is None and self.points:
            object.__setattr__(
                self, "reference_position", self.points[0].anchor
            )

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True, slots=True)
class Region:
    """Axis-aligned artboard rectangle in source units.

    ``top`` is the larger Y and ``bottom`` the smaller one.

    Parameters
    ----------
    name : str
        Artboard name, used in region marker comments.
    left, top, right, bottom : float
        Rectangle edges.
    """

    name: str
    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.left > self.right:
            raise ValueError(
                f"Region '{self.name}': left ({self.left}) > right ({self.right})"
            )
        if self.bottom > self.top:
            raise ValueError(
                f"Region '{self.name}': bottom ({self.bottom}) > top ({self.top})"
            )

    def contains(self, point: Point2D) -> bool:
        """Boundary-inclusive containment test."""
        return (
            self.left <= point.x <= self.right
            and self.bottom <= point.y <= self.top
        )


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


class DocumentSource(Protocol):
    """Read interface the pipeline needs from a host document."""

    @property
    def paths(self) -> Sequence[Path]: ...

    @property
    def regions(self) -> Sequence[Region]: ...

    @property
    def active_region(self) -> Region: ...


@dataclass(frozen=True)
class Document:
    """In-memory document snapshot.

    Parameters
    ----------
    paths : tuple[Path, ...]
        All path items, in document order.
    regions : tuple[Region, ...]
        Artboards, in enumeration order.  At least one is required.
    active_index : int
        Index of the artboard used when no rectangle contains a path.
    name : str
        Source label (usually the file name).
    """

    paths: tuple[Path, ...] = field(default_factory=tuple)
    regions: tuple[Region, ...] = field(default_factory=tuple)
    active_index: int = 0
    name: str = ""

    def __post_init__(self) -> None:
        if not self.regions:
            raise ValueError("Document must define at least one region")
        if not 0 <= self.active_index < len(self.regions):
            raise ValueError(
                f"active_index {self.active_index} out of range for "
                f"{len(self.regions)} region(s)"
            )

    @property
    def active_region(self) -> Region:
        return self.regions[self.active_index]
