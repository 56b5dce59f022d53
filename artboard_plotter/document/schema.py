"""YAML schema for document files (document.v1).

A document file is the on-disk stand-in for the host document: it lists
artboards and path items exactly as a vector editor exposes them.

Example::

    schema: document.v1
    name: poster
    active_artboard: 0
    artboards:
      - name: Front
        rect: [0, 842, 595, 0]        # left, top, right, bottom
    paths:
      - name: outline
        closed: true
        marking: Plotter-Red
        points:
          - anchor: [100, 700]
            left: [80, 700]           # defaults to anchor
            right: [120, 700]         # defaults to anchor
        reference: [100, 700]         # defaults to first anchor

Units are source units (points), +Y up.  Handles are absolute.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from artboard_plotter.document.model import AnchorPoint, Document, Path, Region
from artboard_plotter.geometry.primitives import Point2D


class AnchorPointV1(BaseModel):
    """Path vertex with optional handles (absolute coordinates)."""
    anchor: Tuple[float, float] = Field(..., description="Vertex (x, y)")
    left: Optional[Tuple[float, float]] = Field(None, description="Incoming handle (x, y)")
    right: Optional[Tuple[float, float]] = Field(None, description="Outgoing handle (x, y)")

    def to_model(self) -> AnchorPoint:
        anchor = Point2D.of(self.anchor)
        return AnchorPoint(
            anchor=anchor,
            left_handle=Point2D.of(self.left) if self.left is not None else anchor,
            right_handle=Point2D.of(self.right) if self.right is not None else anchor,
        )


class PathV1(BaseModel):
    """Single path item."""
    name: str = Field("", description="Label for log messages")
    closed: bool = Field(False, description="Close the loop back to the first anchor")
    marking: Any = Field(None, description="Marking attribute matched by the filter")
    reference: Optional[Tuple[float, float]] = Field(
        None, description="Artboard assignment point; defaults to first anchor"
    )
    points: List[AnchorPointV1] = Field(default_factory=list, description="Anchors in order")

    def to_model(self) -> Path:
        return Path(
            points=tuple(p.to_model() for p in self.points),
            closed=self.closed,
            marking_attribute=self.marking,
            reference_position=(
                Point2D.of(self.reference) if self.reference is not None else None
            ),
            name=self.name,
        )


class ArtboardV1(BaseModel):
    """Artboard rectangle, ``[left, top, right, bottom]`` with top > bottom."""
    name: str = Field(..., description="Artboard name")
    rect: Tuple[float, float, float, float] = Field(..., description="left, top, right, bottom")

    @field_validator('rect')
    @classmethod
    def validate_rect(cls, v: Tuple[float, float, float, float]) -> Tuple[float, float, float, float]:
        left, top, right, bottom = v
        if right < left:
            raise ValueError(f"rect right ({right}) must be >= left ({left})")
        if top < bottom:
            raise ValueError(f"rect top ({top}) must be >= bottom ({bottom})")
        return v

    def to_model(self) -> Region:
        left, top, right, bottom = self.rect
        return Region(name=self.name, left=left, top=top, right=right, bottom=bottom)


class DocumentV1(BaseModel):
    """Document file schema v1."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("document.v1", alias="schema", description="Schema version")
    name: str = Field("", description="Document label")
    active_artboard: int = Field(0, ge=0, description="Fallback artboard index")
    artboards: List[ArtboardV1] = Field(..., min_length=1, description="Artboards in order")
    paths: List[PathV1] = Field(default_factory=list, description="Path items in order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "document.v1":
            raise ValueError(f"Expected schema 'document.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_active_artboard(self) -> 'DocumentV1':
        if self.active_artboard >= len(self.artboards):
            raise ValueError(
                f"active_artboard {self.active_artboard} out of range for "
                f"{len(self.artboards)} artboard(s)"
            )
        return self

    def to_document(self) -> Document:
        return Document(
            paths=tuple(p.to_model() for p in self.paths),
            regions=tuple(a.to_model() for a in self.artboards),
            active_index=self.active_artboard,
            name=self.name,
        )
