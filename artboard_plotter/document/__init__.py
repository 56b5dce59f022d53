"""
Document module.

Read-only input model (paths, anchors, artboards), the document.v1 file
schema, and its loader.  Coordinates are in source units, +Y up.
"""

from artboard_plotter.document.loader import (
    DocumentError,
    NoInputDocumentError,
    load_document,
)
from artboard_plotter.document.model import (
    AnchorPoint,
    Document,
    DocumentSource,
    Path,
    Region,
)

__all__ = [
    "AnchorPoint",
    "Document",
    "DocumentError",
    "DocumentSource",
    "NoInputDocumentError",
    "Path",
    "Region",
    "load_document",
]
