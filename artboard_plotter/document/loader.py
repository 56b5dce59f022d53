"""Load document files into the in-memory ``Document`` model.

Usage::

    from artboard_plotter.document.loader import load_document
    doc = load_document("poster.yaml")
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import yaml
from pydantic import ValidationError

from artboard_plotter.document.model import Document
from artboard_plotter.document.schema import DocumentV1
from artboard_plotter.utils.fs import load_yaml

logger = logging.getLogger(__name__)


class NoInputDocumentError(Exception):
    """Raised when there is no document to export."""

    pass


class DocumentError(Exception):
    """Raised when a document file cannot be parsed or validated."""

    pass


def load_document(path: str | Path | None) -> Document:
    """Load and validate a ``document.v1`` YAML file.

    Parameters
    ----------
    path : str | Path | None
        Document file path.

    Returns
    -------
    Document
        Immutable snapshot of the document's paths and artboards.

    Raises
    ------
    NoInputDocumentError
        If *path* is ``None``, missing, or the file is empty.
    DocumentError
        If the YAML is malformed or fails schema validation.
    """
    if path is None:
        raise NoInputDocumentError("No document given")

    path = Path(path)
    if not path.is_file():
        raise NoInputDocumentError(f"Document not found: {path}")

    logger.info("Loading document from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise DocumentError(str(exc)) from exc

    if data is None:
        raise NoInputDocumentError(f"Empty document file: {path}")
    if not isinstance(data, dict):
        raise DocumentError(
            f"Document root must be a mapping, got {type(data).__name__}: {path}"
        )

    try:
        parsed = DocumentV1(**data)
    except ValidationError as exc:
        raise DocumentError(
            f"Document validation failed at {path}: {exc}"
        ) from exc

    document = parsed.to_document()
    if not document.name:
        document = replace(document, name=path.stem)

    logger.info(
        "Document '%s': %d path(s), %d artboard(s)",
        document.name,
        len(document.paths),
        len(document.regions),
    )
    return document
