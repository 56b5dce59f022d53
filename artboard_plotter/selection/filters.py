"""Marking-attribute path filter.

Matching is a case-insensitive substring test, so a filter of
``"plotter"`` keeps ``"Plotter-Red"`` and ``"pen plotter"`` alike.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from artboard_plotter.document.model import Path

logger = logging.getLogger(__name__)


def matches_marking(path: Path, attribute_filter: str) -> bool:
    """True if the path's marking attribute contains *attribute_filter*.

    Missing or non-string attributes never match.
    """
    value = path.marking_attribute
    if not isinstance(value, str):
        return False
    return attribute_filter.lower() in value.lower()


def filter_paths(
    paths: Iterable[Path],
    attribute_filter: str | None,
) -> list[Path]:
    """Keep paths whose marking attribute matches *attribute_filter*.

    Parameters
    ----------
    paths : Iterable[Path]
        Input paths in document order.
    attribute_filter : str | None
        Substring to look for; ``None`` disables filtering.

    Returns
    -------
    list[Path]
        Order-preserving subsequence of *paths*.
    """
    paths = list(paths)
    if attribute_filter is None:
        return paths

    kept = [p for p in paths if matches_marking(p, attribute_filter)]
    logger.info(
        "Marking filter %r kept %d of %d path(s)",
        attribute_filter,
        len(kept),
        len(paths),
    )
    return kept
