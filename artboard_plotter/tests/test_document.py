"""Tests for the document model, schema, and file loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from artboard_plotter.document.loader import (
    DocumentError,
    NoInputDocumentError,
    load_document,
)
from artboard_plotter.document.model import AnchorPoint, Document, Path as DocPath, Region
from artboard_plotter.document.schema import AnchorPointV1, ArtboardV1, DocumentV1
from artboard_plotter.geometry.primitives import Point2D


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _minimal_doc(**overrides) -> dict:
    data = {
        "schema": "document.v1",
        "artboards": [{"name": "A", "rect": [0, 100, 100, 0]}],
        "paths": [{"points": [{"anchor": [1, 2]}, {"anchor": [3, 4]}]}],
    }
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class TestModel:
    def test_reference_defaults_to_first_anchor(self) -> None:
        path = DocPath(points=(AnchorPoint.corner(5, 6), AnchorPoint.corner(7, 8)))
        assert path.reference_position == Point2D(5.0, 6.0)

    def test_explicit_reference_kept(self) -> None:
        path = DocPath(
            points=(AnchorPoint.corner(5, 6),),
            reference_position=Point2D(0.0, 0.0),
        )
        assert path.reference_position == Point2D(0.0, 0.0)

    def test_empty_path_has_no_reference(self) -> None:
        path = DocPath()
        assert path.is_empty
        assert path.reference_position is None

    def test_corner_retracts_handles(self) -> None:
        a = AnchorPoint.corner(1, 2)
        assert a.anchor == a.left_handle == a.right_handle == Point2D(1.0, 2.0)

    def test_region_contains_boundary(self) -> None:
        r = Region("R", left=0, top=10, right=10, bottom=0)
        assert r.contains(Point2D(0, 0))
        assert r.contains(Point2D(10, 10))
        assert r.contains(Point2D(5, 5))
        assert not r.contains(Point2D(10.001, 5))
        assert not r.contains(Point2D(5, -0.001))

    def test_region_rejects_inverted_x(self) -> None:
        with pytest.raises(ValueError, match="left"):
            Region("R", left=10, top=10, right=0, bottom=0)

    def test_region_rejects_inverted_y(self) -> None:
        with pytest.raises(ValueError, match="bottom"):
            Region("R", left=0, top=0, right=10, bottom=10)

    def test_document_requires_region(self) -> None:
        with pytest.raises(ValueError, match="at least one region"):
            Document(paths=(), regions=())

    def test_document_active_index_range(self) -> None:
        r = Region("R", 0, 1, 1, 0)
        with pytest.raises(ValueError, match="out of range"):
            Document(regions=(r,), active_index=1)

    def test_active_region(self) -> None:
        a = Region("A", 0, 1, 1, 0)
        b = Region("B", 2, 1, 3, 0)
        assert Document(regions=(a, b), active_index=1).active_region is b


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestSchema:
    def test_handles_default_to_anchor(self) -> None:
        a = AnchorPointV1(anchor=(1, 2)).to_model()
        assert a.left_handle == a.right_handle == a.anchor

    def test_explicit_handles(self) -> None:
        a = AnchorPointV1(anchor=(1, 2), left=(0, 2), right=(2, 2)).to_model()
        assert a.left_handle == Point2D(0, 2)
        assert a.right_handle == Point2D(2, 2)

    def test_artboard_rect_validation(self) -> None:
        with pytest.raises(ValidationError):
            ArtboardV1(name="bad", rect=(10, 0, 0, 10))

    def test_artboard_to_region(self) -> None:
        r = ArtboardV1(name="A", rect=(1, 20, 30, 4)).to_model()
        assert (r.left, r.top, r.right, r.bottom) == (1, 20, 30, 4)

    def test_wrong_schema_rejected(self) -> None:
        with pytest.raises(ValidationError, match="document.v1"):
            DocumentV1(**_minimal_doc(schema="document.v2"))

    def test_active_artboard_out_of_range(self) -> None:
        with pytest.raises(ValidationError, match="out of range"):
            DocumentV1(**_minimal_doc(active_artboard=3))

    def test_artboards_required(self) -> None:
        with pytest.raises(ValidationError):
            DocumentV1(**_minimal_doc(artboards=[]))

    def test_marking_keeps_non_string(self) -> None:
        data = _minimal_doc()
        data["paths"][0]["marking"] = 42
        doc = DocumentV1(**data).to_document()
        assert doc.paths[0].marking_attribute == 42


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestLoadDocument:
    def test_fixture_document(self, data_dir: Path) -> None:
        doc = load_document(data_dir / "two_artboards.yaml")
        assert doc.name == "two_artboards"
        assert [r.name for r in doc.regions] == ["Left", "Right"]
        assert doc.active_region.name == "Left"
        assert [p.name for p in doc.paths] == [
            "left-line", "right-arch", "ink-square", "empty", "stray",
        ]
        assert doc.paths[2].closed
        assert doc.paths[3].is_empty

    def test_name_defaults_to_stem(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "poster.yaml", _minimal_doc())
        assert load_document(path).name == "poster"

    def test_none_path(self) -> None:
        with pytest.raises(NoInputDocumentError):
            load_document(None)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(NoInputDocumentError, match="not found"):
            load_document(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(NoInputDocumentError, match="Empty"):
            load_document(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("artboards: [unclosed\n", encoding="utf-8")
        with pytest.raises(DocumentError):
            load_document(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "list.yaml", [1, 2, 3])
        with pytest.raises(DocumentError, match="mapping"):
            load_document(path)

    def test_validation_error_wrapped(self, tmp_path: Path) -> None:
        path = _write_yaml(tmp_path / "bad.yaml", _minimal_doc(artboards=[]))
        with pytest.raises(DocumentError, match="validation failed"):
            load_document(path)
