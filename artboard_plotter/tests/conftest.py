"""Shared fixtures for the exporter tests."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from artboard_plotter.configs.loader import (
    BoilerplateConfig,
    MachineConfig,
    load_config,
)
from artboard_plotter.document.model import AnchorPoint, Path as DocPath, Region

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture()
def default_config() -> MachineConfig:
    """The machine.yaml shipped with the package."""
    return load_config()


@pytest.fixture()
def unit_config(default_config: MachineConfig) -> MachineConfig:
    """1 document unit == 1 mm, pen offset (35, 23), marked region blocks."""
    return replace(
        default_config,
        points_to_mm=1.0,
        marking_filter=None,
        work_area=None,
        gcode=BoilerplateConfig(
            before=("G21", "G90"),
            region_before=("; BEGIN $region_name",),
            region_after=("; END $region_name",),
            after=("M84",),
        ),
    )


@pytest.fixture()
def square_region() -> Region:
    return Region(name="Square", left=0.0, top=100.0, right=100.0, bottom=0.0)


@pytest.fixture()
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture()
def make_line():
    """Factory for open two-anchor paths with retracted handles."""

    def _make(
        start: tuple[float, float],
        end: tuple[float, float],
        **kwargs,
    ) -> DocPath:
        return DocPath(
            points=(AnchorPoint.corner(*start), AnchorPoint.corner(*end)),
            **kwargs,
        )

    return _make
