"""Tests for machine.yaml loading and validation."""

from __future__ import annotations

import copy
import logging
from pathlib import Path

import pytest
import yaml

from artboard_plotter.configs.loader import (
    ConfigError,
    MachineConfig,
    load_config,
)

DEFAULT_YAML = Path(__file__).parents[1] / "configs" / "machine.yaml"


@pytest.fixture()
def raw_config() -> dict:
    with open(DEFAULT_YAML, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _dump(tmp_path: Path, data: dict) -> Path:
    path = tmp_path / "machine.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _with(raw: dict, section: str, key: str, value) -> dict:
    data = copy.deepcopy(raw)
    data[section][key] = value
    return data


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_machine_constants(self, default_config: MachineConfig) -> None:
        cfg = default_config
        assert cfg.pen.offset_x_mm == 35.0
        assert cfg.pen.offset_y_mm == 23.0
        assert cfg.z_states.draw_mm == 0.0
        assert cfg.z_states.lift_mm == 2.0
        assert cfg.z_states.high_mm == 50.0
        assert cfg.feeds.draw_mm_min == 2000.0
        assert cfg.feeds.lift_mm_min == 6000.0
        assert cfg.points_to_mm == pytest.approx(0.352777777777)
        assert cfg.flatten.max_error_mm == 0.1
        assert cfg.flatten.max_depth == 16
        assert cfg.precision == 3

    def test_optional_sections_disabled(self, default_config: MachineConfig) -> None:
        assert default_config.marking_filter is None
        assert default_config.work_area is None

    def test_park_position(self, default_config: MachineConfig) -> None:
        park = default_config.park
        assert (park.x_mm, park.y_mm, park.z_mm) == (0.0, 220.0, 20.0)

    def test_max_error_in_document_units(self, default_config: MachineConfig) -> None:
        # 0.1 mm is about 0.2835 points
        assert default_config.max_error == pytest.approx(0.1 / 0.352777777777)

    def test_boilerplate_blocks(self, default_config: MachineConfig) -> None:
        gcode = default_config.gcode
        assert gcode.before[0] == ";FLAVOR:Marlin"
        assert any(line.startswith("G28") for line in gcode.before)
        assert any("M0" in line for line in gcode.region_before)
        assert gcode.after[-1].startswith("M84")

    def test_config_is_frozen(self, default_config: MachineConfig) -> None:
        with pytest.raises(AttributeError):
            default_config.precision = 4  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


class TestOverrides:
    def test_with_marking_filter(self, default_config: MachineConfig) -> None:
        cfg = default_config.with_marking_filter("plotter")
        assert cfg.marking_filter == "plotter"
        assert default_config.marking_filter is None

    def test_with_marking_filter_none(self, default_config: MachineConfig) -> None:
        cfg = default_config.with_marking_filter("x").with_marking_filter(None)
        assert cfg.marking_filter is None

    def test_empty_marking_filter_rejected(self, default_config: MachineConfig) -> None:
        with pytest.raises(ConfigError):
            default_config.with_marking_filter("")

    def test_with_max_error_mm(self, default_config: MachineConfig) -> None:
        cfg = default_config.with_max_error_mm(0.5)
        assert cfg.flatten.max_error_mm == 0.5
        assert cfg.flatten.max_depth == default_config.flatten.max_depth

    def test_non_positive_max_error_rejected(self, default_config: MachineConfig) -> None:
        with pytest.raises(ConfigError):
            default_config.with_max_error_mm(0.0)


# ---------------------------------------------------------------------------
# Loading from files
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_explicit_path(self, tmp_path: Path, raw_config: dict) -> None:
        data = _with(raw_config, "pen", "offset_x_mm", 10.0)
        cfg = load_config(_dump(tmp_path, data))
        assert cfg.pen.offset_x_mm == 10.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "machine.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigError, match="Empty"):
            load_config(path)

    def test_yaml_syntax_error(self, tmp_path: Path) -> None:
        path = tmp_path / "machine.yaml"
        path.write_text("pen: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_root_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "machine.yaml"
        path.write_text("- pen\n- feeds\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="root must be a mapping"):
            load_config(path)

    @pytest.mark.parametrize(
        "section,value",
        [
            ("filter", "plotter"),
            ("gcode", "G28"),
            ("park", 5),
            ("output", 3),
            ("pen", [35.0, 23.0]),
        ],
    )
    def test_section_must_be_mapping(
        self, tmp_path: Path, raw_config: dict, section, value
    ) -> None:
        data = copy.deepcopy(raw_config)
        data[section] = value
        with pytest.raises(ConfigError, match=f"'{section}' must be a mapping"):
            load_config(_dump(tmp_path, data))

    def test_missing_key(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        del data["feeds"]
        with pytest.raises(ConfigError, match="Missing"):
            load_config(_dump(tmp_path, data))

    def test_non_numeric_value(self, tmp_path: Path, raw_config: dict) -> None:
        data = _with(raw_config, "feeds", "draw_mm_min", "fast")
        with pytest.raises(ConfigError, match="Invalid"):
            load_config(_dump(tmp_path, data))

    def test_optional_sections_may_be_absent(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        for key in ("filter", "output", "work_area_mm", "park", "gcode"):
            data.pop(key)
        cfg = load_config(_dump(tmp_path, data))
        assert cfg.marking_filter is None
        assert cfg.precision == 3
        assert cfg.work_area is None
        assert cfg.park.z_mm == cfg.z_states.high_mm
        assert cfg.gcode.before == ()

    def test_marking_from_file(self, tmp_path: Path, raw_config: dict) -> None:
        data = _with(raw_config, "filter", "marking", "Plotter")
        assert load_config(_dump(tmp_path, data)).marking_filter == "Plotter"

    def test_empty_marking_disables_filter(self, tmp_path: Path, raw_config: dict) -> None:
        data = _with(raw_config, "filter", "marking", "")
        assert load_config(_dump(tmp_path, data)).marking_filter is None

    def test_non_string_marking_rejected(self, tmp_path: Path, raw_config: dict) -> None:
        data = _with(raw_config, "filter", "marking", 7)
        with pytest.raises(ConfigError, match="filter.marking"):
            load_config(_dump(tmp_path, data))

    def test_null_boilerplate_line_is_blank(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        data["gcode"]["after"] = ["M77", None]
        cfg = load_config(_dump(tmp_path, data))
        assert cfg.gcode.after == ("M77", "")

    def test_boilerplate_block_must_be_list(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        data["gcode"]["before"] = "G28"
        with pytest.raises(ConfigError, match="gcode.before"):
            load_config(_dump(tmp_path, data))

    def test_work_area_parsed(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        data["work_area_mm"] = {"x": 220.0, "y": 220.0}
        cfg = load_config(_dump(tmp_path, data))
        assert (cfg.work_area.x, cfg.work_area.y) == (220.0, 220.0)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize(
        "section,key,value,match",
        [
            ("feeds", "draw_mm_min", 0, "draw_mm_min"),
            ("feeds", "lift_mm_min", -1, "lift_mm_min"),
            ("units", "points_to_mm", 0, "points_to_mm"),
            ("flatten", "max_error_mm", 0, "max_error_mm"),
            ("flatten", "max_depth", -1, "max_depth"),
            ("z_states", "lift_mm", -1.0, "lift_mm"),
            ("output", "precision", 7, "precision"),
        ],
    )
    def test_invalid_values(
        self, tmp_path: Path, raw_config: dict, section, key, value, match
    ) -> None:
        data = _with(raw_config, section, key, value)
        with pytest.raises(ConfigError, match=match):
            load_config(_dump(tmp_path, data))

    def test_non_positive_work_area(self, tmp_path: Path, raw_config: dict) -> None:
        data = copy.deepcopy(raw_config)
        data["work_area_mm"] = {"x": 0.0, "y": 220.0}
        with pytest.raises(ConfigError, match="work_area_mm"):
            load_config(_dump(tmp_path, data))

    def test_high_below_lift_warns(self, tmp_path: Path, raw_config: dict, caplog) -> None:
        data = _with(raw_config, "z_states", "high_mm", 1.0)
        with caplog.at_level(logging.WARNING, logger="artboard_plotter.configs.loader"):
            cfg = load_config(_dump(tmp_path, data))
        assert cfg.z_states.high_mm == 1.0
        assert "below lift_mm" in caplog.text

    def test_pen_offset_outside_work_area_warns(
        self, tmp_path: Path, raw_config: dict, caplog
    ) -> None:
        data = copy.deepcopy(raw_config)
        data["work_area_mm"] = {"x": 20.0, "y": 20.0}
        with caplog.at_level(logging.WARNING, logger="artboard_plotter.configs.loader"):
            load_config(_dump(tmp_path, data))
        assert "outside the work area" in caplog.text
