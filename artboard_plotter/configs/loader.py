"""Configuration loader for the G-code exporter.

Loads and validates ``machine.yaml`` into typed, frozen dataclasses.
All machine values (pen offset, Z states, feed rates, tolerances,
boilerplate blocks) come from the config -- nothing is hardcoded in the
pipeline.

Feed rates are stored in **mm/min**, the unit of the G-code ``F``
parameter.  Linear dimensions are in **mm**, except
``MachineConfig.max_error`` which is derived in document units.

Usage::

    from artboard_plotter.configs.loader import load_config
    cfg = load_config()                       # default path
    cfg = load_config("/custom/machine.yaml") # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from artboard_plotter.utils.fs import load_yaml

logger = logging.getLogger(__name__)

MAX_PRECISION = 6


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PenConfig:
    """Physical offset of the pen tip from the machine origin (mm)."""

    offset_x_mm: float
    offset_y_mm: float


@dataclass(frozen=True)
class ZStatesConfig:
    """Pen heights in mm."""

    draw_mm: float
    lift_mm: float
    high_mm: float


@dataclass(frozen=True)
class FeedsConfig:
    """Feed rates in mm/min."""

    draw_mm_min: float
    lift_mm_min: float


@dataclass(frozen=True)
class FlattenConfig:
    """Bézier flattening tolerance.

    ``max_error_mm`` is the allowed deviation on paper; the flattener
    works in document units (see ``MachineConfig.max_error``).
    """

    max_error_mm: float
    max_depth: int


@dataclass(frozen=True)
class WorkAreaConfig:
    """Reachable XY area in mm, origin at (0, 0)."""

    x: float
    y: float


@dataclass(frozen=True)
class ParkConfig:
    """Position used to present the result and load paper (mm)."""

    x_mm: float
    y_mm: float
    z_mm: float


@dataclass(frozen=True)
class BoilerplateConfig:
    """Static G-code blocks.

    ``before`` / ``after`` bracket the whole program; ``region_before`` /
    ``region_after`` bracket each artboard.  Lines are ``string.Template``
    strings (``$lift_feed`` etc.).
    """

    before: tuple[str, ...] = ()
    region_before: tuple[str, ...] = ()
    region_after: tuple[str, ...] = ()
    after: tuple[str, ...] = ()


@dataclass(frozen=True)
class MachineConfig:
    """Complete exporter configuration loaded from ``machine.yaml``."""

    pen: PenConfig
    z_states: ZStatesConfig
    feeds: FeedsConfig
    points_to_mm: float
    flatten: FlattenConfig
    park: ParkConfig
    gcode: BoilerplateConfig
    marking_filter: str | None = None
    precision: int = 3
    work_area: WorkAreaConfig | None = None

    # -- Derived values ------------------------------------------------------

    @property
    def unit_scale(self) -> float:
        """Document units -> mm."""
        return self.points_to_mm

    @property
    def max_error(self) -> float:
        """Flattening tolerance in document units."""
        return self.flatten.max_error_mm / self.points_to_mm

    @property
    def max_subdivision_depth(self) -> int:
        return self.flatten.max_depth

    # -- Overrides -----------------------------------------------------------

    def with_marking_filter(self, marking: str | None) -> MachineConfig:
        """Copy with a different marking filter (``None`` disables it)."""
        if marking is not None and not marking:
            raise ConfigError("Marking filter must be non-empty or None")
        return replace(self, marking_filter=marking)

    def with_max_error_mm(self, max_error_mm: float) -> MachineConfig:
        """Copy with a different flattening tolerance."""
        if max_error_mm <= 0:
            raise ConfigError(f"max_error_mm must be > 0, got {max_error_mm}")
        return replace(
            self, flatten=replace(self.flatten, max_error_mm=max_error_mm)
        )


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], key: str, required: bool = True) -> dict[str, Any]:
    """Return the mapping under *key*.

    Optional sections that are absent or null come back empty.

    Raises
    ------
    ConfigError
        If the section is not a mapping.
    KeyError
        If a required section is missing.
    """
    if key not in data and required:
        raise KeyError(key)
    section = data.get(key)
    if section is None and not required:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{key}' must be a mapping, got {type(section).__name__}"
        )
    return section


def _parse_lines(section: str, raw: Any) -> tuple[str, ...]:
    """Parse one boilerplate block (list of strings, may be empty)."""
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError(f"gcode.{section} must be a list, got {type(raw).__name__}")
    return tuple("" if line is None else str(line) for line in raw)


def _parse_boilerplate(data: dict[str, Any]) -> BoilerplateConfig:
    """Parse the optional ``gcode`` section."""
    return BoilerplateConfig(
        before=_parse_lines("before", data.get("before")),
        region_before=_parse_lines("region_before", data.get("region_before")),
        region_after=_parse_lines("region_after", data.get("region_after")),
        after=_parse_lines("after", data.get("after")),
    )


def _parse_marking(data: dict[str, Any]) -> str | None:
    """Parse ``filter.marking``; empty or null disables filtering."""
    marking = data.get("marking")
    if marking is None:
        return None
    if not isinstance(marking, str):
        raise ConfigError(
            f"filter.marking must be a string or null, got {marking!r}"
        )
    return marking or None


def _parse_work_area(data: dict[str, Any]) -> WorkAreaConfig | None:
    """Parse the optional ``work_area_mm`` section."""
    if not data:
        return None
    return WorkAreaConfig(x=float(data["x"]), y=float(data["y"]))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_config(cfg: MachineConfig) -> None:
    """Validate value ranges and cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid combination.
    """
    # -- Feeds ---------------------------------------------------------------
    if cfg.feeds.draw_mm_min <= 0:
        raise ConfigError(f"feeds.draw_mm_min must be > 0, got {cfg.feeds.draw_mm_min}")
    if cfg.feeds.lift_mm_min <= 0:
        raise ConfigError(f"feeds.lift_mm_min must be > 0, got {cfg.feeds.lift_mm_min}")

    # -- Units / tolerance ---------------------------------------------------
    if cfg.points_to_mm <= 0:
        raise ConfigError(f"units.points_to_mm must be > 0, got {cfg.points_to_mm}")
    if cfg.flatten.max_error_mm <= 0:
        raise ConfigError(
            f"flatten.max_error_mm must be > 0, got {cfg.flatten.max_error_mm}"
        )
    if cfg.flatten.max_depth < 0:
        raise ConfigError(
            f"flatten.max_depth must be >= 0, got {cfg.flatten.max_depth}"
        )

    # -- Z states ------------------------------------------------------------
    z = cfg.z_states
    if z.lift_mm < z.draw_mm:
        raise ConfigError(
            f"z_states.lift_mm ({z.lift_mm}) must be >= draw_mm ({z.draw_mm})"
        )
    if z.high_mm < z.lift_mm:
        logger.warning(
            "z_states.high_mm (%.1f) is below lift_mm (%.1f)",
            z.high_mm,
            z.lift_mm,
        )

    # -- Output --------------------------------------------------------------
    if not 0 <= cfg.precision <= MAX_PRECISION:
        raise ConfigError(
            f"output.precision must be in [0, {MAX_PRECISION}], got {cfg.precision}"
        )

    # -- Work area -----------------------------------------------------------
    if cfg.work_area is not None:
        if cfg.work_area.x <= 0 or cfg.work_area.y <= 0:
            raise ConfigError(
                f"work_area_mm must be positive, got "
                f"({cfg.work_area.x}, {cfg.work_area.y})"
            )
        if not (
            0 <= cfg.pen.offset_x_mm <= cfg.work_area.x
            and 0 <= cfg.pen.offset_y_mm <= cfg.work_area.y
        ):
            logger.warning(
                "Pen offset (%.1f, %.1f) lies outside the work area",
                cfg.pen.offset_x_mm,
                cfg.pen.offset_y_mm,
            )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> MachineConfig:
    """Load and validate machine configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``machine.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    MachineConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "machine.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(str(exc)) from exc

    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {path}"
        )

    try:
        pd = _section(data, "pen")
        pen = PenConfig(
            offset_x_mm=float(pd["offset_x_mm"]),
            offset_y_mm=float(pd["offset_y_mm"]),
        )

        zd = _section(data, "z_states")
        z_states = ZStatesConfig(
            draw_mm=float(zd["draw_mm"]),
            lift_mm=float(zd["lift_mm"]),
            high_mm=float(zd.get("high_mm", zd["lift_mm"])),
        )

        fd = _section(data, "feeds")
        feeds = FeedsConfig(
            draw_mm_min=float(fd["draw_mm_min"]),
            lift_mm_min=float(fd["lift_mm_min"]),
        )

        fl = _section(data, "flatten")
        flatten = FlattenConfig(
            max_error_mm=float(fl["max_error_mm"]),
            max_depth=int(fl.get("max_depth", 16)),
        )

        pk = _section(data, "park", required=False)
        park = ParkConfig(
            x_mm=float(pk.get("x_mm", 0.0)),
            y_mm=float(pk.get("y_mm", 0.0)),
            z_mm=float(pk.get("z_mm", z_states.high_mm)),
        )

        output = _section(data, "output", required=False)

        config = MachineConfig(
            pen=pen,
            z_states=z_states,
            feeds=feeds,
            points_to_mm=float(_section(data, "units")["points_to_mm"]),
            flatten=flatten,
            park=park,
            gcode=_parse_boilerplate(_section(data, "gcode", required=False)),
            marking_filter=_parse_marking(_section(data, "filter", required=False)),
            precision=int(output.get("precision", 3)),
            work_area=_parse_work_area(_section(data, "work_area_mm", required=False)),
        )

        _validate_config(config)
        logger.info("Configuration loaded successfully")
        return config

    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid configuration value: {exc}"
        ) from exc
