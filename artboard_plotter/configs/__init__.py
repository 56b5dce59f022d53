"""Machine configuration loading and validation."""

from artboard_plotter.configs.loader import (
    BoilerplateConfig,
    ConfigError,
    FeedsConfig,
    FlattenConfig,
    MachineConfig,
    ParkConfig,
    PenConfig,
    WorkAreaConfig,
    ZStatesConfig,
    load_config,
)

__all__ = [
    "BoilerplateConfig",
    "ConfigError",
    "FeedsConfig",
    "FlattenConfig",
    "MachineConfig",
    "ParkConfig",
    "PenConfig",
    "WorkAreaConfig",
    "ZStatesConfig",
    "load_config",
]
