"""Core module: constants and configuration."""

from .config import (
    GearphaseConfig,
    GearsetConfig,
    OperatingConfig,
    default_config,
    load_config,
    merge_config,
    save_config,
)
from .constants import TWO_PI

__all__ = [
    "GearphaseConfig",
    "GearsetConfig",
    "OperatingConfig",
    "default_config",
    "load_config",
    "merge_config",
    "save_config",
    "TWO_PI",
]
