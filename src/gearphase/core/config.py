"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..gear.planetary import PlanetaryGearset


class GearsetConfig(BaseModel):
    """Planetary gearset tooth counts."""

    sun_teeth: int = Field(default=30, ge=1)
    planet_teeth: int = Field(default=20, ge=1)
    n_planets: int = Field(default=3, ge=1, le=64)
    ring_teeth: int | None = Field(default=None, ge=1)


class OperatingConfig(BaseModel):
    """Operating point: phases (rad) and speeds (rad per unit time)."""

    sun_phase: float = 0.0
    carrier_angle: float = 0.0
    sun_omega: float = 0.0
    carrier_omega: float = 0.0


class GearphaseConfig(BaseModel):
    """Root configuration object."""

    gearset: GearsetConfig = Field(default_factory=GearsetConfig)
    operating: OperatingConfig = Field(default_factory=OperatingConfig)
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    def build_gearset(self) -> PlanetaryGearset:
        """Construct the planetary gearset described by this config."""
        from ..gear.planetary import PlanetaryGearset

        g = self.gearset
        return PlanetaryGearset(
            sun_teeth=g.sun_teeth,
            planet_teeth=g.planet_teeth,
            n_planets=g.n_planets,
            ring_teeth=g.ring_teeth,
        )


def load_config(path: str | Path) -> GearphaseConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed GearphaseConfig object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return GearphaseConfig.model_validate(data or {})


def save_config(config: GearphaseConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False)


def default_config() -> GearphaseConfig:
    """Return default configuration."""
    return GearphaseConfig()


def merge_config(base: GearphaseConfig, overrides: dict[str, Any]) -> GearphaseConfig:
    """Merge overrides into base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.model_dump()

    def deep_merge(d1: dict, d2: dict) -> dict:
        result = d1.copy()
        for k, v in d2.items():
            if k in result and isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
        return result

    merged = deep_merge(base_dict, overrides)
    return GearphaseConfig.model_validate(merged)
