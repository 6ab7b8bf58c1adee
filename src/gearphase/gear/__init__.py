"""Gear module: phase/speed relations and the solvers built on them."""

from .gear_math import (
    calculate_child_phase,
    calculate_internal_mesh_phase,
    calculate_ring_phase_from_planet,
    normalize_angle,
    planetary_ring_speed,
    planetary_ring_teeth,
)
from .planetary import PlanetaryGearset, PlanetaryState
from .train import Gear, GearTrain, Mesh, TrainState

__all__ = [
    "normalize_angle",
    "planetary_ring_teeth",
    "planetary_ring_speed",
    "calculate_ring_phase_from_planet",
    "calculate_child_phase",
    "calculate_internal_mesh_phase",
    "PlanetaryGearset",
    "PlanetaryState",
    "Gear",
    "GearTrain",
    "Mesh",
    "TrainState",
]
