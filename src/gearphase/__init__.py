"""gearphase: phase offsets and angular velocities for meshing gears."""

from .gear import gear_math
from .gear.gear_math import (
    calculate_child_phase,
    calculate_internal_mesh_phase,
    calculate_ring_phase_from_planet,
    normalize_angle,
    planetary_ring_speed,
    planetary_ring_teeth,
)

__version__ = "0.1.0"

__all__ = [
    "gear_math",
    "normalize_angle",
    "planetary_ring_teeth",
    "planetary_ring_speed",
    "calculate_ring_phase_from_planet",
    "calculate_child_phase",
    "calculate_internal_mesh_phase",
]
