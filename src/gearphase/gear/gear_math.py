"""Pure phase and speed relations for meshing gears.

This module is the GearMath namespace: six closed-form functions that map
tooth counts and mesh angles to phase offsets and angular velocities.

Conventions:
    - Angles are radians; phases are returned normalized to [0, 2π).
    - Inputs may be Python scalars or numpy arrays (evaluated elementwise).
    - No validation is performed. A zero tooth count yields inf/NaN per
      IEEE-754 instead of raising, and NaN/inf inputs propagate.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from ..core.constants import TWO_PI

__all__ = [
    "normalize_angle",
    "planetary_ring_teeth",
    "planetary_ring_speed",
    "calculate_ring_phase_from_planet",
    "calculate_child_phase",
    "calculate_internal_mesh_phase",
]


def _f64(x: ArrayLike) -> np.ndarray:
    return np.asarray(x, dtype=np.float64)


def _finish(value: np.ndarray) -> float | np.ndarray:
    """Return a Python float for scalar results, the array otherwise."""
    if np.ndim(value) == 0:
        return float(value)
    return value


def normalize_angle(angle: ArrayLike) -> float | np.ndarray:
    """Map an angle to the equivalent value in [0, 2π).

    Uses a sign-following remainder and adds 2π once when it is negative.
    A tiny negative remainder whose shift rounds to exactly 2π maps to 0.

    Args:
        angle: Angle (radians), scalar or array.

    Returns:
        Normalized angle (radians).
    """
    with np.errstate(invalid="ignore"):
        a = np.fmod(_f64(angle), TWO_PI)
        a = np.where(a < 0.0, a + TWO_PI, a)
        a = np.where(a >= TWO_PI, 0.0, a)
    return _finish(a)


def planetary_ring_teeth(
    sun_teeth: int | float | np.ndarray,
    planet_teeth: int | float | np.ndarray,
) -> int | float | np.ndarray:
    """Ring tooth count for a valid planetary gearset.

    R = S + 2P
    """
    return sun_teeth + 2 * planet_teeth


def planetary_ring_speed(
    sun_omega: ArrayLike,
    carrier_omega: ArrayLike,
    sun_teeth: ArrayLike,
    ring_teeth: ArrayLike,
) -> float | np.ndarray:
    """Ring angular velocity from the planetary constraint.

    S·ωs + R·ωr = (S+R)·ωc  →  ωr = ((S+R)·ωc - S·ωs) / R

    Args:
        sun_omega: Sun angular velocity (signed).
        carrier_omega: Carrier angular velocity (signed).
        sun_teeth: Sun gear teeth.
        ring_teeth: Ring gear teeth.

    Returns:
        Ring angular velocity (signed). ±inf or NaN when ring_teeth is 0.
    """
    s = _f64(sun_teeth)
    r = _f64(ring_teeth)
    with np.errstate(divide="ignore", invalid="ignore"):
        omega = ((s + r) * _f64(carrier_omega) - s * _f64(sun_omega)) / r
    return _finish(omega)


def calculate_ring_phase_from_planet(
    planet_phase: ArrayLike,
    mesh_angle: ArrayLike,
    planet_teeth: ArrayLike,
    ring_teeth: ArrayLike,
) -> float | np.ndarray:
    """Ring phase implied by a known planet phase (internal mesh, inverted).

    Ring and planet rotate in the same direction.

    Args:
        planet_phase: Planet gear phase offset (radians).
        mesh_angle: Angle from ring center to planet center (radians).
        planet_teeth: Planet gear teeth.
        ring_teeth: Ring gear teeth.

    Returns:
        Ring phase offset, normalized to [0, 2π).
    """
    p = _f64(planet_teeth)
    with np.errstate(divide="ignore", invalid="ignore"):
        half_tooth_planet = np.pi / p
        ratio = p / _f64(ring_teeth)
        offset = (_f64(planet_phase) - half_tooth_planet) * ratio + _f64(mesh_angle) * (1.0 - ratio)
    return normalize_angle(offset)


def calculate_child_phase(
    parent_phase: ArrayLike,
    mesh_angle: ArrayLike,
    parent_teeth: ArrayLike,
    child_teeth: ArrayLike,
) -> float | np.ndarray:
    """Phase offset for a child gear in external mesh with its parent.

    Args:
        parent_phase: Parent gear phase offset (radians).
        mesh_angle: Angle from parent center to child center (radians).
        parent_teeth: Number of teeth on the parent gear.
        child_teeth: Number of teeth on the child gear.

    Returns:
        Child phase offset, normalized to [0, 2π).
    """
    c = _f64(child_teeth)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = _f64(parent_teeth) / c
        half_tooth = np.pi / c
        # Parent tooth meets child gap at the contact point; -π is the external flip.
        offset = half_tooth - np.pi - _f64(mesh_angle) * (1.0 + ratio) - _f64(parent_phase) * ratio
    return normalize_angle(offset)


def calculate_internal_mesh_phase(
    parent_phase: ArrayLike,
    mesh_angle: ArrayLike,
    parent_teeth: ArrayLike,
    child_teeth: ArrayLike,
) -> float | np.ndarray:
    """Phase offset for a gear meshing inside a ring-type parent.

    Both gears rotate in the same direction for internal mesh.

    Args:
        parent_phase: Parent (ring) gear phase offset (radians).
        mesh_angle: Angle from ring center to child center (radians).
        parent_teeth: Number of teeth on the ring.
        child_teeth: Number of teeth on the child gear.

    Returns:
        Child phase offset, normalized to [0, 2π).
    """
    c = _f64(child_teeth)
    with np.errstate(divide="ignore", invalid="ignore"):
        ratio = _f64(parent_teeth) / c
        half_tooth = np.pi / c
        # Ring gap meets gear tooth at the contact point.
        offset = -half_tooth + _f64(mesh_angle) * (ratio - 1.0) + _f64(parent_phase) * ratio
    return normalize_angle(offset)
