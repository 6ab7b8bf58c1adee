"""Planetary gearset phase and speed solve.

Builds a consistent snapshot of a sun/planet/ring/carrier set from the
GearMath relations:
    - planet phases from the sun (external mesh) at each planet position
    - ring phase from the first planet (internal mesh, inverted)
    - ring and planet speeds from the carrier and sun speeds
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..core.constants import TWO_PI
from .gear_math import (
    calculate_child_phase,
    calculate_ring_phase_from_planet,
    normalize_angle,
    planetary_ring_speed,
    planetary_ring_teeth,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanetaryGearset:
    """Tooth counts and planet count of a simple planetary set.

    Attributes:
        sun_teeth: Sun gear teeth.
        planet_teeth: Planet gear teeth.
        n_planets: Number of evenly spaced planets.
        ring_teeth: Ring gear teeth. Derived from R = S + 2P when None.
    """

    sun_teeth: int
    planet_teeth: int
    n_planets: int = 3
    ring_teeth: int | None = None

    def __post_init__(self) -> None:
        if self.sun_teeth <= 0 or self.planet_teeth <= 0:
            raise ValueError(
                f"teeth must be positive, got sun={self.sun_teeth}, planet={self.planet_teeth}"
            )
        if self.n_planets < 1:
            raise ValueError(f"n_planets must be >= 1, got {self.n_planets}")
        if self.ring_teeth is None:
            object.__setattr__(
                self, "ring_teeth", planetary_ring_teeth(self.sun_teeth, self.planet_teeth)
            )
        elif self.ring_teeth <= 0:
            raise ValueError(f"ring_teeth must be positive, got {self.ring_teeth}")

    @property
    def ratio_sun_to_carrier(self) -> float:
        """Reduction sun → carrier with the ring held."""
        return 1.0 + self.ring_teeth / self.sun_teeth

    @property
    def assembly_ok(self) -> bool:
        """True when n evenly spaced planets can mesh with sun and ring at once."""
        return (self.sun_teeth + self.ring_teeth) % self.n_planets == 0

    def mesh_angles(self, carrier_angle: float = 0.0) -> np.ndarray:
        """Planet centre angles, measured from the sun centre, normalized."""
        angles = carrier_angle + TWO_PI * np.arange(self.n_planets) / self.n_planets
        return np.asarray(normalize_angle(angles), dtype=np.float64)

    def ring_speed(self, sun_omega: float, carrier_omega: float) -> float:
        return planetary_ring_speed(sun_omega, carrier_omega, self.sun_teeth, self.ring_teeth)

    def planet_speed(self, sun_omega: float, carrier_omega: float) -> float:
        """Absolute planet angular velocity.

        (ωs - ωc) / (ωp - ωc) = -P / S  →  ωp = ωc - (S/P)(ωs - ωc)
        """
        ratio = self.sun_teeth / self.planet_teeth
        return float(carrier_omega - ratio * (sun_omega - carrier_omega))

    def solve(
        self,
        sun_phase: float = 0.0,
        sun_omega: float = 0.0,
        carrier_omega: float = 0.0,
        carrier_angle: float = 0.0,
    ) -> PlanetaryState:
        """Solve phases and speeds for one carrier position.

        Args:
            sun_phase: Sun gear phase offset (radians).
            sun_omega: Sun angular velocity (signed).
            carrier_omega: Carrier angular velocity (signed).
            carrier_angle: Angle of the first planet centre (radians).

        Returns:
            PlanetaryState snapshot.
        """
        mesh = self.mesh_angles(carrier_angle)
        planet_phases = np.asarray(
            calculate_child_phase(sun_phase, mesh, self.sun_teeth, self.planet_teeth),
            dtype=np.float64,
        )
        ring_phase = calculate_ring_phase_from_planet(
            float(planet_phases[0]), float(mesh[0]), self.planet_teeth, self.ring_teeth
        )

        ok = self.assembly_ok
        if not ok:
            logger.warning(
                "Assembly condition failed: (S+R)=%d not divisible by n_planets=%d",
                self.sun_teeth + self.ring_teeth,
                self.n_planets,
            )
        logger.debug(
            "Solved planetary set S=%d P=%d R=%d",
            self.sun_teeth,
            self.planet_teeth,
            self.ring_teeth,
        )

        return PlanetaryState(
            gearset=self,
            sun_phase=normalize_angle(sun_phase),
            ring_phase=ring_phase,
            planet_phases=planet_phases,
            mesh_angles=mesh,
            sun_omega=float(sun_omega),
            carrier_omega=float(carrier_omega),
            ring_omega=self.ring_speed(sun_omega, carrier_omega),
            planet_omega=self.planet_speed(sun_omega, carrier_omega),
            assembly_ok=ok,
        )


@dataclass
class PlanetaryState:
    """Solved planetary snapshot."""

    gearset: PlanetaryGearset
    sun_phase: float
    ring_phase: float
    planet_phases: np.ndarray
    mesh_angles: np.ndarray
    sun_omega: float
    carrier_omega: float
    ring_omega: float
    planet_omega: float
    assembly_ok: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "teeth": {
                "sun": self.gearset.sun_teeth,
                "planet": self.gearset.planet_teeth,
                "ring": self.gearset.ring_teeth,
                "n_planets": self.gearset.n_planets,
            },
            "phases": {
                "sun": self.sun_phase,
                "ring": self.ring_phase,
                "planets": self.planet_phases.tolist(),
            },
            "mesh_angles": self.mesh_angles.tolist(),
            "omegas": {
                "sun": self.sun_omega,
                "carrier": self.carrier_omega,
                "ring": self.ring_omega,
                "planet": self.planet_omega,
            },
            "assembly_ok": self.assembly_ok,
        }
