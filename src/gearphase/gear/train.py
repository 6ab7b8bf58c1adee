"""Simple gear train phase and speed propagation.

A train is a set of named gears and parent → child meshes rooted at one
driving gear. Phases and speeds are propagated breadth-first from the root:

    external:  child_omega = -parent_omega * Np / Nc
    internal:  child_omega =  parent_omega * Np / Nc   (parent is a ring)
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from ..core.constants import MESH_EXTERNAL, MESH_INTERNAL, MESH_KINDS
from .gear_math import calculate_child_phase, calculate_internal_mesh_phase, normalize_angle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Gear:
    """Named gear with a tooth count."""

    name: str
    teeth: int

    def __post_init__(self) -> None:
        if self.teeth <= 0:
            raise ValueError(f"gear {self.name!r}: teeth must be positive, got {self.teeth}")


@dataclass(frozen=True)
class Mesh:
    """Mesh between a driving parent and a driven child.

    Attributes:
        parent: Parent gear name.
        child: Child gear name.
        mesh_angle: Angle from parent center to child center (radians).
        kind: "external" or "internal" (child inside a ring parent).
    """

    parent: str
    child: str
    mesh_angle: float
    kind: str = MESH_EXTERNAL

    def __post_init__(self) -> None:
        if self.kind not in MESH_KINDS:
            raise ValueError(f"mesh kind must be one of {MESH_KINDS}, got {self.kind!r}")


@dataclass
class TrainState:
    """Solved phases and speeds keyed by gear name."""

    phases: dict[str, float] = field(default_factory=dict)
    omegas: dict[str, float] = field(default_factory=dict)
    unreachable: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "phases": dict(self.phases),
            "omegas": dict(self.omegas),
            "unreachable": list(self.unreachable),
        }


class GearTrain:
    """Tree of meshes driven from a single root gear."""

    def __init__(self, gears: list[Gear], meshes: list[Mesh], root: str) -> None:
        self.gears: dict[str, Gear] = {}
        for g in gears:
            if g.name in self.gears:
                raise ValueError(f"duplicate gear name {g.name!r}")
            self.gears[g.name] = g

        if root not in self.gears:
            raise ValueError(f"unknown root gear {root!r}")

        driven: set[str] = set()
        for m in meshes:
            for name in (m.parent, m.child):
                if name not in self.gears:
                    raise ValueError(f"mesh references unknown gear {name!r}")
            if m.child in driven or m.child == root:
                raise ValueError(f"gear {m.child!r} is driven more than once")
            driven.add(m.child)

        self.meshes = list(meshes)
        self.root = root

    def _children(self) -> dict[str, list[Mesh]]:
        out: dict[str, list[Mesh]] = {name: [] for name in self.gears}
        for m in self.meshes:
            out[m.parent].append(m)
        return out

    def solve(self, root_phase: float = 0.0, root_omega: float = 0.0) -> TrainState:
        """Propagate phase and speed from the root through every mesh.

        Args:
            root_phase: Root gear phase offset (radians).
            root_omega: Root angular velocity (signed).

        Returns:
            TrainState with every gear reachable from the root.
        """
        state = TrainState()
        state.phases[self.root] = normalize_angle(root_phase)
        state.omegas[self.root] = float(root_omega)

        children = self._children()
        queue = deque([self.root])
        while queue:
            name = queue.popleft()
            parent = self.gears[name]
            for m in children[name]:
                child = self.gears[m.child]
                ratio = parent.teeth / child.teeth
                if m.kind == MESH_INTERNAL:
                    phase = calculate_internal_mesh_phase(
                        state.phases[name], m.mesh_angle, parent.teeth, child.teeth
                    )
                    omega = state.omegas[name] * ratio
                else:
                    phase = calculate_child_phase(
                        state.phases[name], m.mesh_angle, parent.teeth, child.teeth
                    )
                    omega = -state.omegas[name] * ratio
                state.phases[m.child] = phase
                state.omegas[m.child] = omega
                queue.append(m.child)

        state.unreachable = sorted(n for n in self.gears if n not in state.phases)
        if state.unreachable:
            logger.warning("Gears not reachable from root %r: %s", self.root, state.unreachable)
        return state
