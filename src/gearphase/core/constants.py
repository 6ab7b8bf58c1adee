"""Core constants for gearphase.

This module defines shared numeric invariants:
- The full-turn angle used for normalization
- Mesh kinds accepted by the gear train solver
"""

from __future__ import annotations

import math

# Full rotation (rad)
TWO_PI = 2.0 * math.pi

# Mesh kinds understood by the gear train solver
MESH_EXTERNAL = "external"
MESH_INTERNAL = "internal"
MESH_KINDS = (MESH_EXTERNAL, MESH_INTERNAL)
