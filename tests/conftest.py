"""Pytest configuration for gearphase.

Shared gearsets and random generators for the gear math and solver tests.
"""

from __future__ import annotations

import numpy as np
import pytest

from gearphase.gear.planetary import PlanetaryGearset


@pytest.fixture
def gearset() -> PlanetaryGearset:
    # (24 + 60) is divisible by 3, so three planets assemble evenly.
    return PlanetaryGearset(sun_teeth=24, planet_teeth=18, n_planets=3)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)
