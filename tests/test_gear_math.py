"""Tests for the GearMath phase and speed relations."""

import inspect
import math
import warnings

import numpy as np
import pytest

from gearphase.gear import gear_math
from gearphase.gear.gear_math import (
    calculate_child_phase,
    calculate_internal_mesh_phase,
    calculate_ring_phase_from_planet,
    normalize_angle,
    planetary_ring_speed,
    planetary_ring_teeth,
)

TWO_PI = 2 * math.pi


def _circular_diff(a: float, b: float, period: float = TWO_PI) -> float:
    d = (a - b) % period
    return min(d, period - d)


# ---------------------------------------------------------------------------
# normalize_angle
# ---------------------------------------------------------------------------


def test_normalize_angle_range(rng):
    """Every finite input lands in [0, 2π)."""
    xs = np.concatenate([rng.uniform(-1e3, 1e3, 200), [0.0, TWO_PI, -TWO_PI, 3 * TWO_PI]])
    for x in xs:
        a = normalize_angle(float(x))
        assert 0.0 <= a < TWO_PI, f"normalize_angle({x}) = {a}"


def test_normalize_angle_periodic(rng):
    """Shifting by whole turns does not change the normalized angle."""
    for x in rng.uniform(-100.0, 100.0, 50):
        base = normalize_angle(float(x))
        for k in range(-3, 4):
            shifted = normalize_angle(float(x) + TWO_PI * k)
            assert _circular_diff(shifted, base) < 1e-9


def test_normalize_angle_known_values():
    assert normalize_angle(0.0) == 0.0
    assert normalize_angle(-0.0001) == pytest.approx(TWO_PI - 0.0001)
    assert normalize_angle(math.pi) == pytest.approx(math.pi)
    assert normalize_angle(TWO_PI + 0.5) == pytest.approx(0.5)


def test_normalize_angle_tiny_negative_stays_below_two_pi():
    """A remainder too small to survive +2π rounding maps to 0, not 2π."""
    a = normalize_angle(-1e-20)
    assert 0.0 <= a < TWO_PI


def test_normalize_angle_scalar_and_array_types():
    assert isinstance(normalize_angle(1.0), float)
    out = normalize_angle(np.array([-1.0, 7.0]))
    assert isinstance(out, np.ndarray)
    np.testing.assert_allclose(out, [TWO_PI - 1.0, 7.0 - TWO_PI])


def test_normalize_angle_non_finite_propagates():
    assert math.isnan(normalize_angle(float("nan")))
    assert math.isnan(normalize_angle(float("inf")))


# ---------------------------------------------------------------------------
# Planetary teeth and speed
# ---------------------------------------------------------------------------


def test_planetary_ring_teeth():
    assert planetary_ring_teeth(30, 20) == 70
    assert isinstance(planetary_ring_teeth(30, 20), int)


def test_planetary_ring_speed_at_rest():
    assert planetary_ring_speed(0.0, 0.0, 30, 70) == 0.0


def test_planetary_ring_speed_carrier_fixed():
    """With the carrier held the ring turns against the sun by S/R."""
    omega = planetary_ring_speed(sun_omega=10.0, carrier_omega=0.0, sun_teeth=30, ring_teeth=70)
    assert omega == pytest.approx(-300.0 / 70.0)
    assert omega == pytest.approx(-4.2857, abs=1e-4)


def test_planetary_ring_speed_satisfies_constraint(rng):
    """S·ωs + R·ωr = (S+R)·ωc for arbitrary speeds."""
    for _ in range(20):
        s = int(rng.integers(8, 80))
        r = planetary_ring_teeth(s, int(rng.integers(8, 40)))
        ws, wc = rng.uniform(-50.0, 50.0, 2)
        wr = planetary_ring_speed(ws, wc, s, r)
        assert s * ws + r * wr == pytest.approx((s + r) * wc)


def test_planetary_ring_speed_zero_ring_teeth_is_not_an_error():
    """Division by zero follows IEEE semantics without raising or warning."""
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        omega = planetary_ring_speed(10.0, 0.0, 30, 0)
        undefined = planetary_ring_speed(0.0, 0.0, 0, 0)

    assert math.isinf(omega) and omega < 0
    assert math.isnan(undefined)


# ---------------------------------------------------------------------------
# Phase relations
# ---------------------------------------------------------------------------


def test_child_phase_known_values():
    # Equal gears, collinear centres: half a tooth past the 180° flip.
    assert calculate_child_phase(0.0, 0.0, 20, 20) == pytest.approx(math.pi + math.pi / 20)

    parent_phase, mesh, np_, nc = 0.2, 0.5, 24, 18
    ratio = np_ / nc
    expected = (math.pi / nc - math.pi - mesh * (1 + ratio) - parent_phase * ratio) % TWO_PI
    assert calculate_child_phase(parent_phase, mesh, np_, nc) == pytest.approx(expected)


def test_internal_mesh_phase_known_values():
    assert calculate_internal_mesh_phase(0.0, 0.0, 60, 20) == pytest.approx(TWO_PI - math.pi / 20)

    parent_phase, mesh, np_, nc = 0.4, 1.1, 60, 18
    ratio = np_ / nc
    expected = (-math.pi / nc + mesh * (ratio - 1) + parent_phase * ratio) % TWO_PI
    assert calculate_internal_mesh_phase(parent_phase, mesh, np_, nc) == pytest.approx(expected)


def test_ring_phase_from_planet_known_values():
    assert calculate_ring_phase_from_planet(math.pi / 18, 0.0, 18, 60) == pytest.approx(0.0, abs=1e-12)


def test_ring_phase_from_planet_inverts_exactly_without_wrap():
    planet_phase, mesh, p, r = 1.0, 0.5, 18, 60
    ratio = p / r
    ring = calculate_ring_phase_from_planet(planet_phase, mesh, p, r)
    # Exact inverse of the ring-from-planet formula, not calculate_internal_mesh_phase.
    recovered = (ring - mesh * (1 - ratio)) / ratio + math.pi / p
    assert recovered == pytest.approx(planet_phase)


def test_ring_phase_from_planet_round_trip(rng):
    """The forward planet relation recovers the planet phase modulo its tooth pitch."""
    for _ in range(50):
        p = int(rng.integers(8, 40))
        r = p + int(rng.integers(8, 80))
        planet_phase, mesh = rng.uniform(0.0, TWO_PI, 2)
        ratio = p / r

        ring = calculate_ring_phase_from_planet(planet_phase, mesh, p, r)
        # Exact inverse of the ring-from-planet formula, not calculate_internal_mesh_phase.
        recovered = (ring - mesh * (1 - ratio)) / ratio + math.pi / p

        assert _circular_diff(recovered, planet_phase, TWO_PI / p) < 1e-9


def test_phase_relations_stay_normalized(rng):
    n = 500
    phase = rng.uniform(-50.0, 50.0, n)
    mesh = rng.uniform(-50.0, 50.0, n)
    parent = rng.integers(1, 200, n)
    child = rng.integers(1, 200, n)

    for fn in (calculate_child_phase, calculate_internal_mesh_phase, calculate_ring_phase_from_planet):
        out = fn(phase, mesh, parent, child)
        assert out.shape == (n,)
        assert np.all(out >= 0.0) and np.all(out < TWO_PI), fn.__name__


def test_single_tooth_gives_finite_result():
    """One tooth means a half-tooth width of π; results stay finite and normalized."""
    for value in (
        calculate_child_phase(0.3, 0.7, 20, 1),
        calculate_internal_mesh_phase(0.3, 0.7, 20, 1),
        calculate_ring_phase_from_planet(0.3, 0.7, 1, 20),
    ):
        assert math.isfinite(value)
        assert 0.0 <= value < TWO_PI

    # Equal single-tooth gears, no offsets: π - π = 0.
    assert calculate_child_phase(0.0, 0.0, 1, 1) == pytest.approx(0.0)


def test_zero_child_teeth_propagates_nan():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert math.isnan(calculate_child_phase(0.5, 0.5, 20, 0))
        assert math.isnan(calculate_internal_mesh_phase(0.5, 0.5, 20, 0))


def test_public_functions_are_annotated():
    """Every GearMath function declares parameter and return types."""
    for name in gear_math.__all__:
        sig = inspect.signature(getattr(gear_math, name))
        assert sig.return_annotation is not inspect.Signature.empty, name
        for param in sig.parameters.values():
            assert param.annotation is not inspect.Parameter.empty, f"{name}.{param.name}"
