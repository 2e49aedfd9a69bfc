"""Tests for the gradient lattice and noise sampling."""

import math

import numpy as np
import pytest


class ScriptedRng:
    """Returns preset values from uniform(), in call order."""

    def __init__(self, values):
        self._values = iter(values)

    def uniform(self, low, high):
        return next(self._values)


def _oracle_field():
    """w = h = 8, d = 4 lattice with hand-picked corner gradients."""
    from stipplefield.noise import LatticeField
    # Build order is x outer, y inner:
    # (0,0) (0,4) (0,8) (4,0) (4,4) (4,8) (8,0) (8,4) (8,8)
    angles = [0.0, math.pi, 0.0,
              math.pi / 2, 3 * math.pi / 2, 0.0,
              0.0, 0.0, 0.0]
    return LatticeField.build(8, 8, 4, ScriptedRng(angles))


def test_vector_basics():
    from stipplefield.vector import Vector2D
    v = Vector2D(3, 4)
    assert v.magnitude() == 5.0
    assert v.dot(Vector2D(2, -1)) == 2
    assert Vector2D(1, 2).key() == Vector2D(1.0, 2.0).key()
    assert Vector2D(1, 2).key() != Vector2D(2, 1).key()
    assert str(Vector2D(0.5, -0.0)) == "0.5,0"


def test_vector_key_distinguishes_large_ints():
    from stipplefield.vector import Vector2D
    assert Vector2D(2**53, 0).key() != Vector2D(2**53 + 1, 0).key()
    assert Vector2D(2**53 + 1, 0).key() == "9007199254740993,0"
    assert Vector2D(1.5, 2).key() == "1.5,2"


def test_vector_is_immutable():
    from dataclasses import FrozenInstanceError
    from stipplefield.vector import Vector2D
    v = Vector2D(1, 2)
    with pytest.raises(FrozenInstanceError):
        v.x = 5


@pytest.mark.parametrize("seed", [0, 7, 42])
def test_gradients_are_unit_length(seed):
    from stipplefield.noise import LatticeField
    field = LatticeField.build(100, 60, 10, np.random.RandomState(seed))
    for x, y in field:
        assert abs(field.get(x, y).magnitude() - 1.0) < 1e-12


def test_lattice_covers_full_grid():
    from stipplefield.noise import LatticeField
    field = LatticeField.build(95, 58, 10, np.random.RandomState(1))
    # x in 0..90, y in 0..50
    assert len(field) == 10 * 6
    for x in range(0, 91, 10):
        for y in range(0, 51, 10):
            assert field.get(x, y) is not None
            assert (x, y) in field


@pytest.mark.parametrize("x,y", [
    (100, 0), (0, 60), (5, 0), (10.5, 20), (-10, 0), (0, -10),
])
def test_lattice_misses_off_grid(x, y):
    from stipplefield.noise import LatticeField
    field = LatticeField.build(95, 58, 10, np.random.RandomState(1))
    assert field.get(x, y) is None


def test_lattice_accepts_integral_floats():
    from stipplefield.noise import LatticeField
    field = LatticeField.build(20, 20, 10, np.random.RandomState(2))
    assert field.get(10.0, 20.0) == field.get(10, 20)


def test_degenerate_dimensions():
    from stipplefield.noise import LatticeField
    assert len(LatticeField.build(-1, 5, 4, np.random.RandomState(0))) == 0
    assert len(LatticeField.build(0, 0, 4, np.random.RandomState(0))) == 1


@pytest.mark.parametrize("spacing", [0, -3, 2.5, 0.5])
def test_invalid_spacing(spacing):
    from stipplefield.noise import LatticeField
    with pytest.raises(ValueError):
        LatticeField.build(10, 10, spacing, np.random.RandomState(0))
    with pytest.raises(ValueError):
        LatticeField.from_gradients(10, 10, spacing, {})


def test_integral_float_spacing_accepted():
    from stipplefield.noise import LatticeField
    field = LatticeField.build(10, 10, 5.0, np.random.RandomState(0))
    assert field.spacing == 5
    assert len(field) == 9


def test_same_seed_same_field():
    from stipplefield.noise import LatticeField
    a = LatticeField.build(40, 40, 8, np.random.RandomState(5))
    b = LatticeField.build(40, 40, 8, np.random.RandomState(5))
    assert all(a.get(*k) == b.get(*k) for k in a)


def test_fade_endpoints_and_midpoint():
    from stipplefield.noise import fade
    assert fade(0.0) == 0.0
    assert fade(1.0) == 1.0
    assert fade(0.5) == 0.5


def test_fade_is_monotonic():
    from stipplefield.noise import fade
    ts = np.linspace(0.0, 1.0, 1001)
    assert np.all(np.diff(fade(ts)) >= 0)


def test_lerp():
    from stipplefield.noise import lerp
    assert lerp(0.0, 2.0, 6.0) == 2.0
    assert lerp(1.0, 2.0, 6.0) == 6.0
    assert lerp(0.25, 2.0, 6.0) == 3.0


def test_dot_gradient_uses_gradient_offset():
    from stipplefield.noise import dot_gradient
    from stipplefield.vector import Vector2D
    # (point - grad) . grad, not (point - corner) . grad
    assert dot_gradient(Vector2D(2, 2), Vector2D(-1, 0)) == -3
    assert dot_gradient(Vector2D(2, 2), Vector2D(0, 1)) == 1


def test_sample_regression_oracle():
    from stipplefield.noise import sample
    from stipplefield.vector import Vector2D
    # Corner dots 1, 1, -3, -3 with u = v = 0.5 -> -1
    field = _oracle_field()
    assert sample(Vector2D(2, 2), field, 4) == pytest.approx(-1.0, abs=1e-9)


def test_sample_regression_oracle_exact_gradients():
    from stipplefield.noise import LatticeField, sample
    from stipplefield.vector import Vector2D
    field = LatticeField.from_gradients(8, 8, 4, {
        (0, 0): Vector2D(1, 0),
        (4, 0): Vector2D(0, 1),
        (0, 4): Vector2D(-1, 0),
        (4, 4): Vector2D(0, -1),
    })
    assert sample(Vector2D(2, 2), field, 4) == -1.0


@pytest.mark.parametrize("seed", [3, 11])
def test_sample_at_origin_corner(seed):
    from stipplefield.noise import LatticeField, sample
    from stipplefield.vector import Vector2D
    field = LatticeField.build(16, 16, 4, np.random.RandomState(seed))
    # u = v = 0 leaves only the top-left term: (0 - g) . g = -|g|^2
    assert sample(Vector2D(0, 0), field, 4) == pytest.approx(-1.0)


@pytest.mark.parametrize("x,y", [(8, 0), (0, 8), (8, 8), (9.5, 2), (-1, 0)])
def test_sample_missing_data_outside_lattice(x, y):
    from stipplefield.noise import MissingData, sample
    from stipplefield.vector import Vector2D
    field = _oracle_field()
    with pytest.raises(MissingData) as excinfo:
        sample(Vector2D(x, y), field, 4)
    assert isinstance(excinfo.value, LookupError)
    assert excinfo.value.point == Vector2D(x, y)


def test_sample_inside_last_cell():
    from stipplefield.noise import sample
    from stipplefield.vector import Vector2D
    value = sample(Vector2D(7.9, 7.9), _oracle_field(), 4)
    assert math.isfinite(value)
