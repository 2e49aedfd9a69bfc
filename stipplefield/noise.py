"""Gradient-lattice noise used to drive dot density.

A ``LatticeField`` anchors one random unit gradient at every multiple of
the cell spacing ``d``. ``sample`` evaluates the noise at a continuous
point by blending the four corner contributions of its cell with a
quintic fade.
"""

import logging
import math

import numpy as np

from .vector import Vector2D

logger = logging.getLogger(__name__)


class MissingData(LookupError):
    """A cell corner needed for sampling is not part of the lattice."""

    def __init__(self, point, corner):
        super().__init__(f"no gradient at {corner} for point {point}")
        self.point = point
        self.corner = corner


def fade(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(t, a, b):
    return a + t * (b - a)


def dot_gradient(point, gradient):
    """Dot a gradient against ``point - gradient``.

    Note this is not the textbook Perlin offset (``point - corner``). The
    stipple textures depend on this exact form, so keep it.
    """
    return ((point.x - gradient.x) * gradient.x
            + (point.y - gradient.y) * gradient.y)


def _check_spacing(spacing):
    """Return the spacing as an int, rejecting fractional or sub-1 values."""
    if spacing != math.floor(spacing) or spacing < 1:
        raise ValueError(f"lattice spacing must be an integer >= 1, got {spacing}")
    return int(spacing)


def _lattice_key(x, y):
    """Integer key for a lattice coordinate, or None if not integral."""
    if x != math.floor(x) or y != math.floor(y):
        return None
    return int(x), int(y)


class LatticeField:
    """Read-only mapping of lattice points to unit gradient vectors.

    Build a new field whenever the width, height or spacing changes;
    instances are never updated in place.
    """

    def __init__(self, width, height, spacing, gradients):
        self.width = width
        self.height = height
        self.spacing = spacing
        self._gradients = dict(gradients)

    @classmethod
    def build(cls, width, height, spacing, rng=None):
        """Assign a random unit gradient to every lattice point.

        Args:
            width: Field width. Lattice x runs over 0, d, 2d, ... <= width.
            height: Field height. Lattice y runs over 0, d, 2d, ... <= height.
            spacing: Lattice cell size ``d`` (integer, at least 1).
            rng: Object with ``uniform(low, high)``, e.g. a numpy
                RandomState. A fresh unseeded RandomState if None.

        Returns:
            A new LatticeField. Negative dimensions give an empty field.
        """
        spacing = _check_spacing(spacing)
        if rng is None:
            rng = np.random.RandomState()

        gradients = {}
        # x outer, y inner; the draw order fixes which angle lands where
        for x in range(0, int(math.floor(width)) + 1, spacing):
            for y in range(0, int(math.floor(height)) + 1, spacing):
                angle = rng.uniform(0, 2 * math.pi)
                gradients[(x, y)] = Vector2D(math.cos(angle), math.sin(angle))

        logger.info("Built %d-point lattice (%sx%s, spacing %d)",
                    len(gradients), width, height, spacing)
        return cls(width, height, spacing, gradients)

    @classmethod
    def from_gradients(cls, width, height, spacing, gradients):
        """Wrap an explicit ``{(x, y): Vector2D}`` mapping."""
        return cls(width, height, _check_spacing(spacing), gradients)

    def get(self, x, y):
        """Gradient anchored at (x, y), or None if (x, y) is off the grid."""
        key = _lattice_key(x, y)
        if key is None:
            return None
        return self._gradients.get(key)

    def __contains__(self, key):
        x, y = key
        return self.get(x, y) is not None

    def __iter__(self):
        return iter(self._gradients)

    def __len__(self):
        return len(self._gradients)

    def __repr__(self):
        return (f"LatticeField(width={self.width}, height={self.height}, "
                f"spacing={self.spacing}, points={len(self)})")


def sample(point, field, spacing):
    """Evaluate the gradient noise at a continuous point.

    Args:
        point: Vector2D position.
        field: LatticeField holding the corner gradients.
        spacing: Cell size ``d`` the field was built with.

    Returns:
        Raw noise value, roughly in [-d, d].

    Raises:
        MissingData: A corner of the enclosing cell is outside the field,
            which happens along its right and bottom edges.
    """
    x0 = math.floor(point.x / spacing) * spacing
    y0 = math.floor(point.y / spacing) * spacing

    corners = ((x0, y0), (x0 + spacing, y0),
               (x0, y0 + spacing), (x0 + spacing, y0 + spacing))
    grads = []
    for cx, cy in corners:
        grad = field.get(cx, cy)
        if grad is None:
            raise MissingData(point, (cx, cy))
        grads.append(grad)

    top_left, top_right, bottom_left, bottom_right = (
        dot_gradient(point, g) for g in grads)

    u = fade((point.x - x0) / spacing)
    v = fade((point.y - y0) / spacing)

    top = lerp(u, top_left, top_right)
    bottom = lerp(u, bottom_left, bottom_right)
    return lerp(v, top, bottom)
