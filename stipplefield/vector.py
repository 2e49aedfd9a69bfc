"""Minimal 2D vector value type."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector2D:
    """Immutable 2D vector."""

    x: float
    y: float

    def magnitude(self):
        return math.sqrt(self.x * self.x + self.y * self.y)

    def dot(self, other):
        return self.x * other.x + self.y * other.y

    def key(self):
        """Canonical "x,y" form, equal only for equal coordinates."""
        return f"{_format_coord(self.x)},{_format_coord(self.y)}"

    def __str__(self):
        return self.key()


def _format_coord(value):
    # Integral values print as exact ints so 1 and 1.0 (and -0.0 and 0)
    # share a key and large ints stay distinct.
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return repr(int(value))
    return repr(float(value))
