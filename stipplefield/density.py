"""Map raw noise values to dot probabilities with a logistic curve."""

from dataclasses import dataclass

import numpy as np


class DegenerateConfigError(ValueError):
    """Configuration that would make the pipeline divide by zero."""


@dataclass(frozen=True)
class DensityConfig:
    """Logistic density mapping parameters.

    input_range: (a, b) range of the incoming noise values; a != b.
    threshold: normalized value in [0, 1] where the probability is 0.5.
    contrast: steepness of the transition (0 gives a flat 0.5).
    invert: swap dense and sparse regions.
    """

    input_range: tuple = (-1.0, 1.0)
    threshold: float = 0.5
    contrast: float = 6.0
    invert: bool = False

    def __post_init__(self):
        a, b = self.input_range
        if a == b:
            raise DegenerateConfigError(
                f"input_range must span a non-empty interval, got {self.input_range}")
        object.__setattr__(self, "input_range", (float(a), float(b)))


def to_probability(value, config):
    """Turn a noise value into a draw probability in (0, 1).

    The value is normalized against ``config.input_range`` and clamped to
    [0, 1], optionally inverted, then pushed through
    ``1 / (1 + exp(-contrast * (v - threshold)))``.
    """
    a, b = config.input_range
    v = (value - a) / (b - a)
    v = min(1.0, max(0.0, v))
    if config.invert:
        v = 1.0 - v

    x = config.contrast * (v - config.threshold)
    # np.exp saturates to inf instead of raising OverflowError
    with np.errstate(over="ignore"):
        return float(1.0 / (1.0 + np.exp(-x)))
