"""Stipple rendering pipeline.

Scans the canvas at a fixed step, samples the lattice noise at every
scan point, maps it to a probability and draws a dot when a Bernoulli
trial succeeds.
"""

import logging
import math

import numpy as np
from PIL import Image, ImageDraw
from dataclasses import dataclass

from .density import DegenerateConfigError, DensityConfig, to_probability
from .noise import LatticeField, MissingData, sample
from .vector import Vector2D

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderConfig:
    """Canvas and scan configuration."""

    # Canvas
    width: int = 1000
    height: int = 1000

    # Lattice cell count along the width; spacing d = floor(width / cells)
    cells: int = 50

    # Scan step and dot radius (step >= radius avoids overdraw)
    step: float = 4.0
    radius: float = 1.5

    def __post_init__(self):
        if self.cells < 1:
            raise DegenerateConfigError(f"cells must be >= 1, got {self.cells}")
        if self.step <= 0:
            raise DegenerateConfigError(f"step must be > 0, got {self.step}")
        if self.spacing < 1:
            raise DegenerateConfigError(
                f"width {self.width} is too small for {self.cells} cells")

    @property
    def spacing(self):
        return int(math.floor(self.width / self.cells))


def render(config, density, field, rng, draw):
    """Scatter dots over the canvas according to the noise field.

    Args:
        config: RenderConfig.
        density: DensityConfig for the probability mapping.
        field: LatticeField built with ``config.spacing``.
        rng: Object with ``uniform(low, high)`` used for the Bernoulli draws.
        draw: Callback ``draw(x, y, radius)`` invoked for each dot, in scan
            order (x outer, y inner, both ascending).

    Returns:
        Number of dots drawn.
    """
    if config.step < config.radius:
        logger.warning("Scan step %s is smaller than dot radius %s; dots will overlap",
                       config.step, config.radius)

    d = config.spacing
    drawn = 0
    skipped = 0

    for i in _scan(config.width, config.step):
        for j in _scan(config.height, config.step):
            try:
                noise = sample(Vector2D(i, j), field, d)
            except MissingData:
                logger.debug("missing data at (%s, %s)", i, j)
                skipped += 1
                continue

            # noise / d lands roughly in [-1, 1]
            p = to_probability(noise / d, density)
            if rng.uniform(0, 1) < p:
                draw(i, j, config.radius)
                drawn += 1

    logger.debug("Skipped %d scan points outside the lattice", skipped)
    logger.info("Rendered %d dots", drawn)
    return drawn


def render_image(config=None, density=None, seed=None, field=None,
                 fill=(0, 0, 0), background=(255, 255, 255)):
    """Render a stipple field onto a new Pillow image.

    Args:
        config: RenderConfig (defaults used if None).
        density: DensityConfig (defaults used if None).
        seed: Random seed for the lattice and the dot draws.
        field: Prebuilt LatticeField; built from the seed if None.
        fill: Dot colour.
        background: Canvas colour.

    Returns:
        PIL Image in RGB mode, ``width x height`` pixels.
    """
    if config is None:
        config = RenderConfig()
    if density is None:
        density = DensityConfig()
    if seed is None:
        seed = np.random.randint(0, 2**31)

    rng = np.random.RandomState(seed)
    if field is None:
        field = LatticeField.build(config.width, config.height,
                                   config.spacing, rng)

    img = Image.new('RGB', (config.width, config.height), background)
    canvas = ImageDraw.Draw(img)

    def _draw_dot(x, y, r):
        canvas.ellipse([x - r, y - r, x + r, y + r], fill=fill)

    render(config, density, field, rng, _draw_dot)
    return img


def probability_map(config, density, field):
    """Draw probability at every scan point.

    Returns:
        Array of shape (rows, cols) indexed [j, i] in scan units, NaN where
        the enclosing cell is incomplete.
    """
    d = config.spacing
    xs = list(_scan(config.width, config.step))
    ys = list(_scan(config.height, config.step))

    probs = np.full((len(ys), len(xs)), np.nan, dtype=np.float64)
    for col, i in enumerate(xs):
        for row, j in enumerate(ys):
            try:
                noise = sample(Vector2D(i, j), field, d)
            except MissingData:
                continue
            probs[row, col] = to_probability(noise / d, density)
    return probs


def probability_image(probs):
    """Greyscale preview of a probability map (dark = dense, NaN = white)."""
    shade = np.where(np.isnan(probs), 1.0, 1.0 - probs)
    return Image.fromarray(np.clip(shade * 255, 0, 255).astype(np.uint8))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _scan(limit, step):
    """Yield 0, step, 2*step, ... up to and including ``limit``."""
    pos = 0
    while pos <= limit:
        yield pos
        pos += step
