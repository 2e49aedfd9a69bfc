"""stipplefield - Stippled dot textures driven by gradient-lattice noise."""

from dataclasses import fields

from .density import DegenerateConfigError, DensityConfig, to_probability
from .noise import LatticeField, MissingData, sample
from .renderer import RenderConfig, render, render_image
from .vector import Vector2D

__version__ = "0.1.0"
__all__ = [
    "generate", "render", "render_image", "sample", "to_probability",
    "DensityConfig", "RenderConfig", "LatticeField", "Vector2D",
    "MissingData", "DegenerateConfigError",
]

_RENDER_FIELDS = {f.name for f in fields(RenderConfig)}
_DENSITY_FIELDS = {f.name for f in fields(DensityConfig)}


def generate(width=1000, height=1000, cells=50, seed=None, **kwargs):
    """Generate a stippled texture image.

    Args:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        cells: Number of lattice cells across the width.
        seed: Random seed for reproducible output.
        **kwargs: Additional RenderConfig (step, radius) or DensityConfig
            (input_range, threshold, contrast, invert) parameters, plus
            render_image's fill and background colours. Density defaults
            to a gentle contrast of 0.3.

    Returns:
        PIL Image in RGB mode.
    """
    render_kwargs = {k: kwargs.pop(k) for k in list(kwargs) if k in _RENDER_FIELDS}
    density_kwargs = {k: kwargs.pop(k) for k in list(kwargs) if k in _DENSITY_FIELDS}
    density_kwargs.setdefault("contrast", 0.3)

    config = RenderConfig(width=width, height=height, cells=cells, **render_kwargs)
    density = DensityConfig(**density_kwargs)
    return render_image(config, density, seed=seed, **kwargs)
