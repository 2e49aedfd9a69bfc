"""CLI entry point for stipplefield."""

import argparse
import logging
from pathlib import Path

import numpy as np

from .density import DegenerateConfigError, DensityConfig
from .noise import LatticeField
from .renderer import RenderConfig, probability_image, probability_map, render_image


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a stippled texture from gradient-lattice noise"
    )
    parser.add_argument(
        "--width", "-W", type=int, default=1000,
        help="Canvas width in pixels (default: 1000)"
    )
    parser.add_argument(
        "--height", "-H", type=int, default=1000,
        help="Canvas height in pixels (default: 1000)"
    )
    parser.add_argument(
        "--cells", "-n", type=int, default=50,
        help="Lattice cells across the width (default: 50)"
    )
    parser.add_argument(
        "--step", "-s", type=float, default=4.0,
        help="Distance between scan points (default: 4)"
    )
    parser.add_argument(
        "--radius", "-r", type=float, default=1.5,
        help="Dot radius (default: 1.5)"
    )
    parser.add_argument(
        "--threshold", "-t", type=float, default=0.5,
        help="Normalized noise value with 50%% dot probability (default: 0.5)"
    )
    parser.add_argument(
        "--contrast", "-c", type=float, default=0.3,
        help="Steepness of the density transition (default: 0.3)"
    )
    parser.add_argument(
        "--input-range", nargs=2, type=float, default=(-1.0, 1.0),
        metavar=("LOW", "HIGH"),
        help="Expected range of the normalized noise (default: -1 1)"
    )
    parser.add_argument(
        "--invert", action="store_true",
        help="Swap dense and sparse regions"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for reproducible generation"
    )
    parser.add_argument(
        "--output", "-o", default="stipple.png",
        help="Output file path (default: stipple.png)"
    )
    parser.add_argument(
        "--density-map", default=None, metavar="PATH",
        help="Also save a greyscale preview of the dot probability"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log per-point diagnostics"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = RenderConfig(width=args.width, height=args.height,
                              cells=args.cells, step=args.step,
                              radius=args.radius)
        density = DensityConfig(input_range=tuple(args.input_range),
                                threshold=args.threshold,
                                contrast=args.contrast,
                                invert=args.invert)
    except DegenerateConfigError as e:
        parser.error(str(e))

    seed = args.seed
    if seed is not None and not 0 <= seed < 2**32:
        parser.error(f"--seed must be between 0 and 2**32 - 1, got {seed}")
    if seed is None:
        seed = np.random.randint(0, 2**31)

    image = render_image(config, density, seed=seed)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    print(f"Saved stipple field ({image.size[0]}x{image.size[1]}, seed {seed}) to {output}")

    if args.density_map:
        # render_image draws the lattice first, so the same seed rebuilds it
        field = LatticeField.build(config.width, config.height,
                                   config.spacing, np.random.RandomState(seed))
        preview = probability_image(probability_map(config, density, field))
        preview_path = Path(args.density_map)
        preview_path.parent.mkdir(parents=True, exist_ok=True)
        preview.save(str(preview_path))
        print(f"Saved density map to {preview_path}")


if __name__ == "__main__":
    main()
