"""
Sprinkle
========

Create a mosaic-like rendition of an image by stamping many randomly
sized, randomly placed square gradient tiles onto a canvas. Each tile
blends the average colours of the four quadrants of the source region
it covers.
"""

__version__ = "1.0.0"

from sprinkle.color_utils import average_color, clamp_region, distance
from sprinkle.compositor import (
    TilePlacement,
    canvas_size,
    composite,
    generate_placements,
    square_tiles,
)
from sprinkle.config import SprinkleConfig
from sprinkle.errors import ConfigError, InputError, OutputError, SprinkleError
from sprinkle.image_io import (
    derive_output_path,
    load_image,
    make_comparison_grid,
    save_image,
)
from sprinkle.pipeline import sprinkle_file
from sprinkle.tiles import corner_weights, quadrant_regions, square_tile

__all__ = [
    "ConfigError",
    "InputError",
    "OutputError",
    "SprinkleConfig",
    "SprinkleError",
    "TilePlacement",
    "average_color",
    "canvas_size",
    "clamp_region",
    "composite",
    "corner_weights",
    "derive_output_path",
    "distance",
    "generate_placements",
    "load_image",
    "make_comparison_grid",
    "quadrant_regions",
    "save_image",
    "sprinkle_file",
    "square_tile",
    "square_tiles",
]
