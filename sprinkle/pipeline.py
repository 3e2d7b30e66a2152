"""One-call load -> tile -> save entry point."""

from __future__ import annotations

import logging
from pathlib import Path

from sprinkle.compositor import ProgressCallback, square_tiles
from sprinkle.config import SprinkleConfig
from sprinkle.image_io import (
    derive_output_path,
    load_image,
    make_comparison_grid,
    save_image,
)

logger = logging.getLogger(__name__)


def sprinkle_file(
    path: str | Path,
    config: SprinkleConfig | None = None,
    output: str | Path | None = None,
    progress: ProgressCallback | None = None,
) -> Path:
    """Tile the image at *path* and write the result.

    Args:
        path:     Source image.
        config:   Tiling parameters (default: ``SprinkleConfig()``).
        output:   Destination file. Defaults to the prefixed source name,
                  see :func:`~sprinkle.image_io.derive_output_path`.
        progress: Forwarded to :func:`~sprinkle.compositor.square_tiles`.

    Returns:
        Path of the written image.

    Raises:
        InputError:  The source cannot be loaded (nothing is computed).
        OutputError: The result cannot be written.
    """
    cfg = config or SprinkleConfig()
    path = Path(path)

    source = load_image(path)
    tiled = square_tiles(source, cfg, progress=progress)

    out_path = (
        Path(output) if output is not None
        else derive_output_path(path, cfg.output_prefix, fmt=cfg.output_format)
    )
    save_image(tiled, out_path)
    logger.info("Saved %s", out_path)

    if cfg.save_comparison:
        comp_path = out_path.with_name(f"{out_path.stem}_comparison.png")
        make_comparison_grid(source, tiled, comp_path)
        logger.info("Comparison saved: %s", comp_path)

    return out_path
