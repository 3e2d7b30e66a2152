"""Random gradient-tile compositing onto a scaled canvas."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import NamedTuple

import numpy as np

from sprinkle.color_utils import round_half_up
from sprinkle.config import SprinkleConfig
from sprinkle.tiles import square_tile

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

# Tiles in flight per worker when synthesising on a thread pool
_BATCH_PER_WORKER = 4


class TilePlacement(NamedTuple):
    """Upper-left corner and side of a tile, in source coordinates."""

    x: int
    y: int
    side: int


def canvas_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Output ``(w, h)`` for a source of ``width x height`` at *scale*."""
    return round_half_up(width * scale), round_half_up(height * scale)


def generate_placements(
    rng: np.random.Generator,
    width: int,
    height: int,
    iterations: int,
    blur: float,
) -> list[TilePlacement]:
    """Draw *iterations* random tile placements over a source image.

    Side lengths fall between one and two times ``mean_side / blur``. Each
    tile is centred on a uniform point inside the image, so tiles near the
    border hang over the edge.
    """
    mean_side = (width + height) / 2
    placements = []
    for _ in range(iterations):
        side = max(1, round_half_up((rng.random() + 1) * mean_side / blur))
        x = round_half_up(rng.random() * width - side / 2)
        y = round_half_up(rng.random() * height - side / 2)
        placements.append(TilePlacement(x, y, side))
    return placements


def composite(
    canvas: np.ndarray,
    tile: np.ndarray,
    x: int,
    y: int,
    opacity: float = 1.0,
) -> None:
    """Alpha-blend *tile* over *canvas* in place (source-over).

    The tile's alpha channel is multiplied by *opacity*. Parts of the tile
    falling outside the canvas are discarded, so negative offsets are fine.

    Args:
        canvas: (H, W, 4) float64 array in the 0-255 range, mutated.
        tile:   (h, w, 4) array in the 0-255 range.
        x, y:   Canvas position of the tile's upper-left corner.
        opacity: Extra alpha multiplier in [0, 1].
    """
    ch, cw = canvas.shape[:2]
    th, tw = tile.shape[:2]
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + tw, cw), min(y + th, ch)
    if x0 >= x1 or y0 >= y1:
        return

    src = tile[y0 - y:y1 - y, x0 - x:x1 - x]
    dst = canvas[y0:y1, x0:x1]

    src_a = src[..., 3:] / 255.0 * opacity
    dst_a = dst[..., 3:] / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)

    blended = src[..., :3] * src_a + dst[..., :3] * dst_a * (1.0 - src_a)
    with np.errstate(divide="ignore", invalid="ignore"):
        rgb = np.where(out_a > 0, blended / out_a, 0.0)

    dst[..., :3] = rgb
    dst[..., 3:] = out_a * 255.0


def _synthesise(
    source: np.ndarray,
    placements: list[TilePlacement],
    scale: float,
    workers: int,
) -> Iterator[np.ndarray]:
    """Yield one tile per placement, in placement order."""

    def _make(p: TilePlacement) -> np.ndarray:
        return square_tile(source, p.x, p.y, p.side, max(1, round_half_up(p.side * scale)))

    if workers <= 1:
        for p in placements:
            yield _make(p)
        return

    batch = workers * _BATCH_PER_WORKER
    with ThreadPoolExecutor(max_workers=workers) as executor:
        for start in range(0, len(placements), batch):
            # map() returns results in submission order
            yield from executor.map(_make, placements[start:start + batch])


def square_tiles(
    source: np.ndarray,
    config: SprinkleConfig,
    rng: np.random.Generator | None = None,
    progress: ProgressCallback | None = None,
) -> np.ndarray:
    """Create a randomly tiled rendition of *source*.

    A single background tile covering the whole canvas is laid down first,
    then ``config.iterations`` random tiles are composited on top in the
    order they were generated.

    Args:
        source:   (H, W, 4) uint8 source image. Never modified.
        config:   Tiling parameters.
        rng:      Random generator (default: seeded from ``config.seed``).
        progress: Called as ``progress(done, total)`` after each random tile.

    Returns:
        (round(H*scale), round(W*scale), 4) uint8 image.
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)

    h, w = source.shape[:2]
    out_w, out_h = canvas_size(w, h, config.scale)
    canvas = np.zeros((out_h, out_w, 4), dtype=np.float64)

    logger.info(
        "Tiling %dx%d -> %dx%d | iterations=%s  opacity=%.2f  blur=%.2f",
        w, h, out_w, out_h, f"{config.iterations:,}", config.opacity, config.blur,
    )
    t0 = time.perf_counter()

    # Background: the square is placed in canvas space but sampled at the
    # same offset in source space. The two only agree when scale == 1.
    bg_side = max(out_w, out_h)
    bg_x = round_half_up(out_w / 2 - bg_side / 2)
    bg_y = round_half_up(out_h / 2 - bg_side / 2)
    composite(canvas, square_tile(source, bg_x, bg_y, bg_side), bg_x, bg_y)
    logger.debug("Background tile %d px at (%d, %d)", bg_side, bg_x, bg_y)

    placements = generate_placements(rng, w, h, config.iterations, config.blur)
    total = len(placements)
    tiles = _synthesise(source, placements, config.scale, config.workers)
    for done, (p, tile) in enumerate(zip(placements, tiles, strict=True), 1):
        composite(canvas, tile, p.x, p.y, config.opacity)
        if progress is not None:
            progress(done, total)

    logger.info("Tiling done  (%.1f s)", time.perf_counter() - t0)
    return np.clip(np.rint(canvas), 0, 255).astype(np.uint8)
