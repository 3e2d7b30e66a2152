"""Four-corner gradient tiles sampled from quadrant averages."""

from __future__ import annotations

import numpy as np

from sprinkle.color_utils import average_color


def quadrant_regions(
    x: int,
    y: int,
    width: int,
) -> list[tuple[int, int, int, int]]:
    """Split a square into TL, TR, BL, BR regions ``(x, y, w, h)``.

    The right column and bottom row take the odd pixel, so the four
    quadrants always cover the square exactly.
    """
    half = width // 2
    rest = width - half
    return [
        (x, y, half, half),
        (x + half, y, rest, half),
        (x, y + half, half, rest),
        (x + half, y + half, rest, rest),
    ]


def corner_weights(side: int) -> np.ndarray:
    """Normalised inverse-distance weights of every pixel to the 4 corners.

    Corners sit at (0, 0), (side, 0), (0, side) and (side, side), in the
    same order as :func:`quadrant_regions`. The raw weight of a corner is
    ``1 / (distance + 1)``.

    Returns:
        (side, side, 4) float64 array whose last axis sums to 1.
    """
    ys, xs = np.mgrid[0:side, 0:side].astype(np.float64)
    corners = ((0, 0), (side, 0), (0, side), (side, side))
    raw = np.stack(
        [1.0 / (np.hypot(xs - cx, ys - cy) + 1.0) for cx, cy in corners],
        axis=-1,
    )
    return raw / raw.sum(axis=-1, keepdims=True)


def square_tile(
    image: np.ndarray,
    x: int,
    y: int,
    width: int,
    new_width: int | None = None,
) -> np.ndarray:
    """Create a 4-way gradient square from part of *image*.

    Each quadrant of the source square ``(x, y, width, width)`` is
    averaged, and the four colours are blended across the output square
    from its corners.

    Args:
        image: (H, W, 4) source array.
        x, y: Upper-left corner of the source square (may be out of bounds).
        width: Side of the source square.
        new_width: Side of the output tile. Defaults to *width*.

    Returns:
        (new_width, new_width, 4) float64 tile in the 0-255 range.
    """
    if new_width is None:
        new_width = width

    colors = np.stack([
        average_color(image, qx, qy, qw, qh)
        for qx, qy, qw, qh in quadrant_regions(x, y, width)
    ])
    return corner_weights(new_width) @ colors
