"""Region clamping, region averaging and the distance helper."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going towards +inf."""
    return math.floor(value + 0.5)


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two equal-length coordinate sequences."""
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt(np.sum(diff ** 2)))


def clamp_region(
    image_width: int,
    image_height: int,
    x: float,
    y: float,
    width: float,
    height: float,
) -> tuple[int, int, int, int]:
    """Clamp a rectangle to the image bounds.

    The origin is clamped first and the extent is then clamped against
    what is left of the image, so a region lying entirely outside the
    image collapses onto its nearest edge pixels.

    Returns:
        ``(x, y, w, h)`` with ``w >= 0`` and ``h >= 0``.
    """
    bx = min(max(round_half_up(x), 0), image_width - 1)
    by = min(max(round_half_up(y), 0), image_height - 1)
    bw = min(max(round_half_up(width), 0), image_width - bx)
    bh = min(max(round_half_up(height), 0), image_height - by)
    return bx, by, bw, bh


def average_color(
    image: np.ndarray,
    x: float,
    y: float,
    width: float,
    height: float,
) -> np.ndarray:
    """Mean RGBA colour of a rectangular region of *image*.

    The region is clamped to the image (see :func:`clamp_region`). If
    clamping leaves nothing to sample, the single pixel at the clamped
    origin is used instead.

    Args:
        image: (H, W, 4) array, any numeric dtype.
        x, y: Upper-left corner of the region.
        width, height: Size of the region.

    Returns:
        (4,) float64 array of channel means.
    """
    h, w = image.shape[:2]
    bx, by, bw, bh = clamp_region(w, h, x, y, width, height)
    if bw == 0 or bh == 0:
        bw = bh = 1

    patch = image[by:by + bh, bx:bx + bw]
    return patch.reshape(-1, image.shape[2]).astype(np.float64).mean(axis=0)
