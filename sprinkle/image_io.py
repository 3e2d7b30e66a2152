"""Image loading, saving, output naming and comparison-grid generation."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from sprinkle.errors import InputError, OutputError

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
_OPAQUE_SUFFIXES = frozenset({".jpg", ".jpeg", ".jfif", ".bmp"})


def load_image(path: str | Path) -> np.ndarray:
    """Decode an image file into an RGBA array.

    Returns:
        (H, W, 4) uint8 array.

    Raises:
        InputError: The file is missing, unreadable or not an image.
    """
    path = Path(path)
    if not path.is_file():
        msg = f"Source image not found: {path}"
        raise InputError(msg)
    try:
        with Image.open(path) as img:
            array = np.array(img.convert("RGBA"), dtype=np.uint8)
    except (UnidentifiedImageError, OSError) as exc:
        msg = f"Cannot decode {path}: {exc}"
        raise InputError(msg) from exc

    logger.debug("Loaded %s (%dx%d)", path, array.shape[1], array.shape[0])
    return array


def save_image(array: np.ndarray, path: str | Path) -> None:
    """Encode an RGBA array to *path*, format chosen from the suffix.

    Alpha is dropped for formats that cannot store it.

    Raises:
        OutputError: The file cannot be written or the suffix is unknown.
    """
    path = Path(path)
    img = Image.fromarray(np.asarray(array, dtype=np.uint8))
    if path.suffix.lower() in _OPAQUE_SUFFIXES:
        img = img.convert("RGB")
    try:
        img.save(path)
    except (OSError, ValueError) as exc:
        msg = f"Cannot write {path}: {exc}"
        raise OutputError(msg) from exc

    logger.debug("Saved %s (%dx%d)", path, img.width, img.height)


def derive_output_path(
    source: str | Path,
    prefix: str = "TILED",
    output_dir: str | Path | None = None,
    fmt: str | None = None,
) -> Path:
    """Name of the tiled result for *source*, e.g. ``photo.png`` -> ``TILEDphoto.png``.

    The result lands next to the source unless *output_dir* is given;
    *fmt* (``"png"`` or ``".png"``) replaces the suffix.
    """
    source = Path(source)
    suffix = "." + fmt.lstrip(".") if fmt else source.suffix
    name = prefix + source.stem + suffix
    folder = Path(output_dir) if output_dir is not None else source.parent
    return folder / name


def make_comparison_grid(
    source: np.ndarray,
    tiled: np.ndarray,
    output_path: str | Path,
) -> None:
    """Create a 2-panel comparison: Original | Tiled.

    The original is resized to the tiled image's dimensions so both
    panels line up.

    Raises:
        OutputError: The grid cannot be written.
    """
    th, tw = tiled.shape[:2]
    label_height = 36

    original = Image.fromarray(source).convert("RGB").resize(
        (tw, th), Image.LANCZOS,
    )
    tiled_img = Image.fromarray(tiled).convert("RGB")

    panels = [original, tiled_img]
    labels = ["Original", f"Tiled {tw}x{th}"]

    gap = 8
    total_w = len(panels) * tw + (len(panels) - 1) * gap
    total_h = th + label_height

    canvas = Image.new("RGB", (total_w, total_h), (30, 30, 30))
    draw = ImageDraw.Draw(canvas)

    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 18,
        )
    except OSError:
        font = ImageFont.load_default()

    for i, (panel, label) in enumerate(zip(panels, labels, strict=True)):
        x = i * (tw + gap)
        canvas.paste(panel, (x, label_height))

        bbox = draw.textbbox((0, 0), label, font=font)
        text_w = bbox[2] - bbox[0]
        draw.text((x + (tw - text_w) // 2, 6), label, fill=(220, 220, 220), font=font)

    try:
        canvas.save(output_path)
    except (OSError, ValueError) as exc:
        msg = f"Cannot write {output_path}: {exc}"
        raise OutputError(msg) from exc
