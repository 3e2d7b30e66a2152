"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Integral, Real
from pathlib import Path

from sprinkle.errors import ConfigError


@dataclass(frozen=True)
class SprinkleConfig:
    """All tuneable parameters for a tiling run.

    Attributes:
        iterations:      Number of random tiles stamped on top of the background.
        opacity:         Per-tile blend strength in [0, 1].
        scale:           Output size multiplier relative to the source.
        blur:            Inversely controls tile size (larger = smaller tiles).
        seed:            Random seed for tile placement (None = non-deterministic).
        workers:         Threads used to synthesise tiles (1 = no thread pool).
        output_prefix:   Prepended to the source file name for the result.
        output_format:   Suffix for saved files (None = keep the source suffix).
        save_comparison: Also write an "Original | Tiled" comparison image.
        input_dir:       Folder to scan for source images (batch mode).
        output_dir:      Folder for results (batch mode).
    """

    # Tiling
    iterations: int = 1000
    opacity: float = 0.5
    scale: float = 1.0
    blur: float = 8.0  # tile side ~ mean image side / blur

    # Randomness & execution
    seed: int | None = None
    workers: int = 1

    # Output
    output_prefix: str = "TILED"
    output_format: str | None = None
    save_comparison: bool = False

    # Paths
    input_dir: Path = field(default_factory=lambda: Path("images"))
    output_dir: Path = field(default_factory=lambda: Path("output"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp", ".jfif", ".gif"}
    )

    def __post_init__(self) -> None:
        for name in ("iterations", "workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                msg = f"{name} must be an integer, got {value!r}"
                raise ConfigError(msg)
        for name in ("opacity", "scale", "blur"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, Real)
                or not math.isfinite(value)
            ):
                msg = f"{name} must be a finite number, got {value!r}"
                raise ConfigError(msg)
        if self.iterations < 0:
            msg = f"iterations must be >= 0, got {self.iterations}"
            raise ConfigError(msg)
        if not 0.0 <= self.opacity <= 1.0:
            msg = f"opacity must be within [0, 1], got {self.opacity}"
            raise ConfigError(msg)
        if self.scale <= 0:
            msg = f"scale must be > 0, got {self.scale}"
            raise ConfigError(msg)
        if self.blur <= 0:
            msg = f"blur must be > 0, got {self.blur}"
            raise ConfigError(msg)
        if self.workers < 1:
            msg = f"workers must be >= 1, got {self.workers}"
            raise ConfigError(msg)
