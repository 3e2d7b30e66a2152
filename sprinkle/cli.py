"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TimeElapsedColumn

from sprinkle.config import SprinkleConfig
from sprinkle.errors import ConfigError, SprinkleError
from sprinkle.image_io import derive_output_path
from sprinkle.pipeline import sprinkle_file

app = typer.Typer(
    name="sprinkle",
    help="Sprinkle random gradient tiles over any image.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _collect_images(folder: Path, extensions: frozenset[str]) -> list[Path]:
    if not folder.exists():
        return []
    return sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in extensions
    )


def _build_config(**kwargs: object) -> SprinkleConfig:
    try:
        return SprinkleConfig(**kwargs)  # type: ignore[arg-type]
    except ConfigError as exc:
        console.print(f"[red]Invalid option:[/red] {exc}")
        raise typer.Exit(2) from exc


def _render(source: Path, cfg: SprinkleConfig, output: Path | None) -> Path:
    """Tile one image behind a Rich progress bar."""
    with Progress(
        "[progress.description]{task.description}",
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as bar:
        task = bar.add_task(source.name, total=cfg.iterations)
        return sprinkle_file(
            source, cfg, output=output,
            progress=lambda done, _total: bar.update(task, completed=done),
        )


# Defaults come from SprinkleConfig - single source of truth
_DEFAULTS = SprinkleConfig()


# -- single-image command ----------------------------------------------

@app.command()
def single(
    source: Path = typer.Argument(..., help="Path to the source image"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Result file (default: TILED<name> next to source)",
    ),
    iterations: int = typer.Option(
        _DEFAULTS.iterations, "--iterations", "-n", help="Number of random tiles",
    ),
    opacity: float = typer.Option(
        _DEFAULTS.opacity, "--opacity", help="Per-tile opacity (0 to 1)",
    ),
    scale: float = typer.Option(
        _DEFAULTS.scale, "--scale", help="Output size relative to the source",
    ),
    blur: float = typer.Option(
        _DEFAULTS.blur, "--blur", "-b", help="Larger = smaller tiles, smoother result",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", help="Random seed (None = random)",
    ),
    workers: int = typer.Option(
        _DEFAULTS.workers, "--workers", "-w", help="Threads for tile synthesis",
    ),
    compare: bool = typer.Option(
        _DEFAULTS.save_comparison, "--compare/--no-compare",
        help="Also save an Original | Tiled comparison",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Tile a single image."""
    _setup_logging(verbose)

    cfg = _build_config(
        iterations=iterations,
        opacity=opacity,
        scale=scale,
        blur=blur,
        seed=seed,
        workers=workers,
        save_comparison=compare,
    )

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)

    t0 = time.perf_counter()
    try:
        out_path = _render(source, cfg, output)
    except SprinkleError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(
        f"[green]✓[/green] Saved to {out_path}  "
        f"[dim]time={time.perf_counter() - t0:.1f}s[/dim]"
    )


# -- batch command -----------------------------------------------------

@app.command()
def batch(
    input_dir: Path = typer.Option(
        _DEFAULTS.input_dir, "--input", "-i", help="Folder with source images",
    ),
    output_dir: Path = typer.Option(
        _DEFAULTS.output_dir, "--output", "-o", help="Results folder",
    ),
    iterations: int = typer.Option(_DEFAULTS.iterations, "--iterations", "-n"),
    opacity: float = typer.Option(_DEFAULTS.opacity, "--opacity"),
    scale: float = typer.Option(_DEFAULTS.scale, "--scale"),
    blur: float = typer.Option(_DEFAULTS.blur, "--blur", "-b"),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    workers: int = typer.Option(_DEFAULTS.workers, "--workers", "-w"),
    fmt: str | None = typer.Option(
        _DEFAULTS.output_format, "--format", "-f",
        help="Output format, e.g. 'png' (default: keep source format)",
    ),
    compare: bool = typer.Option(_DEFAULTS.save_comparison, "--compare/--no-compare"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Tile all images in INPUT_DIR and write results to OUTPUT_DIR."""
    _setup_logging(verbose)
    logger = logging.getLogger("sprinkle")

    cfg = _build_config(
        iterations=iterations,
        opacity=opacity,
        scale=scale,
        blur=blur,
        seed=seed,
        workers=workers,
        output_format=fmt,
        save_comparison=compare,
        input_dir=input_dir,
        output_dir=output_dir,
    )

    images = _collect_images(input_dir, cfg.SUPPORTED_EXTENSIONS)
    if not images:
        console.print(f"\n[yellow]No images found in {input_dir}/[/yellow]")
        console.print("Place .jpg / .png / ... files there and re-run.\n")
        raise typer.Exit(0)

    output_dir.mkdir(parents=True, exist_ok=True)

    console.print(Panel.fit(
        f"[bold]SPRINKLE[/bold]\n"
        f"Iterations: {cfg.iterations}  |  Opacity: {cfg.opacity}\n"
        f"Scale: {cfg.scale}  |  Blur: {cfg.blur}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    failed = 0
    for idx, img_path in enumerate(images, 1):
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t0 = time.perf_counter()
        out_path = derive_output_path(
            img_path, cfg.output_prefix, output_dir, cfg.output_format,
        )
        try:
            _render(img_path, cfg, out_path)
        except SprinkleError as exc:
            logger.error("%s", exc)
            failed += 1
            continue

        console.print(
            f"  [green]✓[/green] {out_path.name}  "
            f"[dim]time={time.perf_counter() - t0:.1f}s[/dim]"
        )

    if failed:
        console.print(Panel.fit(
            f"[bold red]{failed} of {len(images)} image(s) failed[/bold red]",
            border_style="red",
        ))
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))


if __name__ == "__main__":
    app()
