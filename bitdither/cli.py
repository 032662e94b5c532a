"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from PIL import UnidentifiedImageError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from bitdither.config import DitherConfig
from bitdither.engine import BOUNDARY_POLICIES, dither
from bitdither.image_io import (
    derive_output_path,
    load_grayscale,
    make_comparison_grid,
    mean_intensity_error,
    save_image,
)
from bitdither.kernels import KERNEL_NAMES, KERNELS, Kernel, get_kernel

app = typer.Typer(
    name="bitdither",
    help="Turn grayscale images into 1-bit error-diffusion dithers.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()
logger = logging.getLogger("bitdither")


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


def _resolve_kernel(name: str) -> Kernel:
    try:
        return get_kernel(name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--kernel") from None


def _check_boundary(boundary: str) -> str:
    if boundary not in BOUNDARY_POLICIES:
        raise typer.BadParameter(
            f"Choose from: {', '.join(BOUNDARY_POLICIES)}", param_hint="--boundary",
        )
    return boundary


def _load_or_exit(path: Path, max_side: int | None) -> np.ndarray:
    try:
        return load_grayscale(path, max_side)
    except FileNotFoundError:
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1) from None
    except UnidentifiedImageError:
        console.print(f"[red]Unsupported image format:[/red] {path}")
        raise typer.Exit(1) from None
    except OSError as exc:
        console.print(f"[red]Could not decode[/red] {path}: {exc}")
        raise typer.Exit(1) from None


def _run(
    gray: np.ndarray,
    kernel: Kernel,
    threshold: int,
    boundary: str,
    seed: int | None,
) -> tuple[np.ndarray, int]:
    result = gray.copy()
    rng = np.random.default_rng(seed) if kernel.randomized else None
    processed = dither(
        result, kernel, threshold=threshold, rng=rng, boundary=boundary,
    )
    return result, processed


# Defaults come from DitherConfig - single source of truth
_DEFAULTS = DitherConfig()


# -- single-image command ----------------------------------------------

@app.command()
def single(
    image: Path = typer.Argument(..., help="Path to the source image"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Output file (default: <stem>_dithered.png)",
    ),
    kernel: str = typer.Option(
        _DEFAULTS.kernel, "--kernel", "-k", help="Diffusion kernel name",
    ),
    threshold: int = typer.Option(
        _DEFAULTS.threshold, "--threshold", "-t", min=0, max=256,
        help="Intensities >= threshold become white",
    ),
    boundary: str = typer.Option(
        _DEFAULTS.boundary, "--boundary", help="'full' or 'legacy'",
    ),
    seed: int | None = typer.Option(
        _DEFAULTS.seed, "--seed", "-s", help="Seed for the random kernel",
    ),
    max_side: int | None = typer.Option(
        _DEFAULTS.max_side, "--max-side", "-m", min=1,
        help="Shrink so the longest side is at most this (default: full size, slow for large photos)",
    ),
    upscale: int = typer.Option(
        _DEFAULTS.pixel_upscale, "--upscale", "-u", min=1, help="Pixel upscale factor",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Dither a single image."""
    _setup_logging(verbose)
    k = _resolve_kernel(kernel)
    _check_boundary(boundary)

    gray = _load_or_exit(image, max_side)
    h, w = gray.shape

    out = output or derive_output_path(
        image, suffix=_DEFAULTS.output_suffix, fmt=_DEFAULTS.output_format,
    )

    t0 = time.perf_counter()
    result, processed = _run(gray, k, threshold, boundary, seed)
    elapsed = time.perf_counter() - t0
    logger.debug("Dithered %d pixels in %.2f s", processed, elapsed)

    save_image(result, out, upscale)

    err = mean_intensity_error(gray, result)
    console.print(
        f"[green]✓[/green] Saved to {out}  "
        f"[dim]{w}x{h}  kernel={k.name}  tone error={err:.1f}"
        f"  time={elapsed:.1f}s[/dim]"
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
    kernel: str = typer.Option(
        _DEFAULTS.kernel, "--kernel", "-k", help="Diffusion kernel name",
    ),
    threshold: int = typer.Option(
        _DEFAULTS.threshold, "--threshold", "-t", min=0, max=256,
    ),
    boundary: str = typer.Option(_DEFAULTS.boundary, "--boundary"),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    max_side: int | None = typer.Option(
        _DEFAULTS.max_side, "--max-side", "-m", min=1,
        help="Shrink so the longest side is at most this (default: full size, slow for large photos)",
    ),
    upscale: int = typer.Option(_DEFAULTS.pixel_upscale, "--upscale", "-u", min=1),
    comparison: bool = typer.Option(
        _DEFAULTS.save_comparison, "--comparison/--no-comparison",
        help="Also save a source | dithered sheet",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Dither every image in INPUT_DIR and write results to OUTPUT_DIR."""
    _setup_logging(verbose)
    k = _resolve_kernel(kernel)
    _check_boundary(boundary)

    cfg = DitherConfig(
        kernel=k.name,
        threshold=threshold,
        boundary=boundary,
        seed=seed,
        max_side=max_side,
        pixel_upscale=upscale,
        save_comparison=comparison,
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
        f"[bold]BITDITHER[/bold]\n"
        f"Kernel: {cfg.kernel}  |  Threshold: {cfg.threshold}\n"
        f"Boundary: {cfg.boundary}  |  Images: {len(images)}",
        border_style="cyan",
    ))

    failures = 0
    for idx, img_path in enumerate(images, 1):
        console.rule(f"[bold cyan][{idx}/{len(images)}] {img_path.name}[/bold cyan]")
        t_total = time.perf_counter()

        try:
            gray = load_grayscale(img_path, cfg.max_side)
        except UnidentifiedImageError:
            logger.warning("Skipping %s: unsupported image format", img_path.name)
            failures += 1
            continue
        except OSError as exc:
            logger.warning("Skipping %s: %s", img_path.name, exc)
            failures += 1
            continue
        h, w = gray.shape
        logger.info("Source: %dx%d = %d pixels", w, h, w * h)

        result, _ = _run(gray, k, cfg.threshold, cfg.boundary, cfg.seed)

        out_path = derive_output_path(
            img_path, output_dir, cfg.output_suffix, fmt=cfg.output_format,
        )
        save_image(result, out_path, cfg.pixel_upscale)

        if cfg.save_comparison:
            comp_path = derive_output_path(
                img_path, output_dir, "comparison", fmt=cfg.output_format,
            )
            make_comparison_grid(
                [gray, result], ["Source", cfg.kernel], comp_path, cfg.pixel_upscale,
            )

        err = mean_intensity_error(gray, result)
        elapsed = time.perf_counter() - t_total
        console.print(
            f"  [green]✓[/green] {out_path.name}  "
            f"[dim]{w}x{h}  tone error={err:.1f}  time={elapsed:.1f}s[/dim]"
        )

    console.print(Panel.fit(
        f"[bold green]ALL DONE[/bold green] - results in [bold]{output_dir}/[/bold]",
        border_style="green",
    ))
    if failures:
        raise typer.Exit(1)


# -- comparison sheet --------------------------------------------------

@app.command()
def compare(
    image: Path = typer.Argument(..., help="Path to the source image"),
    output: Path | None = typer.Option(None, "--output", "-o"),
    kernels: str | None = typer.Option(
        None, "--kernels", help="Comma-separated kernel names (default: all)",
    ),
    threshold: int = typer.Option(_DEFAULTS.threshold, "--threshold", "-t", min=0, max=256),
    boundary: str = typer.Option(_DEFAULTS.boundary, "--boundary"),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", "-s"),
    max_side: int | None = typer.Option(128, "--max-side", "-m", min=1),
    upscale: int = typer.Option(2, "--upscale", "-u", min=1),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Render the source next to one dither per kernel."""
    _setup_logging(verbose)
    _check_boundary(boundary)
    names = (
        [n.strip() for n in kernels.split(",") if n.strip()]
        if kernels else KERNEL_NAMES
    )
    selected = [_resolve_kernel(n) for n in names]

    gray = _load_or_exit(image, max_side)
    out = output or derive_output_path(
        image, suffix="comparison", fmt=_DEFAULTS.output_format,
    )

    panels = [gray]
    labels = ["Source"]
    for k in selected:
        logger.info("Dithering with %s ...", k.name)
        result, _ = _run(gray, k, threshold, boundary, seed)
        panels.append(result)
        labels.append(k.name)

    make_comparison_grid(panels, labels, out, upscale)
    console.print(f"[green]✓[/green] Saved to {out}  [dim]{len(selected)} kernels[/dim]")


# -- kernel listing ----------------------------------------------------

@app.command(name="kernels")
def list_kernels() -> None:
    """List the available diffusion kernels."""
    table = Table(title="Diffusion kernels")
    table.add_column("Name", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Conserves", justify="center")
    table.add_column("Description", style="dim")
    for name in KERNEL_NAMES:
        k = KERNELS[name]
        table.add_row(
            k.name,
            str(len(k.entries)),
            str(k.weight_total),
            "yes" if k.conserves_error else "no",
            k.description,
        )
    console.print(table)


if __name__ == "__main__":
    app()
