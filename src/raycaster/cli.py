"""Command-line entry point: render the four-sphere scene.

Usage:
    raycaster [options] > spheres.ppm
    python -m raycaster.cli [options]

Options:
    --width WIDTH           Image width in pixels (default: 1024)
    --height HEIGHT         Image height in pixels (default: 768)
    --output PATH           Output file path (default: PPM on stdout)
    --format {ppm,png}      Output format (default: from the output suffix, else ppm)
    --arch {cpu,gpu}        Taichi backend (default: cpu)
    --legacy-light-point    Measure light directions from the fixed point (1, 1, 1)
    --quiet                 Suppress progress output
    -v, --verbose           Enable debug logging (Python loggers only)

Image data and progress never share a stream: the image goes to stdout or
the output file, progress and log messages go to stderr.

Example:
    raycaster --width 320 --height 240 --output spheres.png
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

FORMATS = ("ppm", "png")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="raycaster",
        description="Render the four-sphere scene as a PPM or PNG image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file path (default: write PPM to stdout)",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: inferred from --output, else ppm)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--legacy-light-point",
        action="store_true",
        help="Measure light directions from the fixed point (1, 1, 1)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def resolve_format(output: str | None, fmt: str | None) -> str:
    """Pick the output format.

    Args:
        output: Output path, or None for stdout.
        fmt: Explicit format, or None to infer one.

    Returns:
        "ppm" or "png".

    Raises:
        ValueError: If PNG is requested without an output file.
    """
    if fmt is None:
        fmt = "png" if output is not None and Path(output).suffix.lower() == ".png" else "ppm"
    if fmt == "png" and output is None:
        raise ValueError("PNG output needs --output")
    return fmt


def render_default_scene(args: argparse.Namespace) -> int:
    """Render the default scene as described by parsed arguments.

    Taichi must already be initialized.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Process exit code: 0 on success, 1 on failure.
    """
    try:
        fmt = resolve_format(args.output, args.format)

        # Lazy imports to allow Taichi initialization first
        from raycaster.core.renderer import Renderer
        from raycaster.scene.default_scene import create_default_scene
        from raycaster.scene.manager import SceneManager

        config, settings = create_default_scene(
            width=args.width,
            height=args.height,
            legacy_light_point=args.legacy_light_point,
        )
        manager = SceneManager()
        manager.load(config)
        renderer = Renderer(settings)

        def progress_callback(done: int, total: int) -> None:
            if not args.quiet:
                print(f"\rScanlines remaining: {total - done} ", end="", file=sys.stderr, flush=True)

        if args.output is None:
            renderer.render_to(sys.stdout, progress_callback)
            sys.stdout.flush()
        elif fmt == "png":
            renderer.save_png(args.output, progress_callback)
        else:
            renderer.save_ppm(args.output, progress_callback)

        if not args.quiet:
            print("\nDone.", file=sys.stderr)
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Taichi prints its banner and backend line to stdout, which may carry
    # the image
    os.environ.setdefault("ENABLE_TAICHI_HEADER_PRINT", "False")
    with contextlib.redirect_stdout(sys.stderr):
        import taichi as ti

        arch = ti.gpu if args.arch == "gpu" else ti.cpu
        ti.init(arch=arch, log_level=ti.WARN)
    logger.debug("Taichi initialized (arch=%s)", args.arch)

    return render_default_scene(args)


if __name__ == "__main__":
    sys.exit(main())
