#!/usr/bin/env python3
"""Render the default sphere scene.

This script renders the demo scene (a metallic ground plane with mirror,
emissive and colored spheres) with the multi-threaded tile renderer and
writes the result as a BMP or PNG file.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH           Image width in pixels (default: 1280)
    --height HEIGHT         Image height in pixels (default: 720)
    --workers COUNT         Worker threads, including the main thread (default: 8)
    --tile-size SIZE        Tile width and height in pixels (default: 64)
    --rays RAYS             Rays per pixel (default: 512)
    --bounces BOUNCES       Maximum bounces per ray (default: 8)
    --output OUTPUT         Output file path, .bmp or .png (default: render.bmp)
    --quiet                 Suppress progress output
    --verbose               Enable debug logging

Example:
    python examples/render_spheres.py --width 320 --height 180 --rays 32
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from tiletracer.core.engine import TileRenderer
from tiletracer.core.settings import (
    DEFAULT_IMAGE_HEIGHT,
    DEFAULT_IMAGE_WIDTH,
    DEFAULT_MAX_BOUNCE_COUNT,
    DEFAULT_RAYS_PER_PIXEL,
    DEFAULT_TILE_SIZE,
    DEFAULT_WORKER_COUNT,
    RenderSettings,
)
from tiletracer.output.export import save_image
from tiletracer.scene.default_scene import create_default_scene


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_IMAGE_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_IMAGE_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_IMAGE_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_IMAGE_HEIGHT})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKER_COUNT,
        help=f"Worker threads, including the main thread (default: {DEFAULT_WORKER_COUNT})",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f"Tile width and height in pixels (default: {DEFAULT_TILE_SIZE})",
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=DEFAULT_RAYS_PER_PIXEL,
        help=f"Rays per pixel (default: {DEFAULT_RAYS_PER_PIXEL})",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=DEFAULT_MAX_BOUNCE_COUNT,
        help=f"Maximum bounces per ray (default: {DEFAULT_MAX_BOUNCE_COUNT})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.bmp",
        help="Output file path, .bmp or .png (default: render.bmp)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def render_spheres(settings: RenderSettings, output_path: str, quiet: bool = False) -> Path:
    """Render the default scene and save it.

    Args:
        settings: Render settings.
        output_path: Output file path (.bmp or .png).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    scene = create_default_scene()
    renderer = TileRenderer(scene, settings)

    if not quiet:
        print(
            f"Configuration: {settings.worker_count} workers with "
            f"{settings.tile_width}x{settings.tile_height} tiles ({settings.tile_count} total)"
        )
        print(
            f"Quality: {settings.rays_per_pixel} rays/pixel, "
            f"{settings.max_bounce_count} bounces (max) per ray"
        )

    def progress_callback(tiles_done: int, tile_count: int) -> None:
        if not quiet:
            print(f"\rRay casting {100 * tiles_done // tile_count}%...", end="", flush=True)

    result = renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress
        print(f"Ray casting time: {result.elapsed_seconds * 1000.0:.0f}ms")
        print(f"Total bounces: {result.bounces_computed}")
        print(f"Performance: {result.ms_per_bounce:.6f}ms/bounce")

    start = time.perf_counter()
    output_file = save_image(result.image, output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()} ({time.perf_counter() - start:.2f}s)")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )

    try:
        settings = RenderSettings(
            image_width=args.width,
            image_height=args.height,
            worker_count=args.workers,
            tile_width=args.tile_size,
            tile_height=args.tile_size,
            rays_per_pixel=args.rays,
            max_bounce_count=args.bounces,
        )
        render_spheres(settings, args.output, quiet=args.quiet)
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
