"""Image export for rendered pixel buffers.

Supported formats:
    - BMP (32-bit BGRA, bottom-up rows, via Pillow)
    - PNG (8-bit RGB via Pillow)

The pixel values are already sRGB encoded by the renderer, so export is a
pure repacking step: no tone mapping or gamma correction happens here.

Example:
    >>> from tiletracer.output.export import save_image
    >>> from tiletracer.core.engine import render_scene
    >>> result = render_scene(scene, settings)
    >>> save_image(result.image, "render.bmp")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from tiletracer.output.image import ImageBuffer

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".bmp", ".png")


def save_bitmap(image: ImageBuffer, filepath: str | Path) -> None:
    """Save the buffer as a 32-bit BMP file.

    Pillow writes RGBA images as 32 bits per pixel in B, G, R, A byte order
    with the bottom row first, which is exactly the layout of the packed
    buffer.

    Args:
        image: The rendered image.
        filepath: Output file path.
    """
    pil_image = PILImage.fromarray(image.to_rgba())
    pil_image.save(filepath, format="BMP")
    logger.info("Saved %dx%d bitmap: %s", image.width, image.height, filepath)


def save_png(image: ImageBuffer, filepath: str | Path) -> None:
    """Save the buffer as an 8-bit RGB PNG file.

    Args:
        image: The rendered image.
        filepath: Output file path.
    """
    pil_image = PILImage.fromarray(image.to_rgb())
    pil_image.save(filepath, format="PNG")
    logger.info("Saved %dx%d PNG: %s", image.width, image.height, filepath)


def save_image(image: ImageBuffer, filepath: str | Path) -> Path:
    """Save the buffer in the format given by the file suffix.

    Args:
        image: The rendered image.
        filepath: Output file path ending in .bmp or .png.

    Returns:
        The output path.

    Raises:
        ValueError: If the suffix is not a supported format.
    """
    path = Path(filepath)
    suffix = path.suffix.lower()

    if suffix == ".bmp":
        save_bitmap(image, path)
    elif suffix == ".png":
        save_png(image, path)
    else:
        raise ValueError(
            f"Unsupported image format '{suffix}', expected one of {SUPPORTED_SUFFIXES}"
        )

    return path


def load_rgb(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load an exported image as an (H, W, 3) uint8 RGB array, top row first."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
