"""Output module for rendered images.

Components:
    image: ImageBuffer, the shared buffer of packed BGRA pixels
    export: BMP/PNG export via Pillow

Example:
    >>> from tiletracer.output import ImageBuffer, save_image
    >>> image = ImageBuffer(320, 180)
    >>> save_image(image, "blank.bmp")
"""

from tiletracer.output.export import (
    SUPPORTED_SUFFIXES,
    load_rgb,
    save_bitmap,
    save_image,
    save_png,
)
from tiletracer.output.image import ImageBuffer

__all__ = [
    "ImageBuffer",
    "SUPPORTED_SUFFIXES",
    "load_rgb",
    "save_bitmap",
    "save_image",
    "save_png",
]
