"""Color encoding: linear radiance to sRGB and packed 32-bit BGRA pixels.

A pixel is stored as a single unsigned 32-bit integer laid out as
``0xAARRGGBB``. Written little-endian this is the B, G, R, A byte order that
32-bit BMP files expect.

Example:
    >>> from tiletracer.core.color import pack_bgra
    >>> from tiletracer.core.vector import vec3
    >>> pack_bgra(vec3(1.0, 2.0, 3.0))
    4278256131
"""

import math

import numpy as np

from tiletracer.core.vector import Vector3

# Linear values at or below the cutoff use the linear segment of the curve
LINEAR_CUTOFF = np.float32(0.0031308)
SLOPE_HORIZONTAL = np.float32(12.92)

_SRGB_SCALE = np.float32(1.055)
_SRGB_OFFSET = np.float32(0.055)
_SRGB_EXPONENT = np.float32(1.0 / 2.4)
_CHANNEL_MAX = np.float32(255.0)

OPAQUE_ALPHA = 255


def linear_to_srgb(linear: float) -> np.float32:
    """Encode a linear radiance value with the sRGB transfer function.

    The input is clamped to [0, 1] first, so the output is always in [0, 1].

    Args:
        linear: Linear channel value.

    Returns:
        The sRGB-encoded value as a float32 scalar.
    """
    value = np.clip(np.float32(linear), np.float32(0.0), np.float32(1.0))

    if value > LINEAR_CUTOFF:
        return _SRGB_SCALE * np.power(value, _SRGB_EXPONENT) - _SRGB_OFFSET
    return value * SLOPE_HORIZONTAL


def encode_color(linear_color: Vector3) -> Vector3:
    """Map a linear RGB color to sRGB channel values in [0, 255]."""
    return np.array(
        [_CHANNEL_MAX * linear_to_srgb(channel) for channel in linear_color],
        dtype=np.float32,
    )


def round_float_to_uint32(value: float) -> int:
    """Round to the nearest integer, halfway cases away from zero."""
    if value < 0.0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def pack_bgra(color: Vector3) -> int:
    """Pack 8-bit channel values into one 32-bit BGRA pixel.

    Alpha is always 255 (bits 31-24); red, green and blue are taken from the
    x, y and z components and stored in bits 23-16, 15-8 and 7-0.

    Args:
        color: Channel values in [0, 255] as (red, green, blue).

    Returns:
        The packed pixel as a Python int in [0, 2**32).
    """
    red = round_float_to_uint32(color[0]) & 0xFF
    green = round_float_to_uint32(color[1]) & 0xFF
    blue = round_float_to_uint32(color[2]) & 0xFF
    return (OPAQUE_ALPHA << 24) | (red << 16) | (green << 8) | blue


def unpack_bgra(pixel: int) -> tuple[int, int, int, int]:
    """Split a packed pixel into its (red, green, blue, alpha) channels."""
    return (
        (pixel >> 16) & 0xFF,
        (pixel >> 8) & 0xFF,
        pixel & 0xFF,
        (pixel >> 24) & 0xFF,
    )


def linear_to_pixel(linear_color: Vector3) -> int:
    """Encode a linear radiance estimate straight to a packed pixel."""
    return pack_bgra(encode_color(linear_color))
