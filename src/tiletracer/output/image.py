"""In-memory image buffer of packed BGRA pixels.

The buffer is a flat, row-major NumPy ``uint32`` array of
``width * height`` pixels. Row 0 is the bottom row of the view, the same
bottom-up order a BMP file stores its rows in.

Worker threads write into disjoint rectangles of one shared buffer, so no
locking is needed; ``set_pixel`` still bounds-checks every write.

Example:
    >>> from tiletracer.output.image import ImageBuffer
    >>> image = ImageBuffer(4, 2)
    >>> image.set_pixel(3, 1, 0xFF102030)
    >>> hex(image.get_pixel(3, 1))
    '0xff102030'
"""

import numpy as np
import numpy.typing as npt


class ImageBuffer:
    """A pre-allocated buffer of packed 32-bit pixels.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Flat uint32 array of length width * height.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a zero-filled (transparent black) buffer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

        self._width = width
        self._height = height
        self.pixels = np.zeros(width * height, dtype=np.uint32)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def pixel_count(self) -> int:
        """Total number of pixels."""
        return self._width * self._height

    def pixel_index(self, x: int, y: int) -> int:
        """Flat index of pixel (x, y).

        Raises:
            IndexError: If (x, y) lies outside the image.
        """
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside image of size {self._width}x{self._height}"
            )
        return x + y * self._width

    def set_pixel(self, x: int, y: int, value: int) -> None:
        """Write one packed pixel."""
        self.pixels[self.pixel_index(x, y)] = value

    def get_pixel(self, x: int, y: int) -> int:
        """Read one packed pixel."""
        return int(self.pixels[self.pixel_index(x, y)])

    def to_array(self) -> npt.NDArray[np.uint32]:
        """Return a (height, width) copy of the packed pixels, bottom row first."""
        return self.pixels.reshape(self._height, self._width).copy()

    def to_rgba(self) -> npt.NDArray[np.uint8]:
        """Unpack into an 8-bit (height, width, 4) RGBA array, top row first.

        This is the usual orientation for image libraries and display.
        """
        packed = np.flipud(self.pixels.reshape(self._height, self._width))
        rgba = np.empty((self._height, self._width, 4), dtype=np.uint8)
        rgba[..., 0] = (packed >> 16) & 0xFF
        rgba[..., 1] = (packed >> 8) & 0xFF
        rgba[..., 2] = packed & 0xFF
        rgba[..., 3] = (packed >> 24) & 0xFF
        return rgba

    def to_rgb(self) -> npt.NDArray[np.uint8]:
        """Unpack into an 8-bit (height, width, 3) RGB array, top row first."""
        return np.ascontiguousarray(self.to_rgba()[..., :3])

    def tobytes(self) -> bytes:
        """Raw little-endian pixel bytes (B, G, R, A per pixel), bottom row first."""
        return self.pixels.astype("<u4").tobytes()

    def __repr__(self) -> str:
        """Return a string representation of the buffer."""
        return f"ImageBuffer(width={self._width}, height={self._height})"
