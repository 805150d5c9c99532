"""Partitioning of the image into tile batches.

The image is cut into a grid of tiles, ``tile_width`` x ``tile_height``
pixels each, with the last column and row clipped to the image edge. Tiles
are ordered row by row, left to right, starting at the bottom-left corner.

The tiles exactly cover ``[0, width) x [0, height)`` without overlapping. This
is what lets worker threads write pixels without any synchronization: no two
tiles share a pixel.

Example:
    >>> from tiletracer.core.tiles import partition_image
    >>> from tiletracer.output.image import ImageBuffer
    >>> from tiletracer.scene.scene import Scene
    >>> batches = partition_image(Scene(), ImageBuffer(100, 70), 64, 64)
    >>> [(b.x_min, b.y_min, b.one_past_x_max, b.one_past_y_max) for b in batches]
    [(0, 0, 64, 64), (64, 0, 100, 64), (0, 64, 64, 70), (64, 64, 100, 70)]
"""

from dataclasses import dataclass

from tiletracer.core.random_series import RandomSeries, tile_seed
from tiletracer.output.image import ImageBuffer
from tiletracer.scene.scene import Scene


@dataclass(frozen=True, eq=False)
class TileBatch:
    """One rectangular unit of rendering work.

    Created once during partitioning and read-only afterwards.

    Attributes:
        scene: The scene to render.
        image: The shared output buffer.
        x_min: First pixel column of the tile.
        y_min: First pixel row of the tile.
        one_past_x_max: One past the last pixel column.
        one_past_y_max: One past the last pixel row.
        entropy: Seed of the tile's random series.
    """

    scene: Scene
    image: ImageBuffer
    x_min: int
    y_min: int
    one_past_x_max: int
    one_past_y_max: int
    entropy: int

    @property
    def width(self) -> int:
        """Tile width in pixels."""
        return self.one_past_x_max - self.x_min

    @property
    def height(self) -> int:
        """Tile height in pixels."""
        return self.one_past_y_max - self.y_min

    @property
    def pixel_count(self) -> int:
        """Number of pixels in the tile."""
        return self.width * self.height

    def new_series(self) -> RandomSeries:
        """Create the tile's random series, starting from its seed."""
        return RandomSeries(self.entropy)


def partition_image(
    scene: Scene,
    image: ImageBuffer,
    tile_width: int,
    tile_height: int,
) -> list[TileBatch]:
    """Split an image into tile batches.

    Args:
        scene: The scene every tile renders.
        image: The output buffer the tiles write into.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.

    Returns:
        The tile batches, ordered row by row from the bottom-left.

    Raises:
        ValueError: If a tile dimension is not positive.
    """
    if tile_width <= 0 or tile_height <= 0:
        raise ValueError(f"Tile dimensions must be positive, got {tile_width}x{tile_height}")

    tile_count_x = (image.width + tile_width - 1) // tile_width
    tile_count_y = (image.height + tile_height - 1) // tile_height

    batches = []
    for tile_y in range(tile_count_y):
        min_y = tile_y * tile_height
        one_past_max_y = min(min_y + tile_height, image.height)

        for tile_x in range(tile_count_x):
            min_x = tile_x * tile_width
            one_past_max_x = min(min_x + tile_width, image.width)

            batches.append(
                TileBatch(
                    scene=scene,
                    image=image,
                    x_min=min_x,
                    y_min=min_y,
                    one_past_x_max=one_past_max_x,
                    one_past_y_max=one_past_max_y,
                    entropy=tile_seed(tile_x, tile_y),
                )
            )

    return batches
