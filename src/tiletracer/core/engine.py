"""Multi-threaded tile rendering engine.

The engine splits the image into tiles, puts them in a ``TileQueue`` and
starts ``worker_count - 1`` threads; the calling thread works as the last
worker. Every worker repeatedly claims a tile, renders all of its pixels
straight into the shared image buffer and marks it done, until the queue is
exhausted. All threads are joined before the render returns.

Workers never wait on each other. The tile rectangles are disjoint, so pixel
writes need no locking, and each tile draws from its own seeded random
series, so the image is identical whatever the thread count or scheduling.

A render can be stopped between tiles by setting a ``threading.Event``;
tiles that were never claimed stay unwritten. Failed tiles are not retried:
the first exception raised by any worker is re-raised to the caller once all
workers have stopped.

Example:
    >>> from tiletracer.core.engine import TileRenderer
    >>> from tiletracer.core.settings import RenderSettings
    >>> from tiletracer.scene.default_scene import create_default_scene
    >>>
    >>> settings = RenderSettings(image_width=128, image_height=72, rays_per_pixel=8)
    >>> renderer = TileRenderer(create_default_scene(), settings)
    >>> result = renderer.render()
    >>> result.image.pixel_count
    9216
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from tiletracer.camera.viewport import Viewport, setup_viewport, view_coordinate
from tiletracer.core.color import linear_to_pixel
from tiletracer.core.integrator import CastState, cast_rays
from tiletracer.core.queue import TileQueue
from tiletracer.core.settings import RenderSettings
from tiletracer.core.tiles import TileBatch, partition_image
from tiletracer.output.image import ImageBuffer
from tiletracer.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (tiles_done, tile_batch_count)
ProgressCallback = Callable[[int, int], None]

# Checked between tiles; returning True stops the worker
StopCheck = Callable[[], bool]


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a render.

    Attributes:
        image: The output buffer of packed BGRA pixels.
        tiles_done: Number of tiles rendered.
        tile_count: Number of tiles the image was split into.
        bounces_computed: Total bounces traced.
        elapsed_seconds: Wall-clock render time.
    """

    image: ImageBuffer
    tiles_done: int
    tile_count: int
    bounces_computed: int
    elapsed_seconds: float

    @property
    def completed(self) -> bool:
        """Whether every tile was rendered."""
        return self.tiles_done == self.tile_count

    @property
    def ms_per_bounce(self) -> float:
        """Average wall-clock milliseconds per bounce."""
        if self.bounces_computed == 0:
            return 0.0
        return 1000.0 * self.elapsed_seconds / self.bounces_computed


# =============================================================================
# Tile Rendering
# =============================================================================


def render_batch(batch: TileBatch, viewport: Viewport, settings: RenderSettings) -> int:
    """Render every pixel of one tile batch into its image.

    Args:
        batch: The claimed tile batch.
        viewport: The shared camera and film geometry.
        settings: Render settings.

    Returns:
        The number of bounces traced for the tile.
    """
    image = batch.image
    state = CastState.for_viewport(batch.scene, viewport, batch.new_series())

    for y in range(batch.y_min, batch.one_past_y_max):
        state.view_y = view_coordinate(y, image.height)
        for x in range(batch.x_min, batch.one_past_x_max):
            state.view_x = view_coordinate(x, image.width)

            final_color = cast_rays(state, settings)
            image.set_pixel(x, y, linear_to_pixel(final_color))

    return state.bounces_computed


def render_tile(queue: TileQueue, viewport: Viewport, settings: RenderSettings) -> int | None:
    """Claim and render one tile from the queue.

    Returns:
        The number of tiles done right after this tile completed, or None
        if the queue was exhausted.
    """
    claimed = queue.claim()
    if claimed is None:
        return None

    index, batch = claimed
    bounces = render_batch(batch, viewport, settings)
    tiles_done = queue.complete(bounces)

    logger.debug(
        "Tile %d (%d,%d)-(%d,%d) done: %d bounces, %d/%d tiles",
        index,
        batch.x_min,
        batch.y_min,
        batch.one_past_x_max,
        batch.one_past_y_max,
        bounces,
        tiles_done,
        queue.tile_batch_count,
    )
    return tiles_done


def worker_loop(
    queue: TileQueue,
    viewport: Viewport,
    settings: RenderSettings,
    should_stop: StopCheck | None = None,
    callback: ProgressCallback | None = None,
) -> int:
    """Render tiles until the queue is exhausted or a stop is requested.

    Args:
        queue: The shared tile queue.
        viewport: The shared camera and film geometry.
        settings: Render settings.
        should_stop: Optional check called before each claim; the loop ends
            as soon as it returns True.
        callback: Optional progress callback called after each tile this
            worker finishes, with (tiles_done, tile_batch_count). Every
            completed tile reports a distinct tiles_done value.

    Returns:
        The number of tiles this worker rendered.
    """
    rendered = 0
    while should_stop is None or not should_stop():
        tiles_done = render_tile(queue, viewport, settings)
        if tiles_done is None:
            break
        rendered += 1
        if callback is not None:
            callback(tiles_done, queue.tile_batch_count)
    return rendered


# =============================================================================
# Orchestration
# =============================================================================


class TileRenderer:
    """Renders a scene with a fixed pool of worker threads.

    The renderer owns nothing mutable between renders; every call to
    ``render()`` allocates a fresh image, partitions it and runs the workers
    to completion.

    Attributes:
        scene: The scene to render.
        settings: Render settings.
    """

    def __init__(self, scene: Scene, settings: RenderSettings | None = None) -> None:
        self._scene = scene
        self._settings = settings if settings is not None else RenderSettings()

    @property
    def scene(self) -> Scene:
        """Get the scene."""
        return self._scene

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    def build_queue(self, image: ImageBuffer) -> TileQueue:
        """Partition an image into a fresh tile queue."""
        settings = self._settings
        batches = partition_image(self._scene, image, settings.tile_width, settings.tile_height)
        return TileQueue(batches)

    def render(
        self,
        callback: ProgressCallback | None = None,
        stop_event: threading.Event | None = None,
    ) -> RenderResult:
        """Render the scene.

        Args:
            callback: Optional progress callback, called from whichever
                worker thread finished a tile with (tiles_done, tile_count).
                It must be thread-safe.
            stop_event: Optional cancellation flag. Workers stop claiming
                tiles once it is set.

        Returns:
            The RenderResult with the filled image and statistics.

        Raises:
            Exception: The first exception raised by any worker, re-raised
                after all workers have been joined.
        """
        settings = self._settings
        image = ImageBuffer(settings.image_width, settings.image_height)
        viewport = setup_viewport(settings.image_width, settings.image_height)
        queue = self.build_queue(image)

        logger.info(
            "Rendering %dx%d: %d tiles of %dx%d on %d workers, "
            "%d rays/pixel, %d bounces max",
            settings.image_width,
            settings.image_height,
            queue.tile_batch_count,
            settings.tile_width,
            settings.tile_height,
            settings.worker_count,
            settings.rays_per_pixel,
            settings.max_bounce_count,
        )

        # A failing worker stops the others at their next claim
        halt = threading.Event()
        errors: list[BaseException] = []
        errors_lock = threading.Lock()

        def should_stop() -> bool:
            return halt.is_set() or (stop_event is not None and stop_event.is_set())

        def run_worker() -> None:
            try:
                worker_loop(queue, viewport, settings, should_stop, callback)
            except BaseException as exc:
                with errors_lock:
                    errors.append(exc)
                halt.set()

        start = time.perf_counter()

        workers = [
            threading.Thread(target=run_worker, name=f"tile-worker-{index}", daemon=True)
            for index in range(1, settings.worker_count)
        ]
        for worker in workers:
            worker.start()

        # The calling thread is worker 0
        run_worker()

        for worker in workers:
            worker.join()

        elapsed = time.perf_counter() - start

        if errors:
            raise errors[0]

        result = RenderResult(
            image=image,
            tiles_done=queue.tiles_done.value,
            tile_count=queue.tile_batch_count,
            bounces_computed=queue.bounces_computed.value,
            elapsed_seconds=elapsed,
        )

        if result.completed:
            logger.info(
                "Render finished in %.2fs: %d bounces, %.6f ms/bounce",
                elapsed,
                result.bounces_computed,
                result.ms_per_bounce,
            )
        else:
            logger.warning(
                "Render stopped after %d/%d tiles", result.tiles_done, result.tile_count
            )

        return result

    def __repr__(self) -> str:
        """Return a string representation of the renderer."""
        settings = self._settings
        return (
            f"TileRenderer(width={settings.image_width}, height={settings.image_height}, "
            f"workers={settings.worker_count}, primitives={self._scene.primitive_count})"
        )


def render_scene(
    scene: Scene,
    settings: RenderSettings | None = None,
    callback: ProgressCallback | None = None,
    stop_event: threading.Event | None = None,
) -> RenderResult:
    """Render a scene in one call. See ``TileRenderer.render``."""
    return TileRenderer(scene, settings).render(callback=callback, stop_event=stop_event)
