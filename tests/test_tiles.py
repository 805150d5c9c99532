"""Unit tests for image partitioning and the tile queue.

Tests cover:
- Exact, non-overlapping coverage of the image by tiles
- Tile order, edge clipping and seeds
- Claim order and exhaustion of the queue
- Concurrent claims and atomic counters
"""

import threading

import numpy as np
import pytest

from tiletracer.core import queue as queue_module
from tiletracer.core.queue import AtomicCounter, TileQueue
from tiletracer.core.random_series import RandomSeries, tile_seed
from tiletracer.core.tiles import partition_image
from tiletracer.output.image import ImageBuffer
from tiletracer.scene.scene import Scene


def make_queue(width: int = 32, height: int = 32, tile: int = 8) -> TileQueue:
    """Create a queue over an image of the given size."""
    return TileQueue(partition_image(Scene(), ImageBuffer(width, height), tile, tile))


class TestPartitionImage:
    """Tests for partition_image."""

    @pytest.mark.parametrize(
        "width, height, tile_width, tile_height",
        [
            (32, 32, 8, 8),
            (100, 70, 64, 64),
            (33, 17, 8, 5),
            (5, 5, 64, 64),
            (1, 1, 1, 1),
            (1280, 720, 64, 64),
        ],
    )
    def test_tiles_cover_image_exactly_once(self, width, height, tile_width, tile_height):
        """Test that every pixel belongs to exactly one tile."""
        batches = partition_image(Scene(), ImageBuffer(width, height), tile_width, tile_height)
        coverage = np.zeros((height, width), dtype=np.int32)
        for batch in batches:
            assert batch.width > 0
            assert batch.height > 0
            coverage[batch.y_min : batch.one_past_y_max, batch.x_min : batch.one_past_x_max] += 1
        assert np.all(coverage == 1)

    @pytest.mark.parametrize(
        "width, height, tile, expected",
        [(32, 32, 8, 16), (100, 70, 64, 4), (1280, 720, 64, 240), (5, 5, 64, 1)],
    )
    def test_tile_count(self, width, height, tile, expected):
        """Test the number of tiles, rounding partial tiles up."""
        assert len(partition_image(Scene(), ImageBuffer(width, height), tile, tile)) == expected

    def test_edge_tiles_are_clipped(self):
        """Test the bounds of a 100x70 image cut into 64x64 tiles."""
        batches = partition_image(Scene(), ImageBuffer(100, 70), 64, 64)
        bounds = [(b.x_min, b.y_min, b.one_past_x_max, b.one_past_y_max) for b in batches]
        assert bounds == [(0, 0, 64, 64), (64, 0, 100, 64), (0, 64, 64, 70), (64, 64, 100, 70)]
        assert batches[-1].pixel_count == 36 * 6

    def test_order_is_row_major_from_bottom_left(self):
        """Test that tiles go left to right, then up."""
        batches = partition_image(Scene(), ImageBuffer(24, 16), 8, 8)
        origins = [(b.x_min, b.y_min) for b in batches]
        assert origins == [(0, 0), (8, 0), (16, 0), (0, 8), (8, 8), (16, 8)]

    def test_seeds_come_from_tile_coordinates(self):
        """Test that each tile is seeded from its grid position."""
        batches = partition_image(Scene(), ImageBuffer(24, 16), 8, 8)
        seeds = [b.entropy for b in batches]
        expected = [tile_seed(x, y) for y in range(2) for x in range(3)]
        assert seeds == expected

    def test_new_series_starts_at_seed(self):
        """Test that every call gives a fresh series from the tile seed."""
        batch = partition_image(Scene(), ImageBuffer(24, 16), 8, 8)[4]
        first = batch.new_series()
        first.next_u32()
        second = batch.new_series()
        assert isinstance(second, RandomSeries)
        assert second.state == tile_seed(1, 1)

    def test_origin_tile_draws_minus_one(self):
        """Test that the bottom-left tile has a zero seed and draws a constant -1."""
        batch = partition_image(Scene(), ImageBuffer(24, 16), 8, 8)[0]
        assert batch.entropy == 0
        series = batch.new_series()
        assert [series.uniform_signed() for _ in range(4)] == [-1.0] * 4

    def test_batches_share_scene_and_image(self):
        """Test that all batches point at the same scene and buffer."""
        scene = Scene()
        image = ImageBuffer(16, 16)
        batches = partition_image(scene, image, 8, 8)
        assert all(b.scene is scene and b.image is image for b in batches)

    @pytest.mark.parametrize("tile_width, tile_height", [(0, 8), (8, 0), (-8, 8)])
    def test_invalid_tile_size(self, tile_width, tile_height):
        """Test that non-positive tile sizes are rejected."""
        with pytest.raises(ValueError, match="positive"):
            partition_image(Scene(), ImageBuffer(16, 16), tile_width, tile_height)


class TestAtomicCounter:
    """Tests for AtomicCounter."""

    def test_fetch_add_returns_previous(self):
        """Test fetch-and-add semantics."""
        counter = AtomicCounter(5)
        assert counter.fetch_add(3) == 5
        assert counter.value == 8
        assert counter.fetch_add() == 8
        assert counter.value == 9

    def test_concurrent_increments(self):
        """Test that concurrent increments are never lost or duplicated."""
        counter = AtomicCounter()
        thread_count = 8
        per_thread = 1000
        barrier = threading.Barrier(thread_count)
        seen = [[] for _ in range(thread_count)]

        def work(slot):
            barrier.wait()
            for _ in range(per_thread):
                seen[slot].append(counter.fetch_add(1))

        threads = [threading.Thread(target=work, args=(i,)) for i in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert counter.value == thread_count * per_thread
        previous = sorted(value for values in seen for value in values)
        assert previous == list(range(thread_count * per_thread))


class TestTileQueue:
    """Tests for TileQueue."""

    def test_initial_state(self):
        """Test a fresh queue."""
        queue = make_queue()
        assert len(queue) == queue.tile_batch_count == 16
        assert queue.tiles_done.value == 0
        assert queue.bounces_computed.value == 0
        assert not queue.is_done
        assert queue.progress == 0.0

    def test_claims_in_order(self):
        """Test that claims hand out batches in index order."""
        queue = make_queue()
        claimed = [queue.claim() for _ in range(16)]
        assert [index for index, _ in claimed] == list(range(16))
        assert [batch for _, batch in claimed] == list(queue.tile_batches)

    def test_exhausted_queue_returns_none(self):
        """Test that claims past the end keep returning None."""
        queue = make_queue(tile=16)
        for _ in range(4):
            assert queue.claim() is not None
        assert queue.claim() is None
        assert queue.claim() is None

    def test_complete_counts(self):
        """Test that completing tiles accumulates bounces and progress."""
        queue = make_queue(tile=16)
        assert queue.complete(100) == 1
        assert queue.complete(50) == 2
        assert queue.bounces_computed.value == 150
        assert queue.progress == 0.5
        queue.complete(0)
        queue.complete(1)
        assert queue.is_done
        assert queue.progress == 1.0

    def test_empty_queue(self):
        """Test a queue with no batches."""
        queue = TileQueue([])
        assert queue.claim() is None
        assert queue.is_done
        assert queue.progress == 1.0

    def test_concurrent_claims_are_unique(self):
        """Test that racing workers never claim the same batch twice."""
        queue = make_queue(width=128, height=128, tile=4)
        thread_count = 8
        barrier = threading.Barrier(thread_count)
        claimed = [[] for _ in range(thread_count)]

        def work(slot):
            barrier.wait()
            while (result := queue.claim()) is not None:
                claimed[slot].append(result[0])
                queue.complete(1)

        threads = [threading.Thread(target=work, args=(i,)) for i in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        indices = sorted(index for values in claimed for index in values)
        assert indices == list(range(queue.tile_batch_count))
        assert queue.is_done
        assert queue.bounces_computed.value == queue.tile_batch_count

    def test_claims_locked_without_gil(self, monkeypatch):
        """Test that claims take a lock when the interpreter runs without the GIL."""
        monkeypatch.setattr(queue_module, "gil_enabled", lambda: False)
        queue = make_queue(width=64, height=64, tile=4)
        assert queue._claim_lock is not None
        thread_count = 8
        barrier = threading.Barrier(thread_count)
        claimed = [[] for _ in range(thread_count)]

        def work(slot):
            barrier.wait()
            while (result := queue.claim()) is not None:
                claimed[slot].append(result[0])

        threads = [threading.Thread(target=work, args=(i,)) for i in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        indices = sorted(index for values in claimed for index in values)
        assert indices == list(range(queue.tile_batch_count))

    def test_gil_enabled_is_bool(self):
        """Test that the GIL check reports a plain bool."""
        assert isinstance(queue_module.gil_enabled(), bool)

    def test_repr(self):
        """Test the queue repr."""
        queue = make_queue(tile=16)
        queue.complete(7)
        assert repr(queue) == "TileQueue(tiles=4, done=1, bounces=7)"
