"""Shared tile queue and its atomic counters.

The queue is the only mutable state shared between worker threads. A tile
batch moves through three states:

    Pending --claim()--> Claimed --complete()--> Done

- Claiming is a single atomic increment of ``next_tile_batch_index``. The
  value before the increment is the index of the claimed batch; an index at
  or past ``tile_batch_count`` means the queue is exhausted. A batch is never
  handed out twice and never goes back to Pending.
- Completing adds the tile's bounce count to ``bounces_computed`` and bumps
  ``tiles_done``.

The render is finished when ``tiles_done == tile_batch_count``.

Example:
    >>> from tiletracer.core.queue import TileQueue
    >>> queue = TileQueue(batches)
    >>> while (claimed := queue.claim()) is not None:
    ...     index, batch = claimed
    ...     bounces = render(batch)
    ...     queue.complete(bounces)
"""

from __future__ import annotations

import itertools
import sys
import threading
from collections.abc import Sequence

from tiletracer.core.tiles import TileBatch


def gil_enabled() -> bool:
    """Whether the interpreter runs with the global interpreter lock.

    Always True before Python 3.13; free-threaded builds may run without it.
    """
    check = getattr(sys, "_is_gil_enabled", None)
    return True if check is None else check()


class AtomicCounter:
    """An integer counter with an atomic fetch-and-add.

    Python has no atomic integer type, so the read-modify-write is guarded by
    a private lock that is held for that one step only. Reads of ``value``
    need no lock.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self, initial: int = 0) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def fetch_add(self, amount: int = 1) -> int:
        """Add to the counter and return its previous value."""
        with self._lock:
            previous = self._value
            self._value = previous + amount
        return previous

    @property
    def value(self) -> int:
        """The current value."""
        return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self._value})"


class TileQueue:
    """Work queue of tile batches shared by all workers.

    Attributes:
        tile_batches: The batches, in claim order.
        tile_batch_count: Number of batches.
        next_tile_batch_index: Claim ticket counter. With the GIL held,
            ``next()`` on an ``itertools.count`` is a single atomic step.
            Free-threaded builds give no such guarantee, so there the
            increment is guarded by a lock.
        bounces_computed: Total bounces traced by completed tiles.
        tiles_done: Number of completed tiles.
    """

    def __init__(self, tile_batches: Sequence[TileBatch]) -> None:
        self.tile_batches = tuple(tile_batches)
        self.tile_batch_count = len(self.tile_batches)
        self.next_tile_batch_index = itertools.count()
        self._claim_lock = None if gil_enabled() else threading.Lock()
        self.bounces_computed = AtomicCounter()
        self.tiles_done = AtomicCounter()

    def claim(self) -> tuple[int, TileBatch] | None:
        """Claim the next pending batch.

        Returns:
            A tuple of (index, batch), or None once the queue is exhausted.
            Exhaustion is the normal end of a worker's loop, not an error.
        """
        if self._claim_lock is None:
            index = next(self.next_tile_batch_index)
        else:
            with self._claim_lock:
                index = next(self.next_tile_batch_index)
        if index >= self.tile_batch_count:
            return None
        return index, self.tile_batches[index]

    def complete(self, bounces: int) -> int:
        """Mark one claimed batch as done.

        Args:
            bounces: Bounces traced while rendering the batch.

        Returns:
            The number of tiles done, including this one.
        """
        self.bounces_computed.fetch_add(bounces)
        return self.tiles_done.fetch_add(1) + 1

    @property
    def is_done(self) -> bool:
        """Whether every batch has been completed."""
        return self.tiles_done.value == self.tile_batch_count

    @property
    def progress(self) -> float:
        """Fraction of batches completed, in [0, 1]."""
        if self.tile_batch_count == 0:
            return 1.0
        return self.tiles_done.value / self.tile_batch_count

    def __len__(self) -> int:
        return self.tile_batch_count

    def __repr__(self) -> str:
        return (
            f"TileQueue(tiles={self.tile_batch_count}, done={self.tiles_done.value}, "
            f"bounces={self.bounces_computed.value})"
        )
