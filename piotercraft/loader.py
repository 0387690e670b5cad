"""Creation of new chunks, directly or on a background thread."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Iterable, Optional, TypeVar

from .chunk import Chunk
from .coords import ChunkCoord
from .terrain import NoiseSource
from .voxels import ChunkVoxels

T = TypeVar("T")


def _run_in_thread(work: Callable[[], T]) -> "Future[T]":
    future: Future = Future()

    def worker() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(work())
        except BaseException as exc:
            future.set_exception(exc)

    threading.Thread(target=worker, daemon=True).start()
    return future


class ChunkLoader:
    """Generates the chunks around the camera that are not loaded yet."""

    def __init__(
        self,
        render_distance: int,
        chunk_size: int,
        noise: Optional[NoiseSource] = None,
        tree_rng=None,
    ) -> None:
        self.render_distance = render_distance
        self.chunk_size = chunk_size
        self._noise = noise
        self._tree_rng = tree_rng
        self._pending: Optional[Future] = None
        self._running = False

    def create_chunk(self, x: int, z: int) -> Chunk:
        """Generate the chunk at chunk index ``(x, z)``."""
        return Chunk(
            ChunkVoxels(
                self.chunk_size, x, z, tree_rng=self._tree_rng, noise=self._noise
            )
        )

    def launch_task(
        self, cam_chunk_x: int, cam_chunk_z: int, existing_keys: Iterable[ChunkCoord]
    ) -> None:
        """Start generating, in the background, every missing chunk in range."""
        existing = frozenset(existing_keys)
        self._pending = _run_in_thread(
            lambda: self._generate_missing_chunks(cam_chunk_x, cam_chunk_z, existing)
        )
        self._running = True

    def is_task_running(self) -> bool:
        return self._running

    def is_finished(self) -> bool:
        """True when a launched task has produced its chunks."""
        return self._running and self._pending is not None and self._pending.done()

    def retrieve_new_chunks(self) -> dict[ChunkCoord, Chunk]:
        """Wait for the launched task and return its chunks by coordinate."""
        if self._pending is None:
            raise RuntimeError("no chunk generation task has been launched")
        self._running = False
        pending, self._pending = self._pending, None
        return pending.result()

    def _generate_missing_chunks(
        self, cam_chunk_x: int, cam_chunk_z: int, existing: frozenset
    ) -> dict[ChunkCoord, Chunk]:
        distance = self.render_distance
        new_chunks: dict[ChunkCoord, Chunk] = {}
        for x in range(cam_chunk_x - distance, cam_chunk_x + distance + 1):
            for z in range(cam_chunk_z - distance, cam_chunk_z + distance + 1):
                coord = ChunkCoord(x, z)
                if coord not in existing:
                    new_chunks[coord] = self.create_chunk(x, z)
        return new_chunks