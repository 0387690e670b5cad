"""Background recomputation of a chunk's cube data."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Optional, TypeVar

from .cube import CubeData

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


class ChunkUpdater:
    """Computes a chunk's cube data on a worker thread and applies it when ready.

    ``chunk`` needs ``compute_cube_data()``, ``apply_cube_data(data)`` and
    ``clear_neighbors_surrounding_cubes()``; it may be None.
    """

    def __init__(self, chunk) -> None:
        self.chunk = chunk
        self._result: Optional[Future] = None
        self._updating = False

    def is_update_running(self) -> bool:
        return self._updating

    def launch_update(self) -> None:
        """Start a background computation unless one is already running."""
        if self._updating:
            return
        self._updating = True
        target = self.chunk
        self._result = _run_in_thread(
            lambda: target.compute_cube_data() if target is not None else CubeData()
        )

    def check_and_apply_update(self) -> None:
        """Apply the finished computation to the chunk, if there is one."""
        if not self._updating or self.chunk is None or self._result is None:
            return
        if not self._result.done():
            return
        data = self._result.result()
        self.chunk.apply_cube_data(data)
        self.chunk.clear_neighbors_surrounding_cubes()
        self._updating = False