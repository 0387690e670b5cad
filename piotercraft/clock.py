"""Frame timing and frames-per-second measurement."""

from __future__ import annotations

import time


class Clock:
    """Measures the time between frames and averages FPS over an interval."""

    def __init__(self, fps_update_interval: float = 1.0) -> None:
        self.delta_time = 0.0
        self.fps = 0
        self.fps_update_interval = fps_update_interval
        self._last_frame = 0.0
        self._fps_timer = 0.0
        self._frame_count = 0
        self._start = time.perf_counter()

    def tick(self, now: float | None = None) -> int:
        """Record a frame at ``now`` (seconds since the clock started) and return the FPS."""
        if now is None:
            now = time.perf_counter() - self._start
        self.delta_time = now - self._last_frame
        self._last_frame = now
        self._fps_timer += self.delta_time
        self._frame_count += 1
        if self._fps_timer >= self.fps_update_interval:
            self.fps = int(self._frame_count / self._fps_timer)
            self._frame_count = 0
            self._fps_timer = 0.0
        return self.fps