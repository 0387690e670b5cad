"""View-frustum planes and bounding-box containment tests."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class Plane:
    """Plane ``normal · p + d = 0``."""

    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    d: float = 0.0


class Frustum:
    """Six clip planes extracted from a projection-view matrix."""

    def __init__(self, tolerance: float = 7.0) -> None:
        self.planes = [Plane() for _ in range(6)]
        self.cube_tolerance_outside_bounds = tolerance

    def update(self, proj_view) -> None:
        """Extract and normalise the left, right, bottom, top, far and near planes."""
        r0, r1, r2, r3 = np.asarray(proj_view, dtype=float)
        rows = (r3 + r0, r3 - r0, r3 + r1, r3 - r1, r3 - r2, r3 + r2)
        planes = []
        with np.errstate(divide="ignore", invalid="ignore"):
            for row in rows:
                length = np.linalg.norm(row[:3])
                planes.append(Plane(normal=row[:3] / length, d=float(row[3] / length)))
        self.planes = planes

    def is_aabb_inside(self, lo, hi) -> bool:
        """False only when the box lies entirely outside one of the planes."""
        lo = np.asarray(lo, dtype=float)
        hi = np.asarray(hi, dtype=float)
        for plane in self.planes:
            positive = np.where(plane.normal >= 0, hi, lo)
            if plane.normal @ positive + plane.d < 0:
                return False
        return True

    def is_model_included(self, model) -> bool:
        """Test a unit cube placed by ``model``, widened by the tolerance."""
        pos = np.asarray(model, dtype=float)[:3, 3]
        extent = 0.5 + self.cube_tolerance_outside_bounds
        return self.is_aabb_inside(pos - extent, pos + extent)