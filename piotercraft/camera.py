"""A first-person camera driven by Euler angles, with view helpers."""

from __future__ import annotations

import enum
import math

import numpy as np


class Movement(enum.Enum):
    """Directions the camera can move in."""

    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


def _normalize(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` toward ``center``."""
    eye = np.asarray(eye, dtype=float)
    center = np.asarray(center, dtype=float)
    up = np.asarray(up, dtype=float)
    f = _normalize(center - eye)
    s = _normalize(np.cross(f, up))
    u = np.cross(s, f)
    matrix = np.identity(4, dtype=float)
    matrix[0, :3] = s
    matrix[1, :3] = u
    matrix[2, :3] = -f
    matrix[0, 3] = -(s @ eye)
    matrix[1, 3] = -(u @ eye)
    matrix[2, 3] = f @ eye
    return matrix


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection to a [-1, 1] depth range; ``fovy`` in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must be non-zero")
    tan_half = math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4), dtype=float)
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[3, 2] = -1.0
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    return matrix


class Camera:
    """Tracks position and orientation and reacts to input events."""

    def __init__(self, position=(64.0, 30.0, 64.0), yaw: float = -90.0,
                 pitch: float = 0.0) -> None:
        self.position = np.array(position, dtype=float)
        self.world_up = np.array([0.0, 1.0, 0.0])
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.movement_speed = 2.5
        self.mouse_sensitivity = 0.1
        self.zoom = 45.0
        self.front = np.array([0.0, 0.0, -1.0])
        self.right = np.zeros(3)
        self.up = np.zeros(3)
        self._update_vectors()

    def view_matrix(self) -> np.ndarray:
        """The view matrix for the current position and orientation."""
        return look_at(self.position, self.position + self.front, self.up)

    def process_keyboard(self, direction: Movement, delta_time: float) -> None:
        """Move along the camera axes by ``movement_speed * delta_time``."""
        velocity = self.movement_speed * delta_time
        if direction is Movement.FORWARD:
            self.position = self.position + self.front * velocity
        elif direction is Movement.BACKWARD:
            self.position = self.position - self.front * velocity
        elif direction is Movement.LEFT:
            self.position = self.position - self.right * velocity
        elif direction is Movement.RIGHT:
            self.position = self.position + self.right * velocity

    def process_mouse_movement(self, xoffset: float, yoffset: float,
                               constrain_pitch: bool = True) -> None:
        """Turn the camera by mouse offsets, optionally clamping pitch to ±89°."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -89.0), 89.0)
        self._update_vectors()

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Zoom by the wheel offset, keeping zoom within [1, 45]."""
        self.zoom = min(max(self.zoom - yoffset, 1.0), 45.0)

    def _update_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = np.array([
            math.cos(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.sin(yaw) * math.cos(pitch),
        ])
        self.front = _normalize(front)
        self.right = _normalize(np.cross(front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))