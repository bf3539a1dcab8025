"""Coordinate frames and quaternion utilities.

A room lives in its own local frame (origin at the room anchor, axes aligned
with the room's orientation). Everything that reasons about walls and bounds
works in local space; everything that talks to the outside world (obstacles,
instancing) works in world space. Frame converts between the two.

Coordinate convention:
    - Y-up, right-handed
    - Forward for facing computations is +Z
    - Quaternions are numpy arrays (w, x, y, z)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

IDENTITY_QUAT = np.array([1.0, 0.0, 0.0, 0.0])


# ---------------------------------------------------------------------------
# Quaternion utilities
# ---------------------------------------------------------------------------


def _axis_quat(axis: int, angle: float) -> np.ndarray:
    """Rotation of *angle* radians about one of the coordinate axes."""
    q = np.zeros(4)
    q[0] = np.cos(angle / 2)
    q[1 + axis] = np.sin(angle / 2)
    return q


def quat_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product of two quaternions (w, x, y, z)."""
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return np.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ]
    )


def quat_conjugate(q: np.ndarray) -> np.ndarray:
    """Inverse of a unit quaternion."""
    w, x, y, z = q
    return np.array([w, -x, -y, -z])


def quat_rotate(q: np.ndarray, v) -> np.ndarray:
    """Rotate a 3D vector by a unit quaternion."""
    w = q[0]
    u = np.asarray(q[1:], dtype=float)
    v = np.asarray(v, dtype=float)
    # v' = v + 2w(u x v) + 2u x (u x v)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def euler_to_quat(x_deg: float, y_deg: float, z_deg: float) -> np.ndarray:
    """Euler angles in degrees to a quaternion.

    Rotations are applied about Z first, then X, then Y (q = qy * qx * qz),
    the usual order for authored rotation offsets in Y-up scenes.
    """
    qx = _axis_quat(0, np.radians(x_deg))
    qy = _axis_quat(1, np.radians(y_deg))
    qz = _axis_quat(2, np.radians(z_deg))
    return quat_multiply(quat_multiply(qy, qx), qz)


def yaw_to_quat(yaw: float) -> np.ndarray:
    """Rotation about +Y (radians)."""
    return _axis_quat(1, yaw)


def quat_to_yaw(q: np.ndarray) -> float:
    """Heading of a quaternion: angle of its rotated +Z axis about +Y."""
    fwd = quat_rotate(q, (0.0, 0.0, 1.0))
    return float(np.arctan2(fwd[0], fwd[2]))


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Frame:
    """A rigid transform: where a room sits in the world.

    Attributes:
        position: World position of the frame origin (x, y, z)
        rotation: World orientation as a unit quaternion (w, x, y, z)
    """

    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
    _rot: np.ndarray = field(init=False, repr=False, compare=False)
    _pos: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        q = np.asarray(self.rotation, dtype=float)
        norm = np.linalg.norm(q)
        if norm == 0:
            raise ValueError("Frame rotation must be a non-zero quaternion")
        object.__setattr__(self, "_rot", q / norm)
        object.__setattr__(self, "_pos", np.asarray(self.position, dtype=float))

    @classmethod
    def identity(cls) -> Frame:
        return cls()

    @classmethod
    def from_euler(
        cls,
        position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        euler_deg: tuple[float, float, float] = (0.0, 0.0, 0.0),
    ) -> Frame:
        """Build a frame from a position and Euler angles in degrees."""
        q = euler_to_quat(*euler_deg)
        return cls(position=tuple(position), rotation=tuple(float(c) for c in q))

    @property
    def quat(self) -> np.ndarray:
        """Normalized rotation quaternion."""
        return self._rot.copy()

    def to_world(self, local) -> np.ndarray:
        """Transform a point from this frame into world space."""
        return quat_rotate(self._rot, local) + self._pos

    def to_local(self, world) -> np.ndarray:
        """Transform a world-space point into this frame."""
        return quat_rotate(quat_conjugate(self._rot), np.asarray(world) - self._pos)

    def rotate_to_world(self, q_local: np.ndarray) -> np.ndarray:
        """Express a local orientation in world space."""
        return quat_multiply(self._rot, q_local)
