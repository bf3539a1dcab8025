"""Orientation of placed instances.

Facing is computed in frame-local space on the horizontal plane, then lifted
to world space through the room frame, then the group's authored offset is
applied last:

    final = frame_rotation * facing * offset
"""

from __future__ import annotations

import numpy as np

from room_decor.frame import IDENTITY_QUAT, euler_to_quat, quat_multiply, yaw_to_quat
from room_decor.groups import SpawnGroup
from room_decor.room import Room

# Below this horizontal length the look direction is treated as undefined
_MIN_LOOK_LENGTH = 1e-9


def look_rotation(direction) -> np.ndarray:
    """Yaw that turns +Z toward a horizontal direction.

    The Y component is dropped before normalizing. A zero-length direction
    has no heading and returns the identity rotation.
    """
    dx, _, dz = (float(c) for c in direction)
    if np.hypot(dx, dz) < _MIN_LOOK_LENGTH:
        return IDENTITY_QUAT.copy()
    return yaw_to_quat(np.arctan2(dx, dz))


def facing_rotation(group: SpawnGroup, local_pos) -> np.ndarray:
    """Local facing for a group at a frame-local position.

    Wall-aligned groups face from the wall toward the room center;
    face-center groups look along the negated position. Both reduce to the
    same horizontal look toward the center. Anything else gets identity.
    """
    p = np.asarray(local_pos, dtype=float)
    if group.align_with_walls:
        to_center = -p
        to_center[1] = 0.0
        return look_rotation(to_center)
    if group.face_center:
        return look_rotation(-p)
    return IDENTITY_QUAT.copy()


def compute_rotation(group: SpawnGroup, local_pos, room: Room) -> np.ndarray:
    """World orientation for an accepted frame-local position."""
    facing = facing_rotation(group, local_pos)
    offset = euler_to_quat(*group.rotation_offset)
    return quat_multiply(room.frame.rotate_to_world(facing), offset)
