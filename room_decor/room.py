"""Room layout — extents, bounds checks and wall snapping.

A room is an axis-aligned box in its own frame. The floor center sits at
``offset`` (frame-local); the room spans ``±width/2`` along X, ``±depth/2``
along Z and ``[0, height]`` along Y from there. "Room-local" coordinates in
this package are frame-local coordinates minus that offset. Spawn regions
are centered on the frame origin, so the offset moves the walls, not where
candidates are drawn.

Usage:
    room = Room(size=(10.0, 3.0, 10.0), frame=Frame.from_euler((5, 0, 2), (0, 30, 0)))
    validate_room(room)
    local = room.to_room_local(world_pos)
    is_inside_bounds(local, room)            # bounds check (pre-height)
    align_to_nearest_wall(world_pos, group, room)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from room_decor.frame import Frame
from room_decor.groups import ConfigurationError, SpawnGroup

# Default room: 10 m square, 3 m ceiling
DEFAULT_SIZE = (10.0, 3.0, 10.0)


@dataclass(frozen=True)
class Room:
    """Room size and placement in the world.

    Attributes:
        size: (width, height, depth) in meters, each >= 0
        offset: Frame-local position of the room's floor center
        frame: Where the room sits in the world
    """

    size: tuple[float, float, float] = DEFAULT_SIZE
    offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    frame: Frame = field(default_factory=Frame)

    @property
    def width(self) -> float:
        return float(self.size[0])

    @property
    def height(self) -> float:
        return float(self.size[1])

    @property
    def depth(self) -> float:
        return float(self.size[2])

    @property
    def half_width(self) -> float:
        return self.width * 0.5

    @property
    def half_depth(self) -> float:
        return self.depth * 0.5

    def to_room_local(self, world) -> np.ndarray:
        """World position -> room-local position (relative to floor center)."""
        return self.frame.to_local(world) - np.asarray(self.offset, dtype=float)

    def to_world(self, room_local) -> np.ndarray:
        """Room-local position -> world position."""
        return self.frame.to_world(
            np.asarray(room_local, dtype=float) + np.asarray(self.offset, dtype=float)
        )


def validate_room(room: Room) -> None:
    """Raise ConfigurationError if any size component is negative."""
    if len(room.size) != 3:
        raise ConfigurationError(f"Room size must have 3 components (got {room.size})")
    if any(s < 0 for s in room.size):
        raise ConfigurationError(f"Room size components must be >= 0 (got {room.size})")


def random_room(
    rng: np.random.Generator,
    min_extent: float = 4.0,
    max_extent: float = 12.0,
    height: float = 3.0,
) -> Room:
    """Sample a random rectangular room at the world origin.

    Args:
        rng: Numpy random generator.
        min_extent: Minimum width/depth (meters).
        max_extent: Maximum width/depth (meters).
        height: Room height (meters).
    """
    width = float(rng.uniform(min_extent, max_extent))
    depth = float(rng.uniform(min_extent, max_extent))
    return Room(size=(width, height, depth))


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def is_inside_bounds(local_pos, room: Room) -> bool:
    """Check that a room-local position lies within the room's extents.

    Meant for positions before the height adjustment, so Y is normally 0.
    """
    x, y, z = (float(c) for c in local_pos)
    return (
        abs(x) <= room.half_width
        and 0.0 <= y <= room.height
        and abs(z) <= room.half_depth
    )


# ---------------------------------------------------------------------------
# Wall alignment
# ---------------------------------------------------------------------------


def _sign(v: float) -> float:
    return 1.0 if v >= 0 else -1.0


def align_local_to_nearest_wall(
    local_pos, room: Room, padding: float = 0.0
) -> np.ndarray:
    """Snap a room-local position onto the nearest wall.

    The wall axis is whichever of X (east/west) or Z (north/south) has the
    smaller gap between the point and the wall; ties go to Z. For a square
    room that is the same as comparing |x| with |z|. In a rectangular room
    it is not: comparing |x| with |z| would send (1.6, 1.8) in a 10 x 4 room
    to the south/north wall at (1.6, 1.5) and then, on a second pass, to the
    east wall. Comparing gaps keeps snapping idempotent.

    After snapping, X and Z are clamped to [-extent + padding,
    extent - padding] so points near a corner stay off the perpendicular
    wall.
    """
    p = np.array(local_pos, dtype=float)
    hw, hd = room.half_width, room.half_depth

    gap_x = hw - abs(p[0])
    gap_z = hd - abs(p[2])
    if gap_x < gap_z:
        p[0] = _sign(p[0]) * hw
    else:
        p[2] = _sign(p[2]) * hd

    limit_x = max(hw - padding, 0.0)
    limit_z = max(hd - padding, 0.0)
    p[0] = float(np.clip(p[0], -limit_x, limit_x))
    p[2] = float(np.clip(p[2], -limit_z, limit_z))
    return p


def align_to_nearest_wall(world_pos, group: SpawnGroup, room: Room) -> np.ndarray:
    """Snap a world position to the nearest wall, padded by half the overlap radius."""
    local = room.to_room_local(world_pos)
    aligned = align_local_to_nearest_wall(
        local, room, padding=group.overlap_radius * 0.5
    )
    return room.to_world(aligned)
