"""Candidate position sampling for a spawn group."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from room_decor.groups import SpawnGroup
from room_decor.room import Room, align_local_to_nearest_wall


@dataclass(frozen=True)
class Candidate:
    """One placement attempt. Discarded whether accepted or rejected.

    Attributes:
        local: Frame-local position on the floor plane (y = 0)
        room_local: The same position relative to the room's floor center
            (local minus room.offset), as seen by the bounds check
        world: The same position in world space
    """

    local: np.ndarray
    room_local: np.ndarray
    world: np.ndarray


def sample_direction(rng: np.random.Generator) -> tuple[float, float]:
    """Uniform unit direction in the local XZ plane, as (x, z)."""
    angle = rng.uniform(0.0, 2.0 * np.pi)
    return float(np.cos(angle)), float(np.sin(angle))


def sample_distance(rng: np.random.Generator, group: SpawnGroup) -> float:
    """Uniform draw from the group's distance-from-center band."""
    lo = group.min_distance_from_center
    hi = group.max_distance_from_center
    if lo == hi:
        return float(lo)
    return float(rng.uniform(lo, hi))


def sample_local_position(rng: np.random.Generator, group: SpawnGroup) -> np.ndarray:
    """Frame-local floor position inside the group's spawn region (before wall snap).

    The region is an ellipse around the frame origin with semi-axes
    spawn_area_size.xz / 2, scaled by the distance band and shifted by
    spawn_area_offset.xz.
    """
    dx, dz = sample_direction(rng)
    d = sample_distance(rng, group)
    sx, _, sz = group.spawn_area_size
    ox, _, oz = group.spawn_area_offset
    return np.array([dx * sx * 0.5 * d + ox, 0.0, dz * sz * 0.5 * d + oz])


def sample_candidate(
    group: SpawnGroup, room: Room, rng: np.random.Generator
) -> Candidate:
    """Draw one candidate position for *group* inside *room*.

    Wall-aligned groups are snapped before the candidate is returned, so the
    bounds and overlap checks see the final floor position. The room offset
    only moves the walls; the spawn region stays at the frame origin.
    """
    local = sample_local_position(rng, group)
    room_offset = np.asarray(room.offset, dtype=float)
    room_local = local - room_offset
    if group.align_with_walls:
        room_local = align_local_to_nearest_wall(
            room_local, room, padding=group.overlap_radius * 0.5
        )
        local = room_local + room_offset
    return Candidate(local=local, room_local=room_local, world=room.frame.to_world(local))


def sample_height(rng: np.random.Generator, group: SpawnGroup) -> float:
    """Post-acceptance height: uniform in height_range plus the region's Y offset."""
    lo, hi = group.height_range
    h = float(lo) if lo == hi else float(rng.uniform(lo, hi))
    return h + float(group.spawn_area_offset[1])
