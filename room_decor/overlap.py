"""Overlap checks against static obstacles and earlier placements.

The static world is reached through an obstacle query: any callable
``(world_position, radius) -> bool`` that reports whether something solid
lies within *radius* of the position. Earlier placements in the same pass are
plain world positions.

The test is pairwise and order-dependent: a new position is rejected when it
is too close to something already accepted, nothing more. It does not
enforce a global minimum spacing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np


class ObstacleQuery(Protocol):
    """Read-only view of the static world, safe to call repeatedly."""

    def __call__(self, position: np.ndarray, radius: float) -> bool: ...


def no_obstacles(position, radius: float) -> bool:
    """Obstacle query for an empty room."""
    return False


class SphereObstacles:
    """Static obstacles approximated by bounding spheres.

    Blocked when the query sphere intersects any obstacle sphere.
    """

    def __init__(self, centers=(), radii=()):
        self.centers = np.asarray(centers, dtype=float).reshape(-1, 3)
        self.radii = np.asarray(radii, dtype=float).reshape(-1)
        if len(self.centers) != len(self.radii):
            raise ValueError(
                f"{len(self.centers)} obstacle centers but {len(self.radii)} radii"
            )

    def __len__(self) -> int:
        return len(self.centers)

    def __call__(self, position, radius: float) -> bool:
        if not len(self.centers):
            return False
        dist = np.linalg.norm(self.centers - np.asarray(position, dtype=float), axis=1)
        return bool(np.any(dist < radius + self.radii))


def too_close(position, radius: float, used_positions: Sequence) -> bool:
    """True if any used position is strictly closer than *radius*."""
    if not len(used_positions):
        return False
    used = np.asarray(used_positions, dtype=float).reshape(-1, 3)
    dist = np.linalg.norm(used - np.asarray(position, dtype=float), axis=1)
    return bool(np.any(dist < radius))


def is_blocked(
    position,
    radius: float,
    used_positions: Sequence,
    obstacle_query: ObstacleQuery = no_obstacles,
) -> bool:
    """Check a candidate against static obstacles, then against earlier placements."""
    if obstacle_query(np.asarray(position, dtype=float), radius):
        return True
    return too_close(position, radius, used_positions)
