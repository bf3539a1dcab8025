"""Spawn groups — named categories of decorative assets and their placement rules.

A spawn group says *what* to place (a list of interchangeable asset
variants), *how many* (an inclusive count range), and *where* (a spawn region
plus distance band, height range, wall snapping, facing and overlap rules).

Usage:
    lamps = SpawnGroup(
        name="lamps",
        variants=("lamp_iron", "lamp_brass"),
        min_count=2,
        max_count=4,
        height_range=(1.8, 2.2),
        align_with_walls=True,
    )
    validate_group(lamps)   # raises ConfigurationError if malformed
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """A room or spawn group is malformed. Raised before any placement runs."""


@dataclass(frozen=True)
class SpawnGroup:
    """Placement rules for one category of decorative asset.

    Attributes:
        name: Group identifier used in logs and reports (e.g. "tables")
        variants: Asset variants to choose among (one picked per instance)
        min_count: Minimum number of instances to request (inclusive)
        max_count: Maximum number of instances to request (inclusive)
        spawn_area_size: Size of the spawn region in frame-local space
            (x, y, z). Only X and Z shape the sampling ellipse.
        spawn_area_offset: Center of the spawn region relative to the frame
            origin. Its Y component is added to the sampled height.
        min_distance_from_center: Inner edge of the distance band, in [0, 1]
        max_distance_from_center: Outer edge of the distance band, in [0, 1]
        height_range: (min, max) height applied after a position is accepted
        face_center: Turn instances to face the room center
        align_with_walls: Snap instances to the nearest wall and face into
            the room. Takes precedence over face_center.
        rotation_offset: Extra rotation in Euler degrees (x, y, z), applied
            after facing
        avoid_overlap: Reject positions near obstacles or earlier placements
        overlap_radius: Minimum center-to-center distance (meters)
        color: RGBA used by the debug plan render
        show_distance_rings: Draw the distance band in the debug plan render
    """

    name: str
    variants: tuple = ()
    min_count: int = 1
    max_count: int = 3
    spawn_area_size: tuple[float, float, float] = (10.0, 0.0, 10.0)
    spawn_area_offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    min_distance_from_center: float = 0.0
    max_distance_from_center: float = 1.0
    height_range: tuple[float, float] = (0.0, 2.0)
    face_center: bool = False
    align_with_walls: bool = False
    rotation_offset: tuple[float, float, float] = (0.0, 0.0, 0.0)
    avoid_overlap: bool = True
    overlap_radius: float = 1.0
    color: tuple[float, float, float, float] = (0.5, 0.5, 1.0, 0.3)
    show_distance_rings: bool = True


def validate_group(group: SpawnGroup) -> None:
    """Check a group's invariants. Raises ConfigurationError naming the group."""
    name = group.name or "<unnamed>"

    def fail(msg: str):
        raise ConfigurationError(f"Spawn group '{name}': {msg}")

    if len(group.variants) == 0:
        fail("asset variant list is empty")
    if group.min_count < 0:
        fail(f"min_count must be >= 0 (got {group.min_count})")
    if group.min_count > group.max_count:
        fail(f"min_count ({group.min_count}) > max_count ({group.max_count})")

    lo, hi = group.min_distance_from_center, group.max_distance_from_center
    if lo > hi:
        fail(f"min_distance_from_center ({lo}) > max_distance_from_center ({hi})")
    if lo < 0.0 or hi > 1.0:
        fail(f"distance band [{lo}, {hi}] must lie within [0, 1]")

    h_lo, h_hi = group.height_range
    if h_lo > h_hi:
        fail(f"height_range min ({h_lo}) > max ({h_hi})")
    if group.overlap_radius < 0:
        fail(f"overlap_radius must be >= 0 (got {group.overlap_radius})")
    if any(s < 0 for s in group.spawn_area_size):
        fail(f"spawn_area_size has a negative component {group.spawn_area_size}")


def validate_groups(groups: Sequence[SpawnGroup]) -> None:
    """Validate every group, stopping at the first malformed one."""
    for group in groups:
        validate_group(group)
