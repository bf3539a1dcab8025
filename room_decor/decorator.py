"""Room decorator — places spawn groups inside a room.

Two-phase workflow:
  1. **Compute** — RoomDecorator(room, groups, ...).compute_placements()
     runs the randomized search and returns a Decoration: the accepted
     placements plus per-group reports and shortfall diagnostics. Pure;
     nothing is instantiated.
  2. **Materialize** — materialize(decoration, instance_factory) hands
     each placement to the host's instance factory.

decorate() runs both phases in one call.

Per group, in configured order:
    count = uniform integer in [min_count, max_count]
    for each instance:
        up to max_attempts times: sample -> bounds check -> overlap check
        first passing candidate is accepted; otherwise the instance is
        skipped and a shortfall is recorded

Accepted floor positions accumulate across the whole pass, so earlier
groups constrain later ones.

Usage:
    decorator = RoomDecorator(room, groups, obstacle_query, seed=42)
    decoration = decorator.compute_placements()
    handles = materialize(decoration, instance_factory, room.frame)
    print(describe_decoration(decoration, seed=42))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np

from room_decor.config import DecoratorConfig
from room_decor.frame import Frame, quat_to_yaw
from room_decor.groups import SpawnGroup, validate_groups
from room_decor.overlap import ObstacleQuery, is_blocked, no_obstacles
from room_decor.room import Room, is_inside_bounds, validate_room
from room_decor.rotation import compute_rotation
from room_decor.sampler import sample_candidate, sample_height

log = logging.getLogger(__name__)

InstanceFactory = Callable[[object, np.ndarray, np.ndarray, Frame], object]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class PlacementResult:
    """An accepted placement.

    Attributes:
        group: Name of the spawn group it belongs to
        variant: Asset variant chosen from the group
        position: World position, height applied
        orientation: World orientation quaternion (w, x, y, z)
        anchor: World floor position before height (used for overlap checks)
        local_position: Room-local floor position before height
    """

    group: str
    variant: object
    position: np.ndarray
    orientation: np.ndarray
    anchor: np.ndarray
    local_position: np.ndarray


@dataclass(frozen=True)
class PlacementShortfall:
    """An instance that found no valid position within its attempt budget."""

    group: str
    instance: int
    attempts: int


@dataclass(frozen=True)
class GroupReport:
    """Requested vs. placed counts for one group."""

    name: str
    requested: int
    placed: int

    @property
    def shortfall(self) -> int:
        return self.requested - self.placed

    @property
    def complete(self) -> bool:
        return self.placed == self.requested


@dataclass
class Decoration:
    """Outcome of one decoration pass. Partial results are normal."""

    placements: list[PlacementResult] = field(default_factory=list)
    reports: list[GroupReport] = field(default_factory=list)
    shortfalls: list[PlacementShortfall] = field(default_factory=list)
    cancelled: bool = False

    def __len__(self) -> int:
        return len(self.placements)

    def by_group(self, name: str) -> list[PlacementResult]:
        return [p for p in self.placements if p.group == name]

    @property
    def requested(self) -> int:
        return sum(r.requested for r in self.reports)


# ---------------------------------------------------------------------------
# Decorator
# ---------------------------------------------------------------------------


class RoomDecorator:
    """Runs placement passes for one room.

    Owns the pass state (rng and accepted positions). Use one instance per
    room; instances share nothing.
    """

    def __init__(
        self,
        room: Room,
        groups: Sequence[SpawnGroup],
        obstacle_query: ObstacleQuery | None = None,
        rng: np.random.Generator | None = None,
        config: DecoratorConfig | None = None,
        seed: int | None = None,
    ):
        self.room = room
        self.groups = tuple(groups)
        self.obstacle_query = obstacle_query or no_obstacles
        self.config = config or DecoratorConfig()

        # An injected rng wins over seed, which wins over config.seed
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else self.config.seed)
        self.rng = rng

        self._used_positions: list[np.ndarray] = []

    @property
    def used_positions(self) -> list[np.ndarray]:
        """Floor positions accepted so far in the current pass."""
        return list(self._used_positions)

    def validate(self):
        """Check the room and every group. Raises ConfigurationError."""
        validate_room(self.room)
        validate_groups(self.groups)

    # -------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------

    def compute_placements(
        self, should_cancel: Callable[[], bool] | None = None
    ) -> Decoration:
        """Run one full pass over all groups.

        Args:
            should_cancel: Optional callback checked between groups. When it
                returns True, the pass stops and the partial result is
                returned with ``cancelled=True``.
        """
        self.validate()
        self._used_positions = []
        decoration = Decoration()

        log.info(
            "Decorating room size=%s with %d groups", self.room.size, len(self.groups)
        )
        for group in self.groups:
            if should_cancel is not None and should_cancel():
                log.info("Decoration cancelled before group '%s'", group.name)
                decoration.cancelled = True
                break
            self._place_group(group, decoration)

        log.info(
            "Placed %d of %d requested instances (%d shortfalls)",
            len(decoration.placements),
            decoration.requested,
            len(decoration.shortfalls),
        )
        return decoration

    # -------------------------------------------------------------------
    # Internal: per-group and per-instance search
    # -------------------------------------------------------------------

    def _place_group(self, group: SpawnGroup, decoration: Decoration):
        requested = int(self.rng.integers(group.min_count, group.max_count + 1))
        log.debug("Group '%s': requesting %d instances", group.name, requested)

        placed = 0
        for i in range(requested):
            result = self._place_instance(group)
            if result is None:
                decoration.shortfalls.append(
                    PlacementShortfall(group.name, i, self.config.max_attempts)
                )
                if self.config.log_shortfalls:
                    log.warning(
                        "No valid position for '%s' after %d attempts",
                        group.name,
                        self.config.max_attempts,
                    )
                continue
            decoration.placements.append(result)
            placed += 1

        report = GroupReport(group.name, requested, placed)
        decoration.reports.append(report)
        if not report.complete:
            log.info(
                "Group '%s': placed %d of %d", group.name, placed, requested
            )

    def _find_position(self, group: SpawnGroup):
        """Rejection-sample a floor position. Returns a Candidate or None."""
        for attempt in range(self.config.max_attempts):
            candidate = sample_candidate(group, self.room, self.rng)
            if not is_inside_bounds(candidate.room_local, self.room):
                continue
            if group.avoid_overlap and is_blocked(
                candidate.world,
                group.overlap_radius,
                self._used_positions,
                self.obstacle_query,
            ):
                continue
            log.debug(
                "Group '%s': accepted %s on attempt %d",
                group.name,
                np.round(candidate.world, 3),
                attempt + 1,
            )
            return candidate
        return None

    def _place_instance(self, group: SpawnGroup) -> PlacementResult | None:
        candidate = self._find_position(group)
        if candidate is None:
            return None

        orientation = compute_rotation(group, candidate.local, self.room)
        variant = group.variants[int(self.rng.integers(len(group.variants)))]

        raised = candidate.local.copy()
        raised[1] += sample_height(self.rng, group)
        position = self.room.frame.to_world(raised)

        self._used_positions.append(candidate.world)
        return PlacementResult(
            group=group.name,
            variant=variant,
            position=position,
            orientation=orientation,
            anchor=candidate.world,
            local_position=candidate.room_local,
        )


# ---------------------------------------------------------------------------
# Materialization
# ---------------------------------------------------------------------------


def materialize(
    decoration: Decoration,
    instance_factory: InstanceFactory,
    parent_frame: Frame | None = None,
) -> list:
    """Hand every placement to the instance factory. Returns the handles."""
    handles = []
    for placement in decoration.placements:
        handle = instance_factory(
            placement.variant,
            placement.position,
            placement.orientation,
            parent_frame,
        )
        handles.append(handle)
    return handles


def decorate(
    room: Room,
    groups: Sequence[SpawnGroup],
    obstacle_query: ObstacleQuery | None = None,
    instance_factory: InstanceFactory | None = None,
    rng: np.random.Generator | None = None,
    config: DecoratorConfig | None = None,
) -> Decoration:
    """Compute placements for *room* and materialize them if a factory is given."""
    decorator = RoomDecorator(room, groups, obstacle_query, rng=rng, config=config)
    decoration = decorator.compute_placements()
    if instance_factory is not None:
        materialize(decoration, instance_factory, room.frame)
    return decoration


# ---------------------------------------------------------------------------
# Description
# ---------------------------------------------------------------------------


def describe_placement(placement: PlacementResult) -> str:
    """One-line description of a placement."""
    x, y, z = placement.position
    yaw = np.degrees(quat_to_yaw(placement.orientation))
    return (
        f"{placement.group}/{placement.variant} at "
        f"({x:+.2f}, {y:+.2f}, {z:+.2f}) yaw {yaw:.0f}°"
    )


def describe_decoration(decoration: Decoration, seed: int | None = None) -> str:
    """Multi-line textual description of a decoration pass.

    Example output:
        Decoration (seed=42)  7/8 placed
          tables: 3/3
          lamps: 2/3  (1 short)
          [0] tables/table_round at (+1.20, +0.00, -2.31) yaw 152°
    """
    placed = len(decoration.placements)
    header = "Decoration"
    if seed is not None:
        header += f" (seed={seed})"
    header += f"  {placed}/{decoration.requested} placed"
    if decoration.cancelled:
        header += "  [cancelled]"
    lines = [header]

    for report in decoration.reports:
        line = f"  {report.name}: {report.placed}/{report.requested}"
        if report.shortfall:
            line += f"  ({report.shortfall} short)"
        lines.append(line)

    for i, placement in enumerate(decoration.placements):
        lines.append(f"  [{i}] {describe_placement(placement)}")

    return "\n".join(lines)
