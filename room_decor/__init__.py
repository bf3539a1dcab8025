"""Procedural room decoration.

Places decorative assets inside a rectangular room. Each spawn group
describes one category of asset (tables, lamps, paintings, ...) and the
rules for where its instances may go: a distance band around the room
center, a height range, wall snapping, facing, and an overlap radius.
Placement is a bounded randomized search; fewer instances than requested is
a normal outcome and is reported, not raised.

Usage:
    from room_decor import Room, RoomDecorator, SpawnGroup

    room = Room(size=(10.0, 3.0, 10.0))
    groups = [SpawnGroup(name="tables", variants=("table",), min_count=2, max_count=4)]
    decoration = RoomDecorator(room, groups, seed=42).compute_placements()
    for p in decoration.placements:
        spawn(p.variant, p.position, p.orientation)
"""

from room_decor.config import DecoratorConfig
from room_decor.decorator import (
    Decoration,
    GroupReport,
    PlacementResult,
    PlacementShortfall,
    RoomDecorator,
    decorate,
    describe_decoration,
    materialize,
)
from room_decor.frame import Frame
from room_decor.groups import ConfigurationError, SpawnGroup
from room_decor.overlap import SphereObstacles, no_obstacles
from room_decor.room import Room

__all__ = [
    "ConfigurationError",
    "Decoration",
    "DecoratorConfig",
    "Frame",
    "GroupReport",
    "PlacementResult",
    "PlacementShortfall",
    "Room",
    "RoomDecorator",
    "SpawnGroup",
    "SphereObstacles",
    "decorate",
    "describe_decoration",
    "materialize",
    "no_obstacles",
]
