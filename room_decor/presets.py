"""Room presets — ready-made spawn group sets for common room types.

Each preset is a tuple of SpawnGroups processed in order. Order matters:
groups placed earlier claim floor space first, so the bulkiest or most
constrained groups (wall-aligned, large overlap radius) come first.

Usage:
    groups = PRESETS["tavern"]
    decoration = RoomDecorator(room, groups, seed=42).compute_placements()
"""

from __future__ import annotations

from room_decor.groups import SpawnGroup

PRESETS: dict[str, tuple[SpawnGroup, ...]] = {
    "tavern": (
        SpawnGroup(
            name="paintings",
            variants=("painting_landscape", "painting_portrait", "painting_map"),
            min_count=2,
            max_count=4,
            height_range=(1.5, 2.0),
            align_with_walls=True,
            overlap_radius=1.5,
            color=(0.9, 0.6, 0.2, 0.3),
        ),
        SpawnGroup(
            name="tables",
            variants=("table_round", "table_long"),
            min_count=2,
            max_count=4,
            spawn_area_size=(8.0, 0.0, 8.0),
            min_distance_from_center=0.0,
            max_distance_from_center=0.7,
            height_range=(0.0, 0.0),
            rotation_offset=(0.0, 45.0, 0.0),
            overlap_radius=2.0,
            color=(0.6, 0.4, 0.2, 0.3),
        ),
        SpawnGroup(
            name="chests",
            variants=("chest_wood", "chest_iron"),
            min_count=1,
            max_count=2,
            min_distance_from_center=0.75,
            max_distance_from_center=1.0,
            height_range=(0.0, 0.0),
            face_center=True,
            overlap_radius=1.0,
            color=(0.5, 0.3, 0.1, 0.3),
        ),
        SpawnGroup(
            name="barrels",
            variants=("barrel", "barrel_stack"),
            min_count=2,
            max_count=5,
            min_distance_from_center=0.6,
            max_distance_from_center=1.0,
            height_range=(0.0, 0.0),
            overlap_radius=0.8,
            color=(0.4, 0.25, 0.1, 0.3),
        ),
    ),
    "bedroom": (
        SpawnGroup(
            name="bed",
            variants=("bed_single", "bed_double"),
            min_count=1,
            max_count=1,
            height_range=(0.0, 0.0),
            align_with_walls=True,
            overlap_radius=2.5,
            color=(0.3, 0.4, 0.8, 0.3),
        ),
        SpawnGroup(
            name="lamps",
            variants=("wall_lamp", "sconce"),
            min_count=1,
            max_count=3,
            height_range=(1.8, 2.2),
            align_with_walls=True,
            overlap_radius=1.2,
            color=(1.0, 0.9, 0.4, 0.3),
        ),
        SpawnGroup(
            name="rugs",
            variants=("rug_round", "rug_square"),
            min_count=0,
            max_count=1,
            spawn_area_size=(4.0, 0.0, 4.0),
            max_distance_from_center=0.3,
            height_range=(0.0, 0.0),
            avoid_overlap=False,
            color=(0.7, 0.2, 0.2, 0.3),
        ),
        SpawnGroup(
            name="plants",
            variants=("plant_fern", "plant_palm"),
            min_count=0,
            max_count=2,
            min_distance_from_center=0.7,
            height_range=(0.0, 0.0),
            overlap_radius=0.8,
            color=(0.2, 0.7, 0.3, 0.3),
        ),
    ),
    "gallery": (
        SpawnGroup(
            name="paintings",
            variants=("painting_landscape", "painting_portrait", "painting_abstract"),
            min_count=6,
            max_count=10,
            height_range=(1.4, 1.8),
            align_with_walls=True,
            overlap_radius=1.8,
            color=(0.9, 0.6, 0.2, 0.3),
        ),
        SpawnGroup(
            name="pedestals",
            variants=("pedestal_bust", "pedestal_vase"),
            min_count=2,
            max_count=4,
            min_distance_from_center=0.2,
            max_distance_from_center=0.6,
            height_range=(0.0, 0.0),
            face_center=True,
            overlap_radius=1.5,
            color=(0.8, 0.8, 0.8, 0.3),
        ),
        SpawnGroup(
            name="benches",
            variants=("bench",),
            min_count=1,
            max_count=2,
            spawn_area_size=(4.0, 0.0, 4.0),
            max_distance_from_center=0.5,
            height_range=(0.0, 0.0),
            rotation_offset=(0.0, 90.0, 0.0),
            overlap_radius=1.5,
            color=(0.5, 0.35, 0.2, 0.3),
        ),
    ),
    "storeroom": (
        SpawnGroup(
            name="shelves",
            variants=("shelf_tall", "shelf_wide"),
            min_count=2,
            max_count=4,
            height_range=(0.0, 0.0),
            align_with_walls=True,
            overlap_radius=1.6,
            color=(0.55, 0.45, 0.3, 0.3),
        ),
        SpawnGroup(
            name="crates",
            variants=("crate_small", "crate_large"),
            min_count=3,
            max_count=8,
            height_range=(0.0, 0.0),
            rotation_offset=(0.0, 15.0, 0.0),
            overlap_radius=0.9,
            color=(0.6, 0.5, 0.3, 0.3),
        ),
        SpawnGroup(
            name="hanging_lights",
            variants=("bulb", "lantern"),
            min_count=1,
            max_count=2,
            spawn_area_size=(6.0, 0.0, 6.0),
            max_distance_from_center=0.5,
            height_range=(2.6, 2.8),
            avoid_overlap=False,
            show_distance_rings=False,
            color=(1.0, 1.0, 0.6, 0.3),
        ),
    ),
}


def list_presets() -> list[str]:
    """List available preset names."""
    return sorted(PRESETS.keys())


def get(name: str) -> tuple[SpawnGroup, ...]:
    """Get a preset by name. Raises KeyError if not found."""
    return PRESETS[name]
