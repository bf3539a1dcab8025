"""MuJoCo host — obstacle queries and instancing backed by a MuJoCo model.

Two-phase workflow, same as any slot-based MuJoCo scene:
  1. **Build time** — prepare_spec(spec) injects hidden decor body+geom slots
     into an MjSpec before compilation.
  2. **Runtime** — MujocoObstacleQuery(model, data) answers obstacle queries
     from the compiled geoms; MujocoInstanceFactory(model, data) writes
     placements into the slots. No recompilation needed.

Slot naming convention:
    Bodies/geoms:  decor_0, decor_1, ..., decor_{N-1}

The decorator works Y-up; MuJoCo is Z-up. Positions and orientations are
converted at this boundary (+90° about X: (x, y, z) -> (x, -z, y)).

Usage:
    spec = mujoco.MjSpec.from_file("worlds/room.xml")
    prepare_spec(spec)
    model = spec.compile()
    data = mujoco.MjData(model)
    mujoco.mj_forward(model, data)

    query = MujocoObstacleQuery(model, data)
    decoration = RoomDecorator(room, groups, query, seed=1).compute_placements()
    MujocoInstanceFactory(model, data).apply(decoration)
"""

from __future__ import annotations

import logging

import mujoco
import numpy as np

from room_decor.decorator import Decoration, materialize
from room_decor.frame import Frame, quat_conjugate, quat_multiply, quat_rotate

log = logging.getLogger(__name__)

SLOT_PREFIX = "decor_"
DEFAULT_MAX_INSTANCES = 32
DEFAULT_HALF_SIZE = (0.25, 0.25, 0.25)  # Y-up half extents (x, y, z)
DEFAULT_RGBA = (0.6, 0.6, 0.6, 1.0)

# Y-up -> Z-up basis change: +90° about X
_YUP_TO_ZUP = np.array([np.cos(np.pi / 4), np.sin(np.pi / 4), 0.0, 0.0])


def yup_to_zup_position(p) -> np.ndarray:
    """Y-up position -> MuJoCo Z-up position."""
    x, y, z = (float(c) for c in p)
    return np.array([x, -z, y])


def yup_to_zup_quat(q) -> np.ndarray:
    """Y-up orientation -> MuJoCo Z-up orientation (w, x, y, z)."""
    return quat_multiply(
        quat_multiply(_YUP_TO_ZUP, np.asarray(q, dtype=float)),
        quat_conjugate(_YUP_TO_ZUP),
    )


def prepare_spec(spec, max_instances: int = DEFAULT_MAX_INSTANCES):
    """Add hidden decor slots to an MjSpec.

    One body per geom, so runtime writes to model.body_pos are picked up by
    mj_kinematics without touching geom_pos.
    """
    for i in range(max_instances):
        body = spec.worldbody.add_body()
        body.name = f"{SLOT_PREFIX}{i}"
        body.pos = [0, 0, 0]
        geom = body.add_geom()
        geom.name = f"{SLOT_PREFIX}{i}"
        geom.type = mujoco.mjtGeom.mjGEOM_BOX
        geom.size = [0.001, 0.001, 0.001]
        geom.rgba = [0, 0, 0, 0]
        geom.contype = 0
        geom.conaffinity = 0


# ---------------------------------------------------------------------------
# Obstacle query
# ---------------------------------------------------------------------------


class MujocoObstacleQuery:
    """Static obstacles from a compiled model, as bounding spheres.

    Every collidable geom counts except planes (the floor) and decor slots
    (those are tracked by the decorator's own overlap state). Reads
    data.geom_xpos at call time, so call mj_forward after moving things.
    """

    def __init__(self, model: mujoco.MjModel, data: mujoco.MjData):
        self.model = model
        self.data = data
        self.geom_ids = self._discover_obstacles()

    def _discover_obstacles(self) -> np.ndarray:
        ids = []
        for g in range(self.model.ngeom):
            if self.model.geom_type[g] == mujoco.mjtGeom.mjGEOM_PLANE:
                continue
            if self.model.geom_contype[g] == 0 and self.model.geom_conaffinity[g] == 0:
                continue
            if self.model.geom(g).name.startswith(SLOT_PREFIX):
                continue
            ids.append(g)
        return np.array(ids, dtype=int)

    def __call__(self, position, radius: float) -> bool:
        if len(self.geom_ids) == 0:
            return False
        p = yup_to_zup_position(position)
        centers = self.data.geom_xpos[self.geom_ids]
        rbound = self.model.geom_rbound[self.geom_ids]
        dist = np.linalg.norm(centers - p, axis=1)
        return bool(np.any(dist < radius + rbound))


# ---------------------------------------------------------------------------
# Instance factory
# ---------------------------------------------------------------------------


class MujocoInstanceFactory:
    """Writes placements into pre-allocated decor slots.

    Each variant is drawn as a box resting on its placement position.

    Args:
        model, data: Compiled model with slots from prepare_spec().
        sizes: Y-up half extents (x, y, z) per variant.
        colors: RGBA per variant.
    """

    def __init__(
        self,
        model: mujoco.MjModel,
        data: mujoco.MjData,
        sizes: dict | None = None,
        colors: dict | None = None,
    ):
        self.model = model
        self.data = data
        self.sizes = dict(sizes or {})
        self.colors = dict(colors or {})
        self._slots: list[tuple[int, int]] = []
        self._next = 0
        self._discover_slots()

    @property
    def max_instances(self) -> int:
        return len(self._slots)

    @property
    def used(self) -> int:
        return self._next

    def _discover_slots(self):
        """Find decor_N body+geom pairs in slot order."""
        i = 0
        while True:
            name = f"{SLOT_PREFIX}{i}"
            body_id = mujoco.mj_name2id(self.model, mujoco.mjtObj.mjOBJ_BODY, name)
            if body_id < 0:
                break
            geom_id = mujoco.mj_name2id(self.model, mujoco.mjtObj.mjOBJ_GEOM, name)
            self._slots.append((body_id, geom_id))
            i += 1

    def __call__(
        self,
        variant,
        position: np.ndarray,
        orientation: np.ndarray,
        parent_frame: Frame | None = None,
    ) -> int:
        """Write one instance into the next free slot. Returns the slot index.

        Positions are already in world space, so parent_frame is not used
        for placement.
        """
        if self._next >= len(self._slots):
            raise ValueError(f"All {len(self._slots)} decor slots are in use")
        slot = self._next
        body_id, geom_id = self._slots[slot]

        hx, hy, hz = self.sizes.get(variant, DEFAULT_HALF_SIZE)
        quat = yup_to_zup_quat(orientation)
        # Lift the box so its bottom face rests on the placement position
        lift = quat_rotate(quat, (0.0, 0.0, hy))

        self.model.body_pos[body_id] = yup_to_zup_position(position) + lift
        self.model.body_quat[body_id] = quat
        self.model.geom_size[geom_id] = [hx, hz, hy]
        self.model.geom_rgba[geom_id] = self.colors.get(variant, DEFAULT_RGBA)
        self.model.geom_contype[geom_id] = 1
        self.model.geom_conaffinity[geom_id] = 1

        self._next += 1
        return slot

    def clear(self):
        """Hide all decor slots."""
        for body_id, geom_id in self._slots:
            self.model.body_pos[body_id] = [0, 0, 0]
            self.model.body_quat[body_id] = [1, 0, 0, 0]
            self.model.geom_size[geom_id] = [0.001, 0.001, 0.001]
            self.model.geom_rgba[geom_id] = [0, 0, 0, 0]
            self.model.geom_contype[geom_id] = 0
            self.model.geom_conaffinity[geom_id] = 0
        self._next = 0

    def apply(self, decoration: Decoration, parent_frame: Frame | None = None) -> list:
        """Replace the slot contents with a decoration and run forward kinematics."""
        if len(decoration.placements) > len(self._slots):
            raise ValueError(
                f"Too many placements ({len(decoration.placements)}) "
                f"for {len(self._slots)} slots"
            )
        self.clear()
        handles = materialize(decoration, self, parent_frame)
        mujoco.mj_forward(self.model, self.data)
        log.debug("Wrote %d placements into decor slots", len(handles))
        return handles
