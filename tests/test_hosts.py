"""Tests for the host-facing layers: MuJoCo adapter, plan renderer, CLI, benchmark.

The MuJoCo tests build a tiny world in code (floor + one pillar) so no XML
assets are needed.
"""

import sys

import mujoco
import numpy as np
import pytest
from PIL import Image

from room_decor import presets
from room_decor.bench import bench
from room_decor.cli import main
from room_decor.decorator import Decoration, PlacementResult, RoomDecorator
from room_decor.frame import IDENTITY_QUAT, yaw_to_quat
from room_decor.groups import SpawnGroup
from room_decor.mujoco_host import (
    MujocoInstanceFactory,
    MujocoObstacleQuery,
    prepare_spec,
    yup_to_zup_position,
    yup_to_zup_quat,
)
from room_decor.render import (
    CELL_H,
    CELL_W,
    LABEL_H,
    render_decoration_grid,
    render_plan,
)
from room_decor.render import main as render_main
from room_decor.room import Room

PILLAR_CENTER = np.array([2.0, 0.0, 0.5])  # MuJoCo Z-up


def _build_world(max_instances=8):
    spec = mujoco.MjSpec()
    floor = spec.worldbody.add_geom()
    floor.name = "floor"
    floor.type = mujoco.mjtGeom.mjGEOM_PLANE
    floor.size = [10, 10, 0.1]

    pillar = spec.worldbody.add_body()
    pillar.name = "pillar"
    pillar.pos = PILLAR_CENTER.tolist()
    geom = pillar.add_geom()
    geom.name = "pillar"
    geom.type = mujoco.mjtGeom.mjGEOM_BOX
    geom.size = [0.5, 0.5, 0.5]

    prepare_spec(spec, max_instances=max_instances)
    model = spec.compile()
    data = mujoco.MjData(model)
    mujoco.mj_forward(model, data)
    return model, data


def _placement(i=0):
    return PlacementResult(
        group="crates",
        variant="crate",
        position=np.array([float(i), 0.0, 0.0]),
        orientation=IDENTITY_QUAT.copy(),
        anchor=np.array([float(i), 0.0, 0.0]),
        local_position=np.array([float(i), 0.0, 0.0]),
    )


# ---------------------------------------------------------------------------
# MuJoCo adapter
# ---------------------------------------------------------------------------


class TestAxisConversion:
    def test_position(self):
        assert np.allclose(yup_to_zup_position((1.0, 2.0, 3.0)), (1.0, -3.0, 2.0))

    def test_identity_quat(self):
        assert np.allclose(yup_to_zup_quat(IDENTITY_QUAT), (1, 0, 0, 0))

    def test_yaw_becomes_rotation_about_z(self):
        q = yup_to_zup_quat(yaw_to_quat(np.pi / 2))
        s = np.sqrt(0.5)
        assert np.allclose(q, (s, 0, 0, s))


class TestMujocoHost:
    @pytest.fixture
    def world(self):
        return _build_world()

    def test_slots_discovered(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data)
        assert factory.max_instances == 8
        assert factory.used == 0

    def test_only_pillar_is_obstacle(self, world):
        model, data = world
        query = MujocoObstacleQuery(model, data)
        assert len(query.geom_ids) == 1
        assert model.geom(int(query.geom_ids[0])).name == "pillar"

    def test_query(self, world):
        model, data = world
        query = MujocoObstacleQuery(model, data)
        # Y-up (2, 0.5, 0) is the pillar center in Z-up
        assert query((2.0, 0.5, 0.0), 0.1)
        assert not query((-3.0, 0.0, 0.0), 0.5)
        assert not query((0.0, 0.0, -3.0), 0.5)

    def test_decoration_avoids_pillar(self, world):
        model, data = world
        query = MujocoObstacleQuery(model, data)
        rbound = float(model.geom_rbound[query.geom_ids[0]])
        group = SpawnGroup(
            name="crates", variants=("crate",), min_count=6, max_count=6, overlap_radius=1.0
        )
        for seed in range(5):
            decoration = RoomDecorator(Room(), [group], query, seed=seed).compute_placements()
            for p in decoration.placements:
                dist = np.linalg.norm(yup_to_zup_position(p.anchor) - PILLAR_CENTER)
                assert dist >= 1.0 + rbound

    def test_apply_writes_slots(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data, sizes={"crate": (0.3, 0.2, 0.4)})
        group = SpawnGroup(
            name="crates",
            variants=("crate",),
            min_count=3,
            max_count=3,
            face_center=True,
            height_range=(0.0, 0.0),
        )
        decoration = RoomDecorator(Room(), [group], seed=0).compute_placements()
        handles = factory.apply(decoration)

        assert handles == [0, 1, 2]
        assert factory.used == 3
        for slot, p in zip(handles, decoration.placements):
            body_id, geom_id = factory._slots[slot]
            expected = yup_to_zup_position(p.position) + (0.0, 0.0, 0.2)
            assert np.allclose(data.xpos[body_id], expected, atol=1e-9)
            assert np.allclose(model.geom_size[geom_id], (0.3, 0.4, 0.2))
            assert model.geom_contype[geom_id] == 1

        _, unused_geom = factory._slots[3]
        assert model.geom_contype[unused_geom] == 0

    def test_slots_not_treated_as_obstacles(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data)
        factory.apply(Decoration(placements=[_placement(i) for i in range(3)]))
        assert len(MujocoObstacleQuery(model, data).geom_ids) == 1

    def test_too_many_placements(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data)
        with pytest.raises(ValueError, match="Too many placements"):
            factory.apply(Decoration(placements=[_placement(i) for i in range(9)]))

    def test_factory_runs_out_of_slots(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data)
        p = _placement()
        for _ in range(8):
            factory(p.variant, p.position, p.orientation)
        with pytest.raises(ValueError):
            factory(p.variant, p.position, p.orientation)

    def test_clear(self, world):
        model, data = world
        factory = MujocoInstanceFactory(model, data)
        factory.apply(Decoration(placements=[_placement(i) for i in range(2)]))
        factory.clear()
        assert factory.used == 0
        for _, geom_id in factory._slots:
            assert model.geom_rgba[geom_id][3] == 0


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_render_plan(self):
        room = Room()
        groups = presets.get("gallery")
        decoration = RoomDecorator(room, groups, seed=3).compute_placements()
        image = render_plan(room, groups, decoration)
        assert image.size == (CELL_W, CELL_H)

    def test_render_grid(self, tmp_path):
        path = render_decoration_grid([1, 2], tmp_path, Room(), presets.get("tavern"))
        assert path.exists()
        with Image.open(path) as image:
            assert image.size == (2 * CELL_W, CELL_H + LABEL_H)

    def test_render_grid_needs_seeds(self, tmp_path):
        with pytest.raises(ValueError, match="at least one seed"):
            render_decoration_grid([], tmp_path, Room(), presets.get("tavern"))

    def test_render_offset_room(self):
        room = Room(size=(6.0, 3.0, 6.0), offset=(2.0, 0.0, 1.0))
        groups = presets.get("bedroom")
        decoration = RoomDecorator(room, groups, seed=4).compute_placements()
        assert render_plan(room, groups, decoration).size == (CELL_W, CELL_H)

    def test_main_rejects_zero_count(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            render_main(["--count", "0", "--out", str(tmp_path)])
        assert exc.value.code == 2
        assert "--count must be >= 1" in capsys.readouterr().err
        assert not (tmp_path / "decorations.png").exists()


# ---------------------------------------------------------------------------
# CLI & benchmark
# ---------------------------------------------------------------------------


class TestCli:
    @pytest.fixture(autouse=True)
    def _restore_excepthook(self, monkeypatch):
        monkeypatch.setattr(sys, "excepthook", sys.excepthook)

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_decorate(self, capsys):
        assert main(["decorate", "--seed", "3", "--preset", "bedroom"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Decoration (seed=3)")
        assert "  bed: " in out

    def test_presets(self, capsys):
        assert main(["presets"]) == 0
        out = capsys.readouterr().out
        for name in presets.list_presets():
            assert f"{name}:" in out

    def test_render(self, tmp_path, capsys):
        assert main(["render", "--seeds", "5", "--out", str(tmp_path)]) == 0
        assert (tmp_path / "decorations.png").exists()

    def test_bench(self, capsys):
        assert main(["bench", "--count", "3"]) == 0
        assert "passes/sec" in capsys.readouterr().out


class TestBench:
    def test_stats(self):
        stats = bench(10, "storeroom", random_rooms=True)
        assert stats["n_passes"] == 10
        assert stats["mean_ms"] > 0
        assert stats["placed_max"] >= stats["placed_mean"]
