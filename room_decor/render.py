"""Render decorations as a top-down plan grid for visual validation.

Read-only: consumes Room/SpawnGroup/Decoration and draws them, never feeds
anything back into placement.

Each cell shows the room outline, each group's distance band (inner and
outer ring, green at the center to red at the walls), and every placement
as its overlap circle with a tick for its facing.

Usage:
    uv run python -m room_decor.render                          # 8 random seeds
    uv run python -m room_decor.render --seeds 42 43 44         # specific seeds
    uv run python -m room_decor.render --preset gallery --count 16
    uv run python -m room_decor.render --out docs/decor         # custom output dir
"""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from room_decor import presets
from room_decor.decorator import Decoration, RoomDecorator
from room_decor.frame import quat_conjugate, quat_multiply, quat_rotate
from room_decor.groups import SpawnGroup
from room_decor.room import Room

# Render settings
CELL_W = 400
CELL_H = 400
LABEL_H = 28
PAD = 24
BG_COLOR = (40, 42, 48)
ROOM_COLOR = (90, 200, 255)
LABEL_BG = (30, 32, 36)
LABEL_FG = (220, 220, 220)


def _try_load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Try to load a nice font, fall back to default."""
    candidates = [
        "/System/Library/Fonts/Menlo.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for path in candidates:
        if Path(path).exists():
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default()


def _rgb(color: Sequence[float]) -> tuple[int, int, int]:
    return tuple(int(round(255 * c)) for c in color[:3])


def _band_color(t: float) -> tuple[int, int, int]:
    """Green at the room center, red at the edge."""
    t = float(np.clip(t, 0.0, 1.0))
    return (int(255 * t), int(255 * (1.0 - t)), 0)


class _PlanMapper:
    """Room-local XZ -> pixel coordinates inside one cell (+Z points up)."""

    def __init__(self, room: Room, x0: int, y0: int):
        extent = max(room.width, room.depth, 1e-6)
        self.scale = (min(CELL_W, CELL_H) - 2 * PAD) / extent
        self.cx = x0 + CELL_W / 2
        self.cy = y0 + CELL_H / 2

    def __call__(self, x: float, z: float) -> tuple[float, float]:
        return (self.cx + x * self.scale, self.cy - z * self.scale)

    def box(self, cx: float, cz: float, hx: float, hz: float) -> list[float]:
        x0, y0 = self(cx - hx, cz + hz)
        x1, y1 = self(cx + hx, cz - hz)
        return [x0, y0, x1, y1]


def draw_plan(
    draw: ImageDraw.ImageDraw,
    room: Room,
    groups: Sequence[SpawnGroup],
    decoration: Decoration,
    x0: int = 0,
    y0: int = 0,
):
    """Draw one decoration into a cell whose top-left corner is (x0, y0)."""
    m = _PlanMapper(room, x0, y0)

    draw.rectangle(m.box(0.0, 0.0, room.half_width, room.half_depth), outline=ROOM_COLOR)

    # Spawn regions are frame-local; the plan is drawn room-local
    rx, _, rz = room.offset
    for group in groups:
        if not group.show_distance_rings:
            continue
        sx, _, sz = group.spawn_area_size
        ox = group.spawn_area_offset[0] - rx
        oz = group.spawn_area_offset[2] - rz
        for t in (group.min_distance_from_center, group.max_distance_from_center):
            if t <= 0:
                continue
            draw.rectangle(
                m.box(ox, oz, sx * 0.5 * t, sz * 0.5 * t), outline=_band_color(t)
            )

    colors = {g.name: _rgb(g.color) for g in groups}
    radii = {g.name: g.overlap_radius for g in groups}
    frame_inv = quat_conjugate(room.frame.quat)

    for placement in decoration.placements:
        x, _, z = placement.local_position
        color = colors.get(placement.group, LABEL_FG)
        r = max(radii.get(placement.group, 0.0) * 0.5, 0.1) * m.scale
        px, py = m(x, z)
        draw.ellipse([px - r, py - r, px + r, py + r], outline=color, width=2)

        local_q = quat_multiply(frame_inv, placement.orientation)
        fwd = quat_rotate(local_q, (0.0, 0.0, 1.0))
        tx, ty = m(x + fwd[0] * 0.4, z + fwd[2] * 0.4)
        draw.line([px, py, tx, ty], fill=color, width=2)


def render_plan(
    room: Room, groups: Sequence[SpawnGroup], decoration: Decoration
) -> Image.Image:
    """Render a single decoration as an image."""
    image = Image.new("RGB", (CELL_W, CELL_H), BG_COLOR)
    draw_plan(ImageDraw.Draw(image), room, groups, decoration)
    return image


def render_decoration_grid(
    seeds: list[int],
    out_dir: Path,
    room: Room,
    groups: Sequence[SpawnGroup],
) -> Path:
    """Decorate once per seed and render the results as a grid. Returns output path."""
    n = len(seeds)
    if n == 0:
        raise ValueError("Need at least one seed to render")
    cols = min(4, n)
    rows = math.ceil(n / cols)

    cell_total_h = CELL_H + LABEL_H
    grid = Image.new("RGB", (cols * CELL_W, rows * cell_total_h), BG_COLOR)
    draw = ImageDraw.Draw(grid)
    font = _try_load_font(13)

    for idx, seed in enumerate(seeds):
        decoration = RoomDecorator(room, groups, seed=seed).compute_placements()

        x = (idx % cols) * CELL_W
        y = (idx // cols) * cell_total_h
        draw_plan(draw, room, groups, decoration, x, y)

        label = f"seed {seed}  {len(decoration)}/{decoration.requested} placed"
        label_y = y + CELL_H
        draw.rectangle([x, label_y, x + CELL_W, label_y + LABEL_H], fill=LABEL_BG)
        bbox = font.getbbox(label)
        tx = x + (CELL_W - (bbox[2] - bbox[0])) // 2
        ty = label_y + (LABEL_H - (bbox[3] - bbox[1])) // 2
        draw.text((tx, ty), label, fill=LABEL_FG, font=font)

        print(f"  [{idx + 1}/{n}] {label}")

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "decorations.png"
    grid.save(out_path)
    return out_path


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Render decoration plan grids")
    parser.add_argument("--seeds", nargs="*", type=int, help="Specific seeds to render")
    parser.add_argument(
        "--count", type=int, default=8, help="Number of random seeds (default: 8)"
    )
    parser.add_argument("--out", default="docs/decor", help="Output directory")
    parser.add_argument(
        "--preset", choices=presets.list_presets(), default="tavern", help="Group preset"
    )
    parser.add_argument("--width", type=float, default=10.0, help="Room width (m)")
    parser.add_argument("--depth", type=float, default=10.0, help="Room depth (m)")
    args = parser.parse_args(argv)
    if not args.seeds and args.count < 1:
        parser.error("--count must be >= 1")

    if args.seeds:
        seeds = args.seeds
    else:
        rng = np.random.default_rng()
        seeds = [int(rng.integers(0, 2**32)) for _ in range(args.count)]

    room = Room(size=(args.width, 3.0, args.depth))
    groups = presets.get(args.preset)

    print(f"Rendering {len(seeds)} decorations (preset={args.preset})...")
    path = render_decoration_grid(seeds, Path(args.out), room, groups)
    print(f"\n-> {path}")
    return path


if __name__ == "__main__":
    main()
