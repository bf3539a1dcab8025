"""Benchmark decoration speed.

Usage:
    uv run python -m room_decor.bench                    # 1000 passes, tavern preset
    uv run python -m room_decor.bench --count 5000        # more passes
    uv run python -m room_decor.bench --preset gallery    # another preset
"""

from __future__ import annotations

import argparse
import time

import numpy as np

from room_decor import presets
from room_decor.config import DecoratorConfig
from room_decor.decorator import RoomDecorator
from room_decor.room import Room, random_room


def bench(n_passes: int, preset: str, random_rooms: bool = False) -> dict:
    """Run the benchmark. Returns timing stats."""
    groups = presets.get(preset)
    rng = np.random.default_rng(42)
    seeds = [int(rng.integers(0, 2**32)) for _ in range(n_passes)]
    config = DecoratorConfig(log_shortfalls=False)

    times: list[float] = []
    placed: list[int] = []
    shortfalls: list[int] = []

    for seed in seeds:
        room = random_room(np.random.default_rng(seed)) if random_rooms else Room()
        t0 = time.perf_counter()
        decoration = RoomDecorator(room, groups, config=config, seed=seed).compute_placements()
        times.append(time.perf_counter() - t0)
        placed.append(len(decoration))
        shortfalls.append(len(decoration.shortfalls))

    t_arr = np.array(times) * 1000  # ms
    p_arr = np.array(placed)

    return {
        "n_passes": n_passes,
        "mean_ms": float(np.mean(t_arr)),
        "median_ms": float(np.median(t_arr)),
        "p95_ms": float(np.percentile(t_arr, 95)),
        "p99_ms": float(np.percentile(t_arr, 99)),
        "total_s": float(np.sum(t_arr) / 1000),
        "placed_mean": float(np.mean(p_arr)),
        "placed_max": int(np.max(p_arr)),
        "shortfalls_mean": float(np.mean(shortfalls)),
        "passes_per_sec": n_passes / max(np.sum(t_arr) / 1000, 1e-9),
    }


def print_stats(stats: dict):
    print(f"\n  passes:          {stats['n_passes']}")
    print(
        f"  placed/pass:     {stats['placed_mean']:.1f} avg, {stats['placed_max']} max"
    )
    print(f"  shortfalls/pass: {stats['shortfalls_mean']:.2f}")
    print(f"  mean:            {stats['mean_ms']:.3f} ms")
    print(f"  median:          {stats['median_ms']:.3f} ms")
    print(f"  p95:             {stats['p95_ms']:.3f} ms")
    print(f"  p99:             {stats['p99_ms']:.3f} ms")
    print(f"  total:           {stats['total_s']:.2f} s")
    print(f"  passes/sec:      {stats['passes_per_sec']:.0f}")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Benchmark room decoration")
    parser.add_argument("--count", type=int, default=1000, help="Number of passes")
    parser.add_argument(
        "--preset", choices=presets.list_presets(), default="tavern", help="Group preset"
    )
    parser.add_argument(
        "--random-rooms", action="store_true", help="Sample a random room size per pass"
    )
    args = parser.parse_args(argv)

    print(f"Benchmarking {args.count} passes (preset={args.preset})...")
    stats = bench(args.count, args.preset, random_rooms=args.random_rooms)
    print_stats(stats)
    return stats


if __name__ == "__main__":
    main()
