"""
Command line entry point for room decoration.

Usage:
    room-decor decorate [--preset NAME] [--seed N] [--width W --depth D --height H]
    room-decor render [--preset NAME] [--seeds ...] [--count N] [--out DIR]
    room-decor bench [--preset NAME] [--count N] [--random-rooms]
    room-decor presets
"""

from __future__ import annotations

import argparse
import logging
import sys

from room_decor import presets
from room_decor.config import DEFAULT_MAX_ATTEMPTS, DecoratorConfig
from room_decor.decorator import RoomDecorator, describe_decoration
from room_decor.frame import Frame
from room_decor.room import Room

log = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure the root logger and install an excepthook.

    Unhandled exceptions are logged before the default hook prints them.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    _original_excepthook = sys.excepthook

    def _logging_excepthook(exc_type, exc_value, exc_tb):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.critical(
                "Unhandled exception", exc_info=(exc_type, exc_value, exc_tb)
            )
        _original_excepthook(exc_type, exc_value, exc_tb)

    sys.excepthook = _logging_excepthook


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="room-decor",
        description="Procedural room decoration",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    preset_names = presets.list_presets()

    # decorate
    p_dec = sub.add_parser("decorate", help="Decorate one room and print the result")
    p_dec.add_argument("--preset", choices=preset_names, default="tavern", help="Group preset")
    p_dec.add_argument("--seed", type=int, default=None, help="Random seed")
    p_dec.add_argument("--width", type=float, default=10.0, help="Room width (m)")
    p_dec.add_argument("--height", type=float, default=3.0, help="Room height (m)")
    p_dec.add_argument("--depth", type=float, default=10.0, help="Room depth (m)")
    p_dec.add_argument("--yaw", type=float, default=0.0, help="Room yaw (degrees)")
    p_dec.add_argument(
        "--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help="Attempts per instance"
    )

    # render
    p_render = sub.add_parser("render", help="Render a grid of decorated room plans")
    p_render.add_argument("--preset", choices=preset_names, default="tavern", help="Group preset")
    p_render.add_argument("--seeds", nargs="*", type=int, help="Specific seeds to render")
    p_render.add_argument("--count", type=int, default=8, help="Number of random seeds")
    p_render.add_argument("--out", default="docs/decor", help="Output directory")

    # bench
    p_bench = sub.add_parser("bench", help="Benchmark decoration speed")
    p_bench.add_argument("--preset", choices=preset_names, default="tavern", help="Group preset")
    p_bench.add_argument("--count", type=int, default=1000, help="Number of passes")
    p_bench.add_argument("--random-rooms", action="store_true", help="Random room per pass")

    # presets
    sub.add_parser("presets", help="List group presets")

    return parser


def _run_decorate(args) -> int:
    room = Room(
        size=(args.width, args.height, args.depth),
        frame=Frame.from_euler(euler_deg=(0.0, args.yaw, 0.0)),
    )
    config = DecoratorConfig(max_attempts=args.max_attempts, seed=args.seed)
    decorator = RoomDecorator(room, presets.get(args.preset), config=config)
    decoration = decorator.compute_placements()
    print(describe_decoration(decoration, seed=args.seed))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "decorate":
        return _run_decorate(args)

    elif args.command == "render":
        from room_decor.render import main as render_main

        render_argv = ["--preset", args.preset, "--count", str(args.count), "--out", args.out]
        if args.seeds:
            render_argv += ["--seeds", *map(str, args.seeds)]
        render_main(render_argv)

    elif args.command == "bench":
        from room_decor.bench import main as bench_main

        bench_argv = ["--preset", args.preset, "--count", str(args.count)]
        if args.random_rooms:
            bench_argv.append("--random-rooms")
        bench_main(bench_argv)

    elif args.command == "presets":
        for name in presets.list_presets():
            groups = presets.get(name)
            print(f"{name}: {', '.join(g.name for g in groups)}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
