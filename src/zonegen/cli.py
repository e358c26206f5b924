"""Command-line interface for zone generation."""

import argparse
import logging
import sys
import time

import structlog

from .config import ZoneGenConfig, find_config, list_configs, load_config
from .types import RoomCoordinate

_TILE_CHARS = {0: "~", 1: "#", 2: "o", 3: "="}

_ROOM_CHARS = {
    "starter": "S",
    "normal": "N",
    "sub_zone_boss": "B",
    "boss_portal": "P",
    "shop": "$",
    "reward": "R",
    "totem": "T",
}


def render_room_map(layout) -> str:
    """Room grid as one character per cell, top row first."""
    graph = layout.graph
    lines = []
    for y in range(graph.size - 1, -1, -1):
        row = []
        for x in range(graph.size):
            room = graph.room_at(RoomCoordinate(x=x, y=y))
            row.append(_ROOM_CHARS[room.room_type.value] if room is not None else ".")
        lines.append("".join(row))
    return "\n".join(lines)


def render_tile_map(layout, step: int = 1) -> str:
    """Combined tile grid as characters, top row first."""
    grid = layout.combined_layout[::step, ::step]
    return "\n".join(
        "".join(_TILE_CHARS.get(int(v), "?") for v in row) for row in grid[::-1]
    )


def main() -> None:
    """CLI entry point for zone generation."""
    parser = argparse.ArgumentParser(description="Generate a procedural island zone")
    parser.add_argument("--zone", type=int, default=0, help="Zone index (default: 0)")
    parser.add_argument(
        "--sub-zone", type=int, default=0, help="Sub-zone index (default: 0)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--config",
        type=str,
        help=f"Config name or path (available: {', '.join(list_configs())})",
    )
    parser.add_argument(
        "--max-distance", type=int, help="Room grid radius (overrides config)"
    )
    parser.add_argument(
        "--tiles", action="store_true", help="Print the combined tile map"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    if args.config:
        try:
            config = load_config(find_config(args.config))
        except FileNotFoundError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
    else:
        config = ZoneGenConfig()

    # Import here to avoid slow startup for --help
    from .orchestrator import ZoneOrchestrator
    from .validation import validate_zone

    def show_progress(report) -> None:
        if args.verbose:
            print(f"  {report.fraction:5.0%} {report.stage}")

    orchestrator = ZoneOrchestrator(config, on_progress=show_progress)

    start_time = time.time()
    layout = orchestrator.run(args.zone, args.sub_zone, args.seed, args.max_distance)
    gen_time = time.time() - start_time

    if layout is None:
        print("Generation did not complete", file=sys.stderr)
        sys.exit(1)

    print(f"Zone {layout.zone}.{layout.sub_zone} with seed {layout.seed}")
    print(f"Generated {len(layout.graph)} rooms in {gen_time:.2f}s")
    print()
    print(render_room_map(layout))
    print()
    for room_type, coords in sorted(layout.room_index.items(), key=lambda kv: kv[0].value):
        print(f"  {room_type.value}: {len(coords)}")
    print(f"  decorations: {len(layout.decorations)}")

    if args.tiles:
        print()
        print(render_tile_map(layout))

    result = validate_zone(layout)
    print()
    print("Validation passed" if result.passed else "Validation FAILED")
    if not result.passed:
        sys.exit(2)


if __name__ == "__main__":
    main()
