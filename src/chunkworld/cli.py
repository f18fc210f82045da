"""Command-line interface: generate single chunks or stream a viewer walk."""

import argparse
import asyncio
import json
import sys
import time
from pathlib import Path

import structlog

logger = structlog.get_logger()


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for console output."""
    level = 10 if verbose else 20  # DEBUG / INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and stream chunks of a procedural tile world"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    chunk = subparsers.add_parser("chunk", help="Generate one chunk as JSON")
    chunk.add_argument("--chunk-x", type=int, default=0, help="Chunk x (default: 0)")
    chunk.add_argument("--chunk-y", type=int, default=0, help="Chunk y (default: 0)")
    chunk.add_argument("--size", type=int, default=32, help="Chunk size (default: 32)")
    chunk.add_argument("--seed", type=int, default=12345, help="World seed (default: 12345)")
    chunk.add_argument(
        "--detail",
        choices=["minimal", "standard", "full"],
        default="full",
        help="Payload detail level (default: full)",
    )
    chunk.add_argument(
        "--output", "-o", type=str, default=None, help="Write JSON here instead of stdout"
    )

    walk = subparsers.add_parser("walk", help="Stream chunks along a viewer path")
    walk.add_argument(
        "--config", "-c", type=str, default="default", help="Config name or path (default: default)"
    )
    walk.add_argument("--steps", type=int, default=20, help="Number of viewer moves (default: 20)")
    walk.add_argument(
        "--step-tiles", type=int, default=16, help="Tiles moved east per step (default: 16)"
    )
    walk.add_argument(
        "--viewport", type=int, default=64, help="Viewport width and height in tiles (default: 64)"
    )
    walk.add_argument(
        "--radius", type=int, default=1, help="Extra chunks loaded around the viewport (default: 1)"
    )
    return parser


def run_chunk(args: argparse.Namespace) -> int:
    from .api import handle_chunk_request

    body, _headers = handle_chunk_request(
        {
            "chunkX": args.chunk_x,
            "chunkY": args.chunk_y,
            "chunkSize": args.size,
            "seed": args.seed,
            "detail": args.detail,
        }
    )
    text = json.dumps(body)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text)
        logger.info("chunk_written", path=str(output_path), bytes=len(text))
    else:
        print(text)
    return 0


async def walk_viewer(
    config_name: str,
    steps: int,
    step_tiles: int,
    viewport: int,
    radius: int,
) -> dict[str, int]:
    """Move a viewport east ``steps`` times, keeping its chunks loaded.

    Returns:
        Final telemetry counters.
    """
    from .chunks import chunks_for_viewport
    from .config import find_config, load_config
    from .streaming import LoggingChunkTelemetry, create_streaming_manager

    config_path = find_config(config_name)
    config = load_config(config_path)
    logger.info("config_loaded", path=str(config_path))

    settings = config.streaming
    telemetry = LoggingChunkTelemetry(cleanup_interval_ms=settings.cleanup_interval_ms)
    evicted: list[str] = []
    manager = create_streaming_manager(
        settings,
        terrain=config.terrain,
        telemetry=telemetry,
        on_chunk_evicted=evicted.append,
    )

    try:
        for step in range(steps):
            x = step * step_tiles
            visible = chunks_for_viewport(
                x, 0, viewport, viewport, settings.chunk_size, padding=radius
            )
            start = time.perf_counter()
            results = await asyncio.gather(
                *(manager.ensure_chunk_loaded(cx, cy) for cx, cy in visible)
            )
            logger.info(
                "viewer_step",
                step=step,
                x=x,
                visible=len(visible),
                new=sum(1 for r in results if r.is_new),
                cache_size=manager.cache_size,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
    finally:
        manager.dispose()

    stats = telemetry.stats.to_dict()
    stats["evicted"] = len(evicted)
    return stats


def run_walk(args: argparse.Namespace) -> int:
    stats = asyncio.run(
        walk_viewer(
            args.config,
            steps=args.steps,
            step_tiles=args.step_tiles,
            viewport=args.viewport,
            radius=args.radius,
        )
    )
    print(json.dumps(stats, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "chunk":
        return run_chunk(args)

    try:
        return run_walk(args)
    except FileNotFoundError as e:
        parser.error(str(e))
    return 1


if __name__ == "__main__":
    sys.exit(main())
