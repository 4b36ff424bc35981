"""Command-line entry point for Snake Arcade."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade simulation, server, and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless random games and report scores.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (overrides other flags).",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument("--max-frames", type=int, default=2_000)
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument(
        "--classic", action="store_true",
        help="Score one point per food and disable poison.",
    )

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write the default configuration to a JSON file.",
    )
    config_p.add_argument("output", help="Path for the config file.")

    return parser


def _config_from_args(args: argparse.Namespace):
    from snake_arcade.config import GameConfig, ScoreRules

    if args.config:
        return GameConfig.load(args.config)

    defaults = GameConfig()
    overrides: dict = {}
    if args.grid_width is not None:
        overrides["screen_width"] = args.grid_width * defaults.block_size
    if args.grid_height is not None:
        overrides["screen_height"] = args.grid_height * defaults.block_size
    if args.classic:
        overrides["scoring"] = ScoreRules.classic()
        overrides["poison_enabled"] = False
    return replace(defaults, **overrides)


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_arcade.simulate import simulate

    try:
        config = _config_from_args(args)
        result = simulate(
            num_games=args.games,
            config=config,
            seed=args.seed,
            max_frames=args.max_frames,
        )
    except (ValueError, TypeError, OSError) as exc:
        logger.error("Invalid simulation settings: %s", exc)
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.server.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_arcade.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "serve": _run_serve,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
