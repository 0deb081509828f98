"""Command-line tools for the snake simulation."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; other flags override it.",
    )
    parser.add_argument("--grid-width", type=int, default=None)
    parser.add_argument("--grid-height", type=int, default=None)
    parser.add_argument(
        "--wall-mode", type=str, default=None, choices=["wrap", "death"],
    )
    parser.add_argument("--move-delay-ms", type=int, default=None)
    parser.add_argument(
        "--no-throttle", action="store_true",
        help="Disable direction-change throttling.",
    )
    parser.add_argument("--initial-interval-ms", type=int, default=None)
    parser.add_argument("--min-interval-ms", type=int, default=None)
    parser.add_argument("--interval-step-ms", type=int, default=None)
    parser.add_argument("--food-value", type=int, default=None)
    parser.add_argument(
        "--spawn-strategy", type=str, default=None,
        choices=["enumerate", "sample"],
    )
    parser.add_argument("--seed", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-sim",
        description="Snake simulation benchmarking and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=int, default=100)
    bench_p.add_argument("--max-steps", type=int, default=500)
    _add_config_flags(bench_p)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write a game config as JSON.",
    )
    config_p.add_argument("output", help="Path for the JSON file.")
    _add_config_flags(config_p)

    return parser


def _resolve_config(args: argparse.Namespace):
    from snake_sim.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "grid_width": "grid_width",
        "grid_height": "grid_height",
        "wall_mode": "wall_mode",
        "move_delay_ms": "move_delay_ms",
        "initial_interval_ms": "initial_interval_ms",
        "min_interval_ms": "min_interval_ms",
        "interval_step_ms": "interval_step_ms",
        "food_value": "food_value",
        "spawn_strategy": "spawn_strategy",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if getattr(args, "no_throttle", False):
        overrides["move_delay_ms"] = None

    if overrides:
        config = config.with_overrides(**overrides)
    return config


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_sim.benchmark import benchmark_throughput

    config = _resolve_config(args)
    result = benchmark_throughput(
        num_games=args.num_games,
        max_steps=args.max_steps,
        config=config,
        seed=config.seed if config.seed is not None else 42,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-sim`` CLI."""
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
        "benchmark": _run_benchmark,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
