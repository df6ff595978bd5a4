"""
Entry point for Leftover.

Supports two modes:
  - play:     Play Leftover in the terminal.
  - simulate: Run scripted agents and print aggregate statistics.

Usage:
    python main.py --mode play
    python main.py --mode play --config config/game.yaml
    python main.py --mode simulate --policy greedy --episodes 200 --seed 7
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, and the simulation overrides.
    """
    parser = argparse.ArgumentParser(
        description="Leftover: fill rows and columns, but mind the junk.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["play", "simulate"],
        default="play",
        help="Run mode: 'play' (manual play) or 'simulate' (scripted agents).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/game.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--episodes",
        type=int,
        default=None,
        help="Number of episodes for 'simulate' mode (overrides config).",
    )
    parser.add_argument(
        "--policy",
        type=str,
        choices=["random", "greedy"],
        default=None,
        help="Agent policy for 'simulate' mode (overrides config).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides config).",
    )
    parser.add_argument(
        "--csv-log",
        type=str,
        default=None,
        help="Write per-episode metrics to this CSV file in 'simulate' mode.",
    )
    return parser.parse_args(argv)


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Return a copy of config with any CLI flags that were given applied."""
    config = dict(config)
    overrides = {
        "episodes": args.episodes,
        "policy": args.policy,
        "seed": args.seed,
        "csv_log": args.csv_log,
    }
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config


def main() -> None:
    """Main entry point: parse args, load config, and dispatch to the selected mode."""
    args = parse_args()
    config = apply_overrides(load_config(args.config), args)

    if args.mode == "play":
        from leftover.play import play_manual
        play_manual(config)

    elif args.mode == "simulate":
        from leftover.simulate import simulate
        simulate(config)

    else:
        print(f"Unknown mode: {args.mode}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
