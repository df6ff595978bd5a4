"""
Batch simulation of Leftover games with scripted agents.

Runs episodes through LeftoverEnv with one of two policies:
  - random: uniform over legal actions
  - greedy: legal action with the most immediate points (ties broken by
            least junk created, then at random)

Per-episode metrics can be written to CSV; aggregate statistics are printed
at the end.
"""

from __future__ import annotations

import csv
import pathlib
import queue as queue_mod
import threading
import time
from typing import Any, Callable

import numpy as np

from leftover.env import LeftoverEnv

CSV_FIELDNAMES = [
    "episode",
    "score",
    "placements",
    "turns",
    "lines",
    "junk_created",
    "junk_at_end",
    "max_combo",
]

POLICIES = ("random", "greedy")


class CSVLogger:
    """Thread-safe CSV logger that writes rows in a background thread."""

    def __init__(self, path: str | pathlib.Path, fieldnames: list[str]) -> None:
        self._path = pathlib.Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._fieldnames = fieldnames
        self._queue: queue_mod.Queue = queue_mod.Queue()
        self._thread = threading.Thread(target=self._writer, daemon=True)
        self._thread.start()

    def _writer(self) -> None:
        header_written = self._path.exists() and self._path.stat().st_size > 0
        while True:
            row = self._queue.get()
            if row is None:
                break
            try:
                with open(self._path, "a", newline="", encoding="utf-8") as f:
                    w = csv.DictWriter(f, fieldnames=self._fieldnames)
                    if not header_written:
                        w.writeheader()
                        header_written = True
                    w.writerow(row)
            except OSError as e:
                print(f"CSVLogger error: {e}", flush=True)

    def write(self, row: dict) -> None:
        self._queue.put_nowait(row)

    def shutdown(self) -> None:
        self._queue.put(None)
        self._thread.join(timeout=5)


# ── Policies ─────────────────────────────────────────────────────────────────

def random_policy(env: LeftoverEnv, mask: np.ndarray, rng: np.random.Generator) -> int:
    return int(rng.choice(np.flatnonzero(mask)))


def greedy_policy(env: LeftoverEnv, mask: np.ndarray, rng: np.random.Generator) -> int:
    """Pick the afterstate with the most points, then the least junk."""
    afterstates = env.get_afterstates()
    best_key = max((r.points, -r.junk_created) for _, r in afterstates)
    best = [a for a, r in afterstates if (r.points, -r.junk_created) == best_key]
    return int(rng.choice(best))


def get_policy(name: str) -> Callable[[LeftoverEnv, np.ndarray, np.random.Generator], int]:
    """Look up a policy by name.

    Raises:
        ValueError: If the name is not one of POLICIES.
    """
    if name == "random":
        return random_policy
    if name == "greedy":
        return greedy_policy
    raise ValueError(f"Unknown policy: {name} (expected one of {', '.join(POLICIES)})")


# ── Episodes ─────────────────────────────────────────────────────────────────

def run_episode(
    env: LeftoverEnv,
    policy: Callable[[LeftoverEnv, np.ndarray, np.random.Generator], int],
    rng: np.random.Generator,
    max_steps: int = 10_000,
) -> dict[str, Any]:
    """Play one game to completion and return its metrics."""
    env.reset()
    mask = env.get_valid_mask()
    done = not mask.any()

    placements = 0
    lines = 0
    junk_created = 0
    max_combo = 0

    while not done and placements < max_steps:
        action = policy(env, mask, rng)
        _, _, done, info = env.step(action)
        mask = info["valid_mask"]
        placements += 1
        lines += info["lines_cleared"]
        junk_created += info["junk_created"]
        max_combo = max(max_combo, info["combo"])

    return {
        "score": env.session.score,
        "placements": placements,
        "turns": env.session.turn,
        "lines": lines,
        "junk_created": junk_created,
        "junk_at_end": env.session.junk_count,
        "max_combo": max_combo,
    }


def simulate(config: dict[str, Any]) -> list[dict[str, Any]]:
    """Run the configured number of episodes and print aggregate statistics.

    Args:
        config: Config dict with keys episodes, policy, seed, board_size,
            hand_size and optionally csv_log.

    Returns:
        List of per-episode metric dicts.
    """
    num_episodes = int(config.get("episodes", 100))
    policy_name = config.get("policy", "greedy")
    policy = get_policy(policy_name)
    seed = config.get("seed")

    env = LeftoverEnv(
        board_size=config.get("board_size", 6),
        hand_size=config.get("hand_size", 3),
        seed=seed,
    )
    rng = np.random.default_rng(seed)

    csv_logger = None
    if config.get("csv_log"):
        csv_logger = CSVLogger(config["csv_log"], CSV_FIELDNAMES)
        print(f"CSV log: {config['csv_log']}")

    print(f"\nRunning {num_episodes} episodes with the {policy_name} policy...\n")
    start_time = time.time()

    episode_data = []
    try:
        for ep in range(num_episodes):
            record = {"episode": ep, **run_episode(env, policy, rng)}
            episode_data.append(record)
            if csv_logger is not None:
                csv_logger.write(record)
            if (ep + 1) % 10 == 0:
                print(f"  Episode {ep + 1}/{num_episodes} done | "
                      f"Score: {record['score']}, Placements: {record['placements']}, "
                      f"Junk: {record['junk_at_end']}")
    finally:
        if csv_logger is not None:
            csv_logger.shutdown()

    elapsed = time.time() - start_time
    print(f"\nSimulation complete in {elapsed:.1f}s")
    print_summary(episode_data)
    return episode_data


def print_summary(episode_data: list[dict[str, Any]]) -> None:
    if not episode_data:
        print("No episodes played.")
        return

    print("=" * 70)
    print("AGGREGATE STATISTICS")
    print("=" * 70)
    print(f"\n{'Metric':<25} {'Mean':>8} {'Median':>8} {'Std':>8} {'Min':>8} {'Max':>8}")
    print("-" * 70)
    for name in CSV_FIELDNAMES[1:]:
        arr = np.array([d[name] for d in episode_data], dtype=np.float64)
        print(f"{name:<25} {arr.mean():>8.1f} {np.median(arr):>8.1f} "
              f"{arr.std():>8.1f} {arr.min():>8.0f} {arr.max():>8.0f}")
