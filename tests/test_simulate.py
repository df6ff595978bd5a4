import csv

import numpy as np
import pytest

from leftover.env import LeftoverEnv
from leftover.simulate import CSV_FIELDNAMES, get_policy, greedy_policy, run_episode, simulate


def test_get_policy():
    assert get_policy("greedy") is greedy_policy
    with pytest.raises(ValueError):
        get_policy("dqn")


def test_greedy_prefers_points():
    env = LeftoverEnv(seed=0)
    env.reset()
    mask = env.get_valid_mask()
    action = greedy_policy(env, mask, np.random.default_rng(0))
    best = max(r.points for _, r in env.get_afterstates())
    chosen = dict(env.get_afterstates())[action]
    assert chosen.points == best


@pytest.mark.parametrize("policy", ["random", "greedy"])
def test_run_episode_plays_until_stuck_or_capped(policy):
    env = LeftoverEnv(seed=5)
    record = run_episode(env, get_policy(policy), np.random.default_rng(5), max_steps=40)
    assert env.session.game_over or record["placements"] == 40
    assert record["placements"] > 0
    assert record["score"] == env.session.score
    assert set(record) == set(CSV_FIELDNAMES[1:])


def test_simulate_writes_csv(tmp_path, capsys):
    log = tmp_path / "logs" / "sim.csv"
    config = {"episodes": 2, "policy": "random", "seed": 1, "csv_log": str(log)}
    records = simulate(config)
    assert len(records) == 2
    with open(log, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [int(r["episode"]) for r in rows] == [0, 1]
    assert "AGGREGATE STATISTICS" in capsys.readouterr().out


def test_simulate_is_reproducible():
    config = {"episodes": 3, "policy": "random", "seed": 9}
    assert simulate(config) == simulate(config)
