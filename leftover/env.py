"""
Placement-based Leftover environment for agents.

The agent chooses WHICH hand shape to place, in WHICH rotation, at WHICH
anchor. One step = one placement, and the reward is the points it earns.

Action space: hand_size * 4 * N * N discrete actions (432 for 3 shapes on 6x6).
  action = slot * (4 * N * N) + rotation * (N * N) + y * N + x

Observation: (2 + hand_size, N, N) float32.
  Ch0:   Filled cells (binary)
  Ch1:   Junk cells (binary)
  Ch2..: One channel per hand slot, shape drawn at the top-left corner
         (zeros for an empty slot)
"""

from __future__ import annotations

import random
from typing import Any

import numpy as np

from leftover.game.board import GRID_SIZE, CellStatus
from leftover.game.rules import PlacementResult, apply_placement, can_place
from leftover.game.session import HAND_SIZE, Session
from leftover.game.shapes import Shape, rotations


class LeftoverEnv:
    """Discrete-action wrapper around a Session.

    Attributes:
        session: The underlying game session.
        action_space_n: Number of discrete actions.
        observation_shape: Shape of observations.
    """

    NUM_ROTATIONS = 4
    BOARD_CHANNELS = 2

    def __init__(
        self,
        board_size: int = GRID_SIZE,
        hand_size: int = HAND_SIZE,
        seed: int | None = None,
    ) -> None:
        self.board_size = board_size
        self.hand_size = hand_size
        self.session = Session(board_size=board_size, hand_size=hand_size, rng=random.Random(seed))
        self._cells = board_size * board_size
        self._slot_actions = self.NUM_ROTATIONS * self._cells
        self.action_space_n: int = hand_size * self._slot_actions
        self.observation_shape: tuple[int, int, int] = (
            self.BOARD_CHANNELS + hand_size, board_size, board_size
        )

    def reset(self) -> np.ndarray:
        """Start a new game and return the initial observation."""
        self.session.reset()
        return self._build_observation()

    def encode_action(self, slot: int, rotation: int, x: int, y: int) -> int:
        return slot * self._slot_actions + rotation * self._cells + y * self.board_size + x

    def decode_action(self, action: int) -> tuple[int, int, int, int]:
        """Split an action index into (slot, rotation, x, y).

        Raises:
            ValueError: If the action is outside the action space.
        """
        if not 0 <= action < self.action_space_n:
            raise ValueError(f"Action {action} out of range [0, {self.action_space_n})")
        slot, rest = divmod(action, self._slot_actions)
        rotation, cell = divmod(rest, self._cells)
        y, x = divmod(cell, self.board_size)
        return slot, rotation, x, y

    def _oriented_shape(self, slot: int, rotation: int) -> Shape | None:
        if slot >= len(self.session.hand):
            return None
        return rotations(self.session.hand[slot])[rotation]

    def get_valid_mask(self) -> np.ndarray:
        """Return a boolean mask of legal actions."""
        mask = np.zeros(self.action_space_n, dtype=bool)
        if self.session.game_over:
            return mask
        board = self.session.board
        for slot, shape in enumerate(self.session.hand):
            for rotation, oriented in enumerate(rotations(shape)):
                for y in range(self.board_size):
                    for x in range(self.board_size):
                        if can_place(board, oriented, x, y):
                            mask[self.encode_action(slot, rotation, x, y)] = True
        return mask

    def step(self, action: int) -> tuple[np.ndarray, float, bool, dict[str, Any]]:
        """Rotate the chosen shape as requested and place it.

        Args:
            action: Integer in [0, action_space_n).

        Returns:
            (observation, reward, done, info) where info contains 'valid_mask'.

        Raises:
            ValueError: If the action is out of range or not legal.
        """
        if self.session.game_over:
            return self._build_observation(), 0.0, True, self._build_info(None)

        slot, rotation, x, y = self.decode_action(action)
        oriented = self._oriented_shape(slot, rotation)
        if oriented is None or not can_place(self.session.board, oriented, x, y):
            raise ValueError(f"Illegal action {action} (slot={slot}, rotation={rotation}, x={x}, y={y})")

        for _ in range(rotation):
            self.session.rotate(oriented.id)
        result = self.session.place(oriented.id, x, y)

        obs = self._build_observation()
        return obs, float(result.points), self.session.game_over, self._build_info(result)

    def get_afterstates(self) -> list[tuple[int, PlacementResult]]:
        """Simulate every legal action without changing the session.

        Returns:
            List of (action_idx, placement_result).
        """
        results = []
        board = self.session.board
        combo = self.session.combo
        for action_idx in np.flatnonzero(self.get_valid_mask()):
            slot, rotation, x, y = self.decode_action(int(action_idx))
            oriented = self._oriented_shape(slot, rotation)
            results.append((int(action_idx), apply_placement(board, oriented, x, y, combo)))
        return results

    def _build_observation(self) -> np.ndarray:
        obs = np.zeros(self.observation_shape, dtype=np.float32)
        status = self.session.board.status
        obs[0] = (status == CellStatus.FILLED).astype(np.float32)
        obs[1] = (status == CellStatus.JUNK).astype(np.float32)
        for slot, shape in enumerate(self.session.hand[: self.hand_size]):
            for dx, dy in shape.cells:
                obs[self.BOARD_CHANNELS + slot, dy, dx] = 1.0
        return obs

    def _build_info(self, result: PlacementResult | None) -> dict[str, Any]:
        return {
            "score": self.session.score,
            "turn": self.session.turn,
            "combo": self.session.combo,
            "lines_cleared": result.lines_cleared if result else 0,
            "junk_created": result.junk_created if result else 0,
            "junk": self.session.junk_count,
            "valid_mask": self.get_valid_mask(),
        }
