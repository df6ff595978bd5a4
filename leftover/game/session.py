"""
Game session: hand bookkeeping, turns, game over and undo history.

The session owns the only mutable game state. It calls into the pure rules
functions and keeps a bounded stack of immutable snapshots for undo.
"""

from __future__ import annotations

import collections
import random
from dataclasses import dataclass

from leftover.game.board import GRID_SIZE, Board, create_empty_board
from leftover.game.rules import PlacementResult, apply_placement, can_place, can_place_anywhere
from leftover.game.shapes import Shape, generate_hand, rotate

HAND_SIZE = 3
HISTORY_LIMIT = 20


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of everything needed to resume a game.

    Compares by value. Not hashable, since the board holds numpy arrays.
    """
    board: Board
    score: int
    hand: tuple[Shape, ...]
    turn: int
    game_over: bool
    combo: int


class Session:
    """A single Leftover game.

    Attributes:
        board: Current board.
        score: Current score.
        high_score: Best score seen by this session.
        hand: Shapes currently offered.
        turn: Hand number, starting at 1. Increments on every refill.
        combo: Consecutive clean clears.
        game_over: Whether no shape in the hand fits.
        history: Snapshots taken before each placement, newest last.
    """

    def __init__(
        self,
        board_size: int = GRID_SIZE,
        hand_size: int = HAND_SIZE,
        history_limit: int = HISTORY_LIMIT,
        rng: random.Random | None = None,
    ) -> None:
        self.board_size = board_size
        self.hand_size = hand_size
        self.rng = rng or random.Random()
        self.high_score: int = 0
        self.history: collections.deque[Snapshot] = collections.deque(maxlen=history_limit)
        self.board: Board = create_empty_board(board_size)
        self.score: int = 0
        self.hand: list[Shape] = []
        self.turn: int = 1
        self.combo: int = 0
        self.game_over: bool = False
        self.reset()

    def reset(self) -> None:
        """Start a new game. The high score is kept."""
        self.board = create_empty_board(self.board_size)
        self.score = 0
        self.turn = 1
        self.combo = 0
        self.game_over = False
        self.hand = generate_hand(self.hand_size, 1, rng=self.rng)
        self.history.clear()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board,
            score=self.score,
            hand=tuple(self.hand),
            turn=self.turn,
            game_over=self.game_over,
            combo=self.combo,
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the current state with a snapshot (history untouched)."""
        self.board = snapshot.board
        self.score = snapshot.score
        self.hand = list(snapshot.hand)
        self.turn = snapshot.turn
        self.game_over = snapshot.game_over
        self.combo = snapshot.combo
        self.high_score = max(self.high_score, self.score)

    def find_shape(self, shape_id: str) -> Shape:
        """Return the hand entry with this id.

        Raises:
            KeyError: If no shape in the hand has this id.
        """
        for shape in self.hand:
            if shape.id == shape_id:
                return shape
        raise KeyError(f"No shape {shape_id!r} in hand")

    def rotate(self, shape_id: str) -> Shape:
        """Rotate a hand entry clockwise in place and return it."""
        shape = self.find_shape(shape_id)
        rotated = rotate(shape)
        self.hand = [rotated if s.id == shape_id else s for s in self.hand]
        return rotated

    def can_drop(self, shape_id: str, x: int, y: int) -> bool:
        return can_place(self.board, self.find_shape(shape_id), x, y)

    def place(self, shape_id: str, x: int, y: int) -> PlacementResult | None:
        """Place a hand shape at anchor (x, y).

        Records an undo snapshot, applies the placement, refills the hand
        when it empties and updates the game-over flag.

        Args:
            shape_id: Id of a shape in the hand.
            x: Anchor column.
            y: Anchor row.

        Returns:
            The PlacementResult, or None if the game is over or the shape
            does not fit at (x, y).
        """
        shape = self.find_shape(shape_id)
        if self.game_over or not can_place(self.board, shape, x, y):
            return None

        self.history.append(self.snapshot())

        result = apply_placement(self.board, shape, x, y, self.combo)
        self.board = result.board
        self.score += result.points
        self.combo = result.combo_out
        self.high_score = max(self.high_score, self.score)

        self.hand = [s for s in self.hand if s.id != shape_id]
        if not self.hand:
            self.hand = generate_hand(self.hand_size, self.turn, rng=self.rng)
            self.turn += 1

        if not can_place_anywhere(self.board, self.hand):
            self.game_over = True
        return result

    def undo(self) -> bool:
        """Revert to the state before the last placement.

        Returns:
            True if a snapshot was restored, False if the history is empty.
        """
        if not self.history:
            return False
        self.restore(self.history.pop())
        return True

    @property
    def junk_count(self) -> int:
        return self.board.junk_count()
