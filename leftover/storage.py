"""
Save-game persistence.

A SaveStore is a flat key-value store backed by a single JSON file. Two keys
are used:
  - "leftover_save":      current snapshot plus undo history
  - "leftover_highscore": best score, kept across new games
"""

from __future__ import annotations

import json
import pathlib
import sys
from typing import Any

import numpy as np

from leftover.game.board import Board, CellStatus
from leftover.game.session import Session, Snapshot
from leftover.game.shapes import Shape, normalize

SAVE_KEY = "leftover_save"
HIGH_SCORE_KEY = "leftover_highscore"


# ── Snapshot <-> dict ────────────────────────────────────────────────────────

def board_to_dict(board: Board) -> dict[str, Any]:
    return {
        "size": board.size,
        "status": board.status.tolist(),
        "owner": board.owner.tolist(),
        "color": board.color.tolist(),
        "next_owner": board.next_owner,
    }


def board_from_dict(data: dict[str, Any]) -> Board:
    """Rebuild a board written by board_to_dict.

    Raises:
        ValueError: If a grid is not size x size or holds an unknown status.
    """
    board = Board(int(data["size"]))
    expected = (board.size, board.size)
    status = np.array(data["status"], dtype=np.int8)
    owner = np.array(data["owner"], dtype=np.int64)
    color_rows = data["color"]
    if status.shape != expected or owner.shape != expected:
        raise ValueError(
            f"Saved board grids must be {expected}, got {status.shape} and {owner.shape}"
        )
    if len(color_rows) != board.size or any(len(row) != board.size for row in color_rows):
        raise ValueError(f"Saved board colors must be {expected}")
    if not np.isin(status, [s.value for s in CellStatus]).all():
        raise ValueError("Saved board has an unknown cell status")

    color = np.full(expected, None, dtype=object)
    for y, row in enumerate(color_rows):
        for x, value in enumerate(row):
            color[y, x] = value
    board.status = status
    board.owner = owner
    board.color = color
    board.next_owner = int(data["next_owner"])
    return board


def shape_to_dict(shape: Shape) -> dict[str, Any]:
    return {"id": shape.id, "cells": [list(c) for c in shape.cells], "color": shape.color}


def shape_from_dict(data: dict[str, Any]) -> Shape:
    return Shape(
        id=data["id"],
        cells=normalize((int(x), int(y)) for x, y in data["cells"]),
        color=data["color"],
    )


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to JSON-compatible primitives."""
    return {
        "board": board_to_dict(snapshot.board),
        "score": snapshot.score,
        "hand": [shape_to_dict(s) for s in snapshot.hand],
        "turn": snapshot.turn,
        "game_over": snapshot.game_over,
        "combo": snapshot.combo,
    }


def snapshot_from_dict(data: dict[str, Any]) -> Snapshot:
    """Rebuild a snapshot written by snapshot_to_dict.

    Raises:
        KeyError: If "board" or "hand" is missing.
    """
    return Snapshot(
        board=board_from_dict(data["board"]),
        score=int(data.get("score", 0)),
        hand=tuple(shape_from_dict(s) for s in data["hand"]),
        turn=int(data.get("turn", 1)),
        game_over=bool(data.get("game_over", False)),
        combo=int(data.get("combo", 0)),
    )


# ── Store ────────────────────────────────────────────────────────────────────

class SaveStore:
    """JSON-file key-value store for sessions and the high score.

    Attributes:
        path: Location of the JSON file. Created on first write.
    """

    def __init__(self, path: str | pathlib.Path) -> None:
        self.path = pathlib.Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Failed to read save file {self.path}: {e}", file=sys.stderr)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def load_high_score(self) -> int:
        try:
            return int(self.get(HIGH_SCORE_KEY, 0))
        except (TypeError, ValueError):
            return 0

    def save_session(self, session: Session) -> None:
        """Persist the session state, its undo history and the high score."""
        record = snapshot_to_dict(session.snapshot())
        record["history"] = [snapshot_to_dict(s) for s in session.history]
        data = self._read()
        data[SAVE_KEY] = record
        data[HIGH_SCORE_KEY] = max(session.high_score, self.load_high_score())
        self._write(data)

    def load_session(self, session: Session) -> bool:
        """Restore a saved game into `session`.

        The high score is always loaded. The game itself is restored only if
        a complete record exists.

        Returns:
            True if a saved game was restored, False otherwise (the session's
            game state is left unchanged).
        """
        session.high_score = max(session.high_score, self.load_high_score())
        record = self.get(SAVE_KEY)
        if not record:
            return False
        try:
            snapshot = snapshot_from_dict(record)
            history = [snapshot_from_dict(h) for h in record.get("history", [])]
        except (KeyError, TypeError, ValueError) as e:
            print(f"Failed to load save: {e}", file=sys.stderr)
            return False

        session.restore(snapshot)
        session.history.clear()
        session.history.extend(history)
        return True

    def clear_session(self) -> None:
        """Forget the saved game. The high score is kept."""
        self.remove(SAVE_KEY)
