from __future__ import annotations

from typing import Sequence

from leftover.game.board import Board, CellStatus
from leftover.game.shapes import JUNK_COLOR, Shape, make_shape

FILL_COLOR = "#3b82f6"


def board_from_rows(rows: Sequence[str]) -> Board:
    """Build a board from text rows.

    '.' is empty, 'x' is junk, and any other character is a filled cell
    whose owner is shared by every cell drawn with the same character.
    """
    board = Board(len(rows))
    owners: dict[str, int] = {}
    for y, row in enumerate(rows):
        assert len(row) == board.size, f"row {y} has {len(row)} cells"
        for x, ch in enumerate(row):
            if ch == ".":
                continue
            if ch == "x":
                board.status[y, x] = CellStatus.JUNK
                board.color[y, x] = JUNK_COLOR
                continue
            owner = owners.setdefault(ch, len(owners) + 1)
            board.status[y, x] = CellStatus.FILLED
            board.color[y, x] = FILL_COLOR
            board.owner[y, x] = owner
    board.next_owner = len(owners) + 1
    return board


def rows_of(board: Board) -> list[str]:
    """Render statuses as rows of '.', '#' and 'x'."""
    chars = {CellStatus.EMPTY: ".", CellStatus.FILLED: "#", CellStatus.JUNK: "x"}
    return ["".join(chars[CellStatus(int(s))] for s in row) for row in board.status]


def shape(cells, shape_id: str = "s1", color: str = "#22c55e") -> Shape:
    return make_shape(cells, color=color, shape_id=shape_id)
