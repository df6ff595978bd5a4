"""
Board logic for the 6x6 Leftover grid.

The board is three parallel 2D numpy arrays of shape (size, size), indexed
[row, col] = [y, x]:
  - status: int8, 0 = empty, 1 = filled, 2 = junk
  - owner:  int64 placement id of the shape that filled the cell (0 = none)
  - color:  object array of display colors (None for empty cells)

A cell carries an owner if and only if it is filled. Boards are treated as
values: rules functions copy a board before changing it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

GRID_SIZE = 6

NO_OWNER = 0


class CellStatus(enum.IntEnum):
    """Status of a single board cell."""
    EMPTY = 0
    FILLED = 1
    JUNK = 2


@dataclass(frozen=True)
class Cell:
    """Read-only view of one board cell."""
    status: CellStatus
    color: str | None = None
    owner: int | None = None


class Board:
    """Square Leftover board.

    Attributes:
        size: Number of rows and columns.
        status: 2D int8 array of CellStatus values.
        owner: 2D int64 array of placement ids (NO_OWNER where not filled).
        color: 2D object array of color strings or None.
        next_owner: Placement id handed to the next stamped shape.
    """

    def __init__(self, size: int = GRID_SIZE) -> None:
        """Initialize an empty board.

        Args:
            size: Number of rows and columns.
        """
        self.size = size
        self.status = np.zeros((size, size), dtype=np.int8)
        self.owner = np.zeros((size, size), dtype=np.int64)
        self.color = np.full((size, size), None, dtype=object)
        self.next_owner = 1

    def copy(self) -> Board:
        """Return an independent copy of the board."""
        board = Board(self.size)
        board.status = self.status.copy()
        board.owner = self.owner.copy()
        board.color = self.color.copy()
        board.next_owner = self.next_owner
        return board

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Cell:
        """Return the cell at column x, row y."""
        status = CellStatus(int(self.status[y, x]))
        owner = int(self.owner[y, x])
        return Cell(
            status=status,
            color=self.color[y, x],
            owner=owner if owner != NO_OWNER else None,
        )

    def full_rows(self) -> list[int]:
        """Indices of rows with no empty cell (filled and junk both count)."""
        occupied = self.status != CellStatus.EMPTY
        return [int(r) for r in np.flatnonzero(occupied.all(axis=1))]

    def full_cols(self) -> list[int]:
        """Indices of columns with no empty cell."""
        occupied = self.status != CellStatus.EMPTY
        return [int(c) for c in np.flatnonzero(occupied.all(axis=0))]

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.status == CellStatus.FILLED))

    def junk_count(self) -> int:
        return int(np.count_nonzero(self.status == CellStatus.JUNK))

    def is_empty(self) -> bool:
        return not np.any(self.status != CellStatus.EMPTY)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self.size == other.size
            and self.next_owner == other.next_owner
            and np.array_equal(self.status, other.status)
            and np.array_equal(self.owner, other.owner)
            and bool(np.all(self.color == other.color))
        )

    # Boards hold mutable arrays.
    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Board(size={self.size}, filled={self.filled_count()}, "
            f"junk={self.junk_count()})"
        )


def create_empty_board(size: int = GRID_SIZE) -> Board:
    """Return a new board with every cell empty."""
    return Board(size)
