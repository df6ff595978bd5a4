"""
Placement rules: legality, line clears, the leftover-to-junk conversion,
scoring and the no-move check.

All functions are pure. apply_placement works on a copy of the board and
returns the new board inside a PlacementResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

import numpy as np

from leftover.game.board import Board, CellStatus, NO_OWNER
from leftover.game.shapes import JUNK_COLOR, Shape, rotations

# Scoring constants
PLACEMENT_POINTS_PER_CELL = 10
LINE_CLEAR_POINTS = 100
CLEAN_CLEAR_BONUS = 50
COMBO_STEP_BONUS = 100


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of one placement.

    Attributes:
        board: Board after stamping, clearing and junk conversion.
        lines_cleared: Full rows plus full columns.
        junk_created: Cells converted to junk by this placement.
        points: Points earned.
        combo_out: Combo counter after this placement.
        cleared_rows: Indices of the cleared rows.
        cleared_cols: Indices of the cleared columns.
    """
    board: Board
    lines_cleared: int
    junk_created: int
    points: int
    combo_out: int
    cleared_rows: tuple[int, ...] = ()
    cleared_cols: tuple[int, ...] = ()

    @property
    def feedback(self) -> str:
        """'place' (no clear), 'perfect' (clean clear) or 'junk'."""
        if self.lines_cleared == 0:
            return "place"
        if self.junk_created == 0:
            return "perfect"
        return "junk"


def can_place(board: Board, shape: Shape, x: int, y: int) -> bool:
    """Check whether a shape anchored at (x, y) fits on the board.

    A placement is legal if every cell of the shape lands inside the board
    on an empty cell. Filled and junk cells both block.

    Args:
        board: Board to test against.
        shape: Shape with normalized offsets.
        x: Anchor column.
        y: Anchor row.

    Returns:
        True if the placement is legal.
    """
    for dx, dy in shape.cells:
        col = x + dx
        row = y + dy
        if not board.in_bounds(col, row):
            return False
        if board.status[row, col] != CellStatus.EMPTY:
            return False
    return True


def legal_placements(board: Board, shape: Shape) -> Iterator[tuple[int, int, int]]:
    """Yield every (rotation, x, y) at which the shape fits.

    rotation is the number of clockwise quarter turns applied to `shape`.
    """
    for rotation, rotated in enumerate(rotations(shape)):
        for y in range(board.size):
            for x in range(board.size):
                if can_place(board, rotated, x, y):
                    yield rotation, x, y


def can_place_anywhere(board: Board, hand: Sequence[Shape]) -> bool:
    """Return True if any shape in the hand fits somewhere in any rotation.

    An empty hand counts as placeable; callers refill before relying on this.
    """
    if not hand:
        return True
    for shape in hand:
        for _ in legal_placements(board, shape):
            return True
    return False


def calculate_points(cells_placed: int, lines_cleared: int, junk_created: int, combo_out: int) -> int:
    """Score a placement.

    No clear: 10 per placed cell. Otherwise 100 per line, 50 more per line
    when no junk was created, and 100 per combo step beyond the first.
    """
    if lines_cleared == 0:
        return PLACEMENT_POINTS_PER_CELL * cells_placed
    points = LINE_CLEAR_POINTS * lines_cleared
    if junk_created == 0:
        points += CLEAN_CLEAR_BONUS * lines_cleared
    if combo_out > 1:
        points += (combo_out - 1) * COMBO_STEP_BONUS
    return points


def apply_placement(
    board: Board,
    shape: Shape,
    x: int,
    y: int,
    combo_in: int = 0,
) -> PlacementResult:
    """Stamp a shape, clear full lines and turn leftovers into junk.

    Does NOT check legality; the caller must have confirmed can_place().

    Cells of a shape that lie in a cleared line are emptied. Cells of the
    same placement that lie outside every cleared line become junk. Junk
    is never cleared, including junk inside a cleared line.

    Args:
        board: Board before the move. Not modified.
        shape: Shape to place.
        x: Anchor column.
        y: Anchor row.
        combo_in: Combo counter before this placement.

    Returns:
        PlacementResult with the new board, lines, junk, points and combo.
    """
    new_board = board.copy()

    owner_id = new_board.next_owner
    new_board.next_owner += 1
    for dx, dy in shape.cells:
        new_board.status[y + dy, x + dx] = CellStatus.FILLED
        new_board.color[y + dy, x + dx] = shape.color
        new_board.owner[y + dy, x + dx] = owner_id

    full_rows = new_board.full_rows()
    full_cols = new_board.full_cols()
    lines_cleared = len(full_rows) + len(full_cols)

    if lines_cleared == 0:
        return PlacementResult(
            board=new_board,
            lines_cleared=0,
            junk_created=0,
            points=calculate_points(len(shape.cells), 0, 0, 0),
            combo_out=0,
        )

    cleared = np.zeros((new_board.size, new_board.size), dtype=bool)
    cleared[full_rows, :] = True
    cleared[:, full_cols] = True

    filled = new_board.status == CellStatus.FILLED
    affected_owners = np.unique(new_board.owner[cleared & filled])
    affected_owners = affected_owners[affected_owners != NO_OWNER]

    to_empty = filled & cleared
    to_junk = filled & ~cleared & np.isin(new_board.owner, affected_owners)

    new_board.status[to_empty] = CellStatus.EMPTY
    new_board.color[to_empty] = None
    new_board.owner[to_empty] = NO_OWNER

    new_board.status[to_junk] = CellStatus.JUNK
    new_board.color[to_junk] = JUNK_COLOR
    new_board.owner[to_junk] = NO_OWNER

    junk_created = int(np.count_nonzero(to_junk))
    combo_out = combo_in + 1 if junk_created == 0 else 0

    return PlacementResult(
        board=new_board,
        lines_cleared=lines_cleared,
        junk_created=junk_created,
        points=calculate_points(len(shape.cells), lines_cleared, junk_created, combo_out),
        combo_out=combo_out,
        cleared_rows=tuple(full_rows),
        cleared_cols=tuple(full_cols),
    )
