"""Game logic: board, shapes, placement rules and session."""

from leftover.game.board import GRID_SIZE, Board, Cell, CellStatus, create_empty_board
from leftover.game.shapes import SHAPES, Shape, generate_hand, rotate
from leftover.game.rules import (
    PlacementResult,
    apply_placement,
    can_place,
    can_place_anywhere,
)
from leftover.game.session import Session, Snapshot

__all__ = [
    "GRID_SIZE",
    "Board",
    "Cell",
    "CellStatus",
    "create_empty_board",
    "SHAPES",
    "Shape",
    "generate_hand",
    "rotate",
    "PlacementResult",
    "apply_placement",
    "can_place",
    "can_place_anywhere",
    "Session",
    "Snapshot",
]
