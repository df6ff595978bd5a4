"""
Text renderer for the Leftover board and hand.

Cells are drawn one character each:
  '.' empty, '#' filled, 'x' junk
"""

from __future__ import annotations

from typing import Sequence

from leftover.game.board import Board, CellStatus
from leftover.game.session import Session
from leftover.game.shapes import Shape

CELL_CHARS: dict[int, str] = {
    CellStatus.EMPTY: ".",
    CellStatus.FILLED: "#",
    CellStatus.JUNK: "x",
}


def render_board(board: Board) -> str:
    """Draw the board with column and row indices."""
    header = "  " + " ".join(str(x) for x in range(board.size))
    lines = [header]
    for y in range(board.size):
        row = " ".join(CELL_CHARS[int(s)] for s in board.status[y])
        lines.append(f"{y} {row}")
    return "\n".join(lines)


def render_shape(shape: Shape) -> list[str]:
    """Draw a shape inside its bounding box, one string per row."""
    cells = set(shape.cells)
    return [
        "".join("#" if (x, y) in cells else " " for x in range(shape.width))
        for y in range(shape.height)
    ]


def render_hand(hand: Sequence[Shape]) -> str:
    """Draw hand shapes side by side, labelled by slot number."""
    if not hand:
        return "(empty hand)"
    drawings = [render_shape(s) for s in hand]
    widths = [max(len(r) for r in d) for d in drawings]
    height = max(len(d) for d in drawings)
    labels = "   ".join(f"[{i}]".ljust(max(w, 3)) for i, w in enumerate(widths))
    lines = [labels]
    for r in range(height):
        parts = []
        for drawing, width in zip(drawings, widths):
            text = drawing[r] if r < len(drawing) else ""
            parts.append(text.ljust(max(width, 3)))
        lines.append("   ".join(parts).rstrip())
    return "\n".join(lines)


def render_status(session: Session) -> str:
    """One-line summary of score, turn, combo and junk."""
    text = (
        f"Score: {session.score}  Best: {session.high_score}  "
        f"Turn: {session.turn}  Junk: {session.junk_count}"
    )
    if session.combo > 1:
        text += f"  COMBO x{session.combo}"
    return text


def render_session(session: Session) -> str:
    parts = [render_status(session), "", render_board(session.board), "", render_hand(session.hand)]
    if session.game_over:
        parts.extend(["", "GAME OVER"])
    return "\n".join(parts)
