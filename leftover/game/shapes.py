"""
Shape catalog, rotation and hand generation.

Coordinate convention:
  - Shapes are tuples of (x, y) offsets relative to an anchor at (0, 0).
  - x is the column (increasing rightward), y is the row (increasing downward).
  - Offsets are always normalized: min x == min y == 0, sorted by (y, x).
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

# =============================================================================
# Colors
# =============================================================================

BLOCK_COLORS: list[str] = [
    "#ef4444",  # red
    "#f97316",  # orange
    "#eab308",  # yellow
    "#22c55e",  # green
    "#06b6d4",  # cyan
    "#3b82f6",  # blue
    "#a855f7",  # purple
    "#ec4899",  # pink
]

JUNK_COLOR = "#475569"

Offset = tuple[int, int]


@dataclass(frozen=True)
class Shape:
    """A polyomino offered to the player.

    Attributes:
        id: Identifier of this hand entry. Survives rotation.
        cells: Normalized (x, y) offsets.
        color: Display color.
    """
    id: str
    cells: tuple[Offset, ...]
    color: str

    @property
    def width(self) -> int:
        return max(x for x, _ in self.cells) + 1

    @property
    def height(self) -> int:
        return max(y for _, y in self.cells) + 1


def normalize(cells: Iterable[Offset]) -> tuple[Offset, ...]:
    """Shift offsets so the bounding box starts at (0, 0) and sort by (y, x)."""
    cells = list(cells)
    min_x = min(x for x, _ in cells)
    min_y = min(y for _, y in cells)
    shifted = [(x - min_x, y - min_y) for x, y in cells]
    return tuple(sorted(shifted, key=lambda c: (c[1], c[0])))


def rotate(shape: Shape) -> Shape:
    """Rotate a shape 90 degrees clockwise: (x, y) -> (-y, x), renormalized.

    Identifier and color are unchanged.
    """
    return replace(shape, cells=normalize((-y, x) for x, y in shape.cells))


def rotations(shape: Shape) -> list[Shape]:
    """Return the shape in rotation states 0-3 (duplicates kept)."""
    states = [shape]
    for _ in range(3):
        states.append(rotate(states[-1]))
    return states


# =============================================================================
# Catalog
# =============================================================================
# Each entry carries a draw probability. Draws are currently uniform over the
# catalog; the weights are kept for a future weighted draw.

SHAPES: list[dict] = [
    # Single dot
    {"name": "dot", "cells": ((0, 0),), "probability": 1.0},
    # Dominoes
    {"name": "domino_h", "cells": ((0, 0), (1, 0)), "probability": 0.8},
    {"name": "domino_v", "cells": ((0, 0), (0, 1)), "probability": 0.8},
    {"name": "domino_diag", "cells": ((0, 0), (1, 1)), "probability": 0.4},
    # Trominoes
    {"name": "tromino_h", "cells": ((0, 0), (1, 0), (2, 0)), "probability": 0.6},
    {"name": "tromino_v", "cells": ((0, 0), (0, 1), (0, 2)), "probability": 0.6},
    {"name": "l_up_left", "cells": ((0, 0), (1, 0), (0, 1)), "probability": 0.6},
    {"name": "l_up_right", "cells": ((0, 0), (1, 0), (1, 1)), "probability": 0.6},
    {"name": "l_down_left", "cells": ((0, 0), (0, 1), (1, 1)), "probability": 0.6},
    {"name": "l_down_right", "cells": ((1, 0), (0, 1), (1, 1)), "probability": 0.6},
]

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


def new_shape_id(rng: random.Random | None = None) -> str:
    """Return a random 9-character base-36 identifier."""
    rng = rng or random
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def make_shape(
    cells: Sequence[Offset],
    color: str = BLOCK_COLORS[0],
    shape_id: str | None = None,
    rng: random.Random | None = None,
) -> Shape:
    """Build a normalized Shape from raw offsets."""
    return Shape(
        id=shape_id if shape_id is not None else new_shape_id(rng),
        cells=normalize(cells),
        color=color,
    )


def generate_hand(
    count: int,
    difficulty: int = 1,
    rng: random.Random | None = None,
) -> list[Shape]:
    """Draw a hand of shapes uniformly at random (with replacement).

    Args:
        count: Number of shapes to draw.
        difficulty: Accepted for callers that pass the turn number. It does
            not bias the draw.
        rng: Random source. Defaults to the module-level generator; pass a
            seeded random.Random for reproducible hands.

    Returns:
        List of `count` shapes, each with a fresh id and a random color.
    """
    rng = rng or random
    hand = []
    for _ in range(count):
        entry = rng.choice(SHAPES)
        color = rng.choice(BLOCK_COLORS)
        hand.append(make_shape(entry["cells"], color=color, rng=rng))
    return hand
