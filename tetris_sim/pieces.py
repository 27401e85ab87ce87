"""
Tetromino catalog for the falling-block simulation.
Defines the 7 piece kinds plus the empty sentinel, their rotation-state
offset tables and their display colors.
"""

from enum import Enum
from typing import Dict, Tuple, Optional
from dataclasses import dataclass
import numpy as np


Offset = Tuple[int, int]
RGBA = Tuple[int, int, int, int]


class TetrominoKind(Enum):
    """The 7 standard pieces and the empty cell marker."""
    I = 0
    O = 1
    T = 2
    S = 3
    Z = 4
    J = 5
    L = 6
    EMPTY = 7

    @property
    def is_playable(self) -> bool:
        return self is not TetrominoKind.EMPTY


PLAYABLE_KINDS: Tuple[TetrominoKind, ...] = tuple(
    kind for kind in TetrominoKind if kind.is_playable
)


@dataclass(frozen=True)
class Position:
    """Anchor coordinate of a piece on the board."""
    row: int
    col: int

    def shifted(self, row_delta: int, col_delta: int) -> 'Position':
        return Position(self.row + row_delta, self.col + col_delta)


# Offsets are (row_delta, col_delta) relative to the anchor, one list of four
# cells per rotation state. Every shape keeps its own pivot, so these are
# written out by hand instead of being rotated from a base shape.
ROTATION_TABLES: Dict[TetrominoKind, Tuple[Tuple[Offset, ...], ...]] = {
    TetrominoKind.I: (
        ((-1, -2), (-1, -1), (-1, 0), (-1, 1)),
        ((-2, 0), (-1, 0), (0, 0), (1, 0)),
        ((0, -2), (0, -1), (0, 0), (0, 1)),
        ((-2, -1), (-1, -1), (0, -1), (1, -1)),
    ),
    TetrominoKind.O: (
        ((-1, -2), (-2, -2), (-1, -1), (-2, -1)),
        ((-1, -2), (-2, -2), (-1, -1), (-2, -1)),
        ((-1, -2), (-2, -2), (-1, -1), (-2, -1)),
        ((-1, -2), (-2, -2), (-1, -1), (-2, -1)),
    ),
    TetrominoKind.T: (
        ((-1, -2), (-1, -1), (-2, -1), (-1, 0)),
        ((-2, -1), (-1, -1), (0, -1), (-1, 0)),
        ((-1, -2), (-1, -1), (0, -1), (-1, 0)),
        ((-1, -2), (-2, -1), (-1, -1), (0, -1)),
    ),
    TetrominoKind.S: (
        ((-1, -2), (-1, -1), (-2, -1), (-2, 0)),
        ((-2, -1), (-1, -1), (-1, 0), (0, 0)),
        ((0, -2), (0, -1), (-1, -1), (-1, 0)),
        ((-2, -2), (-1, -2), (-1, -1), (0, -1)),
    ),
    TetrominoKind.Z: (
        ((-2, -2), (-2, -1), (-1, -1), (-1, 0)),
        ((0, -1), (-1, -1), (-1, 0), (-2, 0)),
        ((-1, -2), (-1, -1), (0, -1), (0, 0)),
        ((0, -2), (-1, -2), (-1, -1), (-2, -1)),
    ),
    TetrominoKind.J: (
        ((-2, -2), (-1, -2), (-1, -1), (-1, 0)),
        ((0, -1), (-1, -1), (-2, -1), (-2, 0)),
        ((-1, -2), (-1, -1), (-1, 0), (0, 0)),
        ((0, -2), (0, -1), (-1, -1), (-2, -1)),
    ),
    TetrominoKind.L: (
        ((-1, -2), (-1, -1), (-1, 0), (-2, 0)),
        ((-2, -1), (-1, -1), (0, -1), (0, 0)),
        ((0, -2), (-1, -2), (-1, -1), (-1, 0)),
        ((-2, -2), (-2, -1), (-1, -1), (0, -1)),
    ),
    TetrominoKind.EMPTY: (
        ((0, 0), (0, 0), (0, 0), (0, 0)),
    ) * 4,
}

COLORS: Dict[TetrominoKind, Tuple[str, RGBA]] = {
    TetrominoKind.I: ('cyan', (115, 218, 255, 255)),
    TetrominoKind.O: ('yellow', (255, 255, 54, 255)),
    TetrominoKind.T: ('purple', (134, 54, 255, 255)),
    TetrominoKind.S: ('green', (158, 255, 54, 255)),
    TetrominoKind.Z: ('red', (255, 87, 54, 255)),
    TetrominoKind.J: ('blue', (74, 54, 255, 255)),
    TetrominoKind.L: ('orange', (255, 155, 54, 255)),
    TetrominoKind.EMPTY: ('background', (180, 202, 237, 128)),
}


def offsets(kind: TetrominoKind, rotation_state: int) -> Tuple[Offset, ...]:
    """Get the 4 relative cells of a kind in the given rotation state."""
    return ROTATION_TABLES[kind][rotation_state % 4]


def color(kind: TetrominoKind) -> RGBA:
    """Get the RGBA color of a kind."""
    return COLORS[kind][1]


def color_name(kind: TetrominoKind) -> str:
    return COLORS[kind][0]


def hex_color(kind: TetrominoKind) -> str:
    """Get the color as a '#rrggbb' string (alpha dropped), for Tk canvases."""
    r, g, b, _ = color(kind)
    return f"#{r:02x}{g:02x}{b:02x}"


def random_kind(rng: Optional[np.random.Generator] = None) -> TetrominoKind:
    """Get a playable kind, uniformly distributed (no 7-bag)."""
    if rng is None:
        rng = np.random.default_rng()
    return PLAYABLE_KINDS[int(rng.integers(len(PLAYABLE_KINDS)))]
