"""
The falling piece: kind, rotation state, anchor and resting projection.
"""

from typing import List, Optional, Tuple
from .board import Board
from .pieces import TetrominoKind, Position, offsets


Cell = Tuple[int, int]


class ActivePiece:
    """
    A piece in play on a board.

    The piece keeps a reference to the board owned by the game session, never
    a copy, so every collision test reads the current occupancy. Every mutator
    only commits collision-free states and refreshes the resting projection
    (the lowest anchor reachable by falling straight down).
    """

    def __init__(self, kind: TetrominoKind, board: Board,
                 position: Optional[Position] = None, rotation: int = 0):
        if not kind.is_playable:
            raise ValueError("An active piece needs a playable kind, not EMPTY")
        self.kind = kind
        self.board = board
        self.rotation = rotation % 4
        self.position = position if position is not None else self.spawn_position(board)
        self.resting_position = self.position
        self.recompute_resting_projection()

    @staticmethod
    def spawn_position(board: Board, spawn_row: int = 2) -> Position:
        """Canonical spawn anchor: second row, middle column."""
        return Position(spawn_row, board.width // 2)

    def cells_at(self, position: Position, rotation: int) -> List[Cell]:
        """Absolute (row, col) cells for an anchor and rotation state."""
        return [(position.row + dr, position.col + dc) for dr, dc in offsets(self.kind, rotation)]

    def cells(self) -> List[Cell]:
        return self.cells_at(self.position, self.rotation)

    def resting_cells(self) -> List[Cell]:
        """Cells the piece would occupy if dropped now (the ghost)."""
        return self.cells_at(self.resting_position, self.rotation)

    def collides(self, column_offset: int, row_offset: int, rotation_state: int) -> bool:
        """
        Check the anchor moved by the offsets in the given rotation state.
        True if any cell is off the board or already filled.
        """
        target = self.position.shifted(row_offset, column_offset)
        for row, col in self.cells_at(target, rotation_state):
            if not self.board.is_empty(row, col):
                return True
        return False

    def recompute_resting_projection(self):
        """Find the lowest collision-free anchor straight below the current one."""
        if self.collides(0, 0, self.rotation):
            # Blocked where it stands (spawned into the stack): it cannot fall
            self.resting_position = self.position
            return

        drop = 0
        while not self.collides(0, drop + 1, self.rotation):
            drop += 1
        self.resting_position = self.position.shifted(drop, 0)

    def try_rotate(self) -> bool:
        """Rotate one state clockwise in place. No kicks: a colliding rotation is rejected."""
        proposed = (self.rotation + 1) % 4
        if self.collides(0, 0, proposed):
            return False
        self.rotation = proposed
        self.recompute_resting_projection()
        return True

    def try_shift(self, row_delta: int, col_delta: int) -> bool:
        """Move the anchor if the target is free. Returns True if the piece moved."""
        if self.collides(col_delta, row_delta, self.rotation):
            return False
        self.position = self.position.shifted(row_delta, col_delta)
        self.recompute_resting_projection()
        return True

    @property
    def is_resting(self) -> bool:
        """The piece cannot fall further and locks on the next tick."""
        return self.position == self.resting_position

    def __repr__(self):
        return (f"ActivePiece({self.kind.name}, row={self.position.row}, col={self.position.col}, "
                f"r={self.rotation}, rest_row={self.resting_position.row})")
