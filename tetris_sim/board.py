"""
Board state management for the falling-block simulation.
Handles the cell grid, piece merging and row clearing.
"""

from typing import Iterable, List, Tuple
import numpy as np
from .pieces import TetrominoKind


EMPTY_VALUE = TetrominoKind.EMPTY.value


class Board:
    """Fixed-size grid of tetromino kinds, stored as a numpy array of kind values."""

    BOARD_WIDTH = 10
    BOARD_HEIGHT = 20

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT):
        if width < 4 or height < 4:
            raise ValueError(f"Board must be at least 4x4, got {height}x{width}")
        self.width = width
        self.height = height
        self.grid = np.full((self.height, self.width), EMPTY_VALUE, dtype=np.int8)

    def reset(self):
        """Empty every cell. The grid array itself is kept."""
        self.grid[:] = EMPTY_VALUE

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_empty(self, row: int, col: int) -> bool:
        """True iff the cell is in bounds and holds no block."""
        return self.in_bounds(row, col) and bool(self.grid[row, col] == EMPTY_VALUE)

    def cell(self, row: int, col: int) -> TetrominoKind:
        return TetrominoKind(int(self.grid[row, col]))

    def place(self, kind: TetrominoKind, cells: Iterable[Tuple[int, int]]):
        """Write kind into each (row, col) cell."""
        if not kind.is_playable:
            raise ValueError("Cannot place the empty kind on the board")
        cells = list(cells)
        for row, col in cells:
            if not self.in_bounds(row, col):
                raise ValueError(f"Cell ({row}, {col}) is outside the board")
        for row, col in cells:
            self.grid[row, col] = kind.value

    def full_rows(self) -> List[int]:
        """Indices of rows with no empty cell, top to bottom."""
        return [int(row) for row in np.flatnonzero(np.all(self.grid != EMPTY_VALUE, axis=1))]

    def clear_full_rows(self) -> int:
        """
        Remove every full row at once and drop the rows above.
        Returns the number of rows removed.
        """
        keep = np.any(self.grid == EMPTY_VALUE, axis=1)
        removed = self.height - int(np.count_nonzero(keep))
        if removed == 0:
            return 0

        survivors = self.grid[keep]
        # Rewrite in place so pieces holding this board see the new rows
        self.grid[:removed] = EMPTY_VALUE
        self.grid[removed:] = survivors
        return removed

    def to_array(self) -> np.ndarray:
        """Copy of the grid for read-only consumers."""
        return self.grid.copy()

    def get_height_map(self) -> List[int]:
        """Get the height of each column."""
        heights = []
        for x in range(self.width):
            filled = np.flatnonzero(self.grid[:, x] != EMPTY_VALUE)
            heights.append(self.height - int(filled[0]) if filled.size else 0)
        return heights

    def stack_height(self) -> int:
        return max(self.get_height_map())

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid != EMPTY_VALUE))

    def __str__(self):
        """String representation of the board."""
        result = []
        for y in range(self.height):
            row = ""
            for x in range(self.width):
                kind = self.cell(y, x)
                row += "·" if kind is TetrominoKind.EMPTY else kind.name
            result.append(row)
        return "\n".join(result)

    def __repr__(self):
        return f"Board(height={self.height}, width={self.width}, filled={self.filled_count()})"
