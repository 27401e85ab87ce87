"""
Tests for the active piece: collisions, moves, rotation and resting projection.
"""

import unittest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tetris_sim.active_piece import ActivePiece
from tetris_sim.board import Board
from tetris_sim.pieces import TetrominoKind, Position, PLAYABLE_KINDS


def snapshot(piece):
    return (piece.kind, piece.rotation, piece.position, piece.resting_position)


class TestActivePiece(unittest.TestCase):
    """Test piece functionality."""

    def setUp(self):
        self.board = Board()
        self.piece = ActivePiece(TetrominoKind.I, self.board)

    def test_spawn_position(self):
        """Pieces spawn at row 2, middle column."""
        self.assertEqual(self.piece.position, Position(2, 5))
        self.assertEqual(self.piece.rotation, 0)
        self.assertEqual(self.piece.cells(), [(1, 3), (1, 4), (1, 5), (1, 6)])

    def test_empty_kind_rejected(self):
        with self.assertRaises(ValueError):
            ActivePiece(TetrominoKind.EMPTY, self.board)

    def test_resting_projection_on_empty_board(self):
        """A flat I rests with its cells on the bottom row."""
        self.assertEqual(self.piece.resting_position, Position(20, 5))
        self.assertEqual(self.piece.resting_cells(), [(19, 3), (19, 4), (19, 5), (19, 6)])
        self.assertFalse(self.piece.is_resting)

    def test_resting_projection_over_obstacle(self):
        self.board.place(TetrominoKind.O, [(10, 5), (10, 6), (11, 5), (11, 6)])
        piece = ActivePiece(TetrominoKind.I, self.board)
        self.assertEqual(piece.resting_position, Position(10, 5))
        self.assertEqual(piece.resting_cells(), [(9, 3), (9, 4), (9, 5), (9, 6)])

    def test_every_kind_projects_inside_board(self):
        for kind in PLAYABLE_KINDS:
            for rotation in range(4):
                piece = ActivePiece(kind, self.board, Position(2, 5), rotation)
                rows = [r for r, _ in piece.resting_cells()]
                self.assertEqual(max(rows), 19, f"{kind.name} r{rotation}")

    def test_collides_bounds(self):
        """Test out-of-bounds detection."""
        self.assertFalse(self.piece.collides(0, 0, 0))
        self.assertTrue(self.piece.collides(-4, 0, 0))   # left wall
        self.assertTrue(self.piece.collides(4, 0, 0))    # right wall
        self.assertTrue(self.piece.collides(0, 19, 0))   # floor
        self.assertTrue(self.piece.collides(0, -2, 0))   # ceiling

    def test_collides_with_occupied_cell(self):
        self.board.place(TetrominoKind.T, [(5, 4), (5, 5), (5, 6), (6, 5)])
        self.assertTrue(self.piece.collides(0, 4, 0))
        self.assertFalse(self.piece.collides(0, 3, 0))

    def test_shift_moves_and_reprojects(self):
        self.assertTrue(self.piece.try_shift(0, -1))
        self.assertEqual(self.piece.position, Position(2, 4))
        self.assertEqual(self.piece.resting_position, Position(20, 4))

    def test_shift_into_wall_is_noop(self):
        """Rejected moves leave the piece untouched."""
        for _ in range(3):
            self.assertTrue(self.piece.try_shift(0, -1))
        before = snapshot(self.piece)
        self.assertFalse(self.piece.try_shift(0, -1))
        self.assertEqual(snapshot(self.piece), before)
        self.assertEqual(min(c for _, c in self.piece.cells()), 0)

    def test_shift_down_to_resting(self):
        while self.piece.try_shift(1, 0):
            pass
        self.assertTrue(self.piece.is_resting)
        self.assertEqual(self.piece.position, Position(20, 5))

    def test_rotate(self):
        """Test piece rotation."""
        self.assertTrue(self.piece.try_rotate())
        self.assertEqual(self.piece.rotation, 1)
        self.assertEqual(self.piece.position, Position(2, 5))
        self.assertEqual(self.piece.cells(), [(0, 5), (1, 5), (2, 5), (3, 5)])
        self.assertEqual(self.piece.resting_position, Position(18, 5))

    def test_rotation_wraps(self):
        for _ in range(4):
            self.assertTrue(self.piece.try_rotate())
        self.assertEqual(self.piece.rotation, 0)

    def test_rotate_out_of_bounds_rejected(self):
        """No wall kicks: a rotation off the top of the board is refused."""
        piece = ActivePiece(TetrominoKind.I, self.board, Position(1, 5))
        before = snapshot(piece)
        self.assertFalse(piece.try_rotate())
        self.assertEqual(snapshot(piece), before)

    def test_rotate_into_block_rejected(self):
        self.board.place(TetrominoKind.O, [(3, 5), (3, 6), (4, 5), (4, 6)])
        piece = ActivePiece(TetrominoKind.I, self.board)
        before = snapshot(piece)
        self.assertFalse(piece.try_rotate())
        self.assertEqual(snapshot(piece), before)

    def test_projection_follows_successful_moves(self):
        """After any accepted move the ghost is straight below the piece."""
        self.board.place(TetrominoKind.L, [(15, 0), (15, 1), (15, 2), (14, 2)])
        piece = ActivePiece(TetrominoKind.T, self.board)
        moves = [(0, -1), (0, -1), (1, 0), (0, -1), (0, 1), (1, 0), (0, 1)]
        for row_delta, col_delta in moves:
            piece.try_rotate()
            if piece.try_shift(row_delta, col_delta):
                self.assertEqual(piece.resting_position.col, piece.position.col)
                self.assertGreaterEqual(piece.resting_position.row, piece.position.row)
                self.assertFalse(piece.collides(0, piece.resting_position.row - piece.position.row,
                                                piece.rotation))

    def test_blocked_spawn_rests_in_place(self):
        """A piece spawned into the stack cannot fall and rests where it is."""
        self.board.place(TetrominoKind.Z, [(1, 4), (1, 5), (0, 5), (0, 6)])
        piece = ActivePiece(TetrominoKind.I, self.board)
        self.assertTrue(piece.collides(0, 0, piece.rotation))
        self.assertTrue(piece.is_resting)

    def test_reads_live_board(self):
        """The piece sees cells placed on its board after it was created."""
        self.assertFalse(self.piece.collides(0, 10, 0))
        self.board.place(TetrominoKind.O, [(11, 5), (11, 6), (12, 5), (12, 6)])
        self.assertTrue(self.piece.collides(0, 10, 0))


if __name__ == '__main__':
    unittest.main()
