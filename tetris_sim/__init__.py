"""
Falling-block puzzle simulation engine.
Contains the tetromino catalog, board management, the active piece and the game session.
"""

from .tetris_engine import TetrisEngine, GameConfig, GameState, GameStatus, level_speed_ms
from .board import Board
from .pieces import TetrominoKind, Position, PLAYABLE_KINDS
from .active_piece import ActivePiece
from .controls import Intent, translate_key

__all__ = ['TetrisEngine', 'GameConfig', 'GameState', 'GameStatus', 'level_speed_ms',
           'Board', 'TetrominoKind', 'Position', 'PLAYABLE_KINDS', 'ActivePiece',
           'Intent', 'translate_key']
