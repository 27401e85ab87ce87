"""
Main engine for the falling-block simulation.
Owns the board and the active piece and advances the game one tick at a time.
"""

from typing import List, Optional, Callable, Dict, Any, Tuple, Union
from dataclasses import dataclass
from enum import Enum
import time
import numpy as np
from .board import Board
from .pieces import TetrominoKind, Position, random_kind
from .active_piece import ActivePiece
from .controls import Intent


# Milliseconds per gravity step for levels 1-10
_LEVEL_SPEEDS = (750, 670, 590, 520, 440, 360, 280, 200, 125, 90)


def level_speed_ms(level: int) -> int:
    """Get the milliseconds between gravity steps at a level."""
    if level < 1:
        raise ValueError(f"Levels start at 1, got {level}")
    if level <= 10:
        return _LEVEL_SPEEDS[level - 1]
    if level <= 13:
        return 80
    if level <= 16:
        return 60
    if level <= 19:
        return 45
    if level <= 30:
        return 30
    return 20


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameStatus(Enum):
    FALLING = 'falling'
    LOCKING = 'locking'
    GAME_OVER = 'game_over'
    QUIT = 'quit'


@dataclass
class GameConfig:
    """Configuration for a game session."""
    width: int = 10
    height: int = 20
    spawn_row: int = 2
    seed: Optional[int] = None  # None draws fresh entropy
    randomize_spawn_rotation: bool = False
    lines_per_level: int = 10


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot handed to renderers once per frame."""
    board: np.ndarray
    piece_kind: Optional[TetrominoKind]
    piece_cells: Tuple[Tuple[int, int], ...]
    ghost_cells: Tuple[Tuple[int, int], ...]
    score: int
    level: int
    lines_cleared: int
    back_to_back: bool
    status: GameStatus


class TetrisEngine:
    """Game session: scoring, levels, gravity ticks, locking and spawning."""

    def __init__(self, config: Optional[GameConfig] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = config or GameConfig()
        self.clock = clock or _monotonic_ms
        self.board = Board(self.config.width, self.config.height)

        # Callbacks
        self.on_piece_locked: Optional[Callable] = None
        self.on_line_cleared: Optional[Callable] = None
        self.on_level_up: Optional[Callable] = None
        self.on_game_over: Optional[Callable] = None

        self._initialize_game()

    def _initialize_game(self):
        """Initialize the game state."""
        self.board.reset()
        self.rng = np.random.default_rng(self.config.seed)

        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.back_to_back = False
        self.pieces_placed = 0
        self.tetrises = 0
        self.tick_count = 0
        self.status = GameStatus.FALLING
        self.current_piece: Optional[ActivePiece] = None

        self._spawn_piece()
        self.last_tick = self.clock()

    def reset(self):
        """Reset the game to initial state."""
        self._initialize_game()

    def _spawn_piece(self, kind: Optional[TetrominoKind] = None):
        """Put a new piece at the spawn anchor of the current board."""
        if kind is None:
            kind = random_kind(self.rng)
        rotation = int(self.rng.integers(4)) if self.config.randomize_spawn_rotation else 0
        spawn = Position(self.config.spawn_row, self.board.width // 2)
        # A spawn into the stack is allowed; the next tick turns it into game over
        self.current_piece = ActivePiece(kind, self.board, spawn, rotation)

    @property
    def is_over(self) -> bool:
        return self.status in (GameStatus.GAME_OVER, GameStatus.QUIT)

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def update(self, inputs: Optional[List[Union[Intent, str]]] = None,
               now: Optional[float] = None) -> GameStatus:
        """Apply this frame's inputs, then advance gravity if a tick is due."""
        if inputs:
            for action in inputs:
                self.apply_intent(action if isinstance(action, Intent) else Intent(action))
        return self.tick(now)

    def apply_intent(self, intent: Intent) -> bool:
        """
        Apply one player intent to the active piece.
        Returns True if the state changed; rejected moves are no-ops.
        """
        if intent is Intent.QUIT:
            self.status = GameStatus.QUIT
            return True
        if self.is_over:
            return False

        piece = self.current_piece
        if intent is Intent.SHIFT_LEFT:
            return piece.try_shift(0, -1)
        elif intent is Intent.SHIFT_RIGHT:
            return piece.try_shift(0, 1)
        elif intent is Intent.SOFT_DROP_STEP:
            return piece.try_shift(1, 0)
        elif intent is Intent.ROTATE:
            return piece.try_rotate()
        return False

    def tick(self, now: Optional[float] = None) -> GameStatus:
        """Run one step if the level's interval has elapsed since the last one."""
        if self.is_over:
            return self.status

        if now is None:
            now = self.clock()
        if now - self.last_tick >= level_speed_ms(self.level):
            self.step()
            self.last_tick = now
        return self.status

    def step(self) -> GameStatus:
        """Advance one tick: fall a row, or lock the piece if it is resting."""
        if self.is_over:
            return self.status

        self.tick_count += 1
        piece = self.current_piece
        if not piece.is_resting:
            piece.try_shift(1, 0)
            return self.status

        self._lock_piece(piece)
        return self.status

    def _lock_piece(self, piece: ActivePiece):
        """Merge the resting piece, clear rows, score and spawn the next piece."""
        self.status = GameStatus.LOCKING

        # Only a piece spawned into the stack can collide where it rests
        if piece.collides(0, 0, piece.rotation):
            self.status = GameStatus.GAME_OVER
            if self.on_game_over:
                self.on_game_over(self.get_stats())
            return

        cells = piece.resting_cells()
        self.board.place(piece.kind, cells)
        self.pieces_placed += 1

        removed = self.board.clear_full_rows()
        score_delta = self._calculate_score(removed)
        self.score += score_delta
        if removed == 4:
            self.tetrises += 1
        self.back_to_back = removed == 4

        self.lines_cleared += removed
        new_level = self.lines_cleared // self.config.lines_per_level + 1
        level_changed = new_level != self.level
        self.level = new_level

        if self.on_piece_locked:
            self.on_piece_locked(piece.kind, cells, removed)
        if removed > 0 and self.on_line_cleared:
            self.on_line_cleared(removed, score_delta)
        if level_changed and self.on_level_up:
            self.on_level_up(self.level)

        self._spawn_piece()
        self.status = GameStatus.FALLING

    def _calculate_score(self, removed: int) -> int:
        """Points for a lock that removed the given number of rows, at the current level."""
        if removed == 4 and self.back_to_back:
            return 1200 * self.level
        elif removed == 4:
            return 800 * self.level
        elif removed > 0:
            return 100 * self.level * removed
        return 0

    def get_game_state(self) -> GameState:
        """Get the current game state."""
        piece = self.current_piece
        return GameState(
            board=self.board.to_array(),
            piece_kind=piece.kind if piece else None,
            piece_cells=tuple(piece.cells()) if piece else (),
            ghost_cells=tuple(piece.resting_cells()) if piece else (),
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared,
            back_to_back=self.back_to_back,
            status=self.status,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get current game statistics."""
        return {
            'score': self.score,
            'level': self.level,
            'lines_cleared': self.lines_cleared,
            'pieces_placed': self.pieces_placed,
            'tetrises': self.tetrises,
            'ticks': self.tick_count,
            'stack_height': self.board.stack_height(),
            'status': self.status.value,
        }

    def __str__(self):
        """String representation of the game state."""
        rows = [list(line) for line in str(self.board).split("\n")]
        piece = self.current_piece
        if piece and not self.is_over:
            for cells, mark in ((piece.resting_cells(), "□"), (piece.cells(), "○")):
                for r, c in cells:
                    if self.board.in_bounds(r, c):
                        rows[r][c] = mark

        result = []
        result.append(f"Level: {self.level}")
        result.append(f"Lines: {self.lines_cleared}")
        result.append(f"Score: {self.score}")
        result.append("")
        result.extend("".join(row) for row in rows)
        return "\n".join(result)
