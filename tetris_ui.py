import tkinter as tk
from typing import Optional

from tetris_sim import TetrisEngine, GameConfig, GameStatus, Intent, TetrominoKind, translate_key
from tetris_sim.pieces import hex_color

CELL_SIZE = 32
FRAME_MS = 16  # ~60 fps polling; gravity timing is the engine's job

BACKGROUND = "#000000"
EMPTY_OUTLINE = hex_color(TetrominoKind.EMPTY)


class TetrisUI:
    def __init__(self, root: tk.Tk, config: Optional[GameConfig] = None):
        self.root = root
        self.root.title("tetris-sim")
        self.engine = TetrisEngine(config)
        self.board_width = self.engine.board.width
        self.board_height = self.engine.board.height

        self.canvas = tk.Canvas(root, width=self.board_width*CELL_SIZE,
                                height=self.board_height*CELL_SIZE, bg=BACKGROUND,
                                highlightthickness=0)
        self.canvas.pack(side=tk.LEFT)

        self.info_label = tk.Label(root, text="Score: 0\nLevel: 1", font=("Arial", 18),
                                   width=12, bg=BACKGROUND, fg="#ffffff", justify=tk.CENTER)
        self.info_label.pack(side=tk.RIGHT, fill=tk.Y)

        self.root.bind("<KeyPress>", self.on_key)
        self.root.protocol("WM_DELETE_WINDOW", self.close)
        self.draw_board()

    def on_key(self, event):
        intent = translate_key(event.keysym)
        if intent is not None:
            self.engine.apply_intent(intent)

    def on_key_after_game_over(self, event):
        if translate_key(event.keysym) is Intent.QUIT:
            self.close()

    def _cell_box(self, row, col, inset=0):
        return (col*CELL_SIZE + inset, row*CELL_SIZE + inset,
                (col+1)*CELL_SIZE - inset, (row+1)*CELL_SIZE - inset)

    def draw_board(self):
        self.canvas.delete("all")
        state = self.engine.get_game_state()
        # Locked cells filled, empty cells outlined
        for y in range(self.board_height):
            for x in range(self.board_width):
                kind = TetrominoKind(int(state.board[y][x]))
                if kind is TetrominoKind.EMPTY:
                    self.canvas.create_rectangle(*self._cell_box(y, x, 1), outline=EMPTY_OUTLINE, width=2)
                else:
                    self.canvas.create_rectangle(*self._cell_box(y, x), fill=hex_color(kind), outline="")
        if state.piece_kind is not None:
            color = hex_color(state.piece_kind)
            for py, px in state.ghost_cells:
                self.canvas.create_rectangle(*self._cell_box(py, px, 2), outline=color, width=4)
            for py, px in state.piece_cells:
                self.canvas.create_rectangle(*self._cell_box(py, px), fill=color, outline="")
        self.info_label.config(text=f"Score:\n{state.score}\n\nLevel:\n{state.level}")

    def run(self):
        status = self.engine.tick()
        if status is GameStatus.QUIT:
            self.close()
            return
        self.draw_board()
        if status is GameStatus.GAME_OVER:
            stats = self.engine.get_stats()
            self.info_label.config(
                text=f"GAME OVER\n\nScore:\n{stats['score']}\n\nLines:\n{stats['lines_cleared']}")
            self.root.bind("<KeyPress>", self.on_key_after_game_over)
            return
        self.root.after(FRAME_MS, self.run)

    def close(self):
        self.root.destroy()


def play(config: Optional[GameConfig] = None) -> TetrisEngine:
    """Open the game window and block until it is closed."""
    root = tk.Tk()
    app = TetrisUI(root, config)
    app.run()
    root.mainloop()
    return app.engine


if __name__ == "__main__":
    play()
