from __future__ import annotations
import tkinter as tk
from tkinter import ttk, messagebox

from retrodesk.minegrid import MineGrid, DIFFICULTY_PRESETS, WAITING, PLAYING, WON, LOST
from retrodesk.snapshot import grid_view, HIDDEN, FLAG, MINE
from retrodesk.ticker import Ticker
from retrodesk.agents.rule_agent import pick_move
from retrodesk.stats import SessionStats


CELL_SIZE = 24
PADDING = 10
CLOCK_MS = 1000
COLOR_MAP = {
    1: '#1976d2',
    2: '#388e3c',
    3: '#d32f2f',
    4: '#1a237e',
    5: '#b71c1c',
    6: '#0097a7',
    7: '#212121',
    8: '#757575',
}
FACES = {WAITING: '🙂', PLAYING: '🙂', WON: '😎', LOST: '😵'}
FACE_PRESSED = '😮'


def face_for(status: str, pressed: bool = False) -> str:
    if pressed and status == PLAYING:
        return FACE_PRESSED
    return FACES[status]


def cell_style(code: int):
    '''(fill, glyph, glyph colour) for a grid_view code.'''
    if code == MINE:
        return '#ef5350', '💣', None
    if code == FLAG:
        return '#bdbdbd', '🚩', None
    if code == HIDDEN:
        return '#bdbdbd', '', None
    if code == 0:
        return '#d0d0d0', '', None
    return '#d0d0d0', str(code), COLOR_MAP.get(code, '#212121')


class MineGridGUI:
    def __init__(self, root: tk.Tk):
        self.root = root
        self.root.title('Minesweeper')

        # Controls
        control_frame = ttk.Frame(root)
        control_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        self.preset_var = tk.StringVar(value='beginner')
        for i, name in enumerate(DIFFICULTY_PRESETS):
            ttk.Radiobutton(control_frame, text=name.title(), value=name, variable=self.preset_var,
                            command=self.new_game).grid(row=0, column=i, padx=2)
        ttk.Button(control_frame, text='Hint', command=self.show_hint).grid(row=0, column=len(DIFFICULTY_PRESETS), padx=8)

        # Counter, face, clock
        status_frame = ttk.Frame(root)
        status_frame.pack(side=tk.TOP, fill=tk.X, padx=8, pady=2)
        self.label_mines = tk.Label(status_frame, text='000', bg='black', fg='red', font=('Courier', 14, 'bold'), width=4)
        self.label_mines.pack(side=tk.LEFT)
        self.btn_face = tk.Button(status_frame, text=FACES[WAITING], command=self.new_game, width=3)
        self.btn_face.pack(side=tk.LEFT, expand=True)
        self.label_time = tk.Label(status_frame, text='000', bg='black', fg='red', font=('Courier', 14, 'bold'), width=4)
        self.label_time.pack(side=tk.RIGHT)

        self.label_stats = ttk.Label(root, text='')
        self.label_stats.pack(side=tk.TOP, fill=tk.X, padx=8)

        self.canvas = tk.Canvas(root, bg='#c0c0c0')
        self.canvas.pack(side=tk.TOP, padx=PADDING, pady=PADDING)
        self.canvas.bind('<ButtonPress>', self.on_press)
        self.canvas.bind('<ButtonRelease-1>', self.on_left_click)
        self.canvas.bind('<ButtonRelease-3>', self.on_right_click)
        # macOS secondary click
        self.canvas.bind('<ButtonRelease-2>', self.on_right_click)
        self.canvas.bind('<Leave>', self.on_leave)

        self.board = MineGrid.from_preset(self.preset_var.get())
        self.board.add_listener(self.on_board_event)
        self.clock = Ticker(self.root.after, self.root.after_cancel, CLOCK_MS, self.board.tick_clock)
        self.stats = SessionStats()
        self.hint_cell = None
        self.pressed = False

        self.new_game()
        self.root.protocol('WM_DELETE_WINDOW', self.on_close)

    def new_game(self):
        self.clock.stop()
        rows, cols, mines = DIFFICULTY_PRESETS[self.preset_var.get()]
        self.hint_cell = None
        self.board.new_round(rows, cols, mines)
        self._resize_canvas()
        self._render()

    def _resize_canvas(self):
        w = self.board.cols * CELL_SIZE + PADDING * 2
        h = self.board.rows * CELL_SIZE + PADDING * 2
        self.canvas.config(width=w, height=h)

    def _cell_at(self, event):
        col = (event.x - PADDING) // CELL_SIZE
        row = (event.y - PADDING) // CELL_SIZE
        return row, col

    def on_press(self, event):
        self.pressed = True
        self.btn_face.config(text=face_for(self.board.status, pressed=True))

    def on_leave(self, event):
        if self.pressed:
            self.pressed = False
            self.btn_face.config(text=face_for(self.board.status))

    def on_left_click(self, event):
        self.pressed = False
        row, col = self._cell_at(event)
        self._guarded(self.board.reveal, row, col)

    def on_right_click(self, event):
        self.pressed = False
        row, col = self._cell_at(event)
        self._guarded(self.board.toggle_flag, row, col)

    def _guarded(self, action, *args):
        try:
            self.hint_cell = None
            action(*args)
        except Exception as e:
            self.clock.stop()
            messagebox.showerror('Error', str(e))
        self.btn_face.config(text=face_for(self.board.status))

    def on_board_event(self, event, board):
        if board.status == PLAYING and not self.clock.running:
            self.clock.start()
        if event in ('won', 'lost'):
            self.clock.stop()
            self.stats.record(board.win)
        self._render()

    def show_hint(self):
        move = pick_move(self.board)
        self.hint_cell = move[1] if move else None
        self._render()

    def _render(self):
        b = self.board
        self.label_mines.config(text=f'{b.mines_left:03d}')
        self.label_time.config(text=f'{b.elapsed:03d}')
        self.btn_face.config(text=face_for(b.status, self.pressed))
        self.label_stats.config(text=self.stats.summary())
        self.canvas.delete('all')
        view = grid_view(b)
        for r in range(b.rows):
            for c in range(b.cols):
                px = PADDING + c * CELL_SIZE
                py = PADDING + r * CELL_SIZE
                fill, glyph, color = cell_style(int(view[r, c]))
                hinted = self.hint_cell == (r, c)
                self.canvas.create_rectangle(px, py, px+CELL_SIZE, py+CELL_SIZE, fill=fill,
                                             outline='#ff9800' if hinted else '#808080', width=2 if hinted else 1)
                if glyph:
                    font = ('Helvetica', 11, 'bold') if color else ('Arial', 11)
                    self.canvas.create_text(px+CELL_SIZE/2, py+CELL_SIZE/2, text=glyph, fill=color or 'black', font=font)

    def on_close(self):
        try:
            self.clock.stop()
        finally:
            self.root.destroy()


def main():
    root = tk.Tk()
    app = MineGridGUI(root)
    root.mainloop()


if __name__ == '__main__':
    main()
