from __future__ import annotations
import numpy as np

# Array projections of engine state for the front-ends.
# grid_view codes: revealed numbers 0..8, plus the negatives below

HIDDEN = -1
FLAG = -2
MINE = -3

EMPTY = 0
BODY = 1
HEAD = 2
FOOD = 3


def grid_view(board) -> np.ndarray:
    """What the player sees. A revealed mine shows over its flag after a loss."""
    view = np.full((board.rows, board.cols), HIDDEN, dtype=np.int8)
    for r, row in enumerate(board.grid):
        for c, cell in enumerate(row):
            if cell.is_revealed:
                view[r, c] = MINE if cell.is_mine else cell.adjacent_mines
            elif cell.is_flagged:
                view[r, c] = FLAG
    return view


def snake_view(game) -> np.ndarray:
    view = np.full((game.extent, game.extent), EMPTY, dtype=np.int8)
    if game.food is not None:
        fx, fy = game.food
        view[fy, fx] = FOOD
    for i, (x, y) in enumerate(game.snake):
        if game.in_bounds(x, y):
            view[y, x] = HEAD if i == 0 else BODY
    return view
