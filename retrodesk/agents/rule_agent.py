from __future__ import annotations
from typing import Optional, Tuple

# Simple deterministic rules:
# - If a clue's remaining mines equals its remaining hidden neighbors, flag one
# - If a clue's flagged neighbors equals its number, reveal another hidden neighbor

def pick_move(board) -> Optional[Tuple[str, Tuple[int, int]]]:
    if board.game_over:
        return None
    for r, c in board.revealed_number_cells():
        cell = board.grid[r][c]
        nbrs = board.neighbors(r, c)
        hidden = [(nr, nc) for nr, nc in nbrs if not board.grid[nr][nc].is_revealed and not board.grid[nr][nc].is_flagged]
        flagged = [(nr, nc) for nr, nc in nbrs if board.grid[nr][nc].is_flagged]
        if not hidden:
            continue
        if cell.adjacent_mines - len(flagged) == len(hidden):
            return ('flag', hidden[0])
        if len(flagged) == cell.adjacent_mines:
            return ('reveal', hidden[0])
    return None


def apply_move(board, move: Tuple[str, Tuple[int, int]]) -> None:
    kind, (r, c) = move
    if kind == 'flag':
        board.toggle_flag(r, c)
    else:
        board.reveal(r, c)
