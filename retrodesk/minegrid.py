
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

Coordinate = Tuple[int, int]
Listener = Callable[[str, 'MineGrid'], None]

WAITING = 'waiting'
PLAYING = 'playing'
WON = 'won'
LOST = 'lost'

DIFFICULTY_PRESETS: Dict[str, Tuple[int, int, int]] = {
    # rows, cols, mines
    'beginner': (9, 9, 10),
    'intermediate': (16, 16, 40),
    'expert': (16, 30, 99),
}

# Rejection attempts per requested mine before sampling from the free cells
PLACEMENT_ATTEMPTS_PER_MINE = 8


@dataclass
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0


class MineGrid:
    def __init__(self, rows: int, cols: int, mine_count: int, seed: Optional[int] = None):
        self.rng = random.Random(int(seed)) if seed is not None else random.Random()
        self._listeners: List[Listener] = []
        self.new_round(rows, cols, mine_count)

    @classmethod
    def from_preset(cls, name: str, seed: Optional[int] = None) -> 'MineGrid':
        rows, cols, mines = DIFFICULTY_PRESETS[name]
        return cls(rows, cols, mines, seed=seed)

    @classmethod
    def from_layout(cls, layout: List[str]) -> 'MineGrid':
        """Board with fixed mines, one string per row: '*' is a mine, anything else is safe."""
        if not layout or not layout[0]:
            raise ValueError('layout must not be empty')
        rows, cols = len(layout), len(layout[0])
        board = cls(rows, cols, 0)
        for r, line in enumerate(layout):
            if len(line) != cols:
                raise ValueError('layout rows must have equal length')
            for c, ch in enumerate(line):
                board.grid[r][c].is_mine = ch == '*'
        board.mine_count = board.mines_left = len(board.mine_positions())
        if board.mine_count >= rows * cols:
            raise ValueError('layout needs at least one safe cell')
        board._compute_adjacency()
        return board

    def add_listener(self, fn: Listener) -> None:
        self._listeners.append(fn)

    def _emit(self, event: str) -> None:
        for fn in list(self._listeners):
            fn(event, self)

    def new_round(self, rows: int, cols: int, mine_count: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f'board must be at least 1x1, got {rows}x{cols}')
        if not 0 <= mine_count < rows * cols:
            raise ValueError(f'mine_count must be in [0, {rows * cols}), got {mine_count}')
        self.rows = rows
        self.cols = cols
        self.mine_count = mine_count
        self.grid: List[List[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]
        self.status = WAITING
        self.mines_left = mine_count
        self.elapsed = 0
        self.revealed_count = 0
        self._place_mines()
        self._emit('new_round')

    def reset(self) -> None:
        self.new_round(self.rows, self.cols, self.mine_count)

    @property
    def game_over(self) -> bool:
        return self.status in (WON, LOST)

    @property
    def win(self) -> bool:
        return self.status == WON

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def neighbors(self, row: int, col: int) -> List[Coordinate]:
        coords = []
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                nr, nc = row + dr, col + dc
                if self.in_bounds(nr, nc):
                    coords.append((nr, nc))
        return coords

    def mine_positions(self) -> List[Coordinate]:
        return [(r, c) for r in range(self.rows) for c in range(self.cols) if self.grid[r][c].is_mine]

    def _place_mines(self):
        placed = 0
        attempts = PLACEMENT_ATTEMPTS_PER_MINE * self.mine_count
        while placed < self.mine_count and attempts > 0:
            attempts -= 1
            r = self.rng.randrange(self.rows)
            c = self.rng.randrange(self.cols)
            if not self.grid[r][c].is_mine:
                self.grid[r][c].is_mine = True
                placed += 1
        if placed < self.mine_count:
            # Dense board: draw the rest without replacement
            free = [(r, c) for r in range(self.rows) for c in range(self.cols) if not self.grid[r][c].is_mine]
            for (r, c) in self.rng.sample(free, self.mine_count - placed):
                self.grid[r][c].is_mine = True
        self._compute_adjacency()

    def _compute_adjacency(self):
        for r in range(self.rows):
            for c in range(self.cols):
                if self.grid[r][c].is_mine:
                    continue
                self.grid[r][c].adjacent_mines = sum(1 for (nr, nc) in self.neighbors(r, c) if self.grid[nr][nc].is_mine)

    def reveal(self, row: int, col: int) -> None:
        if self.game_over:
            return
        if not self.in_bounds(row, col):
            return
        c = self.grid[row][col]
        if c.is_flagged or c.is_revealed:
            return
        if self.status == WAITING:
            self.status = PLAYING
        if c.is_mine:
            for cells in self.grid:
                for m in cells:
                    if m.is_mine:
                        m.is_revealed = True
            self.status = LOST
            self._emit('lost')
            return
        self._flood_reveal(row, col)
        if self._all_safe_revealed():
            self._declare_win()
            return
        self._emit('reveal')

    def _flood_reveal(self, row: int, col: int) -> None:
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            cell = self.grid[r][c]
            if cell.is_revealed or cell.is_flagged or cell.is_mine:
                continue
            cell.is_revealed = True
            self.revealed_count += 1
            if cell.adjacent_mines == 0:
                for (nr, nc) in self.neighbors(r, c):
                    if not self.grid[nr][nc].is_revealed:
                        stack.append((nr, nc))

    def _all_safe_revealed(self) -> bool:
        return self.revealed_count == self.rows * self.cols - self.mine_count

    def _declare_win(self) -> None:
        for row in self.grid:
            for c in row:
                if c.is_mine and not c.is_flagged:
                    c.is_flagged = True
        self.mines_left = 0
        self.status = WON
        self._emit('won')

    def toggle_flag(self, row: int, col: int) -> None:
        if self.game_over:
            return
        if not self.in_bounds(row, col):
            return
        c = self.grid[row][col]
        if c.is_revealed:
            return
        if self.status == WAITING:
            self.status = PLAYING
        c.is_flagged = not c.is_flagged
        # Cosmetic counter, may go negative
        self.mines_left += -1 if c.is_flagged else 1
        self._emit('flag')

    def tick_clock(self) -> None:
        if self.status != PLAYING:
            return
        self.elapsed += 1
        self._emit('clock')

    def hidden_cells(self) -> Iterable[Coordinate]:
        for r in range(self.rows):
            for c in range(self.cols):
                if not self.grid[r][c].is_revealed and not self.grid[r][c].is_flagged:
                    yield (r, c)

    def revealed_number_cells(self) -> Iterable[Coordinate]:
        for r in range(self.rows):
            for c in range(self.cols):
                cell = self.grid[r][c]
                if cell.is_revealed and not cell.is_mine and cell.adjacent_mines > 0:
                    yield (r, c)

    def render_ascii(self) -> str:
        rows = []
        for r in range(self.rows):
            row = []
            for c in range(self.cols):
                cell = self.grid[r][c]
                if cell.is_flagged:
                    row.append('F')
                elif not cell.is_revealed:
                    row.append('#')
                elif cell.is_mine:
                    row.append('*')
                elif cell.adjacent_mines == 0:
                    row.append('.')
                else:
                    row.append(str(cell.adjacent_mines))
            rows.append(' '.join(row))
        return '\n'.join(rows)
