from __future__ import annotations
import random
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

Position = Tuple[int, int]
Listener = Callable[[str, 'SnakeGame'], None]

IDLE = 'idle'
RUNNING = 'running'
OVER = 'over'

GRID_EXTENT = 20
TICK_MS = 100
START_POSITION: Position = (5, 5)
START_DIRECTION = 'right'
FOOD_SCORE = 10
FOOD_ATTEMPTS = 64

DIRECTIONS: Dict[str, Position] = {
    'up': (0, -1),
    'down': (0, 1),
    'left': (-1, 0),
    'right': (1, 0),
}
OPPOSITE = {'up': 'down', 'down': 'up', 'left': 'right', 'right': 'left'}


class SnakeGame:
    """Snake on a square grid, advanced one cell per ``tick()``.

    The snake is a deque of positions with the head at index 0. Direction
    requests are buffered and applied on the next tick; a request for the
    reverse of the direction last applied is ignored.
    """

    def __init__(self, extent: int = GRID_EXTENT, seed: Optional[int] = None):
        if extent < 2:
            raise ValueError(f'extent must be at least 2, got {extent}')
        self.extent = extent
        # Boards smaller than the default start fall back to the centre
        self.origin = START_POSITION if self.in_bounds(*START_POSITION) else (extent // 2, extent // 2)
        self.rng = random.Random(int(seed)) if seed is not None else random.Random()
        self._listeners: List[Listener] = []
        self.status = IDLE
        self.high_score = 0
        self.score = 0
        self.snake: Deque[Position] = deque([self.origin])
        self.direction = START_DIRECTION
        self.pending_direction = START_DIRECTION
        self.food: Optional[Position] = None

    def add_listener(self, fn: Listener) -> None:
        self._listeners.append(fn)

    def _emit(self, event: str) -> None:
        for fn in list(self._listeners):
            fn(event, self)

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def running(self) -> bool:
        return self.status == RUNNING

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.extent and 0 <= y < self.extent

    def start(self) -> None:
        self.snake = deque([self.origin])
        self.direction = START_DIRECTION
        self.pending_direction = START_DIRECTION
        self.score = 0
        self.food = self._random_food()
        self.status = RUNNING
        self._emit('start')

    def request_direction(self, direction: str) -> bool:
        """Buffer a turn for the next tick. Returns whether it was accepted."""
        if self.status != RUNNING or direction not in DIRECTIONS:
            return False
        if direction == OPPOSITE[self.direction]:
            return False
        self.pending_direction = direction
        return True

    def tick(self) -> None:
        if self.status != RUNNING:
            return
        self.direction = self.pending_direction
        dx, dy = DIRECTIONS[self.direction]
        hx, hy = self.snake[0]
        new_head = (hx + dx, hy + dy)

        # The pre-move tail still counts as occupied
        if not self.in_bounds(*new_head) or new_head in self.snake:
            self.status = OVER
            if self.score > self.high_score:
                self.high_score = self.score
            self._emit('die')
            return

        self.snake.appendleft(new_head)
        if new_head == self.food:
            self.score += FOOD_SCORE
            self.food = self._random_food()
            self._emit('eat')
        else:
            self.snake.pop()
            self._emit('move')

    def _random_food(self) -> Optional[Position]:
        occupied = set(self.snake)
        for _ in range(FOOD_ATTEMPTS):
            pos = (self.rng.randrange(self.extent), self.rng.randrange(self.extent))
            if pos not in occupied:
                return pos
        free = [(x, y) for y in range(self.extent) for x in range(self.extent) if (x, y) not in occupied]
        if not free:
            return None
        return self.rng.choice(free)
