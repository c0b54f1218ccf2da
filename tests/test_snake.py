"""Tests for retrodesk.snake."""

from __future__ import annotations

from collections import deque

import pytest

from retrodesk.snake import (
    FOOD_SCORE,
    GRID_EXTENT,
    IDLE,
    OVER,
    RUNNING,
    START_POSITION,
    SnakeGame,
)

# Far corner, away from the default path along y == 5
FAR_FOOD = (0, GRID_EXTENT - 1)


def _started(seed: int = 0) -> SnakeGame:
    game = SnakeGame(seed=seed)
    game.start()
    game.food = FAR_FOOD
    return game


class TestStart:
    def test_initial_state(self) -> None:
        game = SnakeGame(seed=0)
        assert game.status == IDLE
        game.start()
        assert game.status == RUNNING
        assert list(game.snake) == [START_POSITION] == [(5, 5)]
        assert game.direction == "right"
        assert game.score == 0
        assert game.food is not None
        assert game.food != START_POSITION
        assert game.in_bounds(*game.food)

    def test_restart_keeps_high_score(self) -> None:
        game = _started()
        game.food = (6, 5)
        game.tick()
        game.food = FAR_FOOD
        game.request_direction("up")
        for _ in range(10):
            game.tick()
        assert game.status == OVER
        assert game.high_score == FOOD_SCORE
        game.start()
        assert game.score == 0
        assert game.high_score == FOOD_SCORE
        assert len(game.snake) == 1

    def test_extent_too_small(self) -> None:
        with pytest.raises(ValueError):
            SnakeGame(extent=1)


class TestTick:
    def test_moves_one_cell_right(self) -> None:
        game = _started()
        game.tick()
        assert game.head == (6, 5)
        assert len(game.snake) == 1

    def test_eating_grows_and_moves_food(self) -> None:
        game = _started()
        game.food = (6, 5)
        game.tick()
        assert game.head == (6, 5)
        assert list(game.snake) == [(6, 5), (5, 5)]
        assert game.score == FOOD_SCORE
        assert game.food is not None
        assert game.food != (6, 5)
        assert game.food not in game.snake

    def test_length_preserved_without_food(self) -> None:
        game = _started()
        game.snake = deque([(5, 5), (4, 5), (3, 5)])
        for step in range(1, 6):
            game.tick()
            assert len(game.snake) == 3
            assert game.head == (5 + step, 5)

    def test_head_follows_direction(self) -> None:
        game = _started()
        game.request_direction("down")
        game.tick()
        assert game.head == (5, 6)
        game.request_direction("left")
        game.tick()
        assert game.head == (4, 6)
        game.request_direction("up")
        game.tick()
        assert game.head == (4, 5)

    def test_wall_collision_ends_round(self) -> None:
        game = _started()
        for _ in range(GRID_EXTENT - 1 - 5):
            game.tick()
            assert game.status == RUNNING
        assert game.head == (GRID_EXTENT - 1, 5)
        game.tick()
        assert game.status == OVER
        assert game.head == (GRID_EXTENT - 1, 5)

    def test_top_wall_collision(self) -> None:
        game = _started()
        game.request_direction("up")
        for _ in range(5):
            game.tick()
        assert game.head == (5, 0)
        game.tick()
        assert game.status == OVER

    def test_running_into_pre_move_tail_ends_round(self) -> None:
        game = _started()
        game.snake = deque([(5, 5), (5, 6), (4, 6), (4, 5)])
        game.direction = "up"
        game.pending_direction = "up"
        assert game.request_direction("left")
        game.tick()
        assert game.status == OVER
        assert list(game.snake) == [(5, 5), (5, 6), (4, 6), (4, 5)]

    def test_tick_is_noop_unless_running(self) -> None:
        game = SnakeGame(seed=0)
        game.tick()
        assert list(game.snake) == [START_POSITION]
        game = _started()
        game.request_direction("up")
        for _ in range(7):
            game.tick()
        assert game.status == OVER
        before = list(game.snake)
        game.tick()
        assert list(game.snake) == before

    def test_high_score_only_improves(self) -> None:
        game = _started()
        game.high_score = 50
        game.request_direction("up")
        for _ in range(6):
            game.tick()
        assert game.status == OVER
        assert game.high_score == 50


class TestDirection:
    def test_reverse_is_ignored(self) -> None:
        game = _started()
        assert not game.request_direction("left")
        game.tick()
        assert game.head == (6, 5)
        assert game.status == RUNNING

    def test_request_is_buffered_until_tick(self) -> None:
        game = _started()
        assert game.request_direction("up")
        assert game.direction == "right"
        game.tick()
        assert game.direction == "up"
        assert game.head == (5, 4)

    def test_reverse_checked_against_applied_direction(self) -> None:
        game = _started()
        assert game.request_direction("up")
        assert not game.request_direction("left")
        game.tick()
        assert game.head == (5, 4)

    def test_later_request_wins(self) -> None:
        game = _started()
        game.request_direction("up")
        game.request_direction("down")
        game.tick()
        assert game.head == (5, 6)

    def test_ignored_when_not_running(self) -> None:
        game = SnakeGame(seed=0)
        assert not game.request_direction("up")
        assert game.pending_direction == "right"

    def test_unknown_direction_ignored(self) -> None:
        game = _started()
        assert not game.request_direction("sideways")
        game.tick()
        assert game.head == (6, 5)


class TestFood:
    @pytest.mark.parametrize("seed", range(10))
    def test_food_never_on_snake(self, seed: int) -> None:
        game = SnakeGame(extent=4, seed=seed)
        game.start()
        game.snake = deque([(x, y) for y in range(4) for x in range(4) if (x, y) != (3, 3)])
        assert game._random_food() == (3, 3)

    def test_no_free_cell_gives_none(self) -> None:
        game = SnakeGame(extent=2, seed=0)
        game.start()
        game.snake = deque([(0, 0), (1, 0), (1, 1), (0, 1)])
        assert game._random_food() is None


class TestEvents:
    def test_listener_sees_each_change(self) -> None:
        game = SnakeGame(seed=0)
        events = []
        game.add_listener(lambda event, g: events.append(event))
        game.start()
        game.food = (7, 5)
        game.tick()
        game.tick()
        game.food = FAR_FOOD
        game.request_direction("up")
        for _ in range(6):
            game.tick()
        assert events == ["start", "move", "eat", "move", "move", "move", "move", "move", "die"]
