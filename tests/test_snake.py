"""Tests for the Snake module."""

import pytest

from grid_snake.snake import Direction, Snake


class TestDirection:
    def test_unit_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        assert Direction.LEFT.value == (-1, 0)
        assert Direction.RIGHT.value == (1, 0)

    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.LEFT.opposite is Direction.RIGHT

    def test_is_reverse_of(self):
        assert Direction.LEFT.is_reverse_of(Direction.RIGHT)
        assert Direction.DOWN.is_reverse_of(Direction.UP)
        assert not Direction.UP.is_reverse_of(Direction.RIGHT)
        assert not Direction.RIGHT.is_reverse_of(Direction.RIGHT)


class TestSnakeInit:
    def test_from_cells(self):
        snake = Snake([(3, 3), (2, 3)])
        assert snake.head == (3, 3)
        assert snake.tail == (2, 3)
        assert len(snake) == 2

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake([])

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="overlap"):
            Snake([(1, 1), (1, 1)])


class TestSnakeSpawn:
    def test_body_trails_left(self):
        snake = Snake.spawn(5, 4, length=3)
        assert list(snake.body) == [(5, 4), (4, 4), (3, 4)]

    def test_clamped_at_left_edge(self):
        snake = Snake.spawn(1, 0, length=3)
        assert list(snake.body) == [(1, 0), (0, 0)]

    def test_single_column(self):
        snake = Snake.spawn(0, 2, length=3)
        assert list(snake.body) == [(0, 2)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake.spawn(0, 0, length=0)


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake.spawn(5, 5)
        assert snake.next_head(Direction.RIGHT) == (6, 5)
        assert snake.next_head(Direction.UP) == (5, 4)

    def test_push_and_pop(self):
        snake = Snake.spawn(5, 5)
        snake.push_head((6, 5))
        assert snake.head == (6, 5)
        assert snake.pop_tail() == (3, 5)
        assert len(snake) == 3

    def test_occupies(self):
        snake = Snake.spawn(5, 5)
        assert snake.occupies(4, 5)
        assert not snake.occupies(0, 0)


class TestSnakeSerialization:
    def test_to_list(self):
        assert Snake.spawn(2, 1, length=2).to_list() == [[2, 1], [1, 1]]
