"""Tests for the Snake module."""

import pytest

from snake_arcade.snake import Direction, Snake


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(max_length=100)
        assert snake.body == [(1, 0), (0, 0)]
        assert snake.head == (1, 0)
        assert snake.length == 2
        assert snake.heading == Direction.RIGHT

    def test_longer_start_lies_on_row_zero(self):
        snake = Snake(max_length=100, length=4)
        assert snake.body == [(3, 0), (2, 0), (1, 0), (0, 0)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 2"):
            Snake(max_length=100, length=1)

    def test_length_bounded_by_max(self):
        with pytest.raises(ValueError, match="max_length"):
            Snake(max_length=3, length=4)


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite == Direction.DOWN
        assert Direction.DOWN.opposite == Direction.UP
        assert Direction.LEFT.opposite == Direction.RIGHT
        assert Direction.RIGHT.opposite == Direction.LEFT

    def test_values_are_screen_space_unit_vectors(self):
        assert Direction.UP.value == (0, -1)
        assert Direction.DOWN.value == (0, 1)
        for heading in Direction:
            dx, dy = heading.value
            assert abs(dx) + abs(dy) == 1


class TestSnakeHeading:
    def test_set_valid_heading(self):
        snake = Snake(max_length=100)
        assert snake.set_heading(Direction.DOWN)
        assert snake.heading == Direction.DOWN

    @pytest.mark.parametrize("heading", list(Direction))
    def test_reversal_never_accepted(self, heading):
        snake = Snake(max_length=100, heading=heading)
        assert not snake.set_heading(heading.opposite)
        assert snake.heading == heading

    def test_same_heading_is_accepted(self):
        snake = Snake(max_length=100)
        assert snake.set_heading(Direction.RIGHT)
        assert snake.heading == Direction.RIGHT


class TestSnakeMovement:
    def test_advance_moves_head_along_heading(self):
        snake = Snake(max_length=100)
        snake.advance()
        assert snake.head == (2, 0)

    def test_advance_shifts_body_and_keeps_length(self):
        snake = Snake(max_length=100, length=4)
        snake.set_heading(Direction.DOWN)
        for _ in range(2):
            before = list(snake.body)
            snake.advance()
            assert snake.length == 4
            assert snake.body[1:] == before[:-1]

    def test_advance_returns_vacated_tail(self):
        snake = Snake(max_length=100)
        assert snake.advance() == (0, 0)

    def test_grow_keeps_vacated_tail(self):
        snake = Snake(max_length=100)
        snake.advance()
        assert snake.grow()
        assert snake.body == [(2, 0), (1, 0), (0, 0)]
        snake.advance()
        assert snake.body == [(3, 0), (2, 0), (1, 0)]

    def test_grow_before_any_advance_repeats_tail(self):
        snake = Snake(max_length=100)
        snake.grow()
        assert snake.body == [(1, 0), (0, 0), (0, 0)]

    def test_grow_capped_at_max_length(self):
        snake = Snake(max_length=3)
        snake.advance()
        assert snake.grow()
        snake.advance()
        assert not snake.grow()
        assert snake.length == 3


class TestSnakeSerialization:
    def test_occupies(self):
        snake = Snake(max_length=100)
        assert snake.occupies((0, 0))
        assert not snake.occupies((5, 5))

    def test_to_dict(self):
        snake = Snake(max_length=100)
        d = snake.to_dict()
        assert d["body"] == [[1, 0], [0, 0]]
        assert d["heading"] == [1, 0]
        assert d["length"] == 2
