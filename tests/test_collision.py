"""Tests for the collision queries."""

import pytest

from snake_arcade.collision import border_collision, self_collision
from snake_arcade.snake import Snake

W, H = 10, 8


def _snake_with_body(body):
    snake = Snake(max_length=W * H)
    snake.body = list(body)
    return snake


class TestSelfCollision:
    def test_straight_snake_does_not_collide(self):
        snake = _snake_with_body([(4, 1), (3, 1), (2, 1), (1, 1)])
        assert not self_collision(snake)

    def test_head_wrapped_onto_body(self):
        snake = _snake_with_body([(1, 1), (2, 1), (2, 2), (1, 1)])
        assert self_collision(snake)

    def test_head_on_middle_segment(self):
        snake = _snake_with_body([(2, 2), (3, 2), (2, 2), (1, 2), (0, 2)])
        assert self_collision(snake)


class TestBorderCollision:
    @pytest.mark.parametrize(
        "head",
        [(-1, 3), (W, 3), (4, -1), (4, H)],
    )
    def test_leaving_the_grid(self, head):
        snake = _snake_with_body([head, (0, 0)])
        assert border_collision(snake, W, H)

    @pytest.mark.parametrize("head", [(0, 0), (W - 1, H - 1), (0, H - 1), (W - 1, 0)])
    def test_corners_are_inside(self, head):
        snake = _snake_with_body([head, (1, 1)])
        assert not border_collision(snake, W, H)
