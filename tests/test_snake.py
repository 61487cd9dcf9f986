"""
Tests for SnakeBody stepping, growth and collisions.
"""

from collections import deque

from snakechase.domain.arena import ArenaGrid
from snakechase.domain.constants import DOWN, LEFT, RIGHT, UP
from snakechase.domain.snake import Segment, SnakeBody, offset

FAR_AWAY = (380, 380)


class TestSnakeBody:
    """Construction and accessors."""

    def test_initial_snake(self):
        """The starting snake is two segments heading right."""
        snake = SnakeBody.initial(20)
        assert snake.positions == [(100, 100), (80, 100)]
        assert snake.head == (100, 100)
        assert all(s.previous == s.current for s in snake.segments)

    def test_segments_are_a_deque(self):
        """Segments are kept in a deque."""
        snake = SnakeBody([(5, 5)])
        assert isinstance(snake.segments, deque)
        assert isinstance(snake.segments[0], Segment)

    def test_offset_uses_screen_coordinates(self):
        """Up decreases y, down increases it."""
        assert offset((100, 100), UP, 20) == (100, 80)
        assert offset((100, 100), DOWN, 20) == (100, 120)
        assert offset((100, 100), LEFT, 20) == (80, 100)
        assert offset((100, 100), RIGHT, 20) == (120, 100)

    def test_occupies(self):
        """occupies() checks every segment."""
        snake = SnakeBody.initial(20)
        assert snake.occupies((80, 100))
        assert not snake.occupies((120, 100))


class TestStep:
    """One logical tick."""

    def test_normal_step_keeps_length(self):
        """A step without food keeps the length."""
        arena = ArenaGrid()
        snake = SnakeBody.initial(20)
        result = snake.step(RIGHT, arena, FAR_AWAY)

        assert not result.collided
        assert not result.ate
        assert result.new_head == (120, 100)
        assert snake.positions == [(120, 100), (100, 100)]

    def test_step_records_previous_positions(self):
        """Each segment remembers where it was before the step."""
        arena = ArenaGrid()
        snake = SnakeBody([(100, 100), (80, 100), (60, 100)])
        snake.step(DOWN, arena, FAR_AWAY)

        assert snake.segments[0].current == (100, 120)
        assert snake.segments[0].previous == (100, 100)
        assert [s.previous for s in list(snake.segments)[1:]] == [(100, 100), (80, 100)]

    def test_eating_grows_by_one(self):
        """Eating keeps the tail, so the snake grows by one."""
        arena = ArenaGrid()
        snake = SnakeBody.initial(20)
        result = snake.step(RIGHT, arena, (120, 100))

        assert result.ate
        assert len(snake) == 3
        assert snake.positions == [(120, 100), (100, 100), (80, 100)]

    def test_wall_collision_leaves_body_untouched(self):
        """A wall hit reports the collision and leaves the body as it was."""
        arena = ArenaGrid()
        snake = SnakeBody([(0, 100), (20, 100)])
        before = [(s.current, s.previous) for s in snake.segments]

        result = snake.step(LEFT, arena, FAR_AWAY)

        assert result.collided
        assert result.reason == "wall"
        assert result.new_head == (-20, 100)
        assert [(s.current, s.previous) for s in snake.segments] == before

    def test_wall_is_checked_against_shrunk_bounds(self):
        """Walls move in with the arena."""
        arena = ArenaGrid()
        arena.shrink(20)
        snake = SnakeBody([(340, 100), (320, 100)])
        assert snake.step(RIGHT, arena, FAR_AWAY).reason == "wall"

    def test_self_collision(self):
        """Stepping into the body is a self collision."""
        arena = ArenaGrid()
        snake = SnakeBody([(100, 100), (100, 120), (120, 120), (120, 100), (140, 100)])
        result = snake.step(RIGHT, arena, FAR_AWAY)

        assert result.collided
        assert result.reason == "self"
        assert len(snake) == 5

    def test_moving_into_the_tail_cell_collides(self):
        """The tail cell counts as occupied."""
        arena = ArenaGrid()
        snake = SnakeBody([(100, 100), (100, 120), (120, 120), (120, 100)])
        assert snake.step(RIGHT, arena, FAR_AWAY).reason == "self"

    def test_reversing_hits_the_neck(self):
        """Reversing runs into the second segment."""
        arena = ArenaGrid()
        snake = SnakeBody.initial(20)
        assert snake.step(LEFT, arena, FAR_AWAY).reason == "self"

    def test_segments_stay_unique_while_moving(self):
        """Normal movement never stacks segments."""
        arena = ArenaGrid()
        snake = SnakeBody.initial(20)
        path = [RIGHT, RIGHT, DOWN, DOWN, LEFT, LEFT, LEFT, UP]
        food = [(140, 100), (140, 120)]
        for direction in path:
            target = food[0] if food else FAR_AWAY
            result = snake.step(direction, arena, target)
            assert not result.collided
            if result.ate:
                food.pop(0)
            assert len(set(snake.positions)) == len(snake)
        assert len(snake) == 4


class TestClamp:
    """Clamping after the arena shrinks."""

    def test_clamp_into_moves_segments_inside(self):
        """clamp_into() pulls segments inside the shrunk arena."""
        arena = ArenaGrid()
        snake = SnakeBody([(380, 100), (360, 100)])
        arena.shrink(20)
        snake.clamp_into(arena)
        assert snake.positions == [(340, 100), (340, 100)]
        assert all(arena.contains(pos) for pos in snake.positions)

    def test_clamped_segments_may_share_a_cell(self):
        """Clamping can stack segments, and the next step does not count that as a collision."""
        arena = ArenaGrid()
        snake = SnakeBody([(380, 100), (360, 100), (340, 100)])
        arena.shrink(20)
        snake.clamp_into(arena)

        assert snake.positions == [(340, 100)] * 3

        result = snake.step(DOWN, arena, FAR_AWAY)

        assert not result.collided
        assert snake.positions == [(340, 120), (340, 100), (340, 100)]
        assert len(set(snake.positions)) < len(snake)
