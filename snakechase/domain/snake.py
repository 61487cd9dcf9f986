"""
SnakeBody entity for the game engine.
"""

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .arena import ArenaGrid, Position
from .constants import DOWN, LEFT, RIGHT, UP

STEP_OFFSETS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}


def offset(pos: Position, direction: str, cell_size: int) -> Position:
    """Return pos moved one cell in direction (y grows downwards)."""
    dx, dy = STEP_OFFSETS[direction]
    return (pos[0] + dx * cell_size, pos[1] + dy * cell_size)


@dataclass
class Segment:
    """One snake cell. previous only feeds interpolated rendering."""

    current: Position
    previous: Position


@dataclass(frozen=True)
class StepResult:
    new_head: Position
    collided: bool
    ate: bool = False
    reason: Optional[str] = None


class SnakeBody:
    """
    Represents the snake on the board.

    Attributes:
        segments: deque of Segment from head at index 0 to tail at the end
    """

    def __init__(self, positions: List[Position]):
        self.segments = deque(Segment(current=pos, previous=pos) for pos in positions)

    @classmethod
    def initial(cls, cell_size: int) -> "SnakeBody":
        """Two cells on row 5, heading right."""
        return cls([(5 * cell_size, 5 * cell_size), (4 * cell_size, 5 * cell_size)])

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.segments[0].current

    @property
    def positions(self) -> List[Position]:
        return [segment.current for segment in self.segments]

    def __len__(self):
        return len(self.segments)

    def occupies(self, pos: Position) -> bool:
        return any(segment.current == pos for segment in self.segments)

    def step(self, direction: str, arena: ArenaGrid, food_position: Position) -> StepResult:
        """
        Advance one cell in direction.

        Collisions leave the body untouched. Otherwise a new head is pushed
        and the tail is dropped unless the new head landed on food_position.
        """
        new_head = offset(self.head, direction, arena.cell_size)

        if not arena.contains(new_head):
            return StepResult(new_head=new_head, collided=True, reason="wall")

        for i in range(1, len(self.segments)):
            if self.segments[i].current == new_head:
                return StepResult(new_head=new_head, collided=True, reason="self")

        for segment in self.segments:
            segment.previous = segment.current

        self.segments.appendleft(Segment(current=new_head, previous=self.head))

        ate = new_head == food_position
        if not ate:
            self.segments.pop()

        return StepResult(new_head=new_head, collided=False, ate=ate)

    def clamp_into(self, arena: ArenaGrid) -> None:
        """Pull every segment back inside arena after it shrinks."""
        for segment in self.segments:
            segment.current = arena.clamp_inside(segment.current)

    def __repr__(self):
        return f"<SnakeBody head={self.head} length={len(self)}>"
