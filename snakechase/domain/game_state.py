"""
RenderFrame entity - what a renderer sees at one instant.
"""

from typing import List, Optional, Tuple

from .arena import Position
from .snake import Segment

DisplayPoint = Tuple[float, float]


def interpolate(previous: Position, current: Position, factor: float) -> DisplayPoint:
    """Blend previous towards current by factor (0 = previous, 1 = current)."""
    return (
        previous[0] + (current[0] - previous[0]) * factor,
        previous[1] + (current[1] - previous[1]) * factor,
    )


def clamp_factor(elapsed: float, interval: float) -> float:
    if interval <= 0:
        return 1.0
    return max(0.0, min(1.0, elapsed / interval))


class RenderFrame:
    """
    A read-only snapshot of the session at a specific timestamp.

    Attributes:
        timestamp: the time the frame was sampled at
        segments: list of Segment copies, head first
        food, food_previous: food logical position and its interpolation anchor
        direction: the snake's travel direction
        snake_factor, food_factor: interpolation factors in [0, 1]
        width, height, cell_size: arena geometry
        score: current score
        is_over: whether the session has ended
    """

    def __init__(
        self,
        timestamp: float,
        segments: List[Segment],
        food: Position,
        food_previous: Position,
        direction: str,
        snake_factor: float,
        food_factor: float,
        width: int,
        height: int,
        cell_size: int,
        score: int = 0,
        is_over: bool = False,
        death_reason: Optional[str] = None
    ):
        self.timestamp = timestamp
        self.segments = segments
        self.food = food
        self.food_previous = food_previous
        self.direction = direction
        self.snake_factor = snake_factor
        self.food_factor = food_factor
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.score = score
        self.is_over = is_over
        self.death_reason = death_reason

    @property
    def snake_positions(self) -> List[Position]:
        return [segment.current for segment in self.segments]

    @property
    def head(self) -> Position:
        return self.segments[0].current

    def display_segments(self) -> List[DisplayPoint]:
        """Interpolated pixel positions of every segment, head first."""
        return [
            interpolate(segment.previous, segment.current, self.snake_factor)
            for segment in self.segments
        ]

    def display_food(self) -> DisplayPoint:
        return interpolate(self.food_previous, self.food, self.food_factor)

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Rows run top to bottom, matching screen coordinates.
        """
        columns = self.width // self.cell_size
        rows = self.height // self.cell_size
        board = [['.' for _ in range(columns)] for _ in range(rows)]

        fx, fy = self.food
        if 0 <= fx < self.width and 0 <= fy < self.height:
            board[fy // self.cell_size][fx // self.cell_size] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            if not (0 <= x < self.width and 0 <= y < self.height):
                continue
            board[y // self.cell_size][x // self.cell_size] = 'H' if pos_idx == 0 else 'S'

        result = []
        for row_idx, row in enumerate(board):
            result.append(f"{row_idx:2d} {' '.join(row)}")
        result.append("   " + " ".join(str(i % 10) for i in range(columns)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<RenderFrame t={self.timestamp:.0f} head={self.head} food={self.food} "
            f"arena={self.width}x{self.height} score={self.score}>"
        )
