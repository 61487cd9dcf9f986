"""
ArenaGrid entity - the shrinking board both actors live on.
"""

import random
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .constants import CELL_SIZE, INITIAL_ARENA_HEIGHT, INITIAL_ARENA_WIDTH, MIN_ARENA_SIZE

Position = Tuple[int, int]


class ArenaGrid:
    """
    A board measured in pixels but addressed in whole cells.

    Attributes:
        width, height: current bounds; always multiples of cell_size
        cell_size: size of one grid cell
        min_size: floor that width and height never drop below
    """

    def __init__(
        self,
        width: int = INITIAL_ARENA_WIDTH,
        height: int = INITIAL_ARENA_HEIGHT,
        cell_size: int = CELL_SIZE,
        min_size: int = MIN_ARENA_SIZE
    ):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}.")
        for name, value in (("width", width), ("height", height), ("min_size", min_size)):
            if value % cell_size != 0:
                raise ValueError(f"{name}={value} is not a multiple of cell_size={cell_size}.")
        if width < min_size or height < min_size:
            raise ValueError(
                f"Arena {width}x{height} is smaller than the minimum size {min_size}."
            )

        self.cell_size = cell_size
        self.min_size = min_size
        self.initial_width = width
        self.initial_height = height
        self.width = width
        self.height = height

    def reset(self) -> None:
        self.width = self.initial_width
        self.height = self.initial_height

    @property
    def cell_count(self) -> int:
        return (self.width // self.cell_size) * (self.height // self.cell_size)

    def contains(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupiable(
        self,
        pos: Position,
        segments: Sequence[Position] = (),
        exclude_head: bool = False
    ) -> bool:
        """
        Return True when pos is inside the arena and not covered by the snake.

        segments are snake positions with the head at index 0; exclude_head
        skips that first entry.
        """
        if not self.contains(pos):
            return False
        start = 1 if exclude_head else 0
        for i in range(start, len(segments)):
            if segments[i] == pos:
                return False
        return True

    def is_border(self, pos: Position) -> bool:
        x, y = pos
        return (
            x == 0 or x == self.width - self.cell_size or
            y == 0 or y == self.height - self.cell_size
        )

    def shrink(self, amount: int) -> Tuple[int, int]:
        """Shrink both dimensions by amount per side, never below min_size."""
        self.width = max(self.min_size, self.width - amount * 2)
        self.height = max(self.min_size, self.height - amount * 2)
        return self.width, self.height

    def clamp_inside(self, pos: Position) -> Position:
        x, y = pos
        x = max(0, min(x, self.width - self.cell_size))
        y = max(0, min(y, self.height - self.cell_size))
        return (x, y)

    def cells(self) -> Iterator[Position]:
        """Yield every cell, column by column."""
        for x in range(0, self.width, self.cell_size):
            for y in range(0, self.height, self.cell_size):
                yield (x, y)

    def free_cells(self, occupied: Iterable[Position]) -> List[Position]:
        taken = set(occupied)
        return [cell for cell in self.cells() if cell not in taken]

    def random_cell(self, rng: random.Random) -> Position:
        x = rng.randrange(self.width // self.cell_size) * self.cell_size
        y = rng.randrange(self.height // self.cell_size) * self.cell_size
        return (x, y)

    def random_free_cell(
        self,
        occupied: Iterable[Position],
        rng: random.Random,
        max_attempts: Optional[int] = None
    ) -> Optional[Position]:
        """
        Return a random cell not in occupied, or None if the board is full.

        Rejection sampling is bounded; once the attempts run out the free
        cells are enumerated and one is chosen directly.
        """
        taken = set(occupied)
        if max_attempts is None:
            max_attempts = self.cell_count * 4

        for _ in range(max_attempts):
            cell = self.random_cell(rng)
            if cell not in taken:
                return cell

        free = [cell for cell in self.cells() if cell not in taken]
        if not free:
            return None
        return rng.choice(free)

    def __repr__(self):
        return f"<ArenaGrid {self.width}x{self.height} cell={self.cell_size}>"
