"""
FoodAgent entity - the target that runs away from the snake.

The food is idle while the snake is far away. Once the head comes within
FLEE_DISTANCE a chase timer starts and every food tick the food either steps
to the best neighbouring cell or, once per session and only between 3 and 5
seconds into a chase, jumps to the best cell anywhere on the board.
"""

import logging
import math
import random
from typing import Iterable, List, Optional, Sequence

from .arena import ArenaGrid, Position
from .constants import (
    BORDER_PENALTY,
    DIRECTION_BONUS,
    DOWN,
    FLEE_DISTANCE,
    LEFT,
    LONG_ESCAPE_BONUS,
    LONG_ESCAPE_CHANCE,
    MAX_CHASE_TIME_FOR_ESCAPE,
    MAX_LONG_ESCAPES,
    MIN_CHASE_TIME_FOR_ESCAPE,
    RIGHT,
    UP,
)

logger = logging.getLogger(__name__)

IDLE = "idle"
CHASED = "chased"


class FoodOutcome:
    """What a food tick did."""

    IDLE = "idle"                # snake far away, food held still
    LONG_ESCAPE = "long_escape"  # board-wide jump
    FLEE = "flee"                # stepped to a neighbouring cell
    CORNERED = "cornered"        # chased but nowhere to go


def distance(a: Position, b: Position) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def score_candidate(
    pos: Position,
    head: Position,
    direction: str,
    arena: ArenaGrid,
    long_escape: bool = False
) -> float:
    """Rank a cell for the food: far from the head and behind its travel direction."""
    score = distance(pos, head)

    if direction == UP and pos[1] > head[1]:
        score += DIRECTION_BONUS
    elif direction == DOWN and pos[1] < head[1]:
        score += DIRECTION_BONUS
    elif direction == LEFT and pos[0] > head[0]:
        score += DIRECTION_BONUS
    elif direction == RIGHT and pos[0] < head[0]:
        score += DIRECTION_BONUS

    if long_escape:
        score += LONG_ESCAPE_BONUS

    if arena.is_border(pos):
        score -= BORDER_PENALTY

    return score


def flee_candidates(food: Position, segments: Sequence[Position], arena: ArenaGrid) -> List[Position]:
    """Neighbouring cells the food may step into, in up/down/left/right order."""
    x, y = food
    step = arena.cell_size
    adjacent = [(x, y - step), (x, y + step), (x - step, y), (x + step, y)]
    return [pos for pos in adjacent if arena.is_occupiable(pos, segments, exclude_head=True)]


def long_escape_candidates(segments: Iterable[Position], arena: ArenaGrid) -> List[Position]:
    return arena.free_cells(segments)


def find_optimal_flee_position(
    food: Position,
    segments: Sequence[Position],
    direction: str,
    arena: ArenaGrid,
    long_escape: bool = False
) -> Optional[Position]:
    """
    Pick the best cell for the food, or None when there is nowhere to go.

    segments holds the snake positions with the head first. Ties keep the
    first candidate generated.
    """
    if long_escape:
        candidates = long_escape_candidates(segments, arena)
    else:
        candidates = flee_candidates(food, segments, arena)

    head = segments[0]
    best: Optional[Position] = None
    best_score = -math.inf
    for pos in candidates:
        score = score_candidate(pos, head, direction, arena, long_escape)
        if score > best_score:
            best_score = score
            best = pos
    return best


class FoodAgent:
    """
    Represents the food on the board.

    Attributes:
        current: logical position
        previous: position before the last move, for interpolation
        chase_start_time: when the current chase began, None when idle
        remaining_long_escapes: board-wide jumps still available
    """

    def __init__(self, position: Position, max_long_escapes: int = MAX_LONG_ESCAPES):
        self.current = position
        self.previous = position
        self.chase_start_time: Optional[float] = None
        self.remaining_long_escapes = max_long_escapes

    @property
    def state(self) -> str:
        return IDLE if self.chase_start_time is None else CHASED

    def place(self, position: Position) -> None:
        """Move to position, remembering where we were."""
        self.previous = self.current
        self.current = position

    def hold(self) -> None:
        self.previous = self.current

    def update(
        self,
        now: float,
        segments: Sequence[Position],
        direction: str,
        arena: ArenaGrid,
        rng: random.Random
    ) -> str:
        """Run one food tick and return a FoodOutcome value."""
        head = segments[0]

        if distance(self.current, head) > FLEE_DISTANCE:
            self.chase_start_time = None
            self.hold()
            return FoodOutcome.IDLE

        if self.chase_start_time is None:
            self.chase_start_time = now

        chase_duration = now - self.chase_start_time
        if (
            self.remaining_long_escapes > 0 and
            MIN_CHASE_TIME_FOR_ESCAPE <= chase_duration <= MAX_CHASE_TIME_FOR_ESCAPE and
            rng.random() < LONG_ESCAPE_CHANCE
        ):
            target = find_optimal_flee_position(
                self.current, segments, direction, arena, long_escape=True
            )
            if target is not None:
                logger.info(
                    "Food long escape %s -> %s after %.0f ms chase",
                    self.current, target, chase_duration
                )
                self.place(target)
                self.remaining_long_escapes -= 1
                self.chase_start_time = None
                return FoodOutcome.LONG_ESCAPE

        target = find_optimal_flee_position(self.current, segments, direction, arena)
        if target is None:
            return FoodOutcome.CORNERED

        self.place(target)
        return FoodOutcome.FLEE

    def __repr__(self):
        return (
            f"<FoodAgent at={self.current} state={self.state} "
            f"long_escapes={self.remaining_long_escapes}>"
        )
