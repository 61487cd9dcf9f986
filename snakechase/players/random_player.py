"""
Random player implementation - picks random safe turns.
"""

import random
from typing import List, Optional

from snakechase.domain.constants import OPPOSITES, VALID_MOVES
from snakechase.domain.game_state import RenderFrame
from snakechase.domain.snake import offset
from .base import Player, TURN_FOR_DIRECTION


def safe_directions(frame: RenderFrame) -> List[str]:
    """
    Directions whose next cell is inside the arena and off the body.

    The tail is ignored because it moves out of the way on a normal step.
    """
    body = frame.snake_positions
    valid: List[str] = []
    for move in sorted(VALID_MOVES):
        if move == OPPOSITES[frame.direction]:
            continue
        new_x, new_y = offset(frame.head, move, frame.cell_size)

        # Check wall collisions
        if (new_x < 0 or new_x >= frame.width or
                new_y < 0 or new_y >= frame.height):
            continue

        # Check self collisions (excluding tail which will move)
        if (new_x, new_y) in body[:-1]:
            continue

        valid.append(move)
    return valid


class RandomPlayer(Player):
    """
    Picks a random safe direction once per snake step.
    """

    name = "random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._last_head = None

    def get_command(self, frame: RenderFrame) -> Optional[str]:
        if frame.head == self._last_head:
            return None
        self._last_head = frame.head

        valid_moves = safe_directions(frame)

        # If no valid moves, keep going (we'll die anyway)
        if not valid_moves:
            return None

        return TURN_FOR_DIRECTION[self.rng.choice(valid_moves)]
