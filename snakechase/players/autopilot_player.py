"""
Autopilot player - greedily chases the food and sprints when it lines up.
"""

import math
from typing import Optional

from snakechase.domain.constants import BOOST, BOOST_DURATION
from snakechase.domain.game_state import RenderFrame
from snakechase.domain.snake import offset
from .base import Player, TURN_FOR_DIRECTION
from .random_player import safe_directions


class AutopilotPlayer(Player):
    """
    Steers towards the food along safe cells, preferring to keep going
    straight on ties. Boosts when the food sits dead ahead within
    boost_range cells and no boost is active.
    """

    name = "autopilot"

    def __init__(self, boost_range: int = 3):
        self.boost_range = boost_range
        self._last_head = None
        self._boost_until = -math.inf

    def _food_ahead(self, frame: RenderFrame) -> bool:
        hx, hy = frame.head
        fx, fy = frame.food
        for steps in range(1, self.boost_range + 1):
            if offset((hx, hy), frame.direction, frame.cell_size * steps) == (fx, fy):
                return True
        return False

    def get_command(self, frame: RenderFrame) -> Optional[str]:
        if frame.head == self._last_head:
            return None
        self._last_head = frame.head

        if self.boost_range > 0 and frame.timestamp >= self._boost_until and self._food_ahead(frame):
            self._boost_until = frame.timestamp + BOOST_DURATION
            return BOOST

        candidates = safe_directions(frame)
        if not candidates:
            return None

        def rank(move):
            nx, ny = offset(frame.head, move, frame.cell_size)
            return (math.hypot(frame.food[0] - nx, frame.food[1] - ny), move != frame.direction)

        best = min(candidates, key=rank)
        if best == frame.direction:
            return None
        return TURN_FOR_DIRECTION[best]
