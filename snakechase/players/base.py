"""
Base player interface for the game engine.
"""

from typing import Optional

from snakechase.domain.constants import DOWN, LEFT, RIGHT, TURN_DOWN, TURN_LEFT, TURN_RIGHT, TURN_UP, UP
from snakechase.domain.game_state import RenderFrame

TURN_FOR_DIRECTION = {
    UP: TURN_UP,
    DOWN: TURN_DOWN,
    LEFT: TURN_LEFT,
    RIGHT: TURN_RIGHT,
}


class Player:
    """
    Base class/interface for input adapters.

    A player looks at the latest frame and returns one command for the
    session, or None to leave the snake alone.
    """

    name = "player"

    def get_command(self, frame: RenderFrame) -> Optional[str]:
        """
        Return a command given the current frame.

        Args:
            frame: Snapshot of the running session

        Returns:
            One of: "turn_up", "turn_down", "turn_left", "turn_right", "boost", or None
        """
        raise NotImplementedError
