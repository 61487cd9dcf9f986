"""
Keyboard player - turns raw key names into session commands.
"""

from collections import deque
from typing import Optional

from snakechase.domain.constants import BOOST, TURN_DOWN, TURN_LEFT, TURN_RIGHT, TURN_UP
from snakechase.domain.game_state import RenderFrame
from .base import Player

KEY_BINDINGS = {
    "ArrowUp": TURN_UP,
    "w": TURN_UP,
    "ArrowDown": TURN_DOWN,
    "s": TURN_DOWN,
    "ArrowLeft": TURN_LEFT,
    "a": TURN_LEFT,
    "ArrowRight": TURN_RIGHT,
    "d": TURN_RIGHT,
    " ": BOOST,
}


def translate_key(key: str) -> Optional[str]:
    """Map a key name to a command; unbound keys map to None."""
    return KEY_BINDINGS.get(key)


class KeyboardPlayer(Player):
    """
    Buffers key presses from the host and hands them out one per call.
    """

    name = "keyboard"

    def __init__(self):
        self.pending = deque()

    def press(self, key: str) -> bool:
        command = translate_key(key)
        if command is None:
            return False
        self.pending.append(command)
        return True

    def get_command(self, frame: RenderFrame) -> Optional[str]:
        if not self.pending:
            return None
        return self.pending.popleft()
