"""
Player implementations for snakechase.

This module contains the input adapters that turn key presses or
computer decisions into session commands.
"""

from .base import Player
from .keyboard_player import KeyboardPlayer, translate_key
from .random_player import RandomPlayer
from .autopilot_player import AutopilotPlayer
from .variant_registry import get_player_class, list_players, AVAILABLE_PLAYERS

__all__ = [
    'Player',
    'KeyboardPlayer',
    'translate_key',
    'RandomPlayer',
    'AutopilotPlayer',
    'get_player_class',
    'list_players',
    'AVAILABLE_PLAYERS',
]
