"""
Domain entities for the snakechase game engine.

This module contains the core game entities that are independent of
scheduling and presentation concerns (timers, rendering, input).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    TURN_UP, TURN_DOWN, TURN_LEFT, TURN_RIGHT, BOOST, VALID_COMMANDS,
)
from .arena import ArenaGrid
from .snake import SnakeBody, Segment, StepResult
from .food import FoodAgent, FoodOutcome
from .game_state import RenderFrame

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES',
    'TURN_UP', 'TURN_DOWN', 'TURN_LEFT', 'TURN_RIGHT', 'BOOST', 'VALID_COMMANDS',
    'ArenaGrid',
    'SnakeBody',
    'Segment',
    'StepResult',
    'FoodAgent',
    'FoodOutcome',
    'RenderFrame',
]
