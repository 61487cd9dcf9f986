"""
Computer players selectable by name from the command line.

The keyboard player is not listed here: it needs a host feeding it key
presses, so it cannot drive a headless session.
"""

from typing import Callable, Dict, List, Optional, Type

from .base import Player


def _load_autopilot() -> Type[Player]:
    from .autopilot_player import AutopilotPlayer
    return AutopilotPlayer


def _load_random() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


# key -> (loader, one-line description for --list-players)
PLAYERS: Dict[str, tuple] = {
    "autopilot": (_load_autopilot, "Greedy chaser that boosts when the food lines up"),
    "random": (_load_random, "Random safe turns once per step"),
}

DEFAULT_PLAYER = "autopilot"
AVAILABLE_PLAYERS = list(PLAYERS)


def get_player_class(player_key: Optional[str] = None) -> Type[Player]:
    """
    Resolve a player key to its class.

    Blank keys select the autopilot. Unknown keys raise ValueError naming the
    choices.
    """
    key = (player_key or "").strip() or DEFAULT_PLAYER
    if key not in PLAYERS:
        raise ValueError(
            f"Unknown player '{key}'. Available players: {', '.join(AVAILABLE_PLAYERS)}"
        )
    loader: Callable[[], Type[Player]] = PLAYERS[key][0]
    return loader()


def list_players() -> List[Dict[str, str]]:
    return [{"key": key, "description": description} for key, (_, description) in PLAYERS.items()]
