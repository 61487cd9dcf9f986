"""
Notification hooks for UI adapters.

A session reports score changes and game over to every registered listener.
Listeners are plain objects; a failing listener is logged and skipped so the
simulation keeps running.
"""

import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)


def game_over_message(score: int) -> str:
    return f"Game Over! Your score: {score}"


class SessionListener:
    """Base class/interface for UI adapters. Override what you need."""

    def on_score_changed(self, score: int) -> None:
        pass

    def on_game_over(self, final_score: int, reason: Optional[str]) -> None:
        pass


class LoggingListener(SessionListener):
    """Writes session events to the log; used by the headless CLI."""

    def on_score_changed(self, score: int) -> None:
        logger.info("Score: %s", score)

    def on_game_over(self, final_score: int, reason: Optional[str]) -> None:
        logger.info("%s (reason: %s)", game_over_message(final_score), reason)


class SessionNotifier:
    """Fans events out to a list of listeners."""

    def __init__(self, listeners: Optional[Iterable[SessionListener]] = None):
        self.listeners: List[SessionListener] = list(listeners or [])

    def add(self, listener: SessionListener) -> None:
        self.listeners.append(listener)

    def score_changed(self, score: int) -> None:
        for listener in self.listeners:
            try:
                listener.on_score_changed(score)
            except Exception:  # noqa: BLE001 - keep the game loop alive
                logger.exception("Listener %r failed on score change", listener)

    def game_over(self, final_score: int, reason: Optional[str]) -> None:
        for listener in self.listeners:
            try:
                listener.on_game_over(final_score, reason)
            except Exception:  # noqa: BLE001 - keep the game loop alive
                logger.exception("Listener %r failed on game over", listener)
