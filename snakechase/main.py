import argparse
import json
import logging
import os
import random
import sys
from typing import Any, Callable, Dict, Iterable, List, Optional

from dotenv import load_dotenv

from snakechase.domain.arena import ArenaGrid
from snakechase.domain.constants import (
    BASE_SNAKE_INTERVAL,
    BOOST,
    BOOST_DURATION,
    BOOST_MULTIPLIER,
    FOOD_INTERVAL,
    FOOD_REWARD,
    FOOD_TASK,
    MIN_SNAKE_INTERVAL,
    OPPOSITES,
    RIGHT,
    SHRINK_STEP,
    SNAKE_TASK,
    SPEED_GAIN_PER_FOOD,
    TURN_COMMANDS,
    VALID_MOVES,
)
from snakechase.domain.food import FoodAgent, FoodOutcome
from snakechase.domain.game_state import RenderFrame, clamp_factor
from snakechase.domain.snake import Segment, SnakeBody
from snakechase.players.base import Player
from snakechase.players.variant_registry import AVAILABLE_PLAYERS, get_player_class, list_players
from snakechase.services.notifier import (
    LoggingListener,
    SessionListener,
    SessionNotifier,
    game_over_message,
)
from snakechase.services.scheduler import SimulationClock

logger = logging.getLogger(__name__)


class GameSession:
    """
    Manages:
      - Arena (shrinks every time food is eaten)
      - Snake and its tick interval
      - Food and its evasion state
      - Score and game over
      - The snake and food tasks on the clock

    All state lives on the instance; the clock calls back into bound methods.
    """

    def __init__(
        self,
        clock: Optional[SimulationClock] = None,
        rng: Optional[random.Random] = None,
        listeners: Optional[Iterable[SessionListener]] = None,
        arena: Optional[ArenaGrid] = None
    ):
        self.clock = clock or SimulationClock()
        self.rng = rng or random.Random()
        self.notifier = SessionNotifier(listeners)
        self.arena = arena or ArenaGrid()

        self.snake: SnakeBody = SnakeBody.initial(self.arena.cell_size)
        self.food = FoodAgent((0, 0))
        self.direction = RIGHT
        self.score = 0
        self.snake_interval: float = BASE_SNAKE_INTERVAL
        self.is_over = True
        self.death_reason: Optional[str] = None
        self.last_snake_update = self.clock.now
        self.last_food_update = self.clock.now
        self.foods_eaten = 0
        self.long_escapes = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Start a fresh game; any tasks from the previous one are stopped first."""
        self.clock.cancel_all()

        self.arena.reset()
        self.snake = SnakeBody.initial(self.arena.cell_size)
        self.food = FoodAgent((0, 0))
        self.direction = RIGHT
        self.score = 0
        self.snake_interval = BASE_SNAKE_INTERVAL
        self.is_over = False
        self.death_reason = None
        self.foods_eaten = 0
        self.long_escapes = 0

        spawn = self.arena.random_free_cell(self.snake.positions, self.rng)
        if spawn is not None:
            self.food = FoodAgent(spawn)

        now = self.clock.now
        self.clock.schedule_periodic(SNAKE_TASK, self.snake_interval, self.tick_snake)
        self.clock.schedule_periodic(FOOD_TASK, FOOD_INTERVAL, self.tick_food)
        self.last_snake_update = now
        self.last_food_update = now

        self.notifier.score_changed(self.score)
        logger.info("New game: snake at %s, food at %s", self.snake.head, self.food.current)

    def end_game(self, reason: str) -> None:
        self.is_over = True
        self.death_reason = reason
        self.clock.cancel_all()
        logger.info("Game Over: %s. Final score %s, length %s", reason, self.score, len(self.snake))
        self.notifier.game_over(self.score, reason)

    def game_over_message(self) -> str:
        return game_over_message(self.score)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def turn(self, direction: str) -> bool:
        """Change direction unless the game is over or it would reverse the snake."""
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction '{direction}'.")
        if self.is_over:
            return False
        if direction == OPPOSITES[self.direction]:
            return False
        self.direction = direction
        return True

    def boost(self) -> bool:
        """
        Sprint for BOOST_DURATION ms.

        The revert always lands on the base interval, so speed earned from
        food is lost once a boost ends.
        """
        if self.is_over:
            return False
        self._apply_snake_interval(BASE_SNAKE_INTERVAL * BOOST_MULTIPLIER)
        self.clock.schedule_once(BOOST_DURATION, self._end_boost)
        return True

    def _end_boost(self, now: float) -> None:
        self._apply_snake_interval(BASE_SNAKE_INTERVAL)

    def handle_command(self, command: str) -> bool:
        if command == BOOST:
            return self.boost()
        if command in TURN_COMMANDS:
            return self.turn(TURN_COMMANDS[command])
        raise ValueError(f"Unknown command '{command}'.")

    def _apply_snake_interval(self, interval: float) -> None:
        self.snake_interval = interval
        if self.clock.is_scheduled(SNAKE_TASK):
            self.clock.reschedule(SNAKE_TASK, interval)

    # ------------------------------------------------------------------
    # Logical ticks
    # ------------------------------------------------------------------

    def tick_snake(self, now: float) -> None:
        if self.is_over:
            return

        result = self.snake.step(self.direction, self.arena, self.food.current)
        if result.collided:
            self.end_game(result.reason)
            return

        if result.ate:
            self._eat_food(now)

        self.last_snake_update = now

    def _eat_food(self, now: float) -> None:
        self.score += FOOD_REWARD
        self.foods_eaten += 1
        self.notifier.score_changed(self.score)

        width, height = self.arena.shrink(SHRINK_STEP)
        self.snake.clamp_into(self.arena)
        self.food.current = self.arena.clamp_inside(self.food.current)

        spawn = self.arena.random_free_cell(self.snake.positions, self.rng)
        if spawn is None:
            logger.warning("No free cell left for food; holding it at %s", self.food.current)
            self.food.hold()
        else:
            self.food.place(spawn)
        self.last_food_update = now

        self._apply_snake_interval(max(MIN_SNAKE_INTERVAL, self.snake_interval - SPEED_GAIN_PER_FOOD))
        logger.info(
            "Food eaten: score %s, arena %sx%s, interval %sms, food now at %s",
            self.score, width, height, self.snake_interval, self.food.current
        )

    def tick_food(self, now: float) -> None:
        if self.is_over:
            return

        outcome = self.food.update(
            now, self.snake.positions, self.direction, self.arena, self.rng
        )
        if outcome == FoodOutcome.LONG_ESCAPE:
            self.long_escapes += 1
        if outcome != FoodOutcome.CORNERED:
            self.last_food_update = now

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def sample(self, timestamp: Optional[float] = None) -> RenderFrame:
        """Read-only snapshot for a renderer at timestamp (defaults to now)."""
        if timestamp is None:
            timestamp = self.clock.now
        segments = [Segment(s.current, s.previous) for s in self.snake.segments]
        return RenderFrame(
            timestamp=timestamp,
            segments=segments,
            food=self.food.current,
            food_previous=self.food.previous,
            direction=self.direction,
            snake_factor=clamp_factor(timestamp - self.last_snake_update, self.snake_interval),
            food_factor=clamp_factor(timestamp - self.last_food_update, FOOD_INTERVAL),
            width=self.arena.width,
            height=self.arena.height,
            cell_size=self.arena.cell_size,
            score=self.score,
            is_over=self.is_over,
            death_reason=self.death_reason
        )

    def summary(self) -> Dict[str, Any]:
        return {
            "final_score": self.score,
            "length": len(self.snake),
            "foods_eaten": self.foods_eaten,
            "arena": [self.arena.width, self.arena.height],
            "snake_interval": self.snake_interval,
            "is_over": self.is_over,
            "death_reason": self.death_reason,
            "long_escapes": self.long_escapes,
            "elapsed_ms": self.clock.now,
        }

    def __repr__(self):
        return (
            f"<GameSession score={self.score} direction={self.direction} "
            f"interval={self.snake_interval} over={self.is_over}>"
        )


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    player: Player,
    duration_ms: float,
    fps: int = 30,
    seed: Optional[int] = None,
    listeners: Optional[Iterable[SessionListener]] = None,
    on_frame: Optional[Callable[[RenderFrame], None]] = None
) -> Dict[str, Any]:
    """
    Runs a headless session on a virtual clock.

    Args:
        player: Input adapter polled once per rendered frame.
        duration_ms: Simulated time budget; the run stops early on game over.
        fps: Render rate used for sampling frames and polling the player.
        seed: Seed for food placement and escape draws.
        listeners: Extra UI listeners.
        on_frame: Called with every sampled RenderFrame.

    Returns:
        A dictionary summarizing the session.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}.")

    session = GameSession(rng=random.Random(seed), listeners=listeners)
    session.reset()
    frame_interval = 1000.0 / fps

    while True:
        frame = session.sample()
        if on_frame is not None:
            on_frame(frame)
        if session.is_over or session.clock.now >= duration_ms:
            break

        command = player.get_command(frame)
        if command is not None:
            session.handle_command(command)
        session.clock.advance_to(min(session.clock.now + frame_interval, duration_ms))

    summary = session.summary()
    summary["player"] = player.name
    summary["seed"] = seed
    return summary


def build_player(player_key: str, seed: Optional[int]) -> Player:
    player_cls = get_player_class(player_key)
    if player_key == "random":
        return player_cls(rng=random.Random(seed))
    return player_cls()


def log_level_from_env() -> Optional[int]:
    """Level named by SNAKECHASE_LOG_LEVEL, or None when the name is unknown."""
    level = logging.getLevelName(os.getenv("SNAKECHASE_LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else None


def configure_logging() -> None:
    level = log_level_from_env()
    logging.basicConfig(
        level=logging.INFO if level is None else level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if level is None:
        logger.warning("Unknown SNAKECHASE_LOG_LEVEL %r, using INFO", os.getenv("SNAKECHASE_LOG_LEVEL"))


def env_seed() -> Optional[int]:
    value = os.getenv("SNAKECHASE_SEED")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"SNAKECHASE_SEED must be an integer, got {value!r}.") from None


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    configure_logging()

    parser = argparse.ArgumentParser(
        description="Run a headless snakechase session with a computer player."
    )
    parser.add_argument("--player", choices=AVAILABLE_PLAYERS, default="autopilot",
                        help="Computer player steering the snake")
    parser.add_argument("--duration", type=float, default=60000,
                        help="Simulated milliseconds to run for (default: 60000)")
    parser.add_argument("--fps", type=int, default=30,
                        help="Frames sampled per simulated second (default: 30)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed (default: $SNAKECHASE_SEED)")
    parser.add_argument("--list-players", action="store_true",
                        help="List the available computer players and exit")
    args = parser.parse_args(argv)

    if args.list_players:
        for entry in list_players():
            print(f"{entry['key']:<10} {entry['description']}")
        return 0

    try:
        seed = args.seed if args.seed is not None else env_seed()
        player = build_player(args.player, seed)
        result = run_simulation(
            player,
            duration_ms=args.duration,
            fps=args.fps,
            seed=seed,
            listeners=[LoggingListener()]
        )
    except Exception:
        logger.exception("Simulation failed")
        return 1

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
