"""Tick-driven game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging

import numpy as np

from snake_sim.config import GameConfig
from snake_sim.food import Food, FoodSpawner
from snake_sim.grid import Grid
from snake_sim.snake import CollisionResult, Direction, SnakeBody

logger = logging.getLogger(__name__)


class SimulationState(enum.Enum):
    """Lifecycle states of a game session."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    LOST = "lost"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        return self in (SimulationState.LOST, SimulationState.WON)


class SnakeGame:
    """Single-snake, tick-driven game engine.

    The engine owns the grid, snake, and food spawner. It never reads a
    clock or schedules itself: the caller feeds monotonic millisecond
    timestamps into :meth:`tick` and keeps calling while :attr:`wants_tick`
    is true. :meth:`step` advances exactly one move regardless of time.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        high_score: int = 0,
    ) -> None:
        cfg = config or GameConfig()
        if high_score < 0:
            raise ValueError("high_score must be >= 0.")
        self.config = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.grid = Grid(
            width=cfg.grid_width,
            height=cfg.grid_height,
            wall_mode=cfg.wall_mode,
        )
        self.spawner = FoodSpawner(
            rng=self.rng,
            strategy=cfg.spawn_strategy,
            max_attempts=cfg.max_spawn_attempts,
        )
        self.high_score = high_score
        self.state = SimulationState.NOT_STARTED
        self._reset_entities()

    def _reset_entities(self, timestamp: float = 0.0) -> None:
        cfg = self.config
        self.snake = SnakeBody(
            cfg.start_cell, Direction.RIGHT, move_delay_ms=cfg.move_delay_ms,
        )
        food = self.spawner.place(
            self.grid, self.snake.segments, cfg.food_value, timestamp,
        )
        if food is None:
            raise ValueError("No room on the grid for food.")
        self.food: Food | None = food
        self.score = 0
        self.interval_ms = cfg.initial_interval_ms
        self.tick_count = 0
        self._last_step_at: float | None = None
        self._now = timestamp

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def wants_tick(self) -> bool:
        """True while the caller should keep supplying ticks."""
        return self.state == SimulationState.RUNNING

    @property
    def is_over(self) -> bool:
        return self.state.is_terminal

    def start(self, timestamp: float | None = None) -> bool:
        """Begin play. Returns False if the game was already started."""
        if self.state != SimulationState.NOT_STARTED:
            return False
        self.state = SimulationState.RUNNING
        self._last_step_at = timestamp
        logger.info(
            "Game started on %dx%d grid (%s walls).",
            self.grid.width, self.grid.height, self.grid.wall_mode.value,
        )
        return True

    def restart(self, timestamp: float = 0.0) -> None:
        """Discard the current session and begin a fresh one."""
        self._reset_entities(timestamp)
        self.state = SimulationState.RUNNING
        logger.info("Game restarted (high score %d).", self.high_score)

    def pause(self) -> bool:
        if self.state != SimulationState.RUNNING:
            return False
        self.state = SimulationState.PAUSED
        logger.info("Game paused at tick %d.", self.tick_count)
        return True

    def resume(self) -> bool:
        if self.state != SimulationState.PAUSED:
            return False
        self.state = SimulationState.RUNNING
        # Restart the time base so the first tick after resuming does not
        # see the whole pause as elapsed time.
        self._last_step_at = None
        logger.info("Game resumed at tick %d.", self.tick_count)
        return True

    def toggle_pause(self) -> SimulationState:
        """Flip between RUNNING and PAUSED; other states are unaffected."""
        if self.state == SimulationState.RUNNING:
            self.pause()
        elif self.state == SimulationState.PAUSED:
            self.resume()
        return self.state

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def set_direction(
        self, direction: Direction, timestamp: float | None = None,
    ) -> bool:
        """Buffer a direction change for the next step.

        Returns False when the request is dropped: the game is not
        running, the request reverses the snake, or it arrived too soon
        after the previous change.
        """
        if self.state != SimulationState.RUNNING:
            return False
        return self.snake.set_direction(direction, timestamp)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, timestamp: float) -> bool:
        """Feed a frame timestamp; step if a full interval has elapsed.

        Returns :attr:`wants_tick`.
        """
        if self.state != SimulationState.RUNNING:
            return False

        self._now = timestamp
        if self._last_step_at is None:
            self._last_step_at = timestamp
            return True

        if timestamp - self._last_step_at > self.interval_ms:
            self.step()
            self._last_step_at = timestamp
        return self.wants_tick

    def step(self) -> dict:
        """Advance the game by one move.

        Returns the snapshot after the move.
        """
        if self.state != SimulationState.RUNNING:
            return self.snapshot()

        # Grow on the tick the food is eaten; the tail then stays put and
        # is counted as an obstacle for this move.
        food = self.food
        will_eat = (
            food is not None and self.snake.peek_head(self.grid) == food.cell
        )
        if will_eat:
            self.snake.grow()

        result = self.snake.advance(self.grid)
        self.tick_count += 1
        if result != CollisionResult.NONE:
            self._end(SimulationState.LOST, result)
            return self.snapshot()

        if will_eat:
            self._eat(food)
        return self.snapshot()

    def _eat(self, eaten: Food) -> None:
        self.score += eaten.value
        self.high_score = max(self.high_score, self.score)

        food = self.spawner.place(
            self.grid, self.snake.occupied, self.config.food_value, self._now,
        )
        self.food = food
        if food is None:
            self._end(SimulationState.WON)
            return
        self.interval_ms = max(
            self.config.min_interval_ms,
            self.interval_ms - self.config.interval_step_ms,
        )

    def _end(
        self,
        state: SimulationState,
        collision: CollisionResult | None = None,
    ) -> None:
        self.state = state
        self.high_score = max(self.high_score, self.score)
        if collision is not None:
            logger.info(
                "Snake hit %s at tick %d with score %d.",
                collision.value, self.tick_count, self.score,
            )
        else:
            logger.info(
                "Board filled at tick %d with score %d.",
                self.tick_count, self.score,
            )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def food_age(self, timestamp: float) -> float:
        if self.food is None:
            return 0.0
        return self.food.age(timestamp)

    def snapshot(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick_count,
            "state": self.state.value,
            "score": self.score,
            "high_score": self.high_score,
            "interval_ms": self.interval_ms,
            "grid": self.grid.to_dict(),
            "segments": [list(seg) for seg in self.snake.segments],
            "direction": self.snake.direction.name.lower(),
            "food": self.food.to_dict() if self.food is not None else None,
        }

    def debug_info(self) -> dict:
        """Human-oriented summary for debug overlays and logs."""
        labels = {
            SimulationState.NOT_STARTED: "Not Started",
            SimulationState.RUNNING: "Playing",
            SimulationState.PAUSED: "Paused",
            SimulationState.LOST: "Game Over",
            SimulationState.WON: "Won",
        }
        return {
            "Game Speed": self.interval_ms,
            "Score": self.score,
            "Snake Length": len(self.snake),
            "Snake Head": list(self.snake.head),
            "Food Position": (
                list(self.food.cell) if self.food is not None else None
            ),
            "Game State": labels[self.state],
        }
