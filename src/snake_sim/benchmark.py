"""Headless throughput benchmark for the simulation engine."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_sim.config import GameConfig
from snake_sim.engine import SimulationState, SnakeGame
from snake_sim.snake import Direction

logger = logging.getLogger(__name__)

_DIRECTIONS = list(Direction)


@dataclass
class BenchmarkResult:
    """Results from a throughput benchmark run."""

    total_games: int
    total_steps: int
    games_won: int
    best_score: int
    wall_time_seconds: float
    games_per_second: float
    steps_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.total_games} games, {self.total_steps} steps "
            f"in {self.wall_time_seconds:.2f}s | "
            f"{self.games_per_second:.1f} games/s, "
            f"{self.steps_per_second:.1f} steps/s | "
            f"best score {self.best_score}, {self.games_won} won"
        )


def benchmark_throughput(
    *,
    num_games: int = 100,
    max_steps: int = 500,
    config: GameConfig | None = None,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure raw simulation throughput.

    Plays *num_games* games with random (unthrottled) direction requests,
    calling :meth:`SnakeGame.step` directly, and reports games/second and
    steps/second.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    base = (config or GameConfig()).with_overrides(move_delay_ms=None)
    rng = np.random.default_rng(seed)

    total_steps = 0
    games_won = 0
    best_score = 0
    start = time.perf_counter()

    for _ in range(num_games):
        game = SnakeGame(
            base,
            rng=np.random.default_rng(int(rng.integers(2**31))),
        )
        game.start()
        steps = 0
        while game.wants_tick and steps < max_steps:
            game.set_direction(_DIRECTIONS[int(rng.integers(4))])
            game.step()
            steps += 1
        total_steps += steps
        best_score = max(best_score, game.score)
        if game.state == SimulationState.WON:
            games_won += 1

    elapsed = time.perf_counter() - start
    result = BenchmarkResult(
        total_games=num_games,
        total_steps=total_steps,
        games_won=games_won,
        best_score=best_score,
        wall_time_seconds=elapsed,
        games_per_second=num_games / max(elapsed, 1e-9),
        steps_per_second=total_steps / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
