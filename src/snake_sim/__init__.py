"""Snake Sim: grid snake simulation engine."""

from snake_sim.arbiter import InputArbiter
from snake_sim.config import GameConfig
from snake_sim.engine import SimulationState, SnakeGame
from snake_sim.food import Food, FoodSpawner, SpawnStrategy
from snake_sim.grid import Grid, WallMode
from snake_sim.snake import CollisionResult, Direction, SnakeBody

__all__ = [
    "CollisionResult",
    "Direction",
    "Food",
    "FoodSpawner",
    "GameConfig",
    "Grid",
    "InputArbiter",
    "SimulationState",
    "SnakeBody",
    "SnakeGame",
    "SpawnStrategy",
    "WallMode",
]
