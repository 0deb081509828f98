"""Snake body representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Set as AbstractSet

from snake_sim.arbiter import InputArbiter
from snake_sim.grid import Cell, Grid


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit vectors."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))

    def is_opposite(self, other: Direction) -> bool:
        """True when the two directions point 180° apart."""
        return self.dx * other.dx + self.dy * other.dy == -1

    def apply(self, cell: Cell) -> Cell:
        """Translate *cell* one step in this direction."""
        x, y = cell
        return x + self.dx, y + self.dy

    @classmethod
    def from_vector(cls, vector: tuple[int, int]) -> Direction:
        """Look up the direction for a cardinal unit vector.

        Diagonal or non-unit vectors raise :class:`ValueError`; input
        adapters must resolve them before reaching the simulation.
        """
        try:
            return cls(tuple(vector))
        except ValueError:
            raise ValueError(
                f"{vector!r} is not a cardinal unit vector."
            ) from None

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name (``"up"`` etc.)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction {name!r}.") from None


class CollisionResult(enum.Enum):
    """Outcome of a single :meth:`SnakeBody.advance` call."""

    NONE = "none"
    WALL = "wall"
    SELF = "self"


class SnakeBody:
    """A snake represented as an ordered deque of (x, y) segments.

    The head is ``body[0]``; the tail is ``body[-1]``. An occupancy set is
    kept in step with the deque so collision checks stay O(1).
    """

    def __init__(
        self,
        start: Cell,
        direction: Direction = Direction.RIGHT,
        move_delay_ms: float | None = None,
    ) -> None:
        self.body: deque[Cell] = deque([start])
        self._occupied: set[Cell] = {start}
        self.direction = direction
        self.growth_pending = False
        self.arbiter = InputArbiter(direction, move_delay_ms=move_delay_ms)

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    @property
    def segments(self) -> tuple[Cell, ...]:
        """Read-only ordered view of the body, head first."""
        return tuple(self.body)

    @property
    def occupied(self) -> AbstractSet[Cell]:
        """Live view of the cells the body covers. Do not mutate."""
        return self._occupied

    @property
    def pending_direction(self) -> Direction:
        return self.arbiter.pending

    def set_direction(
        self, new_direction: Direction, timestamp: float | None = None,
    ) -> bool:
        """Buffer a direction change for the next advance.

        Returns False, with no state change, for 180° reversals and for
        throttled requests.
        """
        return self.arbiter.request(new_direction, self.direction, timestamp)

    def grow(self) -> None:
        """Keep the tail in place on the next advance."""
        self.growth_pending = True

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self._occupied

    def peek_head(self, grid: Grid) -> Cell | None:
        """Compute the next head position without moving.

        Returns ``None`` when the move would leave a non-wrapping grid.
        """
        direction = self.arbiter.resolve(self.direction)
        return grid.resolve(direction.apply(self.head))

    def advance(self, grid: Grid) -> CollisionResult:
        """Move the snake one step forward.

        On a wall or self collision the body is left untouched.
        """
        self.direction = self.arbiter.resolve(self.direction)
        self.arbiter.pending = self.direction

        new_head = grid.resolve(self.direction.apply(self.head))
        if new_head is None:
            return CollisionResult.WALL

        # The tail vacates its cell this tick unless the snake is growing,
        # so stepping onto it is legal.
        blocked = self._occupied
        if not self.growth_pending and new_head == self.tail:
            blocked = blocked - {self.tail}
        if new_head in blocked:
            return CollisionResult.SELF

        self.body.appendleft(new_head)
        self._occupied.add(new_head)
        if not self.growth_pending:
            vacated = self.body.pop()
            if vacated != new_head:
                self._occupied.discard(vacated)
        self.growth_pending = False
        return CollisionResult.NONE

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "growth_pending": self.growth_pending,
        }
