"""Direction input arbitration between input events and simulation ticks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_sim.snake import Direction

logger = logging.getLogger(__name__)


class InputArbiter:
    """Buffers at most one direction change for the next tick.

    Requests are checked against the direction the snake is *currently*
    travelling in, not against the buffered one, so a quick double tap can
    never queue two turns that add up to a reversal. Accepted requests
    overwrite each other (last writer wins); rejected ones leave the
    pending slot untouched.

    When *move_delay_ms* is set, a request arriving less than that many
    milliseconds after the last accepted one is dropped. Timestamps come
    from the caller; the arbiter never reads a clock.
    """

    def __init__(
        self,
        initial: Direction,
        move_delay_ms: float | None = None,
    ) -> None:
        if move_delay_ms is not None and move_delay_ms < 0:
            raise ValueError("move_delay_ms must be >= 0.")
        self.move_delay_ms = move_delay_ms
        self.pending: Direction = initial
        self.last_accepted_at: float | None = None

    def reset(self, direction: Direction) -> None:
        """Clear throttling history and point the pending slot at *direction*."""
        self.pending = direction
        self.last_accepted_at = None

    def is_throttled(self, timestamp: float | None) -> bool:
        if self.move_delay_ms is None or timestamp is None:
            return False
        if self.last_accepted_at is None:
            return False
        return timestamp - self.last_accepted_at < self.move_delay_ms

    def request(
        self,
        direction: Direction,
        current: Direction,
        timestamp: float | None = None,
    ) -> bool:
        """Try to buffer *direction*. Returns True if it was accepted."""
        if self.is_throttled(timestamp):
            logger.debug(
                "Direction %s dropped: %.1f ms since last change.",
                direction.name, timestamp - self.last_accepted_at,
            )
            return False
        if direction.is_opposite(current):
            logger.debug(
                "Direction %s rejected: reverses %s.",
                direction.name, current.name,
            )
            return False

        self.pending = direction
        if timestamp is not None:
            self.last_accepted_at = timestamp
        return True

    def resolve(self, current: Direction) -> Direction:
        """Return the direction to travel this tick."""
        if self.pending.is_opposite(current):
            return current
        return self.pending
