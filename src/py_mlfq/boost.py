"""Priority-boost controller — the MLFQ anti-starvation rule.

Rule 5 of MLFQ: after some time period S, move every job back to the
topmost queue.  Without it, a steady stream of short interactive jobs
could keep long CPU-bound jobs parked in the bottom queue forever.

The controller works like an interval timer on the virtual clock: it
remembers when it last fired and fires again once ``interval`` time units
have elapsed.  Firing at an instant moves the clock reference to that
instant, so checking twice at the same time fires at most once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_mlfq.process import Process
    from py_mlfq.queues import QueueBank


class BoostController:
    """Decide when a priority boost is due and apply it to a queue bank."""

    def __init__(self, *, interval: int) -> None:
        """Create a boost controller.

        Args:
            interval: Virtual time between boosts (must be > 0).

        Raises:
            ValueError: If the interval is not positive.

        """
        if interval <= 0:
            msg = f"Boost interval must be positive, got {interval}"
            raise ValueError(msg)
        self._interval = interval
        self._last_boost_time = 0
        self._boosts = 0

    @property
    def interval(self) -> int:
        """Return the time between boosts."""
        return self._interval

    @property
    def last_boost_time(self) -> int:
        """Return the clock value of the most recent boost (0 before the first)."""
        return self._last_boost_time

    @property
    def boosts(self) -> int:
        """Return how many times the boost has fired."""
        return self._boosts

    def due(self, now: int) -> bool:
        """Return True if a boost should fire at time *now*."""
        return now - self._last_boost_time >= self._interval

    def apply(self, now: int, bank: QueueBank) -> list[Process] | None:
        """Fire the boost if it is due.

        Every process waiting below level 0 moves to the tail of level 0.
        The controller fires even when nothing is waiting below the top;
        the interval restarts either way.

        Returns:
            The moved processes if the boost fired, or None if it was not due.

        """
        if not self.due(now):
            return None
        moved = bank.move_all_to_top()
        self._last_boost_time = now
        self._boosts += 1
        return moved
